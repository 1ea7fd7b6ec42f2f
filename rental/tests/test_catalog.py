import pytest
from sqlalchemy import delete, text
from sqlalchemy.exc import IntegrityError

from rental.core.exceptions import NotFoundError, PersistenceError
from rental.db.seed import DEFAULT_CATALOG, seed_catalog
from rental.models.booking import Booking
from rental.models.vehicle import Vehicle
from rental.services.catalog import get_vehicle, list_vehicles

pytestmark = pytest.mark.catalog


class TestCatalogService:

    async def test_empty_catalog(self, db_session):
        assert await list_vehicles(db_session) == []

    async def test_list_is_ordered_by_id(self, db_session):
        db_session.add_all([
            Vehicle(id=3, name="New Altis", price_per_day=1500000),
            Vehicle(id=1, name="Avanza", price_per_day=640000),
            Vehicle(id=2, name="Innova", price_per_day=890000),
        ])
        await db_session.commit()

        vehicles = await list_vehicles(db_session)
        assert [v.id for v in vehicles] == [1, 2, 3]
        assert [v.name for v in vehicles] == ["Avanza", "Innova", "New Altis"]

    async def test_get_vehicle(self, db_session):
        await seed_catalog(db_session)
        vehicle = await get_vehicle(db_session, 5)
        assert vehicle.name == "Alphard"
        assert vehicle.price_per_day == 3220000

    async def test_get_missing_vehicle(self, db_session):
        await seed_catalog(db_session)
        with pytest.raises(NotFoundError):
            await get_vehicle(db_session, 999)

    async def test_store_failure_raises_persistence_error(self, db_session):
        await db_session.execute(text("DROP TABLE bookings"))
        await db_session.execute(text("DROP TABLE cars"))
        await db_session.commit()

        with pytest.raises(PersistenceError):
            await list_vehicles(db_session)


class TestSeed:

    async def test_seed_loads_default_catalog(self, db_session):
        added = await seed_catalog(db_session)
        assert added == len(DEFAULT_CATALOG)

        vehicles = await list_vehicles(db_session)
        assert [(v.name, v.price_per_day) for v in vehicles] == DEFAULT_CATALOG

    async def test_seed_is_skipped_when_populated(self, db_session):
        await seed_catalog(db_session)
        assert await seed_catalog(db_session) == 0
        assert len(await list_vehicles(db_session)) == len(DEFAULT_CATALOG)


class TestSchemaConstraints:

    async def test_booking_requires_existing_vehicle(self, db_session):
        db_session.add(Booking(car_id=999, rental_days=1, extra_hours=0, total_price=1))
        with pytest.raises(IntegrityError):
            await db_session.commit()

    async def test_rental_days_must_be_positive(self, db_session):
        await seed_catalog(db_session)
        db_session.add(Booking(car_id=1, rental_days=0, extra_hours=0, total_price=0))
        with pytest.raises(IntegrityError):
            await db_session.commit()

    async def test_extra_hours_cannot_be_negative(self, db_session):
        await seed_catalog(db_session)
        db_session.add(Booking(car_id=1, rental_days=1, extra_hours=-1, total_price=0))
        with pytest.raises(IntegrityError):
            await db_session.commit()

    async def test_booked_vehicle_cannot_be_deleted(self, db_session):
        await seed_catalog(db_session)
        db_session.add(Booking(car_id=1, rental_days=1, extra_hours=0, total_price=640000))
        await db_session.commit()

        with pytest.raises(IntegrityError):
            await db_session.execute(delete(Vehicle).where(Vehicle.id == 1))
            await db_session.commit()

    async def test_booked_at_defaults_on_insert(self, db_session):
        await seed_catalog(db_session)
        booking = Booking(car_id=1, rental_days=1, total_price=640000)
        db_session.add(booking)
        await db_session.commit()
        await db_session.refresh(booking)

        assert booking.id is not None
        assert booking.extra_hours == 0
        assert booking.booked_at is not None
