import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rental.core.config import settings
from rental.core.exceptions import NotFoundError, PersistenceError, ValidationError
from rental.core.metrics import bookings_created, bookings_rejected, track_db_operation
from rental.models.booking import Booking
from rental.schemas.booking import BookingCreate
from rental.services.catalog import get_vehicle
from rental.services.pricing import calculate_quote

logger = logging.getLogger(__name__)


def _reject(reason: str, detail: str) -> ValidationError:
    bookings_rejected.labels(reason=reason).inc()
    logger.warning(f"Booking rejected ({reason}): {detail}")
    return ValidationError(detail)


def validate_booking(payload: BookingCreate) -> None:
    if payload.rental_days < 1:
        raise _reject("rental_days", "rental_days must be at least 1")
    if payload.extra_hours < 0:
        raise _reject("extra_hours", "extra_hours cannot be negative")
    if payload.total_price is not None and payload.total_price < 0:
        raise _reject("total_price", "total_price cannot be negative")


@track_db_operation("insert", "bookings")
async def submit_booking(db: AsyncSession, payload: BookingCreate) -> Booking:
    """Persist one booking row for a completed quote.

    Raises ValidationError for bad fields, an unknown vehicle or a total that
    does not match the server-side quote, and PersistenceError when the store
    rejects the insert. Nothing is written on failure.
    """
    validate_booking(payload)

    try:
        vehicle = await get_vehicle(db, payload.car_id)
    except NotFoundError:
        raise _reject("unknown_vehicle", f"Vehicle with id {payload.car_id} does not exist") from None

    quote = calculate_quote(vehicle.price_per_day, payload.rental_days, payload.extra_hours)
    total_price = payload.total_price
    if total_price is None:
        total_price = quote.total
    elif settings.VERIFY_TOTAL_PRICE and total_price != quote.total:
        raise _reject(
            "total_mismatch",
            f"total_price {total_price} does not match quoted total {quote.total}",
        )

    booking = Booking(
        car_id=vehicle.id,
        rental_days=payload.rental_days,
        extra_hours=payload.extra_hours,
        total_price=total_price,
    )
    try:
        db.add(booking)
        await db.commit()
        await db.refresh(booking)
    except SQLAlchemyError as e:
        await db.rollback()
        bookings_rejected.labels(reason="persistence").inc()
        logger.error(f"Booking insert failed for car {payload.car_id}: {e}")
        raise PersistenceError("Booking could not be saved") from e

    bookings_created.labels(car_id=str(booking.car_id)).inc()
    logger.info(
        f"Booking {booking.id} created: car={booking.car_id} days={booking.rental_days} "
        f"hours={booking.extra_hours} total={booking.total_price}"
    )
    return booking
