import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from rental.core.exceptions import NotFoundError, PersistenceError
from rental.core.metrics import track_db_operation
from rental.models.vehicle import Vehicle

logger = logging.getLogger(__name__)


@track_db_operation("select", "cars")
async def list_vehicles(db: AsyncSession) -> List[Vehicle]:
    try:
        res = await db.execute(select(Vehicle).order_by(Vehicle.id))
    except SQLAlchemyError as e:
        logger.error(f"Catalog query failed: {e}")
        raise PersistenceError("Vehicle catalog unavailable") from e
    return list(res.scalars().all())


@track_db_operation("get", "cars")
async def get_vehicle(db: AsyncSession, vehicle_id: int) -> Vehicle:
    try:
        vehicle = await db.get(Vehicle, vehicle_id)
    except SQLAlchemyError as e:
        logger.error(f"Vehicle lookup failed for id {vehicle_id}: {e}")
        raise PersistenceError("Vehicle catalog unavailable") from e
    if vehicle is None:
        raise NotFoundError(f"Vehicle with id {vehicle_id} not found")
    return vehicle
