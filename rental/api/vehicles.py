from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from rental.db.session import get_db
from rental.schemas.vehicle import VehicleOut
from rental.services.catalog import list_vehicles, get_vehicle
from rental.core.response_builders import build_vehicle_response, build_vehicle_response_list

router = APIRouter(prefix="/cars", tags=["cars"])


@router.get("", response_model=List[VehicleOut])
async def list_cars(db: AsyncSession = Depends(get_db)):
    vehicles = await list_vehicles(db)
    return build_vehicle_response_list(vehicles)


@router.get("/{car_id}", response_model=VehicleOut)
async def get_car(car_id: int, db: AsyncSession = Depends(get_db)):
    vehicle = await get_vehicle(db, car_id)
    return build_vehicle_response(vehicle)
