from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class BookingCreate(BaseModel):
    """Booking submission body; accepts the camelCase keys the web form sends."""
    model_config = ConfigDict(populate_by_name=True)

    car_id: int = Field(alias="carId")
    rental_days: int = Field(alias="rentalDays")
    extra_hours: int = Field(0, alias="extraHours")
    total_price: Optional[int] = Field(None, alias="totalPrice")


class BookingOut(BaseModel):
    id: int
    car_id: int
    rental_days: int
    extra_hours: int
    total_price: int
    booked_at: datetime


class BookingConfirmation(BaseModel):
    message: str
    booking: BookingOut
