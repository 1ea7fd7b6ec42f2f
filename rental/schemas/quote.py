from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class QuoteRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    vehicle_id: Optional[int] = None
    rental_days: int = Field(1, ge=1)
    extra_hours: int = Field(0, ge=0)

class Quote(BaseModel):
    model_config = ConfigDict(frozen=True)

    price_per_day: int
    rental_days: int
    extra_hours: int
    subtotal: int
    discount_percent: int
    discount_amount: int
    extra_hours_cost: int
    total: int
