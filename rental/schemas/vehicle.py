from pydantic import BaseModel


class VehicleOut(BaseModel):
    id: int
    name: str
    price_per_day: int
