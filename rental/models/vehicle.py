from sqlalchemy import Column, String, Integer, CheckConstraint
from rental.models.base import BaseModel

class Vehicle(BaseModel):
    __tablename__ = "cars"
    __table_args__ = (
        CheckConstraint("price_per_day >= 0", name="ck_cars_price_per_day"),
    )

    name = Column(String(50), nullable=False)
    price_per_day = Column(Integer, nullable=False)
