from sqlalchemy import Column, Integer, DateTime, ForeignKey, CheckConstraint, func, text
from rental.models.base import BaseModel

class Booking(BaseModel):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("rental_days > 0", name="ck_bookings_rental_days"),
        CheckConstraint("extra_hours >= 0", name="ck_bookings_extra_hours"),
    )

    # vehicles referenced by a booking cannot be deleted
    car_id = Column(
        ForeignKey("cars.id", name="fk_bookings_car", onupdate="CASCADE", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    rental_days = Column(Integer, nullable=False)
    extra_hours = Column(Integer, nullable=False, default=0, server_default=text("0"))
    total_price = Column(Integer, nullable=False)
    booked_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
