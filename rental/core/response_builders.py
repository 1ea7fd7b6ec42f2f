from rental.models.booking import Booking
from rental.models.vehicle import Vehicle
from rental.schemas.booking import BookingConfirmation, BookingOut
from rental.schemas.vehicle import VehicleOut


def build_vehicle_response(vehicle: Vehicle) -> VehicleOut:
    return VehicleOut(
        id=vehicle.id,
        name=vehicle.name,
        price_per_day=vehicle.price_per_day,
    )


def build_booking_response(booking: Booking) -> BookingOut:
    return BookingOut(
        id=booking.id,
        car_id=booking.car_id,
        rental_days=booking.rental_days,
        extra_hours=booking.extra_hours,
        total_price=booking.total_price,
        booked_at=booking.booked_at,
    )


def build_booking_confirmation(booking: Booking, message: str) -> BookingConfirmation:
    return BookingConfirmation(message=message, booking=build_booking_response(booking))


def build_vehicle_response_list(vehicles: list) -> list:
    return [build_vehicle_response(vehicle) for vehicle in vehicles]
