"""Domain errors raised by services and rendered by the API exception handler"""
from typing import Optional


class RentalError(Exception):
    status_code: int = 500
    default_detail: str = "Internal error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(RentalError):
    """Booking input rejected before any store call."""
    status_code = 422
    default_detail = "Invalid booking data"


class NotFoundError(RentalError):
    status_code = 404
    default_detail = "Vehicle not found"


class PersistenceError(RentalError):
    """Store unreachable or a constraint rejected the write."""
    status_code = 503
    default_detail = "Booking store unavailable"
