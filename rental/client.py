"""HTTP client for the booking service and the state of a booking form.

The form is an immutable value: every input change produces a new
``BookingForm`` and the quote is recomputed from it, so nothing is shared
between renders.
"""
import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from rental.core.exceptions import NotFoundError
from rental.schemas.quote import Quote
from rental.schemas.vehicle import VehicleOut
from rental.services.pricing import calculate_quote

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Gagal membooking"


def _as_int(value, default: int) -> int:
    try:
        return int(value) or default
    except (TypeError, ValueError):
        return default


class BookingForm(BaseModel):
    model_config = ConfigDict(frozen=True)

    selected_car: Optional[int] = None
    rental_days: int = 1
    extra_hours: int = 0

    def with_changes(self, **fields) -> "BookingForm":
        data = {**self.model_dump(), **fields}
        data["rental_days"] = max(_as_int(data["rental_days"], 1), 1)
        data["extra_hours"] = max(_as_int(data["extra_hours"], 0), 0)
        return BookingForm(**data)


class SubmissionResult(BaseModel):
    ok: bool
    message: str
    form: BookingForm


def find_car(cars: List[VehicleOut], car_id: Optional[int]) -> Optional[VehicleOut]:
    return next((c for c in cars if c.id == car_id), None)


def quote_form(form: BookingForm, cars: List[VehicleOut]) -> Optional[Quote]:
    car = find_car(cars, form.selected_car)
    if car is None:
        return None
    return calculate_quote(car.price_per_day, form.rental_days, form.extra_hours)


class RentalClient:
    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = 10.0):
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def fetch_cars(self) -> List[VehicleOut]:
        try:
            response = await self._client.get("/cars")
            response.raise_for_status()
            return [VehicleOut(**item) for item in response.json()]
        except (httpx.HTTPError, TypeError, ValueError) as e:
            # ValueError covers bad JSON and pydantic validation errors
            logger.warning(f"Could not load vehicle catalog: {e}")
            return []

    async def submit(self, form: BookingForm, cars: List[VehicleOut]) -> SubmissionResult:
        """Submit the form; resets it on success and keeps it on failure."""
        if form.selected_car is None:
            raise NotFoundError("No vehicle selected")

        quote = quote_form(form, cars)
        if quote is None:
            raise NotFoundError(f"Vehicle with id {form.selected_car} not found")

        body = {
            "carId": form.selected_car,
            "rentalDays": form.rental_days,
            "extraHours": form.extra_hours,
            "totalPrice": quote.total,
        }
        try:
            response = await self._client.post("/booking", json=body)
        except httpx.HTTPError as e:
            logger.warning(f"Booking request failed: {e}")
            return SubmissionResult(ok=False, message=DEFAULT_FAILURE_MESSAGE, form=form)

        if response.is_success:
            return SubmissionResult(ok=True, message=response.json()["message"], form=BookingForm())

        try:
            message = response.json().get("error") or DEFAULT_FAILURE_MESSAGE
        except ValueError:
            message = DEFAULT_FAILURE_MESSAGE
        logger.warning(f"Booking rejected with status {response.status_code}: {message}")
        return SubmissionResult(ok=False, message=message, form=form)
