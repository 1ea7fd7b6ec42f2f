from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from rental.db.session import get_db
from rental.schemas.booking import BookingCreate, BookingConfirmation
from rental.services.booking import submit_booking
from rental.core.config import settings
from rental.core.response_builders import build_booking_confirmation
from rental.utils.idempotency import (
    IN_PROGRESS,
    claim_idempotent,
    get_idempotent,
    release_idempotent,
    set_idempotent,
)

router = APIRouter(prefix="/booking", tags=["booking"])


@router.post("", response_model=BookingConfirmation)
async def create_booking(
    payload: BookingCreate,
    idempotency_key: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    if idempotency_key:
        prev = await get_idempotent(idempotency_key)
        if prev is None and not await claim_idempotent(idempotency_key):
            # lost the race for the key; replay whatever the winner left
            prev = await get_idempotent(idempotency_key) or IN_PROGRESS
        if prev is IN_PROGRESS:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="A booking with this Idempotency-Key is already in progress",
            )
        if prev:
            return prev

    try:
        booking = await submit_booking(db, payload)
    except Exception:
        if idempotency_key:
            await release_idempotent(idempotency_key)
        raise

    out = build_booking_confirmation(booking, settings.BOOKING_SUCCESS_MESSAGE)
    if idempotency_key:
        await set_idempotent(idempotency_key, out.model_dump())
    return out


# Bookings are append-only
@router.api_route("/{booking_id}", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
async def booking_mutation_not_allowed(booking_id: int):
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Bookings cannot be modified",
    )
