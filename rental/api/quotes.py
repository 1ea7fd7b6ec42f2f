"""Pricing quote endpoint with Redis caching"""
import json
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rental.db.session import get_db
from rental.schemas.quote import Quote, QuoteRequest
from rental.services.catalog import get_vehicle
from rental.services.pricing import quote_for_request
from rental.core.exceptions import NotFoundError
from rental.core.metrics import cache_hits, cache_misses
from rental.core.redis import get_redis
from rental.core.config import settings
from rental.utils.hashing import cache_key

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


def _generate_cache_key(req: QuoteRequest) -> str:
    return cache_key("quote", req.model_dump())


@router.post("/calc", response_model=Quote)
async def calc_quote(req: QuoteRequest, db: AsyncSession = Depends(get_db)):

    if req.vehicle_id is None:
        raise NotFoundError("No vehicle selected")

    key = _generate_cache_key(req)
    redis = get_redis()

    if redis is not None:
        try:
            cached = await redis.get(key)
            if cached:
                cache_hits.labels(cache="quote").inc()
                return Quote(**json.loads(cached))
            cache_misses.labels(cache="quote").inc()
        except Exception as e:
            logger.warning(f"Cache retrieval failed: {e}")

    vehicle = await get_vehicle(db, req.vehicle_id)
    result = quote_for_request(vehicle.price_per_day, req)

    if redis is not None:
        try:
            await redis.set(
                key,
                result.model_dump_json(),
                ex=settings.PRICE_CACHE_TTL
            )
        except Exception as e:
            logger.warning(f"Cache write failed: {e}")

    return result
