import logging
from typing import Optional
from redis.asyncio import Redis
from rental.core.config import settings

logger = logging.getLogger(__name__)

redis: Optional[Redis] = None

async def init_redis() -> Optional[Redis]:
    global redis
    if not settings.REDIS_URL:
        logger.info("REDIS_URL not set, caching and idempotency disabled")
        return None
    try:
        redis = Redis.from_url(settings.REDIS_URL, decode_responses=False)
        await redis.ping()
        logger.info("Connected to Redis")
        return redis
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        redis = None
        raise

async def close_redis():
    global redis
    if redis:
        await redis.close()
        redis = None

def get_redis() -> Optional[Redis]:
    return redis
