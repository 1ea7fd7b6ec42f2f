import json
import logging
from rental.core.redis import get_redis
from rental.core.config import settings

logger = logging.getLogger(__name__)

# stored under the key while the first request is still being processed
PENDING = b"__pending__"
IN_PROGRESS = {"status": "in_progress"}


def _key(key: str) -> str:
    return f"idemp:{key}"


async def get_idempotent(key: str):
    redis = get_redis()
    if not key or redis is None:
        return None
    try:
        v = await redis.get(_key(key))
    except Exception as e:
        logger.warning(f"Idempotency lookup failed for {key}: {e}")
        return None
    if not v:
        return None
    if v == PENDING:
        return IN_PROGRESS
    return json.loads(v)


async def claim_idempotent(key: str) -> bool:
    """Reserve the key with SET NX; False when another request already holds it.

    Without Redis the claim always succeeds and the request runs unguarded.
    """
    redis = get_redis()
    if not key or redis is None:
        return True
    try:
        return bool(await redis.set(_key(key), PENDING, nx=True, ex=settings.IDEMPOTENCY_TTL))
    except Exception as e:
        logger.warning(f"Idempotency claim failed for {key}: {e}")
        return True


async def set_idempotent(key: str, value: dict):
    redis = get_redis()
    if not key or redis is None:
        return
    try:
        await redis.set(_key(key), json.dumps(value, default=str), ex=settings.IDEMPOTENCY_TTL)
    except Exception as e:
        logger.warning(f"Idempotency store failed for {key}: {e}")


async def release_idempotent(key: str):
    redis = get_redis()
    if not key or redis is None:
        return
    try:
        await redis.delete(_key(key))
    except Exception as e:
        logger.warning(f"Idempotency release failed for {key}: {e}")
