import hashlib
import json


def cache_key(prefix: str, payload: dict) -> str:
    """Stable Redis key for a JSON-serialisable request payload."""
    digest = hashlib.sha256(json.dumps(payload, sort_keys=True, default=str).encode()).hexdigest()
    return f"{prefix}:{digest}"
