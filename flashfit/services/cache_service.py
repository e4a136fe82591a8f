# flashfit/services/cache_service.py
import json
import logging
from typing import Optional

import redis

from ..core.settings import settings

logger = logging.getLogger(__name__)

_REDIS: Optional[redis.Redis] = (
    redis.Redis.from_url(settings.REDIS_URL, decode_responses=True) if settings.REDIS_URL else None
)


def get_client() -> Optional[redis.Redis]:
    return _REDIS


def exercises_key(muscle_group: str | None, movement_type: str | None) -> str:
    return f"exercises:{muscle_group or '*'}:{movement_type or '*'}"


def cache_get(key: str) -> Optional[list | dict]:
    client = get_client()
    if client is None:
        return None
    try:
        raw = client.get(key)
    except redis.RedisError as e:
        logger.warning("Cache read failed for %s: %s", key, e)
        return None
    return json.loads(raw) if raw else None


def cache_set(key: str, data: list | dict, ttl: int = settings.EXERCISE_CACHE_TTL_SECONDS) -> None:
    client = get_client()
    if client is None:
        return
    try:
        client.setex(key, ttl, json.dumps(data))
    except redis.RedisError as e:
        logger.warning("Cache write failed for %s: %s", key, e)
