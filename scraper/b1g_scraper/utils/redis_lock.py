"""Redis distributed lock helpers."""

from __future__ import annotations

import redis

from ..config import settings
from ..logging import logger

LOCK_TIMEOUT_1HOUR = 3600


def acquire_redis_lock(lock_name: str, timeout: int = LOCK_TIMEOUT_1HOUR) -> bool:
    """Try to acquire a Redis lock. Returns True if acquired.

    When Redis is unreachable the lock is treated as acquired so a broker
    outage does not silently stop scheduled ingestion.
    """
    try:
        client = redis.from_url(settings.redis_url)
        return bool(client.set(lock_name, "1", nx=True, ex=timeout))
    except redis.RedisError as exc:
        logger.warning("redis_lock_failed", lock=lock_name, error=str(exc))
        return True


def release_redis_lock(lock_name: str) -> None:
    try:
        client = redis.from_url(settings.redis_url)
        client.delete(lock_name)
    except redis.RedisError as exc:
        logger.warning("redis_unlock_failed", lock=lock_name, error=str(exc))
