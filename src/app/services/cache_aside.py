"""
Cache-aside read helper.

Reads check the cache first and fall back to the loader on a miss, storing
the loaded payload for a fixed TTL. Writes elsewhere do not invalidate these
entries; readers accept up to one TTL of staleness.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from src.app.services.cache_service import ICacheService

logger = logging.getLogger(__name__)

DEFAULT_READ_CACHE_TTL = 60


async def cache_aside(
    cache: ICacheService,
    key: str,
    loader: Callable[[], Awaitable[Optional[Any]]],
    ttl_seconds: int = DEFAULT_READ_CACHE_TTL,
) -> Optional[Any]:
    cached = await cache.get(key)
    if cached is not None:
        logger.debug(f"Cache hit: {key}")
        return cached

    value = await loader()
    if value is not None:
        await cache.set(key, value, ttl_seconds=ttl_seconds)
    return value
