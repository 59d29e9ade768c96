import json
import logging
from typing import Any, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from src.app.services.cache_service import ICacheService

logger = logging.getLogger(__name__)


class RedisCacheService(ICacheService):
    """
    Redis-backed cache. Values are stored as JSON strings.

    Connection problems, timeouts and undecodable payloads are logged and
    reported as a miss or ignored.
    """

    def __init__(self, redis_url: str, *, socket_timeout: float = 5.0, client=None):
        self.redis_url = redis_url
        self.client = client or aioredis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )

    async def get(self, key: str) -> Optional[Any]:
        try:
            raw = await self.client.get(key)
        except (RedisError, OSError) as exc:
            logger.warning(f"Redis GET error for {key}: {exc}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding undecodable cache entry: {key}")
            return None

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as exc:
            logger.warning(f"Cannot serialise cache value for {key}: {exc}")
            return
        try:
            await self.client.set(key, payload, ex=ttl_seconds)
        except (RedisError, OSError) as exc:
            logger.warning(f"Redis SET error for {key}: {exc}")

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except (RedisError, OSError) as exc:
            logger.warning(f"Redis DELETE error for {key}: {exc}")

    async def close(self) -> None:
        try:
            await self.client.aclose()
        except (RedisError, OSError) as exc:
            logger.warning(f"Redis close error: {exc}")
