import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

from src.app.services.cache_service import ICacheService

logger = logging.getLogger(__name__)


class InMemoryCacheService(ICacheService):
    """
    Process-local cache for development and tests (CACHE_BACKEND=memory).

    Values round-trip through JSON so callers see the same shapes as with
    Redis.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[str, Optional[float]]] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        payload, expires_at = entry
        if expires_at is not None and expires_at <= time.monotonic():
            self._entries.pop(key, None)
            return None
        return json.loads(payload)

    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as exc:
            logger.warning(f"Cannot serialise cache value for {key}: {exc}")
            return
        expires_at = time.monotonic() + ttl_seconds if ttl_seconds else None
        self._entries[key] = (payload, expires_at)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    async def close(self) -> None:
        self._entries.clear()
