from abc import ABC, abstractmethod
from typing import Any, Optional


class ICacheService(ABC):
    """
    Key/value cache with TTL - application layer.

    Implementations are best-effort: backend failures are logged and
    reported as a miss (get) or ignored (set/delete). Callers never need
    to catch cache errors.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Get a JSON-decoded value, or None on miss"""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        """Store a JSON-serialisable value, optionally expiring after ttl_seconds"""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key"""
        pass
