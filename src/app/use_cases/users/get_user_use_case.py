"""
Get User Use Case

Cached user profile lookup.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.cache_aside import DEFAULT_READ_CACHE_TTL, cache_aside
from src.app.services.cache_keys import generate_cache_key
from src.app.services.cache_service import ICacheService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UserDetail


class GetUserUseCase:
    """
    Use case for reading one user profile.

    Business Rules:
    - Cache-aside on key user:id=<id>, fixed TTL
    - Missing users are not cached
    """

    def __init__(
        self,
        uow: UnitOfWork,
        cache: ICacheService,
        ttl_seconds: int = DEFAULT_READ_CACHE_TTL,
    ):
        self.uow = uow
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    async def execute(self, user_id: UUID) -> Result[UserDetail]:
        async def load():
            async with self.uow:
                user = await self.uow.users.get_by_id(user_id)
                if user is None:
                    return None
                return UserDetail.from_user(user).model_dump(mode="json")

        data = await cache_aside(
            self.cache,
            generate_cache_key("user", {"id": str(user_id)}),
            load,
            ttl_seconds=self.ttl_seconds,
        )
        if data is None:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))
        return Return.ok(UserDetail.model_validate(data))
