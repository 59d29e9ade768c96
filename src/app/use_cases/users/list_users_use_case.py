"""
List Users Use Case

Cached, cursor-paged user listing.
"""

from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.cache_aside import DEFAULT_READ_CACHE_TTL, cache_aside
from src.app.services.cache_keys import generate_cache_key
from src.app.services.cache_service import ICacheService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import UserDetail, UserListResult

DEFAULT_PAGE_SIZE = 20


class ListUsersUseCase:
    """
    Use case for listing users.

    Business Rules:
    - Cache-aside keyed by normalized paging params, fixed TTL
    - Writes do not invalidate the list; staleness bounded by the TTL
    - has_next_page when a full page came back
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

    async def execute(
        self, limit: int = DEFAULT_PAGE_SIZE, cursor: Optional[UUID] = None
    ) -> Result[UserListResult]:
        async def load():
            async with self.uow:
                users = await self.uow.users.list(limit, cursor)
                total = await self.uow.users.count()

                has_next_page = bool(users) and len(users) >= limit
                return UserListResult(
                    data=[UserDetail.from_user(u) for u in users],
                    limit=limit,
                    has_next_page=has_next_page,
                    next_cursor=str(users[-1].id) if has_next_page else "",
                    total=total,
                ).model_dump(mode="json")

        key = generate_cache_key(
            "users",
            {"limit": limit, "cursor": str(cursor) if cursor else None},
        )
        data = await cache_aside(self.cache, key, load, ttl_seconds=self.ttl_seconds)
        return Return.ok(UserListResult.model_validate(data))
