"""
Revoke Sessions Use Case

Forced revocation of every session a user holds.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.cache_keys import session_cache_key
from src.app.services.cache_service import ICacheService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for revoking user sessions.

    Business Rules:
    - Users can revoke their own sessions
    - Admins can revoke any user's sessions
    - Every revoked device session loses its cache entry as well
    """

    def __init__(self, uow: UnitOfWork, cache: ICacheService):
        self.uow = uow
        self.cache = cache

    async def revoke_all_sessions(
        self,
        target_user_id: UUID,
        requesting_user_id: UUID,
    ) -> Result[dict]:
        """
        Revoke all sessions for a user.

        Args:
            target_user_id: User whose sessions will be revoked
            requesting_user_id: User requesting the revocation

        Returns:
            Result with count of revoked sessions, or Error
        """
        is_self = target_user_id == requesting_user_id

        async with self.uow:
            if not is_self:
                requester = await self.uow.users.get_by_id(requesting_user_id)
                if requester is None or requester.role != UserRole.admin:
                    return Return.err(
                        Error("FORBIDDEN", "Only admins can revoke other users' sessions")
                    )

            target_user = await self.uow.users.get_by_id(target_user_id)
            if not target_user:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            sessions = await self.uow.sessions.list_user_sessions(target_user_id)
            cache_keys = [
                session_cache_key(s.user_id, s.user_agent, s.device) for s in sessions
            ]

            count = await self.uow.sessions.revoke_user_sessions(target_user_id)
            await self.uow.commit()

        for key in cache_keys:
            await self.cache.delete(key)

        logger.info(
            f"Revoked {count} session(s) for user {target_user_id} "
            f"(requested by {requesting_user_id})"
        )

        return Return.ok({"revoked_count": count, "target_user_id": str(target_user_id)})
