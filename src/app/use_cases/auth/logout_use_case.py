"""
Logout Use Case

Ends the session behind a refresh token.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.api.utils.jwt import JwtTokenIssuer, extract_signature
from src.app.services.cache_keys import session_cache_key
from src.app.services.cache_service import ICacheService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ClientContext, LogoutResponse

logger = logging.getLogger(__name__)

LOGOUT_SUCCESS = "Logout successful"


class LogoutUseCase:
    """
    Use case for logging out a device session.

    Business Rules:
    - Invalid or expired refresh token is a no-op, not an error
    - Session row deleted from the store, cache entry dropped
    - Idempotent: repeating a logout succeeds and changes nothing
    """

    def __init__(self, uow: UnitOfWork, cache: ICacheService, token_issuer: JwtTokenIssuer):
        self.uow = uow
        self.cache = cache
        self.token_issuer = token_issuer

    async def execute(
        self, refresh_token: str, context: ClientContext
    ) -> Result[LogoutResponse]:
        payload = self.token_issuer.verify_refresh(refresh_token)
        if payload is None:
            return Return.ok(LogoutResponse(status=""))

        try:
            user_id = UUID(payload["userId"])
        except ValueError:
            return Return.ok(LogoutResponse(status=""))

        session_identity = extract_signature(refresh_token)
        cache_keys = {session_cache_key(user_id, context.user_agent, context.device)}

        async with self.uow:
            # Bound device, not the one named on the request
            session = await self.uow.sessions.find_session_by_identity(session_identity)
            if session is not None:
                cache_keys.add(
                    session_cache_key(session.user_id, session.user_agent, session.device)
                )

            deleted = await self.uow.sessions.delete_session(session_identity)
            await self.uow.commit()

        for key in cache_keys:
            await self.cache.delete(key)

        if not deleted:
            logger.debug(f"Logout for user {user_id}: session already gone")

        return Return.ok(LogoutResponse(status=LOGOUT_SUCCESS))
