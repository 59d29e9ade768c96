"""
Refresh Token Use Case

Rotates the token pair for a device session on every refresh.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.api.utils.jwt import JwtTokenIssuer, extract_signature
from src.app.services.cache_keys import session_cache_key
from src.app.services.cache_service import ICacheService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ClientContext, SessionSnapshot, TokenPair
from .errors import invalid_session, session_limit_exceeded, unauthorized
from .session_support import build_session_input, cache_session, session_limit_reached

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for refreshing tokens with rotation.

    Business Rules:
    - Refresh token must verify against the refresh secret and be bound
      to the calling user agent
    - Session lookup is cache-aside on (user, user agent, device); a cache
      hit is trusted only when it holds the presented token's identity
    - No live session for the device: the presented identity is revoked
      and the request is rejected
    - Live session holding a different identity: the presented token was
      already rotated out (replay), so the live session is revoked too
    - Session limit re-checked, not counting the session being renewed
    - New pair minted on every refresh; session re-persisted and re-cached
    """

    def __init__(
        self,
        uow: UnitOfWork,
        cache: ICacheService,
        token_issuer: JwtTokenIssuer,
        session_limit: int,
    ):
        self.uow = uow
        self.cache = cache
        self.token_issuer = token_issuer
        self.session_limit = session_limit

    async def _cached_session(
        self, cache_key: str, presented_identity: str
    ) -> Optional[SessionSnapshot]:
        cached = await self.cache.get(cache_key)
        if not cached:
            return None
        try:
            snapshot = SessionSnapshot.model_validate(cached)
        except ValueError:
            logger.warning(f"Discarding malformed cached session: {cache_key}")
            return None
        if snapshot.session_identity != presented_identity or snapshot.is_revoked:
            # Stale or foreign entry; the store decides
            return None
        return snapshot

    async def execute(
        self, refresh_token: str, context: ClientContext
    ) -> Result[TokenPair]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token to verify and rotate
            context: Client binding of the caller

        Returns:
            Result with a new TokenPair, or Error
        """
        payload = self.token_issuer.verify_refresh(
            refresh_token, audience=context.user_agent
        )
        if payload is None:
            return Return.err(unauthorized("Invalid refresh token"))

        try:
            user_id = UUID(payload["userId"])
        except ValueError:
            return Return.err(unauthorized("Invalid refresh token"))

        presented_identity = extract_signature(refresh_token)
        cache_key = session_cache_key(user_id, context.user_agent, context.device)

        async with self.uow:
            current = await self._cached_session(cache_key, presented_identity)

            if current is None:
                stored = await self.uow.sessions.find_session_by_user_device(
                    user_id, context.user_agent, context.device
                )

                if stored is None:
                    logger.warning(
                        f"Refresh without live session for user {user_id}; "
                        "revoking presented identity"
                    )
                    await self.uow.sessions.revoke_session(presented_identity)
                    await self.uow.commit()
                    return Return.err(invalid_session())

                if stored.session_identity != presented_identity:
                    logger.warning(
                        f"Rotated-out refresh token replayed for user {user_id}; "
                        "revoking device session"
                    )
                    await self.uow.sessions.revoke_session(stored.session_identity)
                    await self.uow.commit()
                    await self.cache.delete(cache_key)
                    return Return.err(invalid_session())

            if await session_limit_reached(
                self.uow, user_id, self.session_limit, renewing=True
            ):
                return Return.err(session_limit_exceeded(self.session_limit))

            tokens = self.token_issuer.issue_pair(user_id, context.user_agent)

            session_input = build_session_input(
                user_id,
                extract_signature(tokens.refresh_token),
                context,
                self.token_issuer.refresh_ttl_seconds,
            )
            if session_input.is_err():
                return session_input

            session = await self.uow.sessions.save_session(session_input.value)
            await self.uow.commit()

            await cache_session(
                self.cache, session, self.token_issuer.refresh_ttl_seconds
            )

        return Return.ok(
            TokenPair(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
            )
        )
