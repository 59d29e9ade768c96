"""
Login Use Case

Authenticates a user and opens (or renews) the session for the calling device.
"""

import asyncio
import logging

import bcrypt

from libs.result import Result, Return
from src.api.utils.jwt import JwtTokenIssuer, extract_signature
from src.app.services.cache_service import ICacheService
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ClientContext, TokenPair
from .errors import invalid_credentials, session_limit_exceeded
from .session_support import build_session_input, cache_session, session_limit_reached

logger = logging.getLogger(__name__)

# Verified against when the email is unknown so both failure paths cost the same
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password return the same error
    - Session limit is checked before any token is minted
    - Tokens are bound to the client user agent (aud claim)
    - One session per (user, user agent, device), upserted
    - Session is cached only after the store commit succeeds
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

    async def execute(
        self, email: str, password: str, context: ClientContext
    ) -> Result[TokenPair]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            context: Client binding (user agent, IP, device, location)

        Returns:
            Result with TokenPair, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                await asyncio.to_thread(bcrypt.checkpw, password.encode(), _DUMMY_HASH)
                return Return.err(invalid_credentials())

            # Off the event loop
            if not await asyncio.to_thread(
                bcrypt.checkpw, password.encode(), user.password_hash.encode()
            ):
                return Return.err(invalid_credentials())

            if await session_limit_reached(self.uow, user.id, self.session_limit):
                logger.info(f"Session limit reached for user {user.id}")
                return Return.err(session_limit_exceeded(self.session_limit))

            tokens = self.token_issuer.issue_pair(user.id, context.user_agent)

            session_input = build_session_input(
                user.id,
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
