"""
Session helpers shared by the login, refresh and logout use cases.
"""

from uuid import UUID

from pydantic import ValidationError

from libs.result import Result, Return
from src.app.services.cache_keys import session_cache_key
from src.app.services.cache_service import ICacheService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Session, SessionInput
from .dtos import ClientContext, SessionSnapshot
from .errors import validation_error


def build_session_input(
    user_id: UUID,
    session_identity: str,
    context: ClientContext,
    expiration_seconds: int,
) -> Result[SessionInput]:
    """
    Validate the session shape before it reaches the store.

    Returns:
        Result with SessionInput, or VALIDATION_ERROR with one
        {"fields", "constraint"} entry per violated field
    """
    try:
        session_input = SessionInput(
            user_id=user_id,
            session_identity=session_identity,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            device=context.device,
            location=context.location,
            expiration_seconds=expiration_seconds,
        )
    except ValidationError as exc:
        details = [
            {
                "fields": [str(part) for part in err["loc"]],
                "constraint": err["msg"],
            }
            for err in exc.errors()
        ]
        return Return.err(validation_error(details))
    return Return.ok(session_input)


async def session_limit_reached(
    uow: UnitOfWork, user_id: UUID, limit: int, renewing: bool = False
) -> bool:
    """
    Fixed cap on live sessions per user.

    When renewing, the caller's own session is already counted and does not
    occupy a new slot.
    """
    count = await uow.sessions.count_user_sessions(user_id)
    if renewing:
        count -= 1
    return count >= limit


async def cache_session(
    cache: ICacheService, session: Session, ttl_seconds: int
) -> SessionSnapshot:
    """Write-through the stored session under its device key"""
    snapshot = SessionSnapshot.model_validate(session)
    key = session_cache_key(session.user_id, session.user_agent, session.device)
    await cache.set(key, snapshot.model_dump(mode="json"), ttl_seconds=ttl_seconds)
    return snapshot
