from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.cache_service import ICacheService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import SessionSnapshot
from src.app.use_cases.sessions import ListSessionsUseCase
from src.app.use_cases.users import RevokeSessionsUseCase
from src.depends import get_cache_service, get_current_user, get_unit_of_work

router = APIRouter(prefix="/sessions", tags=["Sessions"])


class SessionResponse(BaseModel):
    """One live device session, without its identity"""

    id: str
    ip_address: str
    user_agent: str
    device: str
    location: str | None
    created_at: str
    expires_at: str

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "SessionResponse":
        return cls(
            id=str(snapshot.id),
            ip_address=snapshot.ip_address,
            user_agent=snapshot.user_agent,
            device=snapshot.device,
            location=snapshot.location,
            created_at=snapshot.created_at.isoformat(),
            expires_at=snapshot.expires_at.isoformat(),
        )


class RevokeAllSessionsRequest(BaseModel):
    """Request to revoke all sessions for a user"""

    user_id: UUID = Field(..., description="User ID whose sessions will be revoked")


class RevokeSessionResponse(BaseModel):
    """Response for session revocation operations"""

    message: str
    revoked_count: int


@router.get("", status_code=status.HTTP_200_OK, response_model=List[SessionResponse])
async def list_sessions(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List My Sessions

    Returns the caller's live device sessions, newest first.
    """
    use_case = ListSessionsUseCase(uow)
    result = await use_case.execute(UUID(current_user["userId"]))

    if result.is_err():
        raise ServerError(result.error)

    return [SessionResponse.from_snapshot(s) for s in result.value]


@router.post(
    "/revoke-all",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionResponse,
)
async def revoke_all_sessions(
    request: RevokeAllSessionsRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICacheService = Depends(get_cache_service),
):
    """
    Revoke All Sessions

    Revokes every live session of a user. Useful for:
    - Security incidents (account compromise)
    - Admin-initiated logout

    Authorization:
    - Users can revoke their own sessions
    - Admins can revoke any user's sessions

    Raises:
        - 403 Forbidden: Insufficient permissions
        - 404 Not Found: User not found
        - 500 Internal Server Error: Server error
    """
    use_case = RevokeSessionsUseCase(uow, cache)
    result = await use_case.revoke_all_sessions(
        request.user_id, UUID(current_user["userId"])
    )

    if result.is_err():
        error = result.error
        if error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    data = result.value
    return {
        "message": f"Successfully revoked {data['revoked_count']} session(s)",
        "revoked_count": data["revoked_count"],
    }
