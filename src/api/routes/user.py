from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import ClientError, ServerError
from src.app.services.cache_service import ICacheService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    GetUserUseCase,
    ListUsersUseCase,
    UserDetail,
    UserListResult,
)
from src.depends import get_cache_service, get_config, get_current_user, get_unit_of_work

router = APIRouter(prefix="/users", tags=["User"])


async def _get_user(user_id: UUID, uow: UnitOfWork, cache: ICacheService, config) -> UserDetail:
    use_case = GetUserUseCase(uow, cache, ttl_seconds=config.READ_CACHE_TTL_SECONDS)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserDetail)
async def get_me(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICacheService = Depends(get_cache_service),
    config=Depends(get_config),
):
    """
    Current User Profile

    Raises:
        - 401 Unauthorized: Invalid or expired access token
        - 404 Not Found: User no longer exists
    """
    return await _get_user(UUID(current_user["userId"]), uow, cache, config)


@router.get("", status_code=status.HTTP_200_OK, response_model=UserListResult)
async def list_users(
    limit: int = Query(20, ge=1, le=100),
    cursor: Optional[UUID] = Query(None),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICacheService = Depends(get_cache_service),
    config=Depends(get_config),
):
    """
    List Users

    Cursor-paged; results may lag writes by up to the read cache TTL.
    """
    use_case = ListUsersUseCase(uow, cache, ttl_seconds=config.READ_CACHE_TTL_SECONDS)
    result = await use_case.execute(limit=limit, cursor=cursor)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserDetail)
async def get_user(
    user_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICacheService = Depends(get_cache_service),
    config=Depends(get_config),
):
    """
    User Profile

    Raises:
        - 401 Unauthorized: Invalid or expired access token
        - 404 Not Found: User not found
    """
    return await _get_user(user_id, uow, cache, config)
