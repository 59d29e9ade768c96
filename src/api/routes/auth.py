from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from libs.result import Error
from src.api.error import ClientError, ServerError
from src.api.utils.context import get_client_context
from src.api.utils.jwt import JwtTokenIssuer
from src.app.services.cache_service import ICacheService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    TokenPair,
)
from src.app.use_cases.auth import errors
from src.depends import get_cache_service, get_config, get_token_issuer, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _raise_session_error(error: Error):
    """Map session error kinds to HTTP statuses"""
    if error.code in (errors.INVALID_CREDENTIALS, errors.VALIDATION_ERROR):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    elif error.code == errors.UNAUTHORIZED:
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    elif error.code in (errors.INVALID_SESSION, errors.SESSION_LIMIT_EXCEEDED):
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    raise ServerError(error)


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    first_name: str = Field("", max_length=100)
    last_name: str = Field("", max_length=100)


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(request: RegisterRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Registration

    Raises:
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: Server error
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )

    use_case = RegisterUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == errors.EMAIL_ALREADY_EXISTS:
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=TokenPair)
async def login(
    request: LoginRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICacheService = Depends(get_cache_service),
    token_issuer: JwtTokenIssuer = Depends(get_token_issuer),
    config=Depends(get_config),
):
    """
    User Login

    Opens (or renews) the session for the calling device and returns a
    token pair bound to the caller's User-Agent.

    Raises:
        - 400 Bad Request: Invalid credentials or invalid session data
        - 403 Forbidden: Session limit reached
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, cache, token_issuer, config.SESSION_LIMIT)
    result = await use_case.execute(
        request.email.lower(), request.password, get_client_context(http_request)
    )

    if result.is_err():
        _raise_session_error(result.error)

    return result.value


class RefreshRequest(BaseModel):
    """Refresh token HTTP request payload"""

    refresh_token: str = Field(..., description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=TokenPair)
async def refresh(
    request: RefreshRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICacheService = Depends(get_cache_service),
    token_issuer: JwtTokenIssuer = Depends(get_token_issuer),
    config=Depends(get_config),
):
    """
    Refresh Token Pair

    Rotates both tokens; the presented refresh token stops matching the
    device session.

    Raises:
        - 401 Unauthorized: Invalid/expired token or wrong client
        - 403 Forbidden: No live session for this device, or session limit reached
        - 500 Internal Server Error: Server error
    """
    use_case = RefreshTokenUseCase(uow, cache, token_issuer, config.SESSION_LIMIT)
    result = await use_case.execute(
        request.refresh_token, get_client_context(http_request)
    )

    if result.is_err():
        _raise_session_error(result.error)

    return result.value


class LogoutRequest(BaseModel):
    """Logout HTTP request payload"""

    refresh_token: str = Field(..., description="Refresh token")


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: LogoutRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICacheService = Depends(get_cache_service),
    token_issuer: JwtTokenIssuer = Depends(get_token_issuer),
):
    """
    Logout

    Deletes the device session. An invalid or expired token returns an
    empty status rather than an error.
    """
    use_case = LogoutUseCase(uow, cache, token_issuer)
    result = await use_case.execute(
        request.refresh_token, get_client_context(http_request)
    )

    if result.is_err():
        raise ServerError(result.error)

    return result.value
