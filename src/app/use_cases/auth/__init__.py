"""
Authentication Use Cases

Login, token refresh, logout and registration.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase, LOGOUT_SUCCESS
from .register_use_case import RegisterUseCase
from .dtos import (
    ClientContext,
    RegisterCommand,
    TokenPair,
    LogoutResponse,
    RegisterResponse,
    SessionSnapshot,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "RegisterUseCase",
    # DTOs - Commands
    "ClientContext",
    "RegisterCommand",
    # DTOs - Responses
    "TokenPair",
    "LogoutResponse",
    "RegisterResponse",
    # Cache payloads
    "SessionSnapshot",
    # Constants
    "LOGOUT_SUCCESS",
]
