"""
Use Cases

Organized into domain folders:
- auth/: Login, refresh, logout, registration
- sessions/: Session cleanup and listing
- users/: User reads and session revocation
"""

from .auth import (
    LoginUseCase,
    RefreshTokenUseCase,
    LogoutUseCase,
    RegisterUseCase,
)
from .sessions import (
    CleanupSessionsUseCase,
    ListSessionsUseCase,
)
from .users import (
    GetUserUseCase,
    ListUsersUseCase,
    RevokeSessionsUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    "RegisterUseCase",
    # Sessions
    "CleanupSessionsUseCase",
    "ListSessionsUseCase",
    # Users
    "GetUserUseCase",
    "ListUsersUseCase",
    "RevokeSessionsUseCase",
]
