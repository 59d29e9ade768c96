"""
User Management Use Cases

All user-related business logic.
"""

from .get_user_use_case import GetUserUseCase
from .list_users_use_case import ListUsersUseCase
from .revoke_sessions_use_case import RevokeSessionsUseCase
from .dtos import UserDetail, UserListResult

__all__ = [
    "GetUserUseCase",
    "ListUsersUseCase",
    "RevokeSessionsUseCase",
    "UserDetail",
    "UserListResult",
]
