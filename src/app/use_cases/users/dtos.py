"""
User Use Case DTOs
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel


class UserDetail(BaseModel):
    """Public user profile - never carries the password hash"""

    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    created_at: datetime

    @classmethod
    def from_user(cls, user) -> "UserDetail":
        return cls(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            created_at=user.created_at,
        )


class UserListResult(BaseModel):
    """Cursor-paged user listing"""

    data: List[UserDetail]
    limit: int
    has_next_page: bool
    next_cursor: str
    total: int
