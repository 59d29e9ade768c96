"""
Catalog Domain Entities

Each entity in its own file.
"""

from .enums import UserRole
from .user import User
from .session import Session
from .session_input import SessionInput

__all__ = [
    # Enums
    "UserRole",
    # Entities
    "User",
    "Session",
    # Value objects
    "SessionInput",
]
