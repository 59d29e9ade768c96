"""
Catalog Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Catalog user role"""

    user = "user"
    admin = "admin"
