"""
Session Use Cases

Session housekeeping and listing.
"""

from .cleanup_sessions_use_case import CleanupSessionsUseCase
from .list_sessions_use_case import ListSessionsUseCase

__all__ = [
    "CleanupSessionsUseCase",
    "ListSessionsUseCase",
]
