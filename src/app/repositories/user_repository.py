from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """
    Credential store.

    The session layer only reads from it; registration is the one writer.
    Emails are stored lowercased, so lookups expect a normalized address.
    """

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user; flushed, not committed"""
        pass

    @abstractmethod
    async def list(self, limit: int, cursor: Optional[UUID] = None) -> List[User]:
        """Keyset page of users ordered by id, strictly after ``cursor``"""
        pass

    @abstractmethod
    async def count(self) -> int:
        pass
