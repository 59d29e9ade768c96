from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Session, SessionInput


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def save_session(self, session_input: SessionInput) -> Session:
        """Upsert the session for (user_id, user_agent, device)"""
        pass

    @abstractmethod
    async def delete_session(self, session_identity: str) -> str:
        """Delete session by identity. Returns the identity, or "" if absent."""
        pass

    @abstractmethod
    async def find_session_by_identity(self, session_identity: str) -> Optional[Session]:
        """Get the session holding this identity, whatever its state"""
        pass

    @abstractmethod
    async def find_session_by_user_device(
        self, user_id: UUID, user_agent: str, device: str
    ) -> Optional[Session]:
        """Get the live (non-revoked, non-expired) session for a device"""
        pass

    @abstractmethod
    async def count_user_sessions(self, user_id: UUID) -> int:
        """Count live sessions for a user"""
        pass

    @abstractmethod
    async def revoke_session(self, session_identity: str) -> None:
        """Mark the session holding this identity as revoked"""
        pass

    @abstractmethod
    async def revoke_user_sessions(self, user_id: UUID) -> int:
        """Revoke all live sessions for a user. Returns count of revoked sessions."""
        pass

    @abstractmethod
    async def list_user_sessions(self, user_id: UUID) -> List[Session]:
        """Get all live sessions for a user"""
        pass

    @abstractmethod
    async def cleanup_expired_sessions(self) -> int:
        """Delete sessions past expires_at. Returns count deleted."""
        pass
