from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def list(self, limit: int, cursor: Optional[UUID] = None) -> List[User]:
        """List users ordered by ID, starting after cursor"""
        stmt = select(User).order_by(User.id).limit(limit)
        if cursor is not None:
            stmt = stmt.where(User.id > cursor)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count(self) -> int:
        """Count all users"""
        stmt = select(func.count()).select_from(User)
        result = await self.session.exec(stmt)
        return result.one()
