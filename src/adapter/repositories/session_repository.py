from datetime import timedelta
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, func, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.base import utcnow
from src.domain.entities import Session, SessionInput

_UPSERT_DIALECTS = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _live(self):
        return (Session.is_revoked == False, Session.expires_at > utcnow())  # noqa: E712

    async def _get_by_user_device(
        self, user_id: UUID, user_agent: str, device: str
    ) -> Optional[Session]:
        stmt = (
            select(Session)
            .where(
                Session.user_id == user_id,
                Session.user_agent == user_agent,
                Session.device == device,
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def save_session(self, session_input: SessionInput) -> Session:
        """
        Upsert the session for (user_id, user_agent, device).

        Uses INSERT ... ON CONFLICT DO UPDATE on the composite unique key so
        concurrent logins from one device resolve to last-write-wins without
        ever producing a second row.
        """
        now = utcnow()
        values = {
            "session_identity": session_input.session_identity,
            "ip_address": session_input.ip_address,
            "location": session_input.location,
            "expires_at": now + timedelta(seconds=session_input.expiration_seconds),
            "active": True,
            "is_revoked": False,
        }

        dialect = self.session.bind.dialect.name if self.session.bind else ""
        insert = _UPSERT_DIALECTS.get(dialect)

        if insert is not None:
            stmt = insert(Session).values(
                id=uuid4(),
                user_id=session_input.user_id,
                user_agent=session_input.user_agent,
                device=session_input.device,
                created_at=now,
                **values,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id", "user_agent", "device"],
                set_=values,
            )
            await self.session.execute(stmt)
            await self.session.flush()
            return await self._get_by_user_device(
                session_input.user_id, session_input.user_agent, session_input.device
            )

        session_obj = await self._get_by_user_device(
            session_input.user_id, session_input.user_agent, session_input.device
        )
        if session_obj is None:
            session_obj = Session(
                user_id=session_input.user_id,
                user_agent=session_input.user_agent,
                device=session_input.device,
                created_at=now,
                **values,
            )
        else:
            for field, value in values.items():
                setattr(session_obj, field, value)
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def delete_session(self, session_identity: str) -> str:
        """Delete session by identity"""
        stmt = delete(Session).where(Session.session_identity == session_identity)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return session_identity if result.rowcount else ""

    async def find_session_by_identity(self, session_identity: str) -> Optional[Session]:
        """Get the session holding this identity, whatever its state"""
        stmt = (
            select(Session)
            .where(Session.session_identity == session_identity)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_session_by_user_device(
        self, user_id: UUID, user_agent: str, device: str
    ) -> Optional[Session]:
        """Get the live session for a device"""
        stmt = (
            select(Session)
            .where(
                Session.user_id == user_id,
                Session.user_agent == user_agent,
                Session.device == device,
                *self._live(),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def count_user_sessions(self, user_id: UUID) -> int:
        """Count live sessions for a user"""
        stmt = (
            select(func.count())
            .select_from(Session)
            .where(Session.user_id == user_id, *self._live())
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def revoke_session(self, session_identity: str) -> None:
        """Mark the session holding this identity as revoked"""
        stmt = (
            update(Session)
            .where(Session.session_identity == session_identity)
            .values(is_revoked=True, active=False)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def revoke_user_sessions(self, user_id: UUID) -> int:
        """Revoke all live sessions for a user"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, Session.is_revoked == False)  # noqa: E712
            .values(is_revoked=True, active=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def list_user_sessions(self, user_id: UUID) -> List[Session]:
        """Get all live sessions for a user, newest first"""
        stmt = (
            select(Session)
            .where(Session.user_id == user_id, *self._live())
            .order_by(Session.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def cleanup_expired_sessions(self) -> int:
        """Delete sessions past expires_at"""
        stmt = delete(Session).where(Session.expires_at < utcnow())
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
