"""
Session Entity

One authenticated device binding per (user, user agent, device).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import UniqueConstraint
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - binds a user to one user agent + device.

    Business Rules:
    - At most one row per (user_id, user_agent, device), kept by upsert
    - session_identity is the signature segment of the current refresh
      token, never the token itself
    - Identity rotates on every token refresh
    - expires_at = write time + refresh token lifetime
    - A row past expires_at is dead even before the cleanup job deletes it
    """

    __tablename__ = "user_sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    session_identity: str = Field(unique=True, index=True, max_length=512)
    ip_address: str = Field(default="", max_length=64)
    user_agent: str = Field(max_length=512)
    device: str = Field(max_length=255)
    location: Optional[str] = Field(default=None, max_length=255)

    active: bool = Field(default=True)
    is_revoked: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (
        UniqueConstraint("user_id", "user_agent", "device", name="uq_session_user_device"),
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_revoked", "is_revoked"),
    )
