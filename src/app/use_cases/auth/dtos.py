"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Commands
# ============================================================================


class ClientContext(BaseModel):
    """Client binding for a session: who is calling, from where"""

    model_config = ConfigDict(frozen=True)

    user_agent: str
    ip_address: str = ""
    device: str
    location: Optional[str] = None


class RegisterCommand(BaseModel):
    """Command for registering a new catalog user"""

    email: str
    password: str = Field(..., min_length=8)
    first_name: str = ""
    last_name: str = ""


# ============================================================================
# Response DTOs
# ============================================================================


class TokenPair(BaseModel):
    """Response for login and refresh use cases"""

    access_token: str
    refresh_token: str


class LogoutResponse(BaseModel):
    """Response for logout use case. Empty status means nothing was logged out."""

    status: str


class RegisterResponse(BaseModel):
    """Response for register use case - never carries the password hash"""

    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    created_at: datetime


# ============================================================================
# Cache payloads
# ============================================================================


class SessionSnapshot(BaseModel):
    """Cached mirror of a Session row"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    session_identity: str
    ip_address: str
    user_agent: str
    device: str
    location: Optional[str] = None
    created_at: datetime
    expires_at: datetime
    active: bool
    is_revoked: bool
