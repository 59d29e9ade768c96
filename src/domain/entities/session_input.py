"""
Session Input

Validated shape of a session write, built before touching the store.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SessionInput(BaseModel):
    """Payload for ISessionRepository.save_session"""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    session_identity: str = Field(..., min_length=1, max_length=512)
    ip_address: str = Field(default="", max_length=64)
    user_agent: str = Field(..., min_length=1, max_length=512)
    device: str = Field(..., min_length=1, max_length=255)
    location: Optional[str] = Field(default=None, max_length=255)
    expiration_seconds: int = Field(..., gt=0)
