from datetime import timedelta
from uuid import UUID, uuid4

import bcrypt

from src.domain.base import utcnow
from src.domain.entities import Session, User, UserRole

PASSWORD = "SecurePass123!"
PASSWORD_HASH = bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode()


def make_user(email: str = "a@x.com", role: UserRole = UserRole.user) -> User:
    return User(
        id=uuid4(),
        email=email,
        password_hash=PASSWORD_HASH,
        first_name="Ada",
        last_name="Lovelace",
        role=role,
    )


def make_session(
    user_id: UUID,
    session_identity: str,
    user_agent: str = "Mozilla/5.0 (X11; Linux x86_64)",
    device: str = "laptop-1",
    **overrides,
) -> Session:
    now = utcnow()
    fields = dict(
        id=uuid4(),
        user_id=user_id,
        session_identity=session_identity,
        ip_address="10.0.0.7",
        user_agent=user_agent,
        device=device,
        location="Berlin",
        active=True,
        is_revoked=False,
        created_at=now,
        expires_at=now + timedelta(days=1),
    )
    fields.update(overrides)
    return Session(**fields)


def echo_saved_session(session_input) -> Session:
    """Stand-in for SessionRepository.save_session"""
    return make_session(
        session_input.user_id,
        session_input.session_identity,
        user_agent=session_input.user_agent,
        device=session_input.device,
        ip_address=session_input.ip_address,
        location=session_input.location,
    )
