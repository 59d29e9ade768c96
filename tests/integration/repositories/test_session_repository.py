from datetime import timedelta

import pytest
import pytest_asyncio
from sqlmodel import select

from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.user_repository import UserRepository
from src.domain.base import utcnow
from src.domain.entities import Session, SessionInput, User


@pytest_asyncio.fixture
async def user(db_session):
    user = await UserRepository(db_session).create(
        User(email="a@x.com", password_hash="x" * 60)
    )
    await db_session.commit()
    return user


@pytest.fixture
def repo(db_session):
    return SessionRepository(db_session)


def session_input(user, identity: str, device: str = "deviceA", **overrides) -> SessionInput:
    fields = dict(
        user_id=user.id,
        session_identity=identity,
        ip_address="10.0.0.7",
        user_agent="UA1",
        device=device,
        expiration_seconds=3600,
    )
    fields.update(overrides)
    return SessionInput(**fields)


@pytest.mark.asyncio
async def test_save_session_upserts_per_device(repo, user, db_session):
    first = await repo.save_session(session_input(user, "sig-1"))
    second = await repo.save_session(session_input(user, "sig-2", ip_address="10.0.0.8"))
    await db_session.commit()

    result = await db_session.exec(select(Session))
    rows = result.all()
    assert len(rows) == 1
    assert second.id == first.id
    assert second.session_identity == "sig-2"
    assert second.ip_address == "10.0.0.8"


@pytest.mark.asyncio
async def test_save_session_revives_revoked_row(repo, user, db_session):
    await repo.save_session(session_input(user, "sig-1"))
    await repo.revoke_session("sig-1")

    session = await repo.save_session(session_input(user, "sig-2"))

    assert session.is_revoked is False
    assert session.active is True
    assert await repo.count_user_sessions(user.id) == 1


@pytest.mark.asyncio
async def test_find_session_ignores_revoked_and_expired(repo, user, db_session):
    await repo.save_session(session_input(user, "sig-a", device="a"))
    await repo.save_session(session_input(user, "sig-b", device="b"))
    await repo.revoke_session("sig-a")

    b = await repo.find_session_by_user_device(user.id, "UA1", "b")
    b.expires_at = utcnow() - timedelta(seconds=1)
    db_session.add(b)
    await db_session.flush()

    assert await repo.find_session_by_user_device(user.id, "UA1", "a") is None
    assert await repo.find_session_by_user_device(user.id, "UA1", "b") is None
    assert await repo.count_user_sessions(user.id) == 0


@pytest.mark.asyncio
async def test_delete_session(repo, user):
    await repo.save_session(session_input(user, "sig-1"))

    assert await repo.delete_session("sig-1") == "sig-1"
    assert await repo.delete_session("sig-1") == ""


@pytest.mark.asyncio
async def test_revoke_user_sessions(repo, user):
    for device in ["a", "b", "c"]:
        await repo.save_session(session_input(user, f"sig-{device}", device=device))

    assert await repo.revoke_user_sessions(user.id) == 3
    assert await repo.list_user_sessions(user.id) == []
    assert await repo.revoke_user_sessions(user.id) == 0


@pytest.mark.asyncio
async def test_cleanup_expired_sessions(repo, user, db_session):
    await repo.save_session(session_input(user, "sig-live", device="live"))
    expired = await repo.save_session(session_input(user, "sig-old", device="old"))
    expired.expires_at = utcnow() - timedelta(days=1)
    db_session.add(expired)
    await db_session.flush()

    assert await repo.cleanup_expired_sessions() == 1

    remaining = await repo.list_user_sessions(user.id)
    assert [s.session_identity for s in remaining] == ["sig-live"]


@pytest.mark.asyncio
async def test_find_session_by_identity_includes_revoked(repo, user):
    await repo.save_session(session_input(user, "sig-1", device="phone"))
    await repo.revoke_session("sig-1")

    session = await repo.find_session_by_identity("sig-1")

    assert session is not None
    assert session.device == "phone"
    assert session.is_revoked is True
    assert await repo.find_session_by_identity("missing") is None
