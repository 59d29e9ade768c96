import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import Session, User, UserRole


def auth(tokens) -> dict:
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest.mark.asyncio
async def test_list_my_sessions(client: AsyncClient, tokens):
    await client.post(
        "/auth/login",
        json={"email": "a@x.com", "password": "SecurePass123!"},
        headers={"X-Device-Id": "device-b"},
    )

    response = await client.get("/sessions", headers=auth(tokens))

    assert response.status_code == 200
    sessions = response.json()
    assert sorted(s["device"] for s in sessions) == ["device-a", "device-b"]
    assert all("session_identity" not in s for s in sessions)


@pytest.mark.asyncio
async def test_list_sessions_requires_token(client: AsyncClient):
    response = await client.get("/sessions")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_access_token_bound_to_user_agent(client: AsyncClient, tokens):
    response = await client.get(
        "/sessions", headers={**auth(tokens), "User-Agent": "curl/8.0"}
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_revoke_own_sessions(client: AsyncClient, tokens, registered_user, db_session, cache):
    response = await client.post(
        "/sessions/revoke-all",
        json={"user_id": registered_user["id"]},
        headers=auth(tokens),
    )

    assert response.status_code == 200
    assert response.json()["revoked_count"] == 1

    result = await db_session.exec(select(Session))
    assert all(s.is_revoked for s in result.all())
    assert cache._entries == {}

    refresh = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refresh.status_code == 403


@pytest.mark.asyncio
async def test_revoke_other_user_sessions_forbidden(client: AsyncClient, tokens):
    other = await client.post("/auth/register", json={
        "email": "b@x.com",
        "password": "SecurePass123!",
    })

    response = await client.post(
        "/sessions/revoke-all",
        json={"user_id": other.json()["id"]},
        headers=auth(tokens),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_admin_revokes_other_user_sessions(client: AsyncClient, tokens, db_session):
    result = await db_session.exec(select(User).where(User.email == "a@x.com"))
    admin = result.one()
    admin.role = UserRole.admin
    db_session.add(admin)
    await db_session.commit()

    other = await client.post("/auth/register", json={
        "email": "b@x.com",
        "password": "SecurePass123!",
    })

    response = await client.post(
        "/sessions/revoke-all",
        json={"user_id": other.json()["id"]},
        headers=auth(tokens),
    )

    assert response.status_code == 200
    assert response.json()["revoked_count"] == 0
