import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.app.services.cache_keys import session_cache_key
from src.app.use_cases.auth import SessionSnapshot
from src.domain.entities import Session
from tests.integration.conftest import USER_AGENT


async def current_session(db_session) -> Session:
    result = await db_session.exec(
        select(Session).execution_options(populate_existing=True)
    )
    return result.one()


@pytest.mark.asyncio
async def test_successful_token_refresh(client: AsyncClient, tokens, db_session, cache):
    """Rotated pair; store and cache hold the new identity"""
    response = await client.post("/auth/refresh", json={
        "refresh_token": tokens["refresh_token"]
    })

    assert response.status_code == 200
    data = response.json()
    assert data["access_token"] != tokens["access_token"]
    assert data["refresh_token"] != tokens["refresh_token"]

    session = await current_session(db_session)
    assert session.session_identity == data["refresh_token"].split(".")[2]

    cached = await cache.get(session_cache_key(session.user_id, USER_AGENT, "device-a"))
    assert cached == SessionSnapshot.model_validate(session).model_dump(mode="json")


@pytest.mark.asyncio
async def test_login_populates_cache_with_stored_session(client: AsyncClient, tokens, db_session, cache):
    session = await current_session(db_session)

    cached = await cache.get(session_cache_key(session.user_id, USER_AGENT, "device-a"))

    assert cached == SessionSnapshot.model_validate(session).model_dump(mode="json")


@pytest.mark.asyncio
async def test_refresh_rotates_every_time(client: AsyncClient, tokens, db_session):
    identities = [tokens["refresh_token"].split(".")[2]]
    refresh_token = tokens["refresh_token"]

    for _ in range(2):
        response = await client.post("/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 200
        refresh_token = response.json()["refresh_token"]
        identities.append((await current_session(db_session)).session_identity)

    assert len(set(identities)) == 3


@pytest.mark.asyncio
async def test_refresh_with_rotated_out_token(client: AsyncClient, tokens, db_session):
    """Replaying a rotated-out token is refused and revokes the device session"""
    response = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 200
    new_refresh_token = response.json()["refresh_token"]

    replay = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert replay.status_code == 403
    assert replay.json()["error"]["code"] == "INVALID_SESSION"
    assert (await current_session(db_session)).is_revoked is True

    follow_up = await client.post("/auth/refresh", json={"refresh_token": new_refresh_token})
    assert follow_up.status_code == 403


@pytest.mark.asyncio
async def test_refresh_after_session_deleted(client: AsyncClient, tokens, db_session, cache):
    """Well-signed token without a session anywhere: 403 INVALID_SESSION"""
    session = await current_session(db_session)
    await db_session.delete(session)
    await db_session.commit()
    await cache.delete(session_cache_key(session.user_id, USER_AGENT, "device-a"))

    response = await client.post("/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INVALID_SESSION"


@pytest.mark.asyncio
async def test_refresh_from_other_user_agent(client: AsyncClient, tokens):
    response = await client.post(
        "/auth/refresh",
        json={"refresh_token": tokens["refresh_token"]},
        headers={"User-Agent": "curl/8.0"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_refresh_with_invalid_token(client: AsyncClient):
    response = await client.post("/auth/refresh", json={"refresh_token": "not.a.token"})

    assert response.status_code == 401
