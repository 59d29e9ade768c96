from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.adapter.services.memory_cache_service import InMemoryCacheService
from src.api.utils.jwt import JwtTokenIssuer
from src.app.use_cases.auth import ClientContext


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with both repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.create = AsyncMock()
    uow.users.list = AsyncMock(return_value=[])
    uow.users.count = AsyncMock(return_value=0)

    uow.sessions = MagicMock()
    uow.sessions.save_session = AsyncMock()
    uow.sessions.delete_session = AsyncMock(return_value="")
    uow.sessions.find_session_by_user_device = AsyncMock(return_value=None)
    uow.sessions.find_session_by_identity = AsyncMock(return_value=None)
    uow.sessions.count_user_sessions = AsyncMock(return_value=0)
    uow.sessions.revoke_session = AsyncMock()
    uow.sessions.revoke_user_sessions = AsyncMock(return_value=0)
    uow.sessions.list_user_sessions = AsyncMock(return_value=[])
    uow.sessions.cleanup_expired_sessions = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def cache():
    return InMemoryCacheService()


@pytest.fixture
def token_issuer():
    return JwtTokenIssuer(
        access_secret="unit-access-secret",
        refresh_secret="unit-refresh-secret",
        issuer="catalog-api-test",
        access_ttl=timedelta(minutes=5),
        refresh_ttl=timedelta(days=1),
    )


@pytest.fixture
def context():
    return ClientContext(
        user_agent="Mozilla/5.0 (X11; Linux x86_64)",
        ip_address="10.0.0.7",
        device="laptop-1",
        location="Berlin",
    )
