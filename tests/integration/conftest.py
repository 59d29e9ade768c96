import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.memory_cache_service import InMemoryCacheService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_unit_of_work

USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) CatalogTest/1.0"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def cache():
    return InMemoryCacheService()


@pytest_asyncio.fixture
async def app(engine, cache):
    from config import ApplicationConfig
    from src.api.app import create_app

    app = create_app(ApplicationConfig, cache_service=cache)
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_unit_of_work():
        async with Session() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"User-Agent": USER_AGENT, "X-Device-Id": "device-a"},
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def registered_user(client):
    response = await client.post("/auth/register", json={
        "email": "a@x.com",
        "password": "SecurePass123!",
        "first_name": "Ada",
        "last_name": "Lovelace",
    })
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def tokens(client, registered_user):
    response = await client.post("/auth/login", json={
        "email": "a@x.com",
        "password": "SecurePass123!",
    })
    assert response.status_code == 200
    return response.json()
