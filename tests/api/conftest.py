"""API test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys on
    - get_db dependency overridden to use the test engine through
      DatabaseSessionManager.session() (same rollback + error mapping as prod)
    - db_manager patched so the health route sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - raise_app_exceptions=False: the catch-all 500 handler runs in Starlette's
      ServerErrorMiddleware, which re-raises after responding
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import customer_api.infrastructure.database as db_module
import customer_api.models  # noqa: F401
from customer_api.config import get_settings
from customer_api.db.base import Base
from customer_api.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
from customer_api.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def production_mode(monkeypatch):
    """Switch get_settings() to production for one test."""
    monkeypatch.setenv("ENVIRONMENT", "production")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_customer(client):
    """POST a customer and return its id."""
    async def _make(**overrides):
        body = {
            "first_name": "Jane",
            "last_name": "Doe",
            "phone_number": "9876543210",
            **overrides,
        }
        resp = await client.post("/api/customers", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]["id"]
    return _make


@pytest.fixture
def make_address(client):
    """POST an address for a customer and return its id."""
    async def _make(customer_id: int, **overrides):
        body = {
            "customer_id": customer_id,
            "address_details": "12 MG Road, Near Metro Station",
            "city": "Bengaluru",
            "state": "Karnataka",
            "pin_code": "560001",
            **overrides,
        }
        resp = await client.post("/api/addresses", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]["id"]
    return _make
