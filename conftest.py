import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.pop("REDIS_URL", None)

import time

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from rental.main import app
from rental.core.config import settings
from rental.db.seed import seed_catalog
from rental.db.session import build_engine, get_db, init_db


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeRedis:
    """In-memory stand-in for redis.asyncio.Redis covering get/set/ping."""

    def __init__(self):
        self.store = {}

    async def ping(self):
        return True

    async def get(self, key):
        value, expires_at = self.store.get(key, (None, None))
        if expires_at is not None and expires_at < time.monotonic():
            self.store.pop(key, None)
            return None
        return value

    async def set(self, key, value, ex=None, nx=False):
        if nx and await self.get(key) is not None:
            return None
        if isinstance(value, str):
            value = value.encode()
        self.store[key] = (value, time.monotonic() + ex if ex else None)
        return True

    async def delete(self, key):
        return 1 if self.store.pop(key, None) else 0

    async def close(self):
        self.store.clear()


@pytest.fixture
async def test_engine():
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def setup_db(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
async def seeded_db(setup_db, session_factory):
    async with session_factory() as session:
        await seed_catalog(session)


@pytest.fixture
async def test_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def fake_redis(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr("rental.core.redis.redis", fake)
    return fake


class BrokenRedis(FakeRedis):
    """Redis whose selected commands fail as if the server went away."""

    def __init__(self, failing=("get", "set", "delete")):
        super().__init__()
        self.failing = set(failing)

    async def get(self, key):
        if "get" in self.failing:
            raise ConnectionError("redis down")
        return await super().get(key)

    async def set(self, key, value, ex=None, nx=False):
        if "set" in self.failing:
            raise ConnectionError("redis down")
        return await super().set(key, value, ex=ex, nx=nx)

    async def delete(self, key):
        if "delete" in self.failing:
            raise ConnectionError("redis down")
        return await super().delete(key)


@pytest.fixture
def broken_redis(monkeypatch):
    def _install(failing=("get", "set", "delete")):
        broken = BrokenRedis(failing)
        monkeypatch.setattr("rental.core.redis.redis", broken)
        return broken
    return _install


@pytest.fixture
def strict_totals(monkeypatch):
    monkeypatch.setattr(settings, "VERIFY_TOTAL_PRICE", True)


@pytest.fixture
def valid_booking_data():
    # Innova, 1 day, no extra hours
    return {
        "carId": 2,
        "rentalDays": 1,
        "extraHours": 0,
        "totalPrice": 890000,
    }


@pytest.fixture
def app_settings():
    """Return application settings"""
    return settings


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "pricing: marks tests related to pricing"
    )
    config.addinivalue_line(
        "markers", "booking: marks tests related to booking submission"
    )
    config.addinivalue_line(
        "markers", "catalog: marks tests related to the vehicle catalog"
    )
    config.addinivalue_line(
        "markers", "idempotency: marks tests related to idempotency"
    )
    config.addinivalue_line(
        "markers", "client: marks tests related to the booking form client"
    )
