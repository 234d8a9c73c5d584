import os

# Must be in place before shortlink.core.config builds its settings
os.environ.setdefault("LINK_SALT", "test-salt")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.pop("REDIS_HOST", None)

import threading

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shortlink.main import app
from shortlink.db.models import Base
from shortlink.db import database
from shortlink.api.deps import get_cache, get_registry
from shortlink.services.identifiers import MemoryIdentifierAllocator
from shortlink.services.shortener import LinkRegistry
from shortlink.utils.encoding import LinkCodec


# Create in-memory SQLite database for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeRedis:
    """Just enough of redis.Redis for the cache and the identifier allocator."""

    def __init__(self):
        self.store = {}
        self._lock = threading.Lock()

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ex=None, nx=False):
        with self._lock:
            if nx and key in self.store:
                return None
            self.store[key] = str(value)
            return True

    def exists(self, key):
        return 1 if key in self.store else 0

    def setex(self, key, ttl, value):
        self.store[key] = value
        return True

    def delete(self, key):
        return 1 if self.store.pop(key, None) is not None else 0

    def incr(self, key):
        with self._lock:
            value = int(self.store.get(key, 0)) + 1
            self.store[key] = str(value)
            return value


@pytest.fixture
def db_session():
    """Creates a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def codec():
    return LinkCodec(salt="abc", min_length=5)


@pytest.fixture
def registry(codec):
    return LinkRegistry(codec, MemoryIdentifierAllocator())


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def client(db_session, registry):
    """Creates a test client with overridden database, registry and cache."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database.get_db] = override_get_db
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_cache] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_urls():
    """Provides sample URLs for testing."""
    return [
        "https://example.com/test1",
        "https://google.com/search?q=test",
        "https://github.com/user/repo",
    ]
