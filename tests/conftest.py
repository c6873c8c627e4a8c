import os
import tempfile
from pathlib import Path

# must be set before the app (and its engine) is imported
_DB_DIR = tempfile.mkdtemp(prefix="tour-server-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.db'}"
os.environ.setdefault("REDIS_URL", "redis://127.0.0.1:6379/15")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from loguru import logger  # noqa: E402
from redis.exceptions import ConnectionError as RedisConnectionError  # noqa: E402

from app.cache import get_redis  # noqa: E402
from app.main import app  # noqa: E402


class FakeRedis:
    """Dict-backed stand-in for the two commands the routes use."""

    def __init__(self, error: Exception | None = None):
        self.data: dict[str, str] = {}
        self.error = error

    async def get(self, key):
        if self.error:
            raise self.error
        return self.data.get(key)

    async def set(self, key, value):
        if self.error:
            raise self.error
        self.data[key] = value
        return True


@pytest.fixture
def fake_redis():
    store = FakeRedis()
    app.dependency_overrides[get_redis] = lambda: store
    yield store
    app.dependency_overrides.pop(get_redis, None)


@pytest.fixture
def broken_redis(fake_redis):
    fake_redis.error = RedisConnectionError("connection refused")
    return fake_redis


@pytest.fixture
def client(fake_redis):
    saved = dict(app.dependency_overrides)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    app.dependency_overrides.update(saved)


@pytest.fixture
def log_lines():
    lines = []
    handler_id = logger.add(lines.append, level="DEBUG", format="{message}")
    yield lines
    logger.remove(handler_id)
