"""
Fixtures pytest communes.

- base_environ : environnement minimal valide (les 3 variables requises).
- env_config   : EnvConfig validée à partir de base_environ.
- FakeDatabase : client DB en mémoire (connect / ping / disconnect), pilotable.
- make_client  : construit l’app + TestClient (lifespan exécuté via le context manager).
"""
from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from app.core.env import StartupSuccess, validate_environment
from app.main import create_app


class FakeDatabase:
    def __init__(self, healthy: bool = True, error: str = "connection refused", delay: float = 0.0):
        self.healthy = healthy
        self.error = error
        self.delay = delay
        self.connected = False
        self.disconnected = False

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.disconnected = True

    async def ping(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if not self.healthy:
            raise ConnectionError(self.error)


@pytest.fixture
def base_environ():
    return {
        "DATABASE_URL": "postgres://x",
        "JWT_ACCESS_SECRET": "a",
        "JWT_REFRESH_SECRET": "b",
    }


@pytest.fixture
def env_config(base_environ):
    result = validate_environment(base_environ)
    assert isinstance(result, StartupSuccess)
    return result.config


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def make_client(env_config, fake_db):
    def _make(config=None, database=None, raise_server_exceptions=True, setup=None):
        app = create_app(config or env_config, database=database or fake_db)
        if setup is not None:
            setup(app)
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _make
