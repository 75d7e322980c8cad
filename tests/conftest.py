# tests/conftest.py

from __future__ import annotations

from typing import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from taskvault import models  # noqa: F401  (registers tables)
from taskvault.api import deps
from taskvault.config import get_settings
from taskvault.database import database
from taskvault.database.database import get_session
from taskvault.main import create_app
from taskvault.security import passwords
from taskvault.security.cipher import CipherKey, FieldCipher
from taskvault.security.tokens import TokenService

from .helpers import TEST_ENCRYPTION_KEY, TEST_JWT_SECRET, register


def _clear_caches() -> None:
    get_settings.cache_clear()
    database.get_engine.cache_clear()
    deps.get_token_service.cache_clear()
    deps.get_field_cipher.cache_clear()


@pytest.fixture(autouse=True)
def test_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Point settings at a throwaway configuration for every test."""
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("ENCRYPTION_KEY", TEST_ENCRYPTION_KEY)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    # bcrypt at cost 12 is deliberately slow; tests only need it to be correct
    monkeypatch.setattr(passwords, "BCRYPT_ROUNDS", 4)
    _clear_caches()
    yield
    _clear_caches()


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture(name="cipher")
def cipher_fixture() -> FieldCipher:
    return FieldCipher(CipherKey.from_hex(TEST_ENCRYPTION_KEY))


@pytest.fixture(name="token_service")
def token_service_fixture() -> TokenService:
    return TokenService(TEST_JWT_SECRET)


@pytest.fixture(name="app")
def app_fixture(engine) -> Iterator[FastAPI]:
    app = create_app()

    def _get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session_override
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(name="make_client")
def make_client_fixture(app: FastAPI) -> Iterator[Callable[[], TestClient]]:
    """Factory for independent clients (separate cookie jars) on the same app."""
    clients: list[TestClient] = []

    def _make() -> TestClient:
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture(name="client")
def client_fixture(make_client) -> TestClient:
    return make_client()


@pytest.fixture(name="auth_client")
def auth_client_fixture(make_client) -> TestClient:
    """A client with a live session for alice@example.com."""
    client = make_client()
    resp = register(client, "alice@example.com")
    assert resp.status_code == 201
    return client
