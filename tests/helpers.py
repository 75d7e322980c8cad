# tests/helpers.py

from __future__ import annotations

from fastapi.testclient import TestClient

TEST_JWT_SECRET = "test-secret-that-is-at-least-32-characters-long"
TEST_ENCRYPTION_KEY = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"
OTHER_ENCRYPTION_KEY = "ffeeddccbbaa99887766554433221100ffeeddccbbaa99887766554433221100"
TEST_PASSWORD = "Abcdef12"


def register(client: TestClient, email: str, password: str = TEST_PASSWORD):
    return client.post("/auth/register", json={"email": email, "password": password})


def login(client: TestClient, email: str, password: str = TEST_PASSWORD):
    return client.post("/auth/login", json={"email": email, "password": password})


def create_task(client: TestClient, title: str = "t1", description: str = "secret", status: str | None = None):
    body = {"title": title, "description": description}
    if status is not None:
        body["status"] = status
    return client.post("/tasks", json=body)
