"""Tests for the /auth routes and the session cookie."""

from __future__ import annotations

import pytest
from sqlmodel import Session, select

from taskvault.config import get_settings
from taskvault.models.user import User
from taskvault.security.cookies import AUTH_COOKIE_NAME
from taskvault.security.passwords import verify_password

from .helpers import TEST_PASSWORD, login, register


def _session_cookie_header(resp) -> str:
    headers = [h for h in resp.headers.get_list("set-cookie") if h.startswith(f"{AUTH_COOKIE_NAME}=")]
    assert len(headers) == 1
    return headers[0]


class TestRegister:
    def test_register_sets_session_cookie(self, client) -> None:
        resp = register(client, "Alice@Example.com")

        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["data"]["user"]["email"] == "alice@example.com"
        assert body["data"]["user"]["id"]
        assert set(body["data"]["user"]) == {"id", "email"}

        cookie = _session_cookie_header(resp).lower()
        assert "httponly" in cookie
        assert "samesite=strict" in cookie
        assert "path=/" in cookie
        assert "max-age=604800" in cookie
        # Not production
        assert "; secure" not in cookie

    def test_duplicate_email_conflicts(self, client, make_client, engine) -> None:
        assert register(client, "alice@example.com").status_code == 201
        with Session(engine) as session:
            original_hash = session.exec(select(User)).one().password_hash

        resp = register(make_client(), "ALICE@example.com", password="Different99")

        assert resp.status_code == 409
        assert resp.json() == {
            "success": False,
            "error": {"code": "EMAIL_CONFLICT", "message": "Email already in use"},
        }
        with Session(engine) as session:
            users = session.exec(select(User)).all()
        assert len(users) == 1
        assert users[0].password_hash == original_hash
        assert verify_password(TEST_PASSWORD, users[0].password_hash)

    def test_password_policy(self, client) -> None:
        for password in ["Abcde12", "abcdef12", "ABCDEF12", "Abcdefgh", "A1" + "b" * 71]:
            resp = register(client, "alice@example.com", password=password)
            assert resp.status_code == 400, password
            assert resp.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_invalid_email(self, client) -> None:
        resp = register(client, "not-an-email")
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    def test_missing_body(self, client) -> None:
        resp = client.post("/auth/register")
        assert resp.status_code == 400


class TestLogin:
    def test_login_returns_session(self, client, make_client) -> None:
        register(client, "alice@example.com")

        other = make_client()
        resp = login(other, "ALICE@example.com")

        assert resp.status_code == 200
        assert resp.json()["data"]["user"]["email"] == "alice@example.com"
        assert "httponly" in _session_cookie_header(resp).lower()
        assert other.get("/auth/me").status_code == 200

    def test_wrong_password(self, client) -> None:
        register(client, "alice@example.com")
        resp = login(client, "alice@example.com", password="Wrongpass1")

        assert resp.status_code == 401
        assert resp.json()["error"] == {
            "code": "INVALID_CREDENTIALS",
            "message": "Invalid email or password",
        }

    def test_unknown_email_looks_like_wrong_password(self, client) -> None:
        resp = login(client, "nobody@example.com")

        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "INVALID_CREDENTIALS"
        assert resp.json()["error"]["message"] == "Invalid email or password"


class TestMe:
    def test_me_returns_identity(self, auth_client) -> None:
        resp = auth_client.get("/auth/me")

        assert resp.status_code == 200
        user = resp.json()["data"]["user"]
        assert user["email"] == "alice@example.com"
        assert user["userId"]

    def test_me_without_cookie(self, client) -> None:
        resp = client.get("/auth/me")

        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "UNAUTHORIZED"

    def test_me_with_forged_cookie(self, client) -> None:
        client.cookies.set(AUTH_COOKIE_NAME, "not.a.jwt")
        resp = client.get("/auth/me")

        assert resp.status_code == 401
        assert resp.json()["error"]["code"] == "UNAUTHORIZED"


class TestLogout:
    def test_logout_clears_cookie(self, auth_client) -> None:
        resp = auth_client.post("/auth/logout")

        assert resp.status_code == 200
        assert resp.json()["data"] == {"message": "Logged out"}
        cookie = _session_cookie_header(resp).lower()
        assert cookie.startswith(f'{AUTH_COOKIE_NAME}="";') or cookie.startswith(f"{AUTH_COOKIE_NAME}=;")
        assert "max-age=0" in cookie
        assert "1970" in cookie
        assert "httponly" in cookie

        assert auth_client.get("/auth/me").status_code == 401

    def test_logout_without_session(self, client) -> None:
        resp = client.post("/auth/logout")
        assert resp.status_code == 200


class TestProductionCookies:
    @pytest.fixture(autouse=True)
    def production_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        get_settings.cache_clear()

    def test_session_cookie_is_secure(self, client) -> None:
        resp = register(client, "alice@example.com")

        assert resp.status_code == 201
        cookie = _session_cookie_header(resp).lower()
        assert "; secure" in cookie
        assert "httponly" in cookie
        assert "samesite=strict" in cookie

    def test_login_cookie_is_secure(self, client, make_client) -> None:
        register(client, "alice@example.com")
        resp = login(make_client(), "alice@example.com")

        assert resp.status_code == 200
        assert "; secure" in _session_cookie_header(resp).lower()

    def test_cleared_cookie_is_secure(self, client) -> None:
        resp = client.post("/auth/logout")

        assert resp.status_code == 200
        cookie = _session_cookie_header(resp).lower()
        assert "; secure" in cookie
        assert "max-age=0" in cookie


def test_health(client) -> None:
    assert client.get("/health").json() == {"success": True, "data": {"status": "ok"}}


def test_unknown_route_uses_error_envelope(client) -> None:
    resp = client.get("/nope")

    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": {"code": "NOT_FOUND", "message": "Not Found"}}
