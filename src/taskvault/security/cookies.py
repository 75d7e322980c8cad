"""
Session cookie handling for TaskVault
"""
from datetime import datetime, timezone

from fastapi import Response

from .tokens import SESSION_TTL

AUTH_COOKIE_NAME = "taskvault_session"
SESSION_MAX_AGE = int(SESSION_TTL.total_seconds())
SESSION_EXPIRED_AT = datetime(1970, 1, 1, tzinfo=timezone.utc)


def attach_session_cookie(response: Response, token: str, secure: bool) -> None:
    """Set the session cookie. Its lifetime matches the token's."""
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=SESSION_MAX_AGE,
        httponly=True,
        samesite="strict",
        secure=secure,
        path="/",
    )


def clear_session_cookie(response: Response, secure: bool) -> None:
    """Overwrite the session cookie with an empty value that has already expired."""
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value="",
        max_age=0,
        expires=SESSION_EXPIRED_AT,
        httponly=True,
        samesite="strict",
        secure=secure,
        path="/",
    )
