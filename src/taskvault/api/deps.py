"""
Shared FastAPI dependencies for TaskVault
The session guard and the process-wide security services
"""
from functools import lru_cache
from typing import Optional

from fastapi import Cookie, Depends

from ..config import get_settings
from ..security.cipher import CipherKey, FieldCipher
from ..security.cookies import AUTH_COOKIE_NAME
from ..security.tokens import SessionIdentity, TokenService
from ..utils.errors import UnauthorizedError


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(get_settings().jwt_secret)


@lru_cache
def get_field_cipher() -> FieldCipher:
    return FieldCipher(CipherKey.from_hex(get_settings().encryption_key))


def get_current_user(
    session_token: Optional[str] = Cookie(default=None, alias=AUTH_COOKIE_NAME),
    tokens: TokenService = Depends(get_token_service),
) -> SessionIdentity:
    """
    Resolve the authenticated user from the session cookie.

    Every protected route depends on this; nothing else reads the cookie.

    Raises:
        UnauthorizedError: If the cookie is missing or its token is invalid or expired
    """
    if not session_token:
        raise UnauthorizedError("Authentication required")
    return tokens.verify(session_token)
