"""
Security module for TaskVault
Password hashing, field encryption, session tokens and the session cookie
"""
from .passwords import hash_password, verify_password
from .cipher import CipherKey, FieldCipher
from .tokens import SessionIdentity, TokenService
from .cookies import AUTH_COOKIE_NAME, attach_session_cookie, clear_session_cookie

__all__ = [
    "hash_password",
    "verify_password",
    "CipherKey",
    "FieldCipher",
    "SessionIdentity",
    "TokenService",
    "AUTH_COOKIE_NAME",
    "attach_session_cookie",
    "clear_session_cookie",
]
