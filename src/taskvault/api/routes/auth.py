"""
Auth API routes for TaskVault
Registration, login, logout and the current-session lookup
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ...config import Settings, get_settings
from ...database.database import get_session
from ...models.user import User, UserLogin, UserPublic, UserRegister
from ...security.cookies import attach_session_cookie, clear_session_cookie
from ...security.tokens import SessionIdentity, TokenService
from ...services.user_service import UserService
from ..deps import get_current_user, get_token_service
from ..responses import ok


router = APIRouter(prefix="/auth", tags=["auth"])


def _start_session(user: User, tokens: TokenService, settings: Settings, status_code: int):
    token = tokens.issue(SessionIdentity(user_id=user.id, email=user.email))
    response = ok({"user": UserPublic(id=user.id, email=user.email)}, status_code)
    attach_session_cookie(response, token, secure=settings.is_production)
    return response


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    credentials: UserRegister,
    session: Session = Depends(get_session),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    """
    Create an account and start a session for it.

    Returns:
        201 with the new user; the session cookie is set

    Raises:
        EmailConflictError 409: An account with this email already exists
    """
    user = UserService.register(db=session, credentials=credentials)
    return _start_session(user, tokens, settings, status.HTTP_201_CREATED)


@router.post("/login")
def login(
    credentials: UserLogin,
    session: Session = Depends(get_session),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    """
    Check credentials and start a session.

    Raises:
        InvalidCredentialsError 401: Unknown email or wrong password
    """
    user = UserService.authenticate(db=session, credentials=credentials)
    return _start_session(user, tokens, settings, status.HTTP_200_OK)


@router.post("/logout")
def logout(settings: Settings = Depends(get_settings)):
    """End the session by clearing the cookie. Works with or without a session."""
    response = ok({"message": "Logged out"})
    clear_session_cookie(response, secure=settings.is_production)
    return response


@router.get("/me")
def me(current_user: SessionIdentity = Depends(get_current_user)):
    return ok({"user": current_user})
