"""
User service module for TaskVault
Handles account registration and credential checks
"""
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..models.user import User, UserLogin, UserRegister
from ..security.passwords import hash_password, verify_password
from ..utils.errors import EmailConflictError, InvalidCredentialsError
from ..utils.logging import get_logger, log_error

logger = get_logger(__name__)


class UserService:
    """Service class for account operations"""

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email.lower())
        return db.exec(statement).first()

    @staticmethod
    def register(db: Session, credentials: UserRegister) -> User:
        """
        Create a new account.

        Args:
            db: Database session
            credentials: Validated email (already lowercased) and password

        Returns:
            The created User

        Raises:
            EmailConflictError: If an account with this email already exists
        """
        user = User(
            email=credentials.email.lower(),
            password_hash=hash_password(credentials.password),
        )
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
        except IntegrityError:
            # The unique index on email is the source of truth for duplicates
            db.rollback()
            logger.info("Registration rejected: email already in use")
            raise EmailConflictError()
        except Exception as e:
            log_error(e, "UserService.register")
            db.rollback()
            raise

        logger.info("Registered user %s", user.id)
        return user

    @staticmethod
    def authenticate(db: Session, credentials: UserLogin) -> User:
        """
        Check an email/password pair.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = UserService.get_user_by_email(db, credentials.email)
        if user is None or not verify_password(credentials.password, user.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()
        return user
