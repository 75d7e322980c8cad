"""
User model for TaskVault
Defines the account entity and the credential schemas used by /auth
"""
import re
from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, EmailStr, Field as PydanticField, field_validator
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ..utils.timestamps import utc_now

EMAIL_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72


class User(SQLModel, table=True):
    """User model for database table. email is always stored lowercased."""
    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True, max_length=32)
    email: str = Field(max_length=EMAIL_MAX_LENGTH, unique=True, index=True, nullable=False)
    password_hash: str = Field(nullable=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )


class UserLogin(BaseModel):
    """Schema for logging in"""
    email: EmailStr
    password: str = PydanticField(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if len(v) > EMAIL_MAX_LENGTH:
                raise ValueError(f"Email exceeds maximum length of {EMAIL_MAX_LENGTH} characters")
        return v

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


class UserRegister(UserLogin):
    """Schema for registering a new account"""

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must include at least one uppercase character")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must include at least one lowercase character")
        if not re.search(r"[0-9]", v):
            raise ValueError("Password must include at least one number")
        return v


class UserPublic(BaseModel):
    """Public representation of a user"""
    id: str
    email: str
