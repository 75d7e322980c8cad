"""
Configuration for TaskVault
Settings are read from the environment (and an optional .env file) once, validated,
and shared as an immutable object for the life of the process.
"""
import os
import re
from functools import lru_cache
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .utils.errors import ConfigurationError

MIN_JWT_SECRET_LENGTH = 32
ENCRYPTION_KEY_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    """Process-wide application settings"""
    model_config = ConfigDict(frozen=True)

    environment: Literal["development", "test", "production"] = "development"
    database_url: str
    jwt_secret: str
    encryption_key: str
    log_level: str = "INFO"

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("DATABASE_URL must not be empty")
        # Heroku/Railway style URLs are not accepted by SQLAlchemy
        if v.startswith("postgres://"):
            v = "postgresql://" + v[len("postgres://"):]
        return v

    @field_validator("jwt_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if len(v) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(f"JWT_SECRET must be at least {MIN_JWT_SECRET_LENGTH} characters")
        return v

    @field_validator("encryption_key")
    @classmethod
    def validate_encryption_key(cls, v: str) -> str:
        if not ENCRYPTION_KEY_PATTERN.match(v):
            raise ValueError("ENCRYPTION_KEY must be a 64-character hex string")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper() or "INFO"
        if v not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from; defaults to os.environ

        Raises:
            ConfigurationError: If a required variable is missing or invalid
        """
        env = os.environ if environ is None else environ
        raw = {
            "environment": env.get("APP_ENV") or env.get("NODE_ENV") or "development",
            "database_url": env.get("DATABASE_URL", ""),
            "jwt_secret": env.get("JWT_SECRET", ""),
            "encryption_key": env.get("ENCRYPTION_KEY", ""),
            "log_level": env.get("LOG_LEVEL", "INFO"),
        }
        try:
            return cls(**raw)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(f"Invalid environment variables: {problems}") from e


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process. Tests call get_settings.cache_clear() to reload."""
    load_dotenv(override=False)
    return Settings.from_env()
