"""
Utilities module for TaskVault
Shared error types, logging and timestamp helpers
"""
from .errors import (
    AppError,
    ValidationFailedError,
    UnauthorizedError,
    InvalidCredentialsError,
    ForbiddenError,
    NotFoundError,
    TaskNotFoundException,
    ConflictError,
    EmailConflictError,
    InternalError,
    DecryptionError,
    ConfigurationError,
)
from .logging import get_logger, log_error, setup_logging
from .timestamps import utc_now

__all__ = [
    "AppError",
    "ValidationFailedError",
    "UnauthorizedError",
    "InvalidCredentialsError",
    "ForbiddenError",
    "NotFoundError",
    "TaskNotFoundException",
    "ConflictError",
    "EmailConflictError",
    "InternalError",
    "DecryptionError",
    "ConfigurationError",
    "get_logger",
    "log_error",
    "setup_logging",
    "utc_now",
]
