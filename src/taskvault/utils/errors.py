"""
Error types for TaskVault
Each error carries the HTTP status and machine-readable code it is rendered with
"""
from typing import Optional


class AppError(Exception):
    """Base exception for errors that are reported to the client"""
    status_code: int = 500
    code: str = "INTERNAL_SERVER_ERROR"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailedError(AppError):
    """Raised when request input is malformed or out of range"""
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class UnauthorizedError(AppError):
    """Raised when the session is missing, invalid or expired"""
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Invalid or expired session"


class InvalidCredentialsError(UnauthorizedError):
    """Raised when a login email/password pair does not match an account"""
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class ForbiddenError(AppError):
    """Raised when a valid session touches a resource it does not own"""
    status_code = 403
    code = "FORBIDDEN"
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class TaskNotFoundException(NotFoundError):
    """Raised when a task is not found"""
    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__("Task not found")


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"
    default_message = "Resource already exists"


class EmailConflictError(ConflictError):
    """Raised when registering an email that already has an account"""
    code = "EMAIL_CONFLICT"
    default_message = "Email already in use"


class InternalError(AppError):
    """Raised for failures the client cannot act on"""


class DecryptionError(InternalError):
    """Raised when an encrypted field fails authentication or cannot be decoded"""
    default_message = "Encrypted field could not be decrypted"


class ConfigurationError(Exception):
    """Raised at startup when the environment is missing or invalid"""
    pass
