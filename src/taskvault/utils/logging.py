"""
Logging helpers for TaskVault
"""
import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure the root logger with a single stderr handler.

    Safe to call more than once: the handler from a previous call is replaced.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        if getattr(handler, "_taskvault", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler._taskvault = True
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


_error_logger = logging.getLogger("taskvault.errors")


def log_error(error: BaseException, context: str, user_id: Optional[str] = None) -> None:
    """
    Log an unexpected exception with the operation it happened in.

    Args:
        error: The exception that was raised
        context: Name of the operation, e.g. "TaskService.create_task"
        user_id: ID of the acting user, if known
    """
    _error_logger.error(
        "%s failed (user=%s): %s: %s",
        context,
        user_id or "-",
        type(error).__name__,
        error,
        exc_info=(type(error), error, error.__traceback__),
    )
