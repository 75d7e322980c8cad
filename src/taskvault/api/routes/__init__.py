"""
API routes for TaskVault
"""
from . import auth, tasks

__all__ = [
    "auth",
    "tasks",
]
