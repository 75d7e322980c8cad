"""
Services module for TaskVault
Contains business logic layer for the application
"""
from .task_service import TaskService
from .user_service import UserService

__all__ = [
    "TaskService",
    "UserService",
]
