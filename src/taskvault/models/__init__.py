"""
Models module for TaskVault
Contains all database models and request/response schemas
"""
from sqlmodel import SQLModel
from .user import User, UserLogin, UserRegister, UserPublic
from .task import Task, TaskStatus, TaskCreate, TaskUpdate, TaskPublic, Pagination, TaskPage

__all__ = [
    "SQLModel",
    "User",
    "UserLogin",
    "UserRegister",
    "UserPublic",
    "Task",
    "TaskStatus",
    "TaskCreate",
    "TaskUpdate",
    "TaskPublic",
    "Pagination",
    "TaskPage",
]
