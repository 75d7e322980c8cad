"""
Database module for TaskVault
"""
from .database import build_engine, get_engine, get_session, create_db_and_tables

__all__ = [
    "build_engine",
    "get_engine",
    "get_session",
    "create_db_and_tables",
]
