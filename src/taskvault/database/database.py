"""
Database wiring for TaskVault
Creates the engine from settings and hands out one session per request
"""
from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import get_settings


def build_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        # FastAPI runs sync dependencies in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


@lru_cache
def get_engine() -> Engine:
    return build_engine(get_settings().database_url)


def create_db_and_tables(engine: Optional[Engine] = None) -> None:
    """Create any missing tables for the registered models."""
    # Importing the models registers their tables on SQLModel.metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine or get_engine())


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a database session for one request."""
    with Session(get_engine()) as session:
        yield session
