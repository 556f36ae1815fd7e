"""
Database configuration and session management.
Uses SQLAlchemy 2.0 patterns.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from pos_shared.config.settings import get_settings


def _calculate_pool_size() -> int:
    """
    Calculate pool size based on CPU cores.
    Formula: (2 * CPU cores) + 1, capped at 20.
    """
    cores = os.cpu_count() or 4
    return min(cores * 2 + 1, 20)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine with connection pooling and timeouts.

    SQLite (tests, local runs) gets no pool sizing and allows use across
    FastAPI's worker threads.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=_calculate_pool_size(),
        max_overflow=15,
        pool_timeout=30,  # Wait max 30s for connection from pool
        pool_recycle=1800,  # Recycle connections after 30 minutes
        connect_args={"connect_timeout": 10},
        echo=echo,
    )


@lru_cache
def _engine_for(database_url: str) -> Engine:
    return create_db_engine(database_url)


def get_engine(database_url: str | None = None) -> Engine:
    """Engine for the given URL (defaults to settings), created once per URL."""
    return _engine_for(database_url or get_settings().database_url)


# Session factory, bound per call so the engine is only built on first use
SessionLocal = sessionmaker(
    autoflush=False,
    autocommit=False,
)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    The session is bound to the database of the Settings the running app was
    built with (app.state.settings), never to whatever the environment says.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.scalars(select(Item)).all()
    """
    db = SessionLocal(bind=get_engine(request.app.state.settings.database_url))
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context(database_url: str | None = None) -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI (CLI, scripts).

    Usage:
        with get_db_context() as db:
            db.scalars(select(Table)).all()
    """
    db = SessionLocal(bind=get_engine(database_url))
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
