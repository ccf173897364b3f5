# File: tracker/db/session.py
"""
Database Session Management

This module provides database connection and session management functionality.
It configures SQLAlchemy engine and provides dependency injection for database sessions.

"""
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from tracker.core.config import settings


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


# Create database engine with connection pooling
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before use
    pool_recycle=3600,  # Recycle connections every hour
    echo=settings.SQL_ECHO,
)

# Create session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a DB session and guarantees cleanup.

    Errors are logged where they are handled; here the transaction is only
    rolled back before the error propagates.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
