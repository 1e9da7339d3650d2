"""
Brokerage Back-Office - Database Configuration

SQLModel database setup with connection pooling.
Supports PostgreSQL (production) and SQLite (development and tests).

Usage:
    from brokerage.database import get_engine, init_db

    engine = get_engine()
    init_db(engine)  # Creates tables
"""

from datetime import datetime, timezone
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from brokerage.config import settings


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_engine(database_url: str = None, echo: bool = None):
    """
    Create SQLAlchemy engine with appropriate configuration.

    Args:
        database_url: Override database URL
        echo: Log SQL statements (defaults to settings.SQL_ECHO)

    Returns:
        SQLAlchemy Engine
    """
    url = database_url or settings.DATABASE_URL
    echo = settings.SQL_ECHO if echo is None else echo

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(
            url,
            echo=echo,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
        )

    return engine


def init_db(engine) -> None:
    """
    Initialize database tables.

    Creates all tables defined in SQLModel models.
    Safe to call multiple times (uses CREATE IF NOT EXISTS).
    """
    # Import models to register them with SQLModel
    from brokerage.auth import models as auth_models  # noqa: F401
    from brokerage.content import models as content_models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session_factory(engine):
    """
    Create a session factory bound to engine.

    Returns:
        Callable that creates new database sessions
    """
    def session_factory() -> Session:
        return Session(engine)

    return session_factory

