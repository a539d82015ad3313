"""
Database Configuration Module

SQLAlchemy 2.0 setup for the Book Review API.

The engine is the process-wide handle to the relational store: it is created
once when this module is imported, shared by every request, and disposed by
the application lifespan on shutdown.

Session Management Pattern
==========================
"Session per request":
1. Request arrives → create a new session
2. Use the session for all database operations in that request
3. Commit on success, rollback on failure
4. Close the session when the request ends
"""

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookreview.config import get_settings

settings = get_settings()

# Range of a signed 64-bit INTEGER column (SQLite INTEGER, PostgreSQL BIGINT)
DB_INT_MIN = -(2**63)
DB_INT_MAX = 2**63 - 1


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    PostgreSQL gets a sized connection pool. SQLite (local development and
    tests) gets foreign key enforcement switched on, since SQLite leaves it
    off by default and reviews must reference existing books and users.
    """
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=echo,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,  # Verify connections are alive before using
        echo=echo,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# =============================================================================
# Engine and Session Factory
# =============================================================================
engine = build_engine(settings.database_url, echo=settings.debug)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Yields a session for the duration of one request and closes it
    afterwards, even if the route raised.

    Usage in Routes:
        @router.get("/books")
        def list_books(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    Development and tests only. Production schemas are managed by Alembic.
    """
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop all database tables. Never use in production."""
    Base.metadata.drop_all(bind=engine)
