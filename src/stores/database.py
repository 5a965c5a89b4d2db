"""
Database Core

SQLAlchemy engine, session management, and database utilities for
restaurant-settings.

The engine is created on first use rather than at import time, so the
in-memory settings store and the test suite never need a database driver.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Generator

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.core.config import settings
from src.core.error_codes import DatabaseErrorCode
from src.core.exceptions import DatabaseException
from src.core.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PoolStatus:
    """Immutable connection pool status information."""

    size: int
    checked_out: int
    overflow: int


# Global SQLAlchemy base
Base = declarative_base()


def _create_database_engine() -> Engine:
    """Create and configure the database engine from settings."""
    engine_kwargs: Dict[str, Any] = {
        "echo": settings.database__echo,
        "pool_pre_ping": settings.database__pool_pre_ping,
    }
    if settings.uses_sqlite:
        # SQLite connections are shared across the API's worker threads
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs.update(
            pool_size=settings.database__pool_size,
            max_overflow=settings.database__max_overflow,
            pool_timeout=settings.database__pool_timeout,
            pool_recycle=settings.database__pool_recycle,
        )

    try:
        return create_engine(settings.database__url, **engine_kwargs)
    except Exception as e:
        logger.error("Failed to create database engine: %s", str(e))

        database_url = str(settings.database__url)
        host = (
            database_url.rsplit("@", maxsplit=1)[-1].split("/")[0]
            if "@" in database_url
            else "unknown"
        )
        raise DatabaseException(
            f"Database engine creation failed: {str(e)}",
            DatabaseErrorCode.CONNECTION_FAILED,
            details={"database_url_host": host},
        ) from e


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first call."""
    return _create_database_engine()


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    """Return the process-wide session factory bound to get_engine()."""
    return sessionmaker(
        bind=get_engine(),
        autocommit=False,
        autoflush=False,
        future=True,
        expire_on_commit=False,  # stores hand detached rows back to services
    )


def get_pool_status() -> PoolStatus:
    """
    Get current connection pool status.

    Raises:
        DatabaseException: If pool status cannot be retrieved
    """
    try:
        pool = get_engine().pool
        return PoolStatus(
            size=getattr(pool, "size", lambda: 0)(),
            checked_out=getattr(pool, "checkedout", lambda: 0)(),
            overflow=getattr(pool, "overflow", lambda: 0)(),
        )
    except Exception as e:
        logger.error("Failed to get pool status: %s", str(e))
        raise DatabaseException(
            f"Pool status retrieval failed: {str(e)}",
            DatabaseErrorCode.CONNECTION_FAILED,
        ) from e


@contextmanager
def database_session() -> Generator[Session, None, None]:
    """
    Context manager for a database session.

    Rolls back on error and always closes the session. SQLAlchemy errors are
    re-raised as DatabaseException.

    Example:
        with database_session() as db:
            row = db.get(RestaurantSettingsRecord, "pave46")
            row.values = {**row.values, "phone": "(212) 555-9999"}
            db.commit()
    """
    db_session = get_session_factory()()
    logger.debug("Database session created")
    try:
        yield db_session
    except SQLAlchemyError as e:
        logger.error("Database session error: %s", str(e))
        db_session.rollback()
        raise DatabaseException(
            f"Database session error: {str(e)}", DatabaseErrorCode.QUERY_FAILED
        ) from e
    except Exception:
        db_session.rollback()
        raise
    finally:
        db_session.close()
        logger.debug("Database session closed")


def create_tables() -> None:
    """Create every table registered on Base."""
    # Import models so they are registered with Base
    import src.models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables created")


def dispose_engine() -> None:
    """Dispose the engine and close pooled connections (application shutdown)."""
    if get_engine.cache_info().currsize == 0:
        return
    try:
        get_engine().dispose()
        logger.info("Database engine disposed successfully")
    except Exception as e:
        logger.error("Failed to dispose database engine: %s", str(e))


def test_connection() -> Dict[str, Any]:
    """
    Run a trivial query and report pool status.

    Raises:
        DatabaseException: If the connection test fails
    """
    try:
        engine = get_engine()
        with engine.connect() as conn:
            test_value = conn.execute(text("SELECT 1 as test_value")).scalar()

        pool_status = get_pool_status()
        logger.info(
            "Database connection test - Pool status: Size=%d, Checked out=%d, "
            "Overflow=%d",
            pool_status.size,
            pool_status.checked_out,
            pool_status.overflow,
        )

        return {
            "connection_test": "passed",
            "test_query_result": test_value,
            "pool_status": {
                "size": pool_status.size,
                "checked_out": pool_status.checked_out,
                "overflow": pool_status.overflow,
            },
            "engine_url": engine.url.render_as_string(hide_password=True),
        }

    except DatabaseException:
        raise
    except Exception as e:
        logger.error("Database connection test failed: %s", str(e))
        raise DatabaseException(
            f"Database connection test failed: {str(e)}",
            DatabaseErrorCode.CONNECTION_FAILED,
            details={"error_type": type(e).__name__},
        ) from e
