"""
Module: property_kernel.db.engine
Responsibility: SQLAlchemy engine initialization, session factory management,
    and transactional scope utilities.  Single point of database connection
    configuration for the kernel.
Architecture position: Kernel > DB.  May import from db/base.py.  The
    create_tables/drop_tables helpers import models so Base.metadata is
    populated.

Failure modes:
    - RuntimeError if get_engine/get_session/get_session_factory is called
      before init_engine_from_url().
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from property_kernel.logging_config import configure_logging, get_logger

logger = get_logger("db.engine")

_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def init_engine_from_url(
    database_url: str,
    echo: bool = False,
    pool_pre_ping: bool = True,
) -> Engine:
    """
    Initialize the SQLAlchemy engine from a database URL.

    A second call overwrites the first.  Any SQLAlchemy URL is accepted;
    tests use ``sqlite://`` (in-memory).

    Args:
        database_url: SQLAlchemy connection URL.
        echo: If True, log all SQL statements.
        pool_pre_ping: If True, test connections before use.

    Returns:
        SQLAlchemy Engine instance.
    """
    global _engine, _SessionFactory

    _engine = create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=pool_pre_ping,
    )

    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    configure_logging()
    logger.info(
        "engine_initialized",
        extra={
            "dialect": _engine.dialect.name,
            "echo": echo,
        },
    )

    return _engine


def get_engine() -> Engine:
    """
    Get the current engine instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _engine


def get_session() -> Session:
    """
    Get a new session instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _SessionFactory is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _SessionFactory()


def get_session_factory() -> sessionmaker[Session]:
    if _SessionFactory is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _SessionFactory


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Provide a transactional scope around a series of operations.

    On normal exit the session is committed and closed.  On exception it is
    rolled back and closed, and the exception is re-raised.

    Usage:
        with session_scope() as session:
            BaseParametersService(session).create(params)
    """
    session = get_session()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables() -> None:
    """Create all tables defined in the kernel models."""
    from property_kernel.db.base import Base
    import property_kernel.models  # noqa: F401

    Base.metadata.create_all(get_engine())


def drop_tables() -> None:
    """
    Drop all tables. Use with caution - primarily for testing.
    """
    from property_kernel.db.base import Base

    Base.metadata.drop_all(get_engine())


def reset_engine() -> None:
    """
    Reset the engine and session factory.

    Useful for test cleanup.
    """
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()
        _engine = None

    _SessionFactory = None
