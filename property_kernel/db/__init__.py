"""Database layer - engine, base classes and session scope."""

from property_kernel.db.base import Base, TrackedBase, UUIDString
from property_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    reset_engine,
    session_scope,
)

__all__ = [
    "get_engine",
    "get_session",
    "init_engine_from_url",
    "reset_engine",
    "session_scope",
    "create_tables",
    "drop_tables",
    "Base",
    "TrackedBase",
    "UUIDString",
]
