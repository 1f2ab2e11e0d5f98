"""Database layer - engine, base classes and types."""

from ledger_kernel.db.base import GUID, Base, TrackedBase
from ledger_kernel.db.engine import (
    create_tables,
    drop_tables,
    enable_sqlite_savepoints,
    get_engine,
    get_session,
    init_engine_from_url,
    reset_engine,
    session_scope,
)

__all__ = [
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "session_scope",
    "create_tables",
    "drop_tables",
    "enable_sqlite_savepoints",
    "reset_engine",
    "Base",
    "TrackedBase",
    "GUID",
]
