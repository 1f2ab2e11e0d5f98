"""
BaseService -- common shape of the ledger stores.

A store wraps one session it does not own: it adds and flushes, and leaves
commit / rollback to whoever opened the transaction (``session_scope``,
the importer's per-row SAVEPOINT, the test harness).  Public methods hand
back frozen ``*Info`` DTOs so callers never hold live ORM rows.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from ledger_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """Store over one model type, bound to a caller-owned session."""

    def __init__(self, session: Session):
        self.session = session
