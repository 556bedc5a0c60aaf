"""
BaseService -- abstract base for all kernel services.

Every service that writes receives a SQLAlchemy ``Session`` from the caller
and persists through ``session.flush()`` -- never ``session.commit()``.  The
caller (``session_scope()`` or a test harness) owns commit and rollback.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from property_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for all kernel services.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT provide read methods -- those belong in
          ``property_kernel/selectors/``.
    """

    def __init__(self, session: Session):
        self.session = session
