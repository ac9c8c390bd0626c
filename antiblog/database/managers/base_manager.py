#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common query utilities.
All entity managers should inherit from this class.

Key Features:
    - Session and logger wiring shared by every manager
    - Generic existence, lookup and count helpers
    - Ordered single-row renumbering that respects unique position columns

Usage:
    Subclass BaseManager for each concern and use ``self.session`` for all
    reads and writes. Managers never commit; the enclosing
    ``AntiblogDB.session_scope()`` owns the transaction.

Example:
    class TagManager(BaseManager):
        def __init__(self, session: Session, logger: Optional[AntiblogLogger] = None):
            super().__init__(session, logger)

        def delete(self, entry_id: int) -> None:
            self.session.query(EntryTag).filter_by(entry_id=entry_id).delete()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from typing import Any, Optional, Type, TypeVar

# --- Third party imports ---
from sqlalchemy import update
from sqlalchemy.orm import Session, InstrumentedAttribute

# --- Local imports ---
from antiblog.core.logging_manager import AntiblogLogger, safe_logger

T = TypeVar("T")


class BaseManager(ABC):
    """
    Abstract base manager providing common query helpers.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[AntiblogLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    @property
    def log(self) -> AntiblogLogger:
        """Logger that is always safe to call."""
        return safe_logger(self.logger)

    # -------------------------------------------------------------------------
    # Generic Query Helpers
    # -------------------------------------------------------------------------

    def _exists(self, model_class: Type[T], **filters: Any) -> bool:
        """
        Generic existence check for any model.

        Args:
            model_class: ORM model class to query
            **filters: Equality filters

        Returns:
            True if a matching row exists, False otherwise
        """
        query = self.session.query(model_class).filter_by(**filters)
        return self.session.query(query.exists()).scalar()

    def _count(self, model_class: Type[T], **filters: Any) -> int:
        """
        Count rows with optional equality filtering.

        Args:
            model_class: ORM model class
            **filters: Equality filters

        Returns:
            Count of matching rows
        """
        query = self.session.query(model_class)
        if filters:
            query = query.filter_by(**filters)
        return query.count()

    def _shift_up(
        self,
        key_column: InstrumentedAttribute,
        position_column: InstrumentedAttribute,
        minimum: int = 1,
    ) -> int:
        """
        Add one to every position >= minimum, highest position first.

        Positions are unique, so rows are moved one at a time from the top
        down; a set-based ``UPDATE`` could collide with the row above.

        Args:
            key_column: Primary key column identifying each row
            position_column: Unique integer position column to shift
            minimum: Lowest position affected

        Returns:
            Number of rows shifted
        """
        model_class = key_column.class_
        keys = [
            row[0]
            for row in self.session.query(key_column)
            .filter(position_column >= minimum)
            .order_by(position_column.desc())
        ]
        for key in keys:
            self.session.execute(
                update(model_class)
                .where(key_column == key)
                .values({position_column.key: position_column + 1})
                .execution_options(synchronize_session=False)
            )
        self.session.expire_all()
        return len(keys)
