#!/usr/bin/env python3
"""
series_manager.py
--------------------
Manages series memberships and series navigation.

A series is an ordered sequence of entries; each member carries a
caller-assigned integer index. For every membership of a displayed entry
the manager resolves the first, last, previous and next members of the
series as lightweight references.

Usage:
    series_mgr = SeriesManager(session, logger, symlinks=symlink_mgr)
    series_mgr.update(entry_id, [{"series": "the_story", "index": 2}])
    series_mgr.inject(context)
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import insert
from sqlalchemy.orm import Session

from antiblog.core.logging_manager import AntiblogLogger
from antiblog.core.validators import DataValidator
from antiblog.dataclasses.contexts import Context
from antiblog.dataclasses.entry_view import EntryRef, SeriesLink
from antiblog.database.decorators import log_database_operation
from antiblog.database.models import SeriesAssignment
from .base_manager import BaseManager
from .symlink_manager import SymlinkManager

# (entry_id, index) pairs ordered by index
Members = List[Tuple[int, int]]


class SeriesManager(BaseManager):
    """
    Manages SeriesAssignment rows and neighbour resolution.

    Attributes:
        symlinks: Alias resolver used to compute reference permalinks
    """

    def __init__(
        self,
        session: Session,
        logger: Optional[AntiblogLogger] = None,
        symlinks: Optional[SymlinkManager] = None,
    ):
        super().__init__(session, logger)
        self.symlinks = symlinks or SymlinkManager(session, logger)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    @log_database_operation("update_entry_series")
    def update(self, entry_id: int, series: Optional[List[Dict[str, Any]]]) -> None:
        """
        Replace all series memberships of an entry.

        Args:
            entry_id: Member entry
            series: Items of the form ``{"series": name, "index": n}``;
                None or an empty list clears the memberships

        Raises:
            ValidationError: If an item is malformed
        """
        self.delete(entry_id)
        items = DataValidator.normalize_series(series)
        if not items:
            return

        self.session.execute(
            insert(SeriesAssignment),
            [
                {"entry_id": entry_id, "series": item["series"], "index": item["index"]}
                for item in items
            ],
        )

    def delete(self, entry_id: int) -> None:
        self.session.query(SeriesAssignment).filter_by(entry_id=entry_id).delete()

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    def retrieve(self, name: str) -> Members:
        """
        Full membership of a series.

        Members sharing an index are ordered by entry id.

        Returns:
            ``(entry_id, index)`` pairs, lowest index first
        """
        rows = (
            self.session.query(SeriesAssignment.entry_id, SeriesAssignment.index)
            .filter(SeriesAssignment.series == name)
            .order_by(SeriesAssignment.index, SeriesAssignment.entry_id)
        )
        return [(row.entry_id, row.index) for row in rows]

    @staticmethod
    def find_prev(index: int, members: Members) -> Optional[int]:
        """Member with the highest index strictly below ``index``."""
        prev_id, prev_index = None, None
        for entry_id, member_index in members:
            if member_index >= index:
                continue
            if prev_index is None or member_index > prev_index:
                prev_id, prev_index = entry_id, member_index
        return prev_id

    @staticmethod
    def find_next(index: int, members: Members) -> Optional[int]:
        """Member with the lowest index strictly above ``index``."""
        next_id, next_index = None, None
        for entry_id, member_index in members:
            if member_index <= index:
                continue
            if next_index is None or member_index < next_index:
                next_id, next_index = entry_id, member_index
        return next_id

    def inject(self, context: Context) -> None:
        """
        Attach series memberships with neighbour references to the entries
        of a context.

        Membership lists and references are fetched in one explicit pass:
        every series touched by the context is loaded once, and every
        referenced entry is represented by a single shared EntryRef whose
        permalink is resolved in a batch afterwards.
        """
        if context.is_empty:
            return

        lookup = context.lookup()
        rows = (
            self.session.query(
                SeriesAssignment.entry_id,
                SeriesAssignment.series,
                SeriesAssignment.index,
            )
            .filter(SeriesAssignment.entry_id.in_(list(lookup)))
            .order_by(SeriesAssignment.series)
            .all()
        )
        if not rows:
            return

        series_cache: Dict[str, Members] = {
            name: self.retrieve(name) for name in {row.series for row in rows}
        }
        ref_cache: Dict[int, EntryRef] = {
            entry_id: EntryRef(entry_id)
            for members in series_cache.values()
            for entry_id, _ in members
        }

        def ref(entry_id: Optional[int]) -> Optional[EntryRef]:
            return ref_cache[entry_id] if entry_id is not None else None

        for row in rows:
            members = series_cache[row.series]
            lookup[row.entry_id].series.append(
                SeriesLink(
                    series=row.series,
                    index=row.index,
                    first=ref(members[0][0]),
                    last=ref(members[-1][0]),
                    prev=ref(self.find_prev(row.index, members)),
                    next=ref(self.find_next(row.index, members)),
                )
            )

        self.symlinks.inject(context, list(ref_cache.values()))
