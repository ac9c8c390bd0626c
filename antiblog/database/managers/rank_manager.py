#!/usr/bin/env python3
"""
rank_manager.py
--------------------
Rank allocation and rotation.

Ranks form a dense 1..N permutation over all entries, visible or not.
Inserting at a rank and promoting the last entry both renumber through
``BaseManager._shift_up``, which moves one row at a time from the top so
the unique rank column never holds a duplicate.

Rotation repeatedly promotes the last-ranked entry to rank 1 until the
promoted entry is visible. Invisible entries are cycled to the front
without being announced; the visible one that ends the loop is also
pushed into the recency feed.

Usage:
    rank_mgr = RankManager(session, logger, rss=rss_mgr)
    rank = rank_mgr.allocate(rng)
    promoted_id = rank_mgr.rotate()
"""
from __future__ import annotations

import random
from typing import Optional, Tuple

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from antiblog.core.logging_manager import AntiblogLogger
from antiblog.database.decorators import log_database_operation
from antiblog.database.models import Entry
from .base_manager import BaseManager
from .rss_manager import RssManager


class RankManager(BaseManager):
    """
    Maintains the global entry order.

    Attributes:
        rss: Recency feed receiving visible promotions
        quiet: Suppress informational rotation messages
    """

    def __init__(
        self,
        session: Session,
        logger: Optional[AntiblogLogger] = None,
        rss: Optional[RssManager] = None,
        quiet: bool = False,
    ):
        super().__init__(session, logger)
        self.rss = rss or RssManager(session, logger)
        self.quiet = quiet

    def _report(self, message: str) -> None:
        if not self.quiet:
            self.log.log_info(message)

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def max_rank(self) -> Optional[int]:
        return self.session.query(func.max(Entry.rank)).scalar()

    def slide_ranks(self, rank: int) -> int:
        """Move every entry with rank >= ``rank`` one place down the order."""
        return self._shift_up(Entry.id, Entry.rank, rank)

    def allocate(self, rng: Optional[random.Random] = None) -> int:
        """
        Free a uniformly random rank for a new entry.

        With no entries the new rank is 1. Otherwise a rank in
        ``1..max_rank`` is drawn and everything at or below it slides down
        by one, leaving the drawn rank vacant.

        Args:
            rng: Random source (module-level generator when omitted)

        Returns:
            The vacant rank
        """
        rng = rng or random
        max_rank = self.max_rank()
        if max_rank is None:
            return 1
        rank = rng.randrange(max_rank) + 1
        self.slide_ranks(rank)
        return rank

    # -------------------------------------------------------------------------
    # Rotation
    # -------------------------------------------------------------------------

    def has_visible(self) -> bool:
        return self._exists(Entry, invisible=False)

    def last_entry(self) -> Optional[Tuple[int, bool]]:
        """``(id, invisible)`` of the highest-ranked entry."""
        row = (
            self.session.query(Entry.id, Entry.invisible)
            .order_by(Entry.rank.desc())
            .first()
        )
        return (row.id, row.invisible) if row else None

    def rotate_once(self) -> Tuple[int, bool]:
        """
        Promote the last entry to rank 1.

        Returns:
            ``(entry_id, invisible)`` of the promoted entry
        """
        self.slide_ranks(1)
        entry_id, invisible = self.last_entry()
        self.session.execute(
            update(Entry)
            .where(Entry.id == entry_id)
            .values(rank=1)
            .execution_options(synchronize_session=False)
        )
        self.session.expire_all()

        if invisible:
            self._report(f"Promoted invisible entry {entry_id}")
        else:
            self._report(f"Promoted entry {entry_id}")
            self.rss.enqueue(entry_id)
        return entry_id, invisible

    @log_database_operation("rotate_entries")
    def rotate(self) -> Optional[int]:
        """
        Promote entries until a visible one reaches rank 1.

        Returns:
            Id of the promoted visible entry, or None when no entry is
            visible (nothing is changed in that case)
        """
        if not self.has_visible():
            self._report("No visible entries")
            return None

        while True:
            entry_id, invisible = self.rotate_once()
            if not invisible:
                return entry_id
