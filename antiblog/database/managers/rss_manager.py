#!/usr/bin/env python3
"""
rss_manager.py
--------------------
Bounded recency feed of promoted entries.

Position 1 holds the most recently promoted entry. The feed never holds
more than ``FEED_CAPACITY`` rows; older rows are evicted on enqueue.
"""
from __future__ import annotations

from typing import List

from sqlalchemy import insert

from antiblog.dataclasses.contexts import RssContext
from antiblog.database.decorators import log_database_operation
from antiblog.database.models import Entry, RssEntry
from .base_manager import BaseManager

FEED_CAPACITY = 10


class RssManager(BaseManager):
    """Manages the ``rss_entry`` table."""

    def contains(self, entry_id: int) -> bool:
        return self._exists(RssEntry, entry_id=entry_id)

    @log_database_operation("enqueue_rss_entry")
    def enqueue(self, entry_id: int) -> bool:
        """
        Put an entry at the head of the feed.

        Args:
            entry_id: Promoted entry

        Returns:
            False when the entry was already in the feed, True otherwise
        """
        if self.contains(entry_id):
            return False

        self._shift_up(RssEntry.entry_id, RssEntry.feed_position)
        self.session.execute(
            insert(RssEntry).values(entry_id=entry_id, feed_position=1)
        )
        evicted = (
            self.session.query(RssEntry)
            .filter(RssEntry.feed_position > FEED_CAPACITY)
            .delete()
        )
        if evicted:
            self.log.log_debug("Evicted feed entries", {"count": evicted})
        return True

    def delete(self, entry_id: int) -> None:
        self.session.query(RssEntry).filter_by(entry_id=entry_id).delete()

    def entry_ids(self) -> List[int]:
        """Feed members, most recent first."""
        rows = self.session.query(RssEntry.entry_id).order_by(RssEntry.feed_position)
        return [row.entry_id for row in rows]

    def feed(self, context: RssContext) -> RssContext:
        """Fill a context with feed rows joined with their entries."""
        rows = (
            self.session.query(
                RssEntry.entry_id, Entry.title, Entry.teaser, Entry.date_posted
            )
            .join(Entry, Entry.id == RssEntry.entry_id)
            .order_by(RssEntry.feed_position)
        )
        for row in rows:
            context.append_row(row)
        return context
