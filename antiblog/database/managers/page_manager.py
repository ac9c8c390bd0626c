#!/usr/bin/env python3
"""
page_manager.py
--------------------
Paginated listings over the rank order.

Pages hold ``PAGE_SIZE`` entries. A listing is either unfiltered or
filtered by a tag (stored, ``micro`` or ``meta``); either way only visible
entries are listed.
"""
from __future__ import annotations

from typing import Optional

from antiblog.core.validators import MAX_ID
from antiblog.dataclasses.contexts import PageContext
from antiblog.dataclasses.page_ref import PageRef
from antiblog.database.models import Entry
from .base_manager import BaseManager
from .tag_manager import TagManager

PAGE_SIZE = 5


class PageManager(BaseManager):
    """Counts and slices visible entries into pages."""

    def entry_count(self, tag: Optional[str] = None) -> int:
        """Number of visible entries carrying ``tag`` (all when None)."""
        return TagManager.apply_filter(self.session.query(Entry.id), tag).count()

    def page_count(self, tag: Optional[str] = None) -> int:
        return (self.entry_count(tag) + PAGE_SIZE - 1) // PAGE_SIZE

    def fetch_page(self, ref: PageRef, context: PageContext) -> PageContext:
        """
        Append the entries of one page to a context, in rank order.

        A reference to the last page resolves against the current page
        count. Pages beyond the end are empty.
        """
        real_index = ref.abs_index(self.page_count(ref.tag))
        offset = (real_index - 1) * PAGE_SIZE
        if real_index < 1 or offset > MAX_ID:
            return context

        query = self.session.query(
            Entry.id, Entry.title, Entry.teaser, Entry.body, Entry.redirect_url
        )
        rows = (
            TagManager.apply_filter(query, ref.tag)
            .order_by(Entry.rank)
            .limit(PAGE_SIZE)
            .offset(offset)
        )
        for row in rows:
            context.append_row(row)
        return context

    def inject_prev_next(self, ref: PageRef, context: PageContext) -> None:
        count = self.page_count(ref.tag)
        context.prev = ref.prev(count)
        context.next = ref.next(count)
