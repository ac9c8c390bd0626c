#!/usr/bin/env python3
"""
view_manager.py
--------------------
Assembles request contexts for single entries and listings.

Fetching only loads entry rows; decoration then resolves permalinks,
stored tags, the tag cloud and (for single entry views) series
navigation, each in one batch per request.

Usage:
    view_mgr = ViewManager(session, logger)
    context = view_mgr.retrieve_entry("about-me", EntryContext(profile))
    context = view_mgr.retrieve_page(PageRef.make("stuff"), PageContext(profile))
"""
from __future__ import annotations

import random
from typing import Callable, Optional

from sqlalchemy.orm import Query, Session

from antiblog.core.logging_manager import AntiblogLogger
from antiblog.core.validators import MAX_ID, DataValidator
from antiblog.dataclasses.contexts import EntryContext, PageContext, WebContext
from antiblog.dataclasses.entry_view import EntryRef
from antiblog.dataclasses.page_ref import PageRef
from antiblog.database.models import Entry
from .base_manager import BaseManager
from .page_manager import PageManager
from .series_manager import SeriesManager
from .symlink_manager import SymlinkManager
from .tag_manager import TagManager

RANDOM_REF = "random"


class ViewManager(BaseManager):
    """
    Read-side composition of the relation managers.

    Attributes:
        rng: Random source for the random entry pick
    """

    def __init__(
        self,
        session: Session,
        logger: Optional[AntiblogLogger] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(session, logger)
        self.rng = rng or random.Random()
        self.symlinks = SymlinkManager(session, logger)
        self.tags = TagManager(session, logger)
        self.series = SeriesManager(session, logger, symlinks=self.symlinks)
        self.pages = PageManager(session, logger)

    # -------------------------------------------------------------------------
    # Reference resolution
    # -------------------------------------------------------------------------

    def id_by_ref(self, ref: str, context: WebContext) -> Optional[int]:
        """
        Resolve a textual reference to an entry id.

        Aliases in the context's scope take precedence; otherwise a purely
        numeric reference is taken as a raw id unless it is too large to be
        stored.
        """
        entry_id = self.symlinks.find_for_context(context, ref)
        if entry_id is not None:
            return entry_id
        if DataValidator.is_numeric_ref(ref) and int(ref) <= MAX_ID:
            return int(ref)
        return None

    def random_entry_id(self) -> Optional[int]:
        """Uniformly random visible entry, or None when nothing is visible."""
        count = self.pages.entry_count()
        if count == 0:
            return None
        row = (
            TagManager.apply_filter(self.session.query(Entry.id), None)
            .order_by(Entry.rank)
            .offset(self.rng.randrange(count))
            .first()
        )
        return row.id if row else None

    # -------------------------------------------------------------------------
    # Assembly
    # -------------------------------------------------------------------------

    def fetch_entries(
        self, context: WebContext, restrict: Callable[[Query], Query]
    ) -> WebContext:
        query = self.session.query(
            Entry.id, Entry.title, Entry.teaser, Entry.body, Entry.redirect_url
        )
        for row in restrict(query):
            context.append_row(row)
        return context

    def decorate(self, context: WebContext) -> WebContext:
        self.symlinks.inject(context)
        self.tags.inject_tags(context)
        self.tags.inject_cloud(context)
        if not context.is_page:
            self.series.inject(context)
        return context

    def retrieve_random_entry(self, context: EntryContext) -> EntryContext:
        """Point the context at a random visible entry as a redirect."""
        entry_id = self.random_entry_id()
        if entry_id is None:
            return context
        ref = EntryRef(entry_id)
        self.symlinks.inject(context, [ref])
        context.redirect_url = context.profile.root_url + ref.permalink
        return context

    def retrieve_entry(self, ref: str, context: EntryContext) -> EntryContext:
        """
        Fill a context with a single entry.

        The reference ``random`` produces a redirect to a random visible
        entry without loading any content. An unresolvable reference leaves
        the context empty.
        """
        if ref == RANDOM_REF:
            self.retrieve_random_entry(context)
        else:
            entry_id = self.id_by_ref(ref, context)
            if entry_id is not None:
                self.fetch_entries(context, lambda q: q.filter(Entry.id == entry_id))

        if context.redirect_url is None:
            self.decorate(context)
        return context

    def retrieve_page(self, ref: PageRef, context: PageContext) -> PageContext:
        self.pages.fetch_page(ref, context)
        self.decorate(context)
        self.pages.inject_prev_next(ref, context)
        return context
