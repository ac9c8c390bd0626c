#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages entry tags, tag filters and the tag cloud.

Tags are plain labels in the ``entry_tag`` relation. Two further tags are
synthetic and never stored:
    - micro: entries whose body equals their teaser (short-form posts)
    - meta:  entries carrying a meta-kind alias

Key Features:
    - Wholesale replacement of an entry's tags
    - Listing filters for plain, micro and meta tags (visible entries only)
    - Tag cloud aggregation including the synthetic tags

Usage:
    tag_mgr = TagManager(session, logger)
    tag_mgr.update(entry_id, ["python", "coding"])
    query = tag_mgr.apply_filter(session.query(Entry), "python")
    tag_mgr.inject_cloud(context)
"""
from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from sqlalchemy import exists, func, insert
from sqlalchemy.orm import Query

from antiblog.core.validators import DataValidator
from antiblog.dataclasses.contexts import META_TAG, MICRO_TAG, Context, WebContext
from antiblog.database.decorators import log_database_operation
from antiblog.database.models import Entry, EntryTag, Symlink, SymlinkKind
from .base_manager import BaseManager


class TagManager(BaseManager):
    """
    Manages EntryTag rows and tag-based queries.
    """

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    @log_database_operation("update_entry_tags")
    def update(self, entry_id: int, tags: Optional[List[str]]) -> None:
        """
        Replace all tags of an entry.

        Args:
            entry_id: Entry whose tags are replaced
            tags: New labels; None or an empty list clears the tags
        """
        self.delete(entry_id)
        norm_tags = DataValidator.normalize_tags(tags)
        if not norm_tags:
            return

        self.session.execute(
            insert(EntryTag),
            [{"entry_id": entry_id, "tag": tag} for tag in norm_tags],
        )
        self.log.log_debug(
            "Updated entry tags", {"entry_id": entry_id, "count": len(norm_tags)}
        )

    def delete(self, entry_id: int) -> None:
        self.session.query(EntryTag).filter_by(entry_id=entry_id).delete()

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    def get_for_entry(self, entry_id: int) -> List[str]:
        """Stored tags of one entry, alphabetically."""
        rows = (
            self.session.query(EntryTag.tag)
            .filter_by(entry_id=entry_id)
            .order_by(EntryTag.tag)
        )
        return [row.tag for row in rows]

    def inject_tags(self, context: Context) -> None:
        """Attach stored tags to every entry of a context."""
        if context.is_empty:
            return
        lookup = context.lookup()
        rows = self.session.query(EntryTag.entry_id, EntryTag.tag).filter(
            EntryTag.entry_id.in_(list(lookup))
        )
        for row in rows:
            lookup[row.entry_id].tags.add(row.tag)

    def cloud(self, micro_tag: bool = True) -> Iterator[Tuple[str, int]]:
        """
        Yield ``(tag, count)`` for every tag in use.

        Stored tags are counted per row. The synthetic ``micro`` (only when
        enabled) and ``meta`` tags are counted with the same visibility
        filter that their listing pages use and are skipped when zero.
        Stored rows named ``micro`` or ``meta`` are not counted, since their
        listings always resolve to the synthetic filters.

        Args:
            micro_tag: Whether the micro tag feature is enabled
        """
        rows = (
            self.session.query(EntryTag.tag, func.count(EntryTag.entry_id))
            .filter(EntryTag.tag.notin_((MICRO_TAG, META_TAG)))
            .group_by(EntryTag.tag)
            .order_by(EntryTag.tag)
        )
        for tag, count in rows:
            yield tag, count

        synthetic = [META_TAG]
        if micro_tag:
            synthetic.insert(0, MICRO_TAG)
        for tag in synthetic:
            count = self.apply_filter(self.session.query(Entry.id), tag).count()
            if count:
                yield tag, count

    def inject_cloud(self, context: WebContext) -> None:
        for tag, count in self.cloud(micro_tag=context.profile.has_micro):
            context.add_tag(tag, count)

    # -------------------------------------------------------------------------
    # Filters
    # -------------------------------------------------------------------------

    @staticmethod
    def apply_filter(query: Query, tag: Optional[str]) -> Query:
        """
        Restrict an Entry query to visible entries carrying a tag.

        Args:
            query: Query selecting from the entry table
            tag: None (visibility only), ``micro``, ``meta`` or a stored tag

        Returns:
            Filtered query
        """
        query = query.filter(Entry.invisible.is_(False))
        if tag is None:
            return query
        if tag == MICRO_TAG:
            return query.filter(Entry.body == Entry.teaser)
        if tag == META_TAG:
            return query.filter(
                exists().where(
                    Symlink.entry_id == Entry.id,
                    Symlink.kind == SymlinkKind.META.value,
                )
            )
        return query.filter(
            exists().where(EntryTag.entry_id == Entry.id, EntryTag.tag == tag)
        )
