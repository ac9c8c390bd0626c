#!/usr/bin/env python3
"""
symlink_manager.py
--------------------
Resolves human-readable aliases ("symlinks") to entries and back.

Every entry can carry one alias per kind:
    - normal: served as /entry/<link>
    - meta:   served as /meta/<link> and tags the entry as ``meta``

Permalink precedence for an entry:
    1. /meta/<meta>    when the request is meta-scoped and a meta alias exists
    2. /entry/<normal> when a normal alias exists
    3. /meta/<meta>    when a meta alias exists
    4. /entry/<id>     otherwise

Usage:
    symlink_mgr = SymlinkManager(session, logger)
    symlink_mgr.update(entry_id, SymlinkKind.NORMAL, "about-me")
    entry_id = symlink_mgr.find("about-me", SymlinkKind.NORMAL)
    symlink_mgr.inject(context)
"""
from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from sqlalchemy import insert

from antiblog.dataclasses.contexts import META_TAG, Context
from antiblog.dataclasses.entry_view import EntryRef, EntryView
from antiblog.database.decorators import log_database_operation
from antiblog.database.models import Symlink, SymlinkKind
from .base_manager import BaseManager

Linkable = Union[EntryView, EntryRef]


class SymlinkMap:
    """
    Aliases of a batch of entries, keyed by entry id then kind.

    Built once per request from a single query and consulted for every
    entry of that request.
    """

    def __init__(self, meta_scope: bool = False) -> None:
        self.meta_scope = meta_scope
        self._data: Dict[int, Dict[SymlinkKind, str]] = defaultdict(dict)

    def put(self, entry_id: int, kind: Union[SymlinkKind, str], link: str) -> None:
        self._data[entry_id][SymlinkKind(kind)] = link

    def permalink(self, entry_id: int) -> str:
        links = self._data.get(entry_id, {})
        normal = links.get(SymlinkKind.NORMAL)
        meta = links.get(SymlinkKind.META)
        if meta and self.meta_scope:
            return f"{SymlinkKind.META.url_prefix}/{meta}"
        if normal:
            return f"{SymlinkKind.NORMAL.url_prefix}/{normal}"
        if meta:
            return f"{SymlinkKind.META.url_prefix}/{meta}"
        return f"{SymlinkKind.NORMAL.url_prefix}/{entry_id}"

    def is_meta(self, entry_id: int) -> bool:
        return SymlinkKind.META in self._data.get(entry_id, {})


class SymlinkManager(BaseManager):
    """Manages the ``symlink`` table and permalink resolution."""

    @log_database_operation("update_symlink")
    def update(
        self,
        entry_id: int,
        kind: Union[SymlinkKind, str],
        link: Optional[str],
    ) -> None:
        """
        Replace the alias of one kind for an entry.

        The existing alias of that kind is always removed; a new one is
        inserted only when ``link`` is not None.

        Args:
            entry_id: Aliased entry
            kind: Alias kind
            link: New alias, or None to drop the alias
        """
        kind = SymlinkKind(kind)
        self.session.query(Symlink).filter_by(
            entry_id=entry_id, kind=kind.value
        ).delete()

        if link is None:
            return

        self.session.execute(
            insert(Symlink).values(entry_id=entry_id, kind=kind.value, link=link)
        )
        self.log.log_debug(
            "Updated symlink", {"entry_id": entry_id, "kind": kind.value, "link": link}
        )

    def find(self, link: str, kind: Union[SymlinkKind, str]) -> Optional[int]:
        """
        Resolve an alias to an entry id.

        Args:
            link: Alias text, matched exactly
            kind: Alias kind to search

        Returns:
            Entry id, or None when no alias matches
        """
        row = (
            self.session.query(Symlink.entry_id)
            .filter_by(link=link, kind=SymlinkKind(kind).value)
            .order_by(Symlink.entry_id)
            .first()
        )
        return row[0] if row else None

    def find_for_context(self, context: Context, link: str) -> Optional[int]:
        """Resolve an alias in the scope (normal or meta) of a context."""
        return self.find(link, SymlinkKind.for_scope(context.is_meta))

    def each(self, entry_ids: Iterable[int]) -> Iterator[Tuple[int, str, str]]:
        """Yield ``(entry_id, kind, link)`` for every alias of the given entries."""
        ids = list(set(entry_ids))
        if not ids:
            return
        rows = (
            self.session.query(Symlink.entry_id, Symlink.kind, Symlink.link)
            .filter(Symlink.entry_id.in_(ids))
        )
        for row in rows:
            yield row.entry_id, row.kind, row.link

    def load(self, entry_ids: Iterable[int], meta_scope: bool = False) -> SymlinkMap:
        """Batch-load aliases of the given entries into a SymlinkMap."""
        links = SymlinkMap(meta_scope)
        for entry_id, kind, link in self.each(entry_ids):
            links.put(entry_id, kind, link)
        return links

    def inject(
        self, context: Context, entries: Optional[List[Linkable]] = None
    ) -> None:
        """
        Resolve permalinks for entries (defaults to the context's entries).

        Full entry views that carry a meta alias also receive the synthetic
        ``meta`` tag.

        Args:
            context: Request context, decides the alias scope
            entries: Entries or references to resolve
        """
        if entries is None:
            entries = list(context.entries)
        if not entries:
            return

        links = self.load((e.id for e in entries), meta_scope=context.is_meta)
        for entry in entries:
            entry.permalink = links.permalink(entry.id)
            if isinstance(entry, EntryView) and links.is_meta(entry.id):
                entry.tags.add(META_TAG)

    def count(self, kind: Union[SymlinkKind, str]) -> int:
        return self._count(Symlink, kind=SymlinkKind(kind).value)
