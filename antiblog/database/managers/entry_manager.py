#!/usr/bin/env python3
"""
entry_manager.py
--------------------
Manager for Entry creation and updates.

Entry is the central entity: every write goes through this manager, which
also replaces the entry's aliases, tags, series memberships and feed slot.

Key Features:
    - Sparse random id allocation with collision retry
    - Placeholder rows inserted at a random rank
    - Idempotent updates (an update for an unknown id creates the entry)
    - Redirect stubs that clear content and all relations
    - Teaser computation bounded to a word or line boundary

Usage:
    entry_mgr = EntryManager(session, logger)
    entry_id = entry_mgr.create({"body": "Hello", "tags": ["stuff"]})
    entry_mgr.update({"id": entry_id, "url": "http://example.com"})
"""
from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from sqlalchemy import insert, update
from sqlalchemy.orm import Session

from antiblog.core.exceptions import ValidationError
from antiblog.core.logging_manager import AntiblogLogger
from antiblog.core.validators import MAX_ID, DataValidator
from antiblog.database.decorators import log_database_operation, validate_payload
from antiblog.database.models import Entry, SymlinkKind
from .base_manager import BaseManager
from .rank_manager import RankManager
from .rss_manager import RssManager
from .series_manager import SeriesManager
from .symlink_manager import SymlinkManager
from .tag_manager import TagManager

TEASER_LIMIT = 600
ID_MIN = 1_000_000
ID_SPAN = 9_000_000

EMPTY_ENTRY: Dict[str, Any] = {
    "body": "",
    "teaser": "",
    "title": "",
    "invisible": True,
}


def cut_body(body: str, limit: int = TEASER_LIMIT) -> str:
    """
    Compute the teaser of a body.

    Bodies up to ``limit`` characters are their own teaser. Longer ones are
    cut at the last newline within the first ``limit`` characters, else at
    the last space, else exactly at ``limit``.
    """
    if len(body) <= limit:
        return body
    summary = body[:limit]
    for separator in ("\n", " "):
        ix = summary.rfind(separator)
        if ix >= 0:
            return summary[:ix]
    return summary


class EntryManager(BaseManager):
    """
    Manager for Entry writes and lookups.

    Attributes:
        rng: Random source for ids and initial ranks
        symlinks, tags, series, rss, ranks: Relation managers sharing the
            same session
    """

    def __init__(
        self,
        session: Session,
        logger: Optional[AntiblogLogger] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize EntryManager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
            rng: Random source; a fresh generator when omitted
        """
        super().__init__(session, logger)
        self.rng = rng or random.Random()
        self.symlinks = SymlinkManager(session, logger)
        self.tags = TagManager(session, logger)
        self.series = SeriesManager(session, logger, symlinks=self.symlinks)
        self.rss = RssManager(session, logger)
        self.ranks = RankManager(session, logger, rss=self.rss)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def exists(self, entry_id: int) -> bool:
        return self._exists(Entry, id=entry_id)

    def get(self, entry_id: int) -> Optional[Entry]:
        return self.session.get(Entry, entry_id, populate_existing=True)

    def count(self) -> int:
        return self._count(Entry)

    def signatures(self) -> List[Dict[str, Any]]:
        """Id and client signature of every entry, for client-side sync."""
        rows = self.session.query(Entry.id, Entry.md5_signature).order_by(Entry.id)
        return [{"id": row.id, "signature": row.md5_signature} for row in rows]

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    def generate_id(self) -> int:
        """Draw random ids until one is unused."""
        while True:
            entry_id = self.rng.randrange(ID_SPAN) + ID_MIN
            if not self.exists(entry_id):
                return entry_id

    def _create_empty(self, entry_id: int) -> None:
        rank = self.ranks.allocate(self.rng)
        self.session.execute(
            insert(Entry).values(
                id=entry_id, rank=rank, md5_signature="", **EMPTY_ENTRY
            )
        )
        self.log.log_debug("Inserted placeholder", {"entry_id": entry_id, "rank": rank})

    def ensure_exists(self, entry_id: int) -> bool:
        """
        Insert a placeholder row unless the entry exists.

        Returns:
            True if a placeholder was created
        """
        if self.exists(entry_id):
            return False
        self._create_empty(entry_id)
        return True

    @log_database_operation("create_entry")
    def create(self, payload: Dict[str, Any]) -> int:
        """
        Create an entry from a payload.

        Args:
            payload: Entry fields (``id`` is ignored)

        Returns:
            Id of the new entry

        Raises:
            ValidationError: If the payload is malformed
        """
        DataValidator.validate_required_fields(payload, [])
        entry_id = self.generate_id()
        self._create_empty(entry_id)
        self._update_existing(entry_id, payload)
        return entry_id

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    @log_database_operation("update_entry")
    @validate_payload(["id"])
    def update(self, payload: Dict[str, Any]) -> int:
        """
        Update an entry, creating it first when the id is unknown.

        Args:
            payload: Entry fields including ``id``

        Returns:
            Id of the updated entry

        Raises:
            ValidationError: If the id is not an integer or the payload is
                otherwise malformed
        """
        entry_id = DataValidator.normalize_int(payload["id"])
        if entry_id is None or not 0 < entry_id <= MAX_ID:
            raise ValidationError(f"Entry id must be a positive integer: {payload['id']!r}")
        if self.ensure_exists(entry_id):
            self.log.log_info(f"Restored entry {entry_id}")
        self._update_existing(entry_id, payload)
        return entry_id

    def _update_existing(self, entry_id: int, payload: Dict[str, Any]) -> None:
        if payload.get("url") is None:
            self._update_normal(entry_id, payload)
        else:
            self._update_redirect(entry_id, payload)

        self.symlinks.update(
            entry_id, SymlinkKind.NORMAL,
            DataValidator.normalize_string(payload.get("symlink")),
        )
        self.symlinks.update(
            entry_id, SymlinkKind.META,
            DataValidator.normalize_string(payload.get("metalink")),
        )

    def _update_normal(self, entry_id: int, payload: Dict[str, Any]) -> None:
        body = payload.get("body")
        if not isinstance(body, str):
            raise ValidationError(f"Entry {entry_id} requires a text 'body'")

        summary = payload.get("summary")
        self.session.execute(
            update(Entry)
            .where(Entry.id == entry_id)
            .values(
                title=payload.get("title") or "",
                teaser=summary if summary is not None else cut_body(body),
                body=body,
                invisible=False,
                md5_signature=payload.get("signature"),
                redirect_url=None,
            )
            .execution_options(synchronize_session=False)
        )
        self.tags.update(entry_id, payload.get("tags"))
        self.series.update(entry_id, payload.get("series"))

    def _update_redirect(self, entry_id: int, payload: Dict[str, Any]) -> None:
        self.session.execute(
            update(Entry)
            .where(Entry.id == entry_id)
            .values(
                md5_signature=payload.get("signature"),
                redirect_url=payload["url"],
                **EMPTY_ENTRY,
            )
            .execution_options(synchronize_session=False)
        )
        self.tags.delete(entry_id)
        self.series.delete(entry_id)
        self.rss.delete(entry_id)
