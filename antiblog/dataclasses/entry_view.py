#!/usr/bin/env python3
"""
entry_view.py
-------------
Read-side records for entries as handed to the renderer.

Classes:
    - EntryRef: Lightweight reference (id + permalink) used for series
      navigation
    - SeriesLink: One series membership with its first/prev/next/last
      neighbours
    - EntryView: Fully resolved entry (content, permalink, tags, series)

All collections are provisioned at construction time; nothing is created
lazily on read.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Dict, List, Optional, Set

from antiblog.core.exceptions import InvariantError

COLOR_COUNT = 6


def color_for(value: int) -> int:
    """Stable palette slot (1..6) derived from an integer."""
    return value % COLOR_COUNT + 1


@dataclass
class EntryRef:
    """
    Lightweight entry stub bearing only an id and its resolved permalink.

    Attributes:
        id: Entry identifier
        permalink: Public URL path, filled in by the symlink resolver
    """

    id: int
    permalink: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "permalink": self.permalink}


@dataclass
class SeriesLink:
    """
    Neighbourhood of an entry within one series.

    Attributes:
        series: Series name
        index: Position of the entry in the series
        first: Lowest-index member
        last: Highest-index member
        prev: Closest member with a lower index (None at the start)
        next: Closest member with a higher index (None at the end)
    """

    series: str
    index: int
    first: Optional[EntryRef] = None
    last: Optional[EntryRef] = None
    prev: Optional[EntryRef] = None
    next: Optional[EntryRef] = None

    def to_dict(self) -> Dict[str, Any]:
        """Render the membership, omitting neighbours that do not exist."""
        result: Dict[str, Any] = {"series": self.series, "index": self.index}
        for key in ("first", "prev", "next", "last"):
            ref = getattr(self, key)
            if ref is not None:
                result[key] = ref.to_dict()
        return result


@dataclass
class EntryView:
    """
    A single entry resolved for display.

    Attributes:
        id: Entry identifier
        title: Display title (``#<id>`` when the stored title is empty)
        content: Text to render (body, teaser or cut teaser)
        teaser: Stored excerpt
        permalink: Public URL path
        redirect_url: Target URL when the entry is a redirect stub
        read_more: Whether content is a cut teaser of a longer body
        summary: Feed summary (recency feed only)
        pub_date: Publish date (recency feed only)
        tags: Labels, stored and synthetic
        series: Series memberships with neighbour references
    """

    id: int
    title: str = ""
    content: Optional[str] = None
    teaser: Optional[str] = None
    permalink: Optional[str] = None
    redirect_url: Optional[str] = None
    read_more: bool = False
    summary: Optional[str] = None
    pub_date: Optional[datetime] = None
    tags: Set[str] = field(default_factory=set)
    series: List[SeriesLink] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.title = self.display_title(self.id, self.title)

    @staticmethod
    def display_title(entry_id: int, title: Optional[str]) -> str:
        """
        Resolve the display title of an entry.

        Raises:
            InvariantError: If title is None
        """
        if title is None:
            raise InvariantError(f"Entry {entry_id} has no title")
        return title if title != "" else f"#{entry_id}"

    @property
    def color(self) -> int:
        return color_for(self.id)

    @property
    def sorted_tags(self) -> Optional[List[str]]:
        """Tags in alphabetical order, or None when there are none."""
        return sorted(self.tags) if self.tags else None

    @property
    def rfc822_date(self) -> Optional[str]:
        if self.pub_date is None:
            return None
        stamp = self.pub_date
        if stamp.tzinfo is None:
            stamp = stamp.replace(tzinfo=timezone.utc)
        return format_datetime(stamp.astimezone(timezone.utc), usegmt=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "teaser": self.teaser,
            "permalink": self.permalink,
            "redirect_url": self.redirect_url,
            "read_more": self.read_more,
            "tags": self.sorted_tags,
            "series": [s.to_dict() for s in self.series],
            "color": self.color,
        }

    def to_feed_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "pub_date": self.rfc822_date,
            "permalink": self.permalink,
        }
