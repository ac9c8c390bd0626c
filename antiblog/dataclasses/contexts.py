#!/usr/bin/env python3
"""
contexts.py
-----------
Request-scoped view contexts.

A context collects the entries resolved for one request together with the
navigation and tag-cloud metadata, and renders the whole thing as a plain
dictionary for the template layer. Contexts are never persisted.

Classes:
    - Context: Base collection of entries, normal or meta scoped
    - WebContext: HTML page context with content translation and tag cloud
    - EntryContext: Single entry page (may resolve to a redirect)
    - PageContext: Paginated listing with prev/next links
    - RssContext: Recency feed
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from antiblog.core.profile import Profile
from .entry_view import EntryView, color_for

MICRO_TAG = "micro"
META_TAG = "meta"

_TRAILING_BREAK = re.compile(r"<br />\Z")


class Context:
    """
    Base rendering context.

    Attributes:
        profile: Site configuration
        is_meta: Whether aliases resolve in the meta scope
        entries: Resolved entries in display order
    """

    def __init__(self, profile: Profile) -> None:
        self.profile = profile
        self._meta = False
        self.entries: List[EntryView] = []

    @property
    def is_meta(self) -> bool:
        return self._meta

    def set_meta(self) -> "Context":
        self._meta = True
        return self

    @property
    def is_page(self) -> bool:
        return False

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def lookup(self) -> Dict[int, EntryView]:
        """Map entry ids to the entries of this context."""
        return {entry.id: entry for entry in self.entries}

    def append_row(self, row: Any) -> EntryView:
        """Translate a database row and append the resulting entry."""
        entry = self.translate(row)
        self.entries.append(entry)
        return entry

    def translate(self, row: Any) -> EntryView:
        raise NotImplementedError(f"{type(self).__name__} cannot translate rows")

    def to_dict(self) -> Dict[str, Any]:
        result = self.profile.to_dict()
        result["entries"] = [entry.to_dict() for entry in self.entries]
        return result


class WebContext(Context):
    """Base context for rendering web pages."""

    def __init__(self, profile: Profile) -> None:
        super().__init__(profile)
        self._tag_cloud: List[Dict[str, Any]] = []

    def translate(self, row: Any) -> EntryView:
        entry = EntryView(
            id=row.id,
            title=row.title,
            redirect_url=row.redirect_url,
        )
        self.translate_content(entry, row.body, row.teaser)
        return entry

    def translate_content(self, entry: EntryView, body: str, teaser: str) -> None:
        """
        Choose what part of an entry to render.

        Short-form entries (body equal to teaser) render in full everywhere.
        Listings show the teaser with a "read more" marker, single entry
        pages show the body.
        """
        if body == teaser:
            if self.profile.has_micro:
                entry.tags.add(MICRO_TAG)
            entry.content = teaser
        elif self.is_page:
            entry.content = _TRAILING_BREAK.sub("", teaser.strip())
            entry.read_more = True
        else:
            entry.content = body
        entry.teaser = teaser

    def add_tag(self, tag: str, count: int) -> None:
        self._tag_cloud.append(
            {"name": tag, "count": count, "color": color_for(count)}
        )

    @property
    def tag_cloud(self) -> Optional[List[Dict[str, Any]]]:
        """Tag cloud ordered by count (descending), then name."""
        if not self._tag_cloud:
            return None
        return sorted(self._tag_cloud, key=lambda t: (-t["count"], t["name"]))

    @property
    def page_title(self) -> str:
        return self.profile.site_title

    @property
    def page_url(self) -> str:
        return self.profile.root_url

    @property
    def page_description(self) -> str:
        if self.profile.author_name:
            return f"{self.profile.site_title} by {self.profile.author_name}"
        return self.profile.site_title

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(
            {
                "not_found": self.is_empty,
                "page_title": self.page_title,
                "page_url": self.page_url,
                "page_description": self.page_description,
                "tag_cloud": self.tag_cloud,
            }
        )
        return result


class EntryContext(WebContext):
    """Context of rendering a page with a single entry."""

    def __init__(self, profile: Profile) -> None:
        super().__init__(profile)
        self._redirect_url: Optional[str] = None

    @property
    def redirect_url(self) -> Optional[str]:
        """Explicit redirect (random pick) or the entry's own redirect."""
        if self._redirect_url:
            return self._redirect_url
        if self.is_empty:
            return None
        return self.entries[0].redirect_url

    @redirect_url.setter
    def redirect_url(self, value: Optional[str]) -> None:
        self._redirect_url = value

    @property
    def page_title(self) -> str:
        if self.is_empty:
            return super().page_title
        return f"{self.profile.site_title} : {self.entries[0].title}"

    @property
    def page_url(self) -> str:
        if self.is_empty:
            return super().page_url
        return self.profile.root_url + (self.entries[0].permalink or "")

    @property
    def page_description(self) -> str:
        if self.is_empty:
            return super().page_description
        return self.entries[0].teaser or ""

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["redirect_url"] = self.redirect_url
        return result


class PageContext(WebContext):
    """Context for rendering a multi-entry page."""

    def __init__(self, profile: Profile) -> None:
        super().__init__(profile)
        self.prev: Optional[str] = None
        self.next: Optional[str] = None

    @property
    def is_page(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(
            {
                "prev": self.prev,
                "next": self.next,
                "navi": self.prev or self.next,
            }
        )
        return result


class RssContext(Context):
    """Context of rendering the recency feed."""

    def translate(self, row: Any) -> EntryView:
        return EntryView(
            id=row.entry_id,
            title=row.title,
            summary=row.teaser,
            pub_date=row.date_posted,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = self.profile.to_dict()
        result["entries"] = [entry.to_feed_dict() for entry in self.entries]
        return result
