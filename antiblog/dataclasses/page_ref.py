#!/usr/bin/env python3
"""
page_ref.py
-----------
Value object addressing one page of a (possibly tag-filtered) listing.

A page reference is derived from request path segments and never
persisted:

    /                  -> PageRef(None, 1)
    /page/3            -> PageRef(None, 3)
    /page/stuff        -> PageRef("stuff", 1)
    /page/stuff/last   -> PageRef("stuff", LAST_PAGE)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from antiblog.core.exceptions import InvalidReferenceError
from antiblog.core.validators import DataValidator

LAST_PAGE = "last"

PageIndex = Union[int, str]


@dataclass(frozen=True)
class PageRef:
    """
    Reference to a multi-entry page.

    Attributes:
        tag: Optional filter (tag name, ``meta``, ``micro``) or None
        index: Positive page ordinal, or LAST_PAGE for the final page
    """

    tag: Optional[str]
    index: PageIndex

    @classmethod
    def make(cls, a: Optional[str] = None, b: Optional[str] = None) -> "PageRef":
        """
        Build a reference from up to two path segments.

        With one segment, a number selects a page of the unfiltered
        listing and anything else names a tag. With two segments the first
        is the tag and the second must be an ordinal.

        Raises:
            InvalidReferenceError: If the ordinal segment cannot be parsed
        """
        if a is None:
            return cls(None, 1)
        if b is None:
            index = cls.parse_index(a)
            return cls(a, 1) if index is None else cls(None, index)

        index = cls.parse_index(b)
        if index is None:
            raise InvalidReferenceError(f"Bad number: {b}")
        return cls(a, index)

    @staticmethod
    def parse_index(value: Any) -> Optional[PageIndex]:
        """
        Parse a page ordinal.

        Returns:
            The integer ordinal, LAST_PAGE, or None when the value is not an
            ordinal at all

        Raises:
            InvalidReferenceError: For the numeric but non-positive ordinal 0
        """
        if value == LAST_PAGE:
            return LAST_PAGE
        if not DataValidator.is_numeric_ref(value):
            return None
        index = int(value)
        if index < 1:
            raise InvalidReferenceError(f"Page ordinal must be positive: {value}")
        return index

    @property
    def is_last(self) -> bool:
        return self.index == LAST_PAGE

    def abs_index(self, page_count: int) -> int:
        """Concrete ordinal once the number of pages is known."""
        if self.is_last:
            return page_count
        return self.index  # type: ignore[return-value]

    def prev(self, page_count: int) -> Optional[str]:
        """URL of the previous page, or None on the first page."""
        x = self.abs_index(page_count)
        if x <= 1:
            return None
        return PageRef(self.tag, x - 1).url

    def next(self, page_count: int) -> Optional[str]:
        """URL of the following page, or None on the last page."""
        x = self.abs_index(page_count)
        if x >= page_count:
            return None
        return PageRef(self.tag, x + 1).url

    @property
    def url(self) -> str:
        """
        Canonical URL of this page.

        The first unfiltered page is ``/``; page ordinal 1 is omitted from
        tagged URLs.
        """
        parts = ["/page"]
        if self.tag:
            parts.append(f"/{self.tag}")
        if self.is_last:
            parts.append(f"/{LAST_PAGE}")
        elif self.index > 1:  # type: ignore[operator]
            parts.append(f"/{self.index}")

        url = "".join(parts)
        return "/" if url == "/page" else url
