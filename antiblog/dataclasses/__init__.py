"""
dataclasses package
-------------------
Read-side records and request contexts produced by the engine.

- EntryView / EntryRef / SeriesLink: resolved entries and navigation stubs
- EntryContext / PageContext / RssContext: per-request view payloads
- PageRef: value object addressing one page of a listing
"""
from antiblog.dataclasses.entry_view import EntryRef, EntryView, SeriesLink
from antiblog.dataclasses.page_ref import LAST_PAGE, PageRef
from antiblog.dataclasses.contexts import (
    Context,
    EntryContext,
    PageContext,
    RssContext,
    WebContext,
)

__all__ = [
    "EntryRef",
    "EntryView",
    "SeriesLink",
    "LAST_PAGE",
    "PageRef",
    "Context",
    "WebContext",
    "EntryContext",
    "PageContext",
    "RssContext",
]
