#!/usr/bin/env python3
"""
managers package
--------------------
Per-concern managers for the Antiblog database.

Each manager wraps one table or one read-side concern, receives the
session of the enclosing transaction and inherits from BaseManager.

Available Managers:
    BaseManager: Abstract base class with common utilities
    SymlinkManager: Aliases and permalink resolution
    TagManager: Stored tags, tag filters and the tag cloud
    SeriesManager: Series memberships and neighbour navigation
    RssManager: Bounded recency feed
    RankManager: Rank allocation and rotation
    EntryManager: Entry creation and updates
    PageManager: Paginated listings
    ViewManager: Single entry and page assembly

Usage:
    from antiblog.database.managers import EntryManager, ViewManager

    entry_mgr = EntryManager(session, logger)
    view_mgr = ViewManager(session, logger)
"""
from .base_manager import BaseManager
from .symlink_manager import SymlinkManager, SymlinkMap
from .tag_manager import TagManager
from .series_manager import SeriesManager
from .rss_manager import FEED_CAPACITY, RssManager
from .rank_manager import RankManager
from .entry_manager import TEASER_LIMIT, EntryManager, cut_body
from .page_manager import PAGE_SIZE, PageManager
from .view_manager import RANDOM_REF, ViewManager

__all__ = [
    "BaseManager",
    "SymlinkManager",
    "SymlinkMap",
    "TagManager",
    "SeriesManager",
    "RssManager",
    "FEED_CAPACITY",
    "RankManager",
    "EntryManager",
    "TEASER_LIMIT",
    "cut_body",
    "PageManager",
    "PAGE_SIZE",
    "ViewManager",
    "RANDOM_REF",
]
