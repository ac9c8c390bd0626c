"""
Database Models Package
------------------------

SQLAlchemy ORM models for the Antiblog database.

This package provides a modular organization of database models:
- base: Declarative base class
- enums: Enumeration types
- core: Entry model
- relations: Symlink, EntryTag, SeriesAssignment, RssEntry

Usage:
    from antiblog.database.models import Entry, Symlink, EntryTag
"""
# Base classes
from .base import Base

# Enumerations
from .enums import SymlinkKind

# Core models
from .core import Entry

# Relations
from .relations import EntryTag, RssEntry, SeriesAssignment, Symlink

__all__ = [
    # Base
    "Base",
    # Enums
    "SymlinkKind",
    # Core
    "Entry",
    # Relations
    "EntryTag",
    "RssEntry",
    "SeriesAssignment",
    "Symlink",
]
