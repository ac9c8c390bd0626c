"""
Enumeration Types
------------------

Enum classes for the Antiblog database models.

Enums:
    - SymlinkKind: Scope of an entry alias (normal or meta)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum


class SymlinkKind(str, Enum):
    """
    Enumeration of alias scopes.
    - NORMAL: Served under /entry/<link>
    - META: Served under /meta/<link>, marks the entry as a meta page
    """

    NORMAL = "normal"
    META = "meta"

    @classmethod
    def for_scope(cls, is_meta: bool) -> "SymlinkKind":
        """Alias kind matching a normal or meta scoped request."""
        return cls.META if is_meta else cls.NORMAL

    @property
    def url_prefix(self) -> str:
        """Path prefix of permalinks built from this kind of alias."""
        return "/meta" if self is SymlinkKind.META else "/entry"
