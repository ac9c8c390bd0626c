"""
Core Models
------------

Central model for the Antiblog database.

Models:
    - Entry: A post, its rank in the global ordering and its content

Ranks form a dense 1..N ordering over all entries, visible or not. The
rank column is unique, so every renumbering is issued row by row in an
order that never produces a transient duplicate.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


# ----- Entry Model -----
class Entry(Base):
    """
    Central model representing a post.

    An entry is either a regular post (title, body and teaser) or a
    redirect stub whose content is cleared and whose ``redirect_url`` points
    elsewhere. Entries are never hard-deleted; a stub keeps its row and rank.

    Attributes:
        id: Primary key, sampled sparsely (not autoincremented)
        rank: Position in the global ordering (dense, 1-based, unique)
        title: Stored title (may be empty)
        body: Full text
        teaser: Precomputed excerpt of the body
        invisible: True when the entry is not served in public listings
        redirect_url: Target URL for redirect stubs
        md5_signature: Opaque change token supplied by the publishing client
        date_posted: When the row was created
    """

    __tablename__ = "entry"
    __table_args__ = (CheckConstraint("rank >= 1", name="ck_entry_positive_rank"),)

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    rank: Mapped[int] = mapped_column(Integer, unique=True, nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    teaser: Mapped[str] = mapped_column(Text, nullable=False, default="")
    invisible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    redirect_url: Mapped[Optional[str]] = mapped_column(Text)
    md5_signature: Mapped[Optional[str]] = mapped_column(String(255), default="")

    # ---- Timestamps ----
    date_posted: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    @property
    def is_redirect(self) -> bool:
        return self.redirect_url is not None

    @property
    def is_micro(self) -> bool:
        """Short-form post: the body fits entirely in the teaser."""
        return self.body == self.teaser

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, rank={self.rank}, invisible={self.invisible})>"
