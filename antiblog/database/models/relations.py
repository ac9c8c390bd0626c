"""
Relation Models
----------------

Rows hanging off an entry. None of them outlive their entry (foreign keys
cascade on delete) and all of them are replaced wholesale when the entry
is updated.

Models:
    - Symlink: Human-readable alias of an entry, scoped by kind
    - EntryTag: Label attached to an entry
    - SeriesAssignment: Membership of an entry in a named series
    - RssEntry: Slot of an entry in the bounded recency feed
"""
from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Symlink(Base):
    """
    Alias mapping ``(entry_id, kind)`` to a link string.

    At most one alias of each kind exists per entry.

    Attributes:
        entry_id: Aliased entry
        kind: ``normal`` or ``meta``
        link: Slug used in the public URL
    """

    __tablename__ = "symlink"
    __table_args__ = (
        CheckConstraint("kind IN ('normal', 'meta')", name="ck_symlink_kind"),
        CheckConstraint("link != ''", name="ck_symlink_non_empty_link"),
    )

    entry_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("entry.id", ondelete="CASCADE"), primary_key=True
    )
    kind: Mapped[str] = mapped_column(String(16), primary_key=True)
    link: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Symlink(entry_id={self.entry_id}, kind={self.kind}, link={self.link})>"


class EntryTag(Base):
    """
    Label attached to an entry.

    Attributes:
        entry_id: Tagged entry
        tag: Label text
    """

    __tablename__ = "entry_tag"

    entry_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("entry.id", ondelete="CASCADE"), primary_key=True
    )
    tag: Mapped[str] = mapped_column(String(255), primary_key=True, index=True)

    def __repr__(self) -> str:
        return f"<EntryTag(entry_id={self.entry_id}, tag={self.tag})>"


class SeriesAssignment(Base):
    """
    Membership of an entry in a series.

    Members are ordered by ``index``; indices are caller-assigned and need
    not be contiguous.

    Attributes:
        entry_id: Member entry
        series: Series name
        index: Ordering key within the series
    """

    __tablename__ = "series_assignment"

    entry_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("entry.id", ondelete="CASCADE"), primary_key=True
    )
    series: Mapped[str] = mapped_column(String(255), primary_key=True, index=True)
    index: Mapped[int] = mapped_column("index", Integer, primary_key=True)

    def __repr__(self) -> str:
        return (
            f"<SeriesAssignment(entry_id={self.entry_id}, "
            f"series={self.series}, index={self.index})>"
        )


class RssEntry(Base):
    """
    Slot in the recency feed.

    Feed positions are dense and unique within 1..FEED_CAPACITY and are
    independent of the main entry rank.

    Attributes:
        entry_id: Promoted entry
        feed_position: 1 for the most recently promoted entry
    """

    __tablename__ = "rss_entry"
    __table_args__ = (
        CheckConstraint("feed_position >= 1", name="ck_rss_positive_position"),
    )

    entry_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("entry.id", ondelete="CASCADE"), primary_key=True
    )
    feed_position: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<RssEntry(entry_id={self.entry_id}, feed_position={self.feed_position})>"
