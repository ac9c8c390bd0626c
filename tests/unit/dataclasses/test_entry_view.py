"""
test_entry_view.py
------------------
Tests for the read-side entry records.
"""
from datetime import datetime, timedelta, timezone

import pytest

from antiblog.core.exceptions import InvariantError
from antiblog.dataclasses.entry_view import EntryRef, EntryView, SeriesLink, color_for


class TestEntryView:
    """Test EntryView construction and rendering."""

    def test_collections_provisioned(self):
        """Tags and series exist from construction on, never shared."""
        a, b = EntryView(id=1), EntryView(id=2)
        a.tags.add("x")
        assert b.tags == set()
        assert a.series == [] and a.series is not b.series

    def test_empty_title_falls_back_to_id(self):
        assert EntryView(id=1234567).title == "#1234567"

    def test_title_kept(self):
        assert EntryView(id=1, title="Hello").title == "Hello"

    def test_none_title_is_invariant_violation(self):
        with pytest.raises(InvariantError):
            EntryView(id=1, title=None)

    @pytest.mark.parametrize("entry_id,color", [(0, 1), (5, 6), (6, 1), (1234567, 1234567 % 6 + 1)])
    def test_color(self, entry_id, color):
        assert EntryView(id=entry_id).color == color
        assert color_for(entry_id) == color

    def test_sorted_tags(self):
        entry = EntryView(id=1)
        assert entry.sorted_tags is None
        entry.tags.update({"micro", "meta", "b"})
        assert entry.sorted_tags == ["b", "meta", "micro"]

    def test_rfc822_date(self):
        entry = EntryView(id=1, pub_date=datetime(2024, 1, 15, 12, 30, tzinfo=timezone.utc))
        assert entry.rfc822_date == "Mon, 15 Jan 2024 12:30:00 GMT"

    def test_rfc822_date_naive_is_utc(self):
        entry = EntryView(id=1, pub_date=datetime(2024, 1, 15, 12, 30))
        assert entry.rfc822_date == "Mon, 15 Jan 2024 12:30:00 GMT"

    def test_rfc822_date_converts_offsets(self):
        stamp = datetime(2024, 1, 15, 14, 30, tzinfo=timezone(timedelta(hours=2)))
        assert EntryView(id=1, pub_date=stamp).rfc822_date == "Mon, 15 Jan 2024 12:30:00 GMT"

    def test_to_dict(self):
        entry = EntryView(id=7, title="T", content="C", permalink="/entry/7")
        entry.tags.add("stuff")

        result = entry.to_dict()

        assert result["title"] == "T"
        assert result["tags"] == ["stuff"]
        assert result["series"] == []
        assert result["color"] == 2
        assert result["read_more"] is False


class TestSeriesLink:
    """Test SeriesLink rendering."""

    def test_missing_neighbours_are_omitted(self):
        first = EntryRef(1, "/entry/1")
        link = SeriesLink(series="s", index=1, first=first, last=EntryRef(2, "/entry/2"),
                          next=EntryRef(2, "/entry/2"))

        result = link.to_dict()

        assert "prev" not in result
        assert result["first"] == {"id": 1, "permalink": "/entry/1"}
        assert result["next"]["permalink"] == "/entry/2"
