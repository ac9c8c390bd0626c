"""
test_rss_manager.py
-------------------
Unit tests for the bounded recency feed.
"""
from antiblog.core.profile import Profile
from antiblog.dataclasses.contexts import RssContext
from antiblog.database.managers.rss_manager import FEED_CAPACITY
from antiblog.database.models import RssEntry


def positions(session):
    return [
        p for (p,) in session.query(RssEntry.feed_position).order_by(RssEntry.feed_position)
    ]


class TestRssEnqueue:
    """Test RssManager.enqueue()."""

    def test_enqueue_puts_entry_at_head(self, rss_manager, entry_manager, payloads):
        a = entry_manager.create(payloads.minimal())
        b = entry_manager.create(payloads.minimal())

        assert rss_manager.enqueue(a) is True
        assert rss_manager.enqueue(b) is True

        assert rss_manager.entry_ids() == [b, a]

    def test_enqueue_present_entry_is_noop(self, rss_manager, entry_manager, payloads):
        """An entry already in the feed keeps its position."""
        a = entry_manager.create(payloads.minimal())
        b = entry_manager.create(payloads.minimal())
        rss_manager.enqueue(a)
        rss_manager.enqueue(b)

        assert rss_manager.enqueue(a) is False
        assert rss_manager.entry_ids() == [b, a]

    def test_enqueue_evicts_oldest(self, rss_manager, entry_manager, payloads, db_session):
        """The feed holds at most FEED_CAPACITY rows with dense positions."""
        ids = [entry_manager.create(payloads.minimal()) for _ in range(FEED_CAPACITY + 1)]
        for entry_id in ids:
            rss_manager.enqueue(entry_id)

        feed = rss_manager.entry_ids()
        assert len(feed) == FEED_CAPACITY
        assert feed[0] == ids[-1]
        assert ids[0] not in feed
        assert positions(db_session) == list(range(1, FEED_CAPACITY + 1))

    def test_delete(self, rss_manager, entry_manager, payloads):
        entry_id = entry_manager.create(payloads.minimal())
        rss_manager.enqueue(entry_id)

        rss_manager.delete(entry_id)

        assert rss_manager.contains(entry_id) is False


class TestRssFeed:
    """Test RssManager.feed()."""

    def test_feed_rows(self, rss_manager, entry_manager, payloads):
        a = entry_manager.create(payloads.titled())
        b = entry_manager.create(payloads.teased())
        rss_manager.enqueue(a)
        rss_manager.enqueue(b)
        context = RssContext(Profile.mock_profile())

        rss_manager.feed(context)

        assert [e.id for e in context.entries] == [b, a]
        assert context.entries[0].summary == "Some summary"
        assert context.entries[1].title == "Some title"
        assert context.entries[1].pub_date is not None

    def test_empty_feed(self, rss_manager):
        context = rss_manager.feed(RssContext(Profile.mock_profile()))
        assert context.is_empty
