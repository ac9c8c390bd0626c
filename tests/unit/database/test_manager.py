"""
test_manager.py
---------------
Tests for AntiblogDB: transaction scoping and the top-level operations
used by the web front end.
"""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError

from antiblog.core.exceptions import DatabaseError, InvalidReferenceError, ValidationError
from antiblog.core.profile import Profile
from antiblog.database.manager import AntiblogDB


def page_ids(db, *segments):
    return [entry.id for entry in db.page_view(*segments).entries]


class TestAntiblogDBSessions:
    """Transaction management."""

    @pytest.fixture
    def memory_db(self):
        db = AntiblogDB(Profile.mock_profile())
        db.initialize_schema()
        yield db
        db.dispose()

    def test_session_scope_commits(self, memory_db):
        """Mocked sessions see commit and close on success."""
        mock_session = MagicMock()
        memory_db.SessionLocal = MagicMock(return_value=mock_session)

        with memory_db.session_scope():
            pass

        mock_session.commit.assert_called_once()
        mock_session.rollback.assert_not_called()
        mock_session.close.assert_called_once()

    def test_session_scope_rolls_back(self, memory_db):
        mock_session = MagicMock()
        memory_db.SessionLocal = MagicMock(return_value=mock_session)

        with pytest.raises(ValueError, match="Test error"):
            with memory_db.session_scope():
                raise ValueError("Test error")

        mock_session.rollback.assert_called_once()
        mock_session.commit.assert_not_called()
        mock_session.close.assert_called_once()

    def test_managers_require_scope(self, memory_db):
        """Manager properties are unavailable outside session_scope."""
        with pytest.raises(DatabaseError, match="requires active session"):
            memory_db.entries

        with memory_db.session_scope():
            assert memory_db.entries is not None

        with pytest.raises(DatabaseError):
            memory_db.views

    def test_in_memory_database_is_shared(self, memory_db):
        """Sessions on an in-memory URL see the same data."""
        entry_id = memory_db.create_entry({"body": "Hello"})
        assert memory_db.api_index()[0]["id"] == entry_id

    def test_initialize_schema_reports_created_tables(self, memory_db):
        assert memory_db.initialize_schema() == []

    def test_fresh_schema(self, test_db_path):
        db = AntiblogDB(Profile.mock_profile(database=f"sqlite:///{test_db_path}"))
        try:
            created = db.initialize_schema()
        finally:
            db.dispose()
        assert set(created) == {
            "entry", "symlink", "entry_tag", "series_assignment", "rss_entry",
        }

    def test_failed_write_rolls_back(self, test_db):
        """A rejected payload leaves no partial entry behind."""
        with pytest.raises(ValidationError):
            test_db.create_entry({"signature": "no body"})
        assert test_db.api_index() == []

    def test_store_errors_propagate(self, test_db):
        """Constraint violations surface as SQLAlchemy errors after rollback."""
        with pytest.raises(IntegrityError):
            with test_db.session_scope():
                test_db.entries.create({"body": "a"})
                test_db.tags.update(1, ["orphan"])

        assert test_db.api_index() == []

    def test_file_logging(self, profile, tmp_dir):
        db = AntiblogDB(profile, log_dir=tmp_dir / "logs")
        try:
            db.initialize_schema()
            db.create_entry({"body": "Hello"})
        finally:
            db.dispose()
        assert (tmp_dir / "logs" / "database.log").exists()


class TestEntryView:
    """Single entry lookups."""

    def test_entry_by_id(self, test_db, payloads):
        entry_id = test_db.create_entry(payloads.titled())

        context = test_db.entry_view(entry_id)

        (entry,) = context.entries
        assert entry.title == "Some title"
        assert entry.content == "Hello, world"
        assert entry.permalink == f"/entry/{entry_id}"
        assert context.page_title == "Antiblog MOCK : Some title"

    def test_untitled_entry(self, test_db, payloads):
        entry_id = test_db.create_entry(payloads.minimal())
        assert test_db.entry_view(entry_id).entries[0].title == f"#{entry_id}"

    def test_tag_cloud(self, test_db, payloads):
        test_db.create_entry(payloads.tagged())

        context = test_db.page_view()

        assert context.tag_cloud == [
            {"name": "micro", "count": 1, "color": 2},
            {"name": "stuff", "count": 1, "color": 2},
        ]

    def test_tag_cloud_stored_micro_tag(self, test_db, payloads):
        test_db.create_entry(payloads.minimal(tags=["micro"]))

        names = [t["name"] for t in test_db.page_view().to_dict()["tag_cloud"]]

        assert names == ["micro"]

    def test_tag_cloud_without_micro(self, test_db_path, payloads):
        db = AntiblogDB(
            Profile.mock_profile(database=f"sqlite:///{test_db_path}", has_micro=False)
        )
        db.initialize_schema()
        try:
            db.create_entry(payloads.tagged())
            context = db.page_view()
        finally:
            db.dispose()
        assert context.tag_cloud == [{"name": "stuff", "count": 1, "color": 2}]
        assert context.entries[0].tags == {"stuff"}

    def test_metalink(self, test_db, payloads):
        entry_id = test_db.create_entry(payloads.minimal(metalink="foobar"))

        context = test_db.meta_view("foobar")

        (entry,) = context.entries
        assert entry.id == entry_id
        assert entry.sorted_tags == ["meta", "micro"]
        assert [t["name"] for t in context.tag_cloud] == ["meta", "micro"]
        assert test_db.entry_view("foobar").is_empty

    def test_dual_link(self, test_db, payloads):
        """An entry with both aliases links according to the view scope."""
        test_db.create_entry(payloads.minimal(symlink="barfoo", metalink="foobar"))

        assert test_db.page_view().entries[0].permalink == "/entry/barfoo"
        assert test_db.page_view("meta").entries[0].permalink == "/meta/foobar"
        assert test_db.meta_view("foobar").entries[0].permalink == "/meta/foobar"

    def test_random(self, test_db, payloads):
        entry_id = test_db.create_entry(payloads.minimal())

        context = test_db.entry_view("random")

        assert context.redirect_url == f"http://example.com/entry/{entry_id}"
        assert context.is_empty

    def test_random_on_empty_database(self, test_db):
        context = test_db.entry_view("random")
        assert context.redirect_url is None
        assert context.is_empty

    def test_redirect(self, test_db, payloads):
        entry_id = test_db.create_entry(payloads.redirect())

        assert test_db.entry_view(entry_id).redirect_url == "http://example.com"
        assert test_db.page_view().is_empty

    def test_not_found(self, test_db):
        context = test_db.entry_view("missing")
        assert context.to_dict()["not_found"] is True


class TestSeriesView:
    """Series navigation through the facade."""

    def test_series_links(self, test_db, payloads):
        a = test_db.create_entry(payloads.serial(1))
        test_db.create_entry(payloads.serial(2, symlink="foo"))
        test_db.create_entry(payloads.serial(3, metalink="bar"))

        (link,) = test_db.entry_view(a).entries[0].series

        assert link.first.permalink == f"/entry/{a}"
        assert link.next.permalink == "/entry/foo"
        assert link.last.permalink == "/meta/bar"

    def test_no_series_on_pages(self, test_db, payloads):
        for index in (1, 2, 3):
            test_db.create_entry(payloads.serial(index))
        assert all(e.series == [] for e in test_db.page_view().entries)


class TestPageView:
    """Listings through the facade."""

    def test_page_sizes(self, test_db, payloads):
        for _ in range(7):
            test_db.create_entry(payloads.minimal())

        assert len(page_ids(test_db)) == 5
        assert len(page_ids(test_db, "2")) == 2
        assert len(page_ids(test_db, "3")) == 0

    def test_prev_next(self, test_db, payloads):
        for _ in range(11):
            test_db.create_entry(payloads.minimal())
        for _ in range(6):
            test_db.create_entry(payloads.tagged())

        first = test_db.page_view()
        assert (first.prev, first.next) == (None, "/page/2")
        second = test_db.page_view("2")
        assert (second.prev, second.next) == ("/", "/page/3")
        fourth = test_db.page_view("4")
        assert (fourth.prev, fourth.next) == ("/page/3", None)
        tagged = test_db.page_view("stuff")
        assert tagged.next == "/page/stuff/2"
        tagged_2 = test_db.page_view("stuff", "2")
        assert (tagged_2.prev, tagged_2.next) == ("/page/stuff", None)

    def test_bad_page_number(self, test_db):
        with pytest.raises(InvalidReferenceError):
            test_db.page_view("stuff", "x")

    def test_zero_page_number(self, test_db):
        with pytest.raises(InvalidReferenceError):
            test_db.page_view("0")

    def test_integer_arguments(self, test_db, payloads):
        """Integer segments read as ordinals, like their string forms."""
        for _ in range(7):
            test_db.create_entry(payloads.tagged())

        assert page_ids(test_db, 2) == page_ids(test_db, "2")
        assert len(test_db.page_view(2).entries) == 2
        assert len(test_db.page_view("stuff", 2).entries) == 2

    def test_oversized_references(self, test_db, payloads):
        """Numbers beyond the store's integer range give empty views."""
        test_db.create_entry(payloads.minimal())

        assert test_db.entry_view("99999999999999999999").to_dict()["not_found"] is True
        assert test_db.page_view("99999999999999999999").to_dict()["not_found"] is True

    def test_page_context_dict(self, test_db, payloads):
        test_db.create_entry(payloads.minimal())

        result = test_db.page_view().to_dict()

        assert result["site_title"] == "Antiblog MOCK"
        assert result["author_name"] == "Anonymous"
        assert result["author_href"] == "http://geekyfox.net"
        assert result["root_url"] == "http://example.com"
        assert result["has_powered_by"] is True
        assert result["navi"] is None
        assert len(result["entries"]) == 1


class TestMutations:
    """Writes, rotation and the feed."""

    def test_update_restores_missing_entry(self, test_db, payloads):
        """Updating an unknown id recreates it."""
        test_db.update_entry(payloads.minimal(id=111222))

        assert page_ids(test_db) == [111222]

    def test_update_changes_content(self, test_db, payloads):
        entry_id = test_db.create_entry(payloads.minimal())

        test_db.update_entry(payloads.titled(id=entry_id, body="Changed"))

        (entry,) = test_db.entry_view(entry_id).entries
        assert entry.title == "Some title"
        assert entry.content == "Changed"

    def test_update_to_redirect(self, test_db, payloads):
        entry_id = test_db.create_entry(payloads.tagged())

        test_db.update_entry(payloads.redirect(id=entry_id))

        assert test_db.page_view("stuff").is_empty
        assert test_db.entry_view(entry_id).redirect_url == "http://example.com"

    def test_api_index(self, test_db, payloads):
        a = test_db.create_entry(payloads.minimal())
        b = test_db.create_entry(payloads.titled())

        index = test_db.api_index()

        assert index == sorted(
            [{"id": a, "signature": "sig1"}, {"id": b, "signature": "sig2"}],
            key=lambda item: item["id"],
        )

    def test_rotate(self, test_db, payloads):
        for _ in range(4):
            test_db.create_entry(payloads.minimal())
        ids_a = page_ids(test_db)

        promoted = test_db.rotate()

        ids_b = page_ids(test_db)
        assert promoted == ids_a[-1]
        assert ids_b == [ids_a[-1]] + ids_a[:-1]

    def test_rotate_skips_invisible(self, test_db, payloads):
        for _ in range(3):
            test_db.create_entry(payloads.minimal())
        for _ in range(2):
            test_db.create_entry(payloads.redirect())
        ids_a = page_ids(test_db)

        for _ in range(9):
            test_db.rotate()

        assert page_ids(test_db) == ids_a
        assert len(test_db.rss_view().entries) == 3

    def test_rotate_empty(self, test_db):
        assert test_db.rotate() is None

    def test_rss_view(self, test_db, payloads):
        entry_id = test_db.create_entry(payloads.teased(symlink="teased"))
        test_db.rotate()

        context = test_db.rss_view()

        (entry,) = context.entries
        assert entry.id == entry_id
        assert entry.permalink == "/entry/teased"
        feed = context.to_dict()["entries"][0]
        assert feed["summary"] == "Some summary"
        assert feed["pub_date"].endswith("GMT")
