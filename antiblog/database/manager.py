#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the Antiblog publishing engine.

Provides the AntiblogDB class, the single entry point used by the web
front end and the command line. Handles:
    - Initialization of the database engine and sessionmaker
    - Schema creation from the ORM models
    - Transaction scoping with automatic rollback
    - Per-session entity managers exposed as properties
    - Top-level operations, each in its own transaction

Core Operations:
    Views:
        - entry_view: Single entry by alias, id or ``random``
        - meta_view: Single entry resolved through meta aliases
        - page_view: Paginated, optionally tag-filtered listing
        - rss_view: Recency feed
        - api_index: Id and signature of every entry

    Mutations:
        - create_entry: Create an entry at a random rank
        - update_entry: Update (or restore) an entry
        - rotate: Promote the last entry until a visible one is first

Notes
==============
- Store failures (sqlalchemy.exc.SQLAlchemyError) propagate unchanged
  after rollback; nothing is retried
- An in-memory SQLite database is shared across sessions through a single
  connection
- Schema migrations are not managed here
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import random
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event, inspect
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# --- Local imports ---
from antiblog.core.exceptions import DatabaseError
from antiblog.core.logging_manager import AntiblogLogger, safe_logger
from antiblog.core.profile import Profile
from antiblog.dataclasses.contexts import (
    META_TAG,
    EntryContext,
    PageContext,
    RssContext,
)
from antiblog.dataclasses.page_ref import PageRef
from .models import Base
from .managers import (
    EntryManager,
    PageManager,
    RankManager,
    RssManager,
    SeriesManager,
    SymlinkManager,
    TagManager,
    ViewManager,
)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: object) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ----- Main Database Manager -----
class AntiblogDB:
    """
    Main database manager for an Antiblog site.

    Attributes:
        - profile (Profile): Site configuration, including the database URL
        - engine (Engine): SQLAlchemy engine instance
        - SessionLocal (sessionmaker): SQLAlchemy session factory
        - logger (AntiblogLogger | None): Structured logger

    Usage:
        db = AntiblogDB(Profile.load("blog"), log_dir="~/.antiblog/logs")
        db.initialize_schema()
        entry_id = db.create_entry({"body": "Hello"})
        context = db.entry_view(str(entry_id))
    """

    # ---- Initialization ----
    def __init__(
        self,
        profile: Profile,
        log_dir: Optional[Union[str, Path]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize database engine and session factory.

        Args:
            profile: Site configuration
            log_dir: Directory for log files (optional)
            rng: Random source for ids, ranks and random picks (optional)
        """
        self.profile = profile
        self.rng = rng or random.Random()

        # --- Logging ---
        if log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve()
            self.logger: Optional[AntiblogLogger] = AntiblogLogger(
                self.log_dir, component_name="database"
            )
        else:
            self.log_dir = None
            self.logger = None

        # Managers exist only inside session_scope
        self._managers: Dict[str, Any] = {}

        self._setup_engine()

    @property
    def log(self) -> AntiblogLogger:
        return safe_logger(self.logger)

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        url = make_url(self.profile.database)
        self.log.log_operation("database_init_start", {"database": repr(url)})

        options: Dict[str, Any] = {"echo": False}
        is_sqlite = url.get_backend_name() == "sqlite"
        if is_sqlite:
            options["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                options["poolclass"] = StaticPool
            else:
                Path(url.database).expanduser().parent.mkdir(
                    parents=True, exist_ok=True
                )

        self.engine: Engine = create_engine(url, **options)
        if is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal: sessionmaker = sessionmaker(
            bind=self.engine,
            autoflush=True,
            expire_on_commit=False,
        )
        self.log.log_operation("database_init_complete", {"success": True})

    def initialize_schema(self) -> List[str]:
        """
        Create all tables that do not exist yet.

        Returns:
            Names of the tables that were created
        """
        existing = set(inspect(self.engine).get_table_names())
        Base.metadata.create_all(bind=self.engine)
        created = [name for name in Base.metadata.tables if name not in existing]
        self.log.log_operation("schema_initialized", {"tables_created": created})
        return created

    def dispose(self) -> None:
        """Release pooled connections and close the log handlers."""
        self.engine.dispose()
        if self.logger:
            self.logger.close()

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        Entity managers bound to the session are available as properties
        (``db.entries``, ``db.views``, ...) for the lifetime of the scope.

        Usage:
            with db.session_scope():
                db.entries.update({"id": 1234567, "body": "Hi"})
                db.ranks.rotate()
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        self._open_managers(session)
        self.log.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            self.log.log_debug("session_commit", {"session_id": session_id})
        except Exception as e:
            session.rollback()
            self.log.log_error(
                e, {"operation": "session_rollback", "session_id": session_id}
            )
            raise
        finally:
            self._managers = {}
            session.close()
            self.log.log_debug("session_close", {"session_id": session_id})

    def _open_managers(self, session: Session) -> None:
        logger = self.logger
        symlinks = SymlinkManager(session, logger)
        rss = RssManager(session, logger)
        self._managers = {
            "symlinks": symlinks,
            "tags": TagManager(session, logger),
            "series": SeriesManager(session, logger, symlinks=symlinks),
            "rss": rss,
            "ranks": RankManager(session, logger, rss=rss, quiet=self.profile.mock),
            "entries": EntryManager(session, logger, rng=self.rng),
            "pages": PageManager(session, logger),
            "views": ViewManager(session, logger, rng=self.rng),
        }

    def _manager(self, name: str) -> Any:
        try:
            return self._managers[name]
        except KeyError:
            raise DatabaseError(
                f"Manager '{name}' requires active session. "
                f"Use within session_scope: with db.session_scope(): db.{name}..."
            )

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    @property
    def entries(self) -> EntryManager:
        """
        Access EntryManager for entry writes.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._manager("entries")

    @property
    def ranks(self) -> RankManager:
        """
        Access RankManager for rank allocation and rotation.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._manager("ranks")

    @property
    def symlinks(self) -> SymlinkManager:
        return self._manager("symlinks")

    @property
    def tags(self) -> TagManager:
        return self._manager("tags")

    @property
    def series(self) -> SeriesManager:
        return self._manager("series")

    @property
    def rss(self) -> RssManager:
        return self._manager("rss")

    @property
    def pages(self) -> PageManager:
        return self._manager("pages")

    @property
    def views(self) -> ViewManager:
        """
        Access ViewManager for assembling entry and page contexts.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._manager("views")

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def entry_view(
        self, ref: Union[str, int], context: Optional[EntryContext] = None
    ) -> EntryContext:
        """
        Resolve a single entry.

        Args:
            ref: Alias, numeric id or ``random``
            context: Prepared context (e.g. meta-scoped); a normal one when
                omitted

        Returns:
            Context holding at most one entry, or a redirect
        """
        context = context or EntryContext(self.profile)
        with self.session_scope():
            self.views.retrieve_entry(str(ref), context)
        return context

    def meta_view(self, ref: Union[str, int]) -> EntryContext:
        """Resolve a single entry through meta aliases."""
        context = EntryContext(self.profile)
        context.set_meta()
        return self.entry_view(ref, context)

    def page_view(
        self, a: Union[str, int, None] = None, b: Union[str, int, None] = None
    ) -> PageContext:
        """
        Resolve one page of a listing.

        Raises:
            InvalidReferenceError: If the page ordinal cannot be parsed
        """
        ref = PageRef.make(
            None if a is None else str(a), None if b is None else str(b)
        )
        context = PageContext(self.profile)
        if ref.tag == META_TAG:
            context.set_meta()
        with self.session_scope():
            self.views.retrieve_page(ref, context)
        return context

    def rss_view(self) -> RssContext:
        context = RssContext(self.profile)
        with self.session_scope():
            self.rss.feed(context)
            self.symlinks.inject(context)
        return context

    def api_index(self) -> List[Dict[str, Any]]:
        with self.session_scope():
            return self.entries.signatures()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_entry(self, payload: Dict[str, Any]) -> int:
        with self.session_scope():
            return self.entries.create(payload)

    def update_entry(self, payload: Dict[str, Any]) -> int:
        with self.session_scope():
            return self.entries.update(payload)

    def rotate(self) -> Optional[int]:
        """
        Rotate the rank order once (see RankManager.rotate).

        Returns:
            Id of the promoted visible entry, or None when nothing is visible
        """
        with self.session_scope():
            return self.ranks.rotate()
