"""
SQLite engine and session handling for the movie catalog.

One DatabaseManager owns the engine for a catalog database file (or an
in-memory database in tests). API requests and scripts take sessions from
it through `session_scope`, which commits on success and rolls back on error.
"""

import logging
import os
from contextlib import contextmanager
from typing import Generator, Optional
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from catalog.database.models import Base

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "data/catalog.db"
IN_MEMORY = ":memory:"


def get_database_url(db_path: str = DEFAULT_DB_PATH) -> str:
    """
    Turn a catalog database location into a SQLAlchemy URL.

    `:memory:` gives a private in-memory database. A file path gets its
    parent directory created so a fresh checkout can start the API directly.
    """
    if db_path == IN_MEMORY:
        return "sqlite://"

    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    return f"sqlite:///{os.path.abspath(db_path)}"


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Turn on foreign keys so deleting a movie cascades to its genre rows."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """Engine plus session factory for one catalog database."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH, echo: bool = False):
        self.db_path = db_path
        self.database_url = get_database_url(db_path)

        # A single shared connection keeps an in-memory catalog alive and
        # lets the request threads of the API use the same SQLite handle
        self.engine = create_engine(
            self.database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool
        )
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)

    def create_tables(self):
        """Create the users, movies and movie_genres tables if missing."""
        Base.metadata.create_all(bind=self.engine)

    def reset_database(self):
        """Drop every catalog table, then create them empty."""
        Base.metadata.drop_all(bind=self.engine)
        self.create_tables()

    def new_session(self) -> Session:
        """A session the caller commits and closes itself."""
        return self.SessionLocal()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        One unit of work: commit when the block exits cleanly, roll back
        and re-raise otherwise.

        Usage:
            with db_manager.session_scope() as session:
                crud.create_movie(session, created_by=admin_id, **fields)
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Dispose of the engine and its connection."""
        self.engine.dispose()


_db_manager: Optional[DatabaseManager] = None


def get_db_manager(db_path: str = DEFAULT_DB_PATH, echo: bool = False) -> DatabaseManager:
    """
    The process-wide manager used by the API and scripts.

    Created on first use for `db_path`; later calls return the same manager.
    """
    global _db_manager
    if _db_manager is None:
        logger.info("Opening catalog database %s", db_path)
        _db_manager = DatabaseManager(db_path=db_path, echo=echo)
    return _db_manager
