"""
SQLite database shared by the catalog repositories.

All repositories of one database use a single connection, so reference
entities and books staged during an ingestion become durable together
on commit, or not at all.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from book_catalog.domain.errors import ConstraintViolationError, StoreError

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS authors (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS genres (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS publishers (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS books (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    pages INTEGER NOT NULL CHECK (pages > 0),
    release_date TEXT NOT NULL,
    author_id TEXT NOT NULL REFERENCES authors(id),
    genre_id TEXT NOT NULL REFERENCES genres(id),
    publisher_id TEXT NOT NULL REFERENCES publishers(id),
    UNIQUE (title, author_id, publisher_id, release_date)
);

CREATE INDEX IF NOT EXISTS idx_books_author ON books(author_id);
CREATE INDEX IF NOT EXISTS idx_books_genre ON books(genre_id);
CREATE INDEX IF NOT EXISTS idx_books_publisher ON books(publisher_id);
"""


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise sqlite3 errors as catalog store errors."""
    try:
        yield
    except sqlite3.IntegrityError as e:
        raise ConstraintViolationError(f"Catalog constraint violated while {action}: {e}") from e
    except sqlite3.Error as e:
        raise StoreError(f"Database error while {action}: {e}") from e
    except OverflowError as e:
        raise StoreError(f"Value out of range while {action}: {e}") from e


class SqliteCatalogDatabase:
    """
    Owns the SQLite connection and the unit of work of the catalog.

    Writes issued through the repositories stay pending until commit().
    Pass ":memory:" as the path for a throwaway in-memory database.
    """

    def __init__(self, db_path: Union[Path, str]) -> None:
        """
        Open the database and create the schema if it doesn't exist.
        """
        self._db_path = str(db_path)
        if self._db_path != MEMORY_DATABASE:
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        with translate_errors("opening the catalog database"):
            self._conn = sqlite3.connect(self._db_path)
            self._conn.row_factory = sqlite3.Row # Needed to access by name column and not a number
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._init_schema()

        logger.debug(f"Opened catalog database at {self._db_path}")

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def _init_schema(self) -> None:
        """Create the catalog tables if they don't exist."""
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def commit(self) -> None:
        """
        Persist every pending write.

        On failure the pending writes are rolled back, so the catalog is
        left as it was before the unit of work started.
        """
        try:
            with translate_errors("committing changes"):
                self._conn.commit()
        except StoreError:
            self.rollback()
            raise

    def rollback(self) -> None:
        """Discard every pending write."""
        with translate_errors("rolling back changes"):
            self._conn.rollback()

    def close(self) -> None:
        self._conn.close()
