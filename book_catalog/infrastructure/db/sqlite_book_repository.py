"""
SQLite implementation of the BookRepository port.

This adapter persists Book entities to the books table, compiles
BookPredicate conditions into a WHERE clause, and loads each book with
its author, genre and publisher joined in.
"""

import sqlite3
from datetime import date
from typing import Any, Dict, List, Tuple
from uuid import UUID

from book_catalog.domain.entities import Author, Book, Genre, Publisher, ReferenceEntity
from book_catalog.domain.predicates import BookField, BookPredicate, Condition, Operator

from .sqlite_catalog_database import SqliteCatalogDatabase, translate_errors

_SELECT_BOOKS = """
    SELECT b.id, b.title, b.pages, b.release_date,
           a.id AS author_id, a.name AS author_name,
           g.id AS genre_id, g.name AS genre_name,
           p.id AS publisher_id, p.name AS publisher_name
    FROM books b
    JOIN authors a ON a.id = b.author_id
    JOIN genres g ON g.id = b.genre_id
    JOIN publishers p ON p.id = b.publisher_id
"""

SQLITE_MAX_INTEGER = 2**63 - 1
SQLITE_MIN_INTEGER = -(2**63)

_COLUMNS: Dict[BookField, str] = {
    BookField.TITLE: "b.title",
    BookField.PAGES: "b.pages",
    BookField.RELEASE_DATE: "b.release_date",
    BookField.AUTHOR_ID: "b.author_id",
    BookField.PUBLISHER_ID: "b.publisher_id",
    BookField.AUTHOR_NAME: "a.name",
    BookField.GENRE_NAME: "g.name",
    BookField.PUBLISHER_NAME: "p.name",
}

# instr() is case-sensitive, unlike LIKE
_OPERATORS: Dict[Operator, str] = {
    Operator.EQUALS: "{column} = ?",
    Operator.CONTAINS: "instr({column}, ?) > 0",
    Operator.GREATER_THAN: "{column} > ?",
    Operator.LESS_THAN: "{column} < ?",
}


def _to_sql_value(value: Any) -> Any:
    """Convert a condition value to the representation stored in the table."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, int):
        # Stored page counts are far inside the INTEGER range, so clamping
        # keeps every comparison's result
        return max(SQLITE_MIN_INTEGER, min(value, SQLITE_MAX_INTEGER))
    return value


def compile_predicate(predicate: BookPredicate) -> Tuple[str, List[Any]]:
    """
    Translate a predicate into a WHERE clause and its parameters.

    Returns:
        ("", []) for a predicate without conditions, otherwise
        (" WHERE ... AND ...", params)
    """
    if predicate.is_trivial():
        return "", []

    clauses: List[str] = []
    params: List[Any] = []
    for condition in predicate.conditions:
        clause, value = _compile_condition(condition)
        clauses.append(clause)
        if value is not None:
            params.append(value)

    return " WHERE " + " AND ".join(clauses), params


def _compile_condition(condition: Condition) -> Tuple[str, Any]:
    column = _COLUMNS[condition.field]
    # An unregistered reference has no id, so nothing stored can match it
    if condition.value is None:
        return f"{column} IS NULL", None
    return _OPERATORS[condition.operator].format(column=column), _to_sql_value(condition.value)


class SqliteBookRepository:
    """
    Books stored in SQLite, with the natural key
    (title, author_id, publisher_id, release_date) enforced by a UNIQUE
    constraint.
    """

    def __init__(self, database: SqliteCatalogDatabase) -> None:
        self._database = database

    def _book_to_row(self, book: Book) -> dict:
        """Convert a Book entity to a database row dict."""
        unregistered = [
            type(ref).__name__
            for ref in (book.author, book.genre, book.publisher)
            if not ref.is_registered
        ]
        if unregistered:
            raise ValueError(
                f"Book '{book.title}' references unregistered entities: {', '.join(unregistered)}"
            )

        return {
            "id": str(book.id),
            "title": book.title,
            "pages": book.pages,
            "release_date": book.release_date.isoformat(),
            "author_id": str(book.author_id),
            "genre_id": str(book.genre_id),
            "publisher_id": str(book.publisher_id),
        }

    def _rows_to_books(self, rows: List[sqlite3.Row]) -> List[Book]:
        """
        Convert joined rows to Book entities.

        Books of one query that point at the same reference share a
        single entity instance.
        """
        seen: Dict[Tuple[str, str], ReferenceEntity] = {}

        def reference(entity_type: type, id_column: str, name_column: str, row: sqlite3.Row) -> Any:
            key = (entity_type.__name__, row[id_column])
            if key not in seen:
                seen[key] = entity_type(name=row[name_column], id=UUID(row[id_column]))
            return seen[key]

        return [
            Book(
                id=UUID(row["id"]),
                title=row["title"],
                pages=row["pages"],
                release_date=date.fromisoformat(row["release_date"]),
                author=reference(Author, "author_id", "author_name", row),
                genre=reference(Genre, "genre_id", "genre_name", row),
                publisher=reference(Publisher, "publisher_id", "publisher_name", row),
            )
            for row in rows
        ]

    def count(self) -> int:
        """Get the total number of books in the catalog."""
        with translate_errors("counting books"):
            result = self._database.connection.execute(
                "SELECT COUNT(*) AS cnt FROM books"
            ).fetchone()
        return result["cnt"]

    def get_all(self) -> List[Book]:
        """Retrieve all books from the catalog."""
        return self.find_matching(BookPredicate.always())

    def find_matching(self, predicate: BookPredicate) -> List[Book]:
        """Retrieve the books satisfying a predicate, ordered by title."""
        where, params = compile_predicate(predicate)
        with translate_errors("querying books"):
            rows = self._database.connection.execute(
                _SELECT_BOOKS + where + " ORDER BY b.title, b.release_date",
                params,
            ).fetchall()
        return self._rows_to_books(rows)

    def exists_matching(self, predicate: BookPredicate) -> bool:
        where, params = compile_predicate(predicate)
        with translate_errors("checking for existing books"):
            row = self._database.connection.execute(
                f"SELECT EXISTS({_SELECT_BOOKS}{where}) AS found",
                params,
            ).fetchone()
        return bool(row["found"])

    def add(self, book: Book) -> None:
        self.add_many([book])

    def add_many(self, books: List[Book]) -> None:
        """Stage multiple books in the current transaction."""
        if not books:
            return

        rows = [self._book_to_row(book) for book in books]

        with translate_errors("adding books"):
            self._database.connection.executemany("""
                INSERT INTO books
                (id, title, pages, release_date, author_id, genre_id, publisher_id)
                VALUES
                (:id, :title, :pages, :release_date, :author_id, :genre_id, :publisher_id)
            """, rows)

    def commit(self) -> None:
        self._database.commit()

    def rollback(self) -> None:
        self._database.rollback()
