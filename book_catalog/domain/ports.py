"""
Port interfaces (protocols) for the domain layer.

Ports define the contracts between the domain and infrastructure layers.
They are implemented by adapters in the infrastructure layer, allowing
the domain to remain independent of technical details.

Following Hexagonal Architecture principles, the domain layer depends only
on these abstract protocols, never on concrete implementations.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Protocol, Tuple, TypeVar, Union

from .entities import Book, ReferenceEntity
from .predicates import BookPredicate
from .value_objects import BookFilter, RawRecord

RefT = TypeVar("RefT", bound=ReferenceEntity)

PathLike = Union[str, Path]


class ReferenceRepository(Protocol[RefT]):
    """
    Port for one kind of reference entity (authors, genres or publishers).

    One repository instance serves exactly one kind. Entities are looked
    up by their name, which is unique per kind.

    Writes are staged: add() and add_many() make the entities visible to
    later reads of the same unit of work, and commit() makes them durable
    together with any staged books.
    """

    def get_all(self) -> List[RefT]:
        """
        Retrieve every entity of this kind.

        Returns:
            All persisted entities, ordered by name
        """
        ...

    def get_by_names(self, names: Iterable[str]) -> Dict[str, RefT]:
        """
        Retrieve the entities whose name is in the given set.

        Args:
            names: Names to look up (case-sensitive exact match)

        Returns:
            Mapping from name to entity, containing only the names found

        Raises:
            StoreError: If a database error occurs
        """
        ...

    def add(self, entity: RefT) -> None:
        """
        Stage a new entity for persistence.

        The repository assigns the entity's id if it has none.

        Raises:
            StoreError: If a database error occurs
        """
        ...

    def add_many(self, entities: List[RefT]) -> None:
        """Stage several new entities for persistence."""
        ...

    def commit(self) -> None:
        """
        Persist every staged change of the unit of work.

        Raises:
            StoreError: If the commit fails; nothing is persisted
        """
        ...

    def rollback(self) -> None:
        """Discard every staged change of the unit of work."""
        ...


class BookRepository(Protocol):
    """
    Port for persisting and querying books.

    Queries return books with their author, genre and publisher resolved.

    Implementations should handle:
    - Unique constraint on (title, author_id, publisher_id, release_date)
    - Translation of BookPredicate conditions into their native query
    - Efficient batch operations for bulk ingestion
    """

    def get_all(self) -> List[Book]:
        """Retrieve every book in the catalog."""
        ...

    def find_matching(self, predicate: BookPredicate) -> List[Book]:
        """
        Retrieve books satisfying a predicate.

        Args:
            predicate: Conjunction of conditions; an empty one matches all

        Returns:
            Matching books with references resolved, ordered by title

        Raises:
            StoreError: If a database error occurs
        """
        ...

    def exists_matching(self, predicate: BookPredicate) -> bool:
        """
        Check whether at least one persisted book satisfies a predicate.

        Raises:
            StoreError: If a database error occurs
        """
        ...

    def add(self, book: Book) -> None:
        """Stage a book for persistence. Its references must be registered."""
        ...

    def add_many(self, books: List[Book]) -> None:
        """
        Stage several books for persistence.

        Raises:
            ConstraintViolationError: If a book violates the natural-key constraint
            StoreError: If a database error occurs
        """
        ...

    def count(self) -> int:
        """Get the total number of persisted books."""
        ...

    def commit(self) -> None:
        """
        Persist every staged change of the unit of work.

        Raises:
            ConstraintViolationError: If a unique constraint is violated
            StoreError: If the commit fails; nothing is persisted
        """
        ...

    def rollback(self) -> None:
        """Discard every staged change of the unit of work."""
        ...


class BookFileProvider(Protocol):
    """
    Port for reading raw records from, and writing books to, delimited files.

    The expected columns are Title, Pages, Genre, ReleaseDate, Author and
    Publisher. Unknown columns are ignored and missing ones read as None.
    """

    def read_records(self, file_path: PathLike) -> List[Tuple[int, RawRecord]]:
        """
        Read every data row of a file.

        Args:
            file_path: Path of the file to read

        Returns:
            Pairs of (row number, record); the header is row 1

        Raises:
            InputNotFoundError: If the file does not exist
            InputParseError: If the file contents cannot be parsed
        """
        ...

    def write_books(self, books: List[Book], file_path: PathLike) -> None:
        """
        Write books to a file, one row per book.

        Release dates are written as YYYY-MM-DD and references by name.

        Raises:
            OutputWriteError: If the file cannot be written
        """
        ...


class FilterProvider(Protocol):
    """Port for loading a filter description."""

    def read_filter(self, file_path: PathLike) -> BookFilter:
        """
        Load a filter from a file.

        Raises:
            InputNotFoundError: If the file does not exist
            InputParseError: If the file is not a valid filter description
        """
        ...
