"""
Value objects for the domain layer.

Value objects are immutable objects that represent descriptive aspects
of the domain with no conceptual identity.
"""

from dataclasses import dataclass, field, fields
from datetime import date
from pathlib import Path
from typing import List, Optional

from .entities import Book


@dataclass(frozen=True)
class RawRecord:
    """
    A row exactly as parsed from an input file, before validation.

    Every field is loosely typed text and may be missing altogether when
    the file does not carry the corresponding column.
    """

    title: Optional[str] = None
    pages: Optional[str] = None
    genre: Optional[str] = None
    release_date: Optional[str] = None
    author: Optional[str] = None
    publisher: Optional[str] = None


@dataclass(frozen=True)
class BookFilter:
    """
    Filter used to select books from the catalog.

    All filters are optional. When a filter is None, it means "no restriction".
    Text filters are case-sensitive substring matches and every bound is
    exclusive.
    """

    title: Optional[str] = None
    """Substring of the book title"""

    author: Optional[str] = None
    """Substring of the author name"""

    genre: Optional[str] = None
    """Substring of the genre name"""

    publisher: Optional[str] = None
    """Substring of the publisher name"""

    more_than_pages: Optional[int] = None
    """Exclusive lower bound on the page count"""

    less_than_pages: Optional[int] = None
    """Exclusive upper bound on the page count"""

    published_after: Optional[date] = None
    """Exclusive lower bound on the release date"""

    published_before: Optional[date] = None
    """Exclusive upper bound on the release date"""

    def is_empty(self) -> bool:
        """Check if no filters are set."""
        return all(getattr(self, f.name) in (None, "") for f in fields(self))


@dataclass(frozen=True)
class IngestionSummary:
    """
    Summary of an ingestion operation.

    Every row read from the source ends up in exactly one bucket: rejected
    by validation, skipped as a duplicate, or inserted into the catalog.
    """

    n_read: int
    """Number of records read from the input file"""

    n_invalid: int
    """Number of records rejected by validation"""

    n_duplicates: int
    """Number of valid records skipped as duplicates"""

    n_inserted: int
    """Number of books added to the catalog"""

    source: str
    """The file the records were read from"""

    errors: List[str] = field(default_factory=list)
    """Validation messages, one per rejected row"""

    def __post_init__(self) -> None:
        """Validate summary constraints."""
        for name in ("n_read", "n_invalid", "n_duplicates", "n_inserted"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative, got {getattr(self, name)}")

        # Invariant: read = invalid + duplicates + inserted
        expected_read = self.n_invalid + self.n_duplicates + self.n_inserted
        if self.n_read != expected_read:
            raise ValueError(
                f"Invariant violated: n_read ({self.n_read}) must equal "
                f"n_invalid + n_duplicates + n_inserted ({expected_read})"
            )


@dataclass(frozen=True)
class SearchSummary:
    """Outcome of a search-and-export operation."""

    books: List[Book]
    """Books matching the filter, with their references resolved"""

    output_path: Optional[Path] = None
    """CSV file the matches were written to; None when nothing matched"""

    @property
    def count(self) -> int:
        return len(self.books)
