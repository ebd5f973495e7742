"""
Domain entities for the book catalog.

Entities are objects with a unique identity that runs through time and
different representations. A Book points at three reference entities
(Author, Genre, Publisher) instead of embedding their names, so every
reference entity is stored once and shared by all the books naming it.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple
from uuid import UUID, uuid4


@dataclass(eq=False)
class ReferenceEntity:
    """
    A named entity that books refer to by identity.

    The name is unique per kind across the store (case-sensitive exact
    match), which makes it the lookup key used when resolving the names
    read from an input file.
    """

    name: str
    """Display name, unique per kind"""

    id: Optional[UUID] = None
    """Store identity; None until the entity is registered with a repository"""

    def __post_init__(self) -> None:
        """Validate reference entity data."""
        if not self.name or not self.name.strip():
            raise ValueError(f"{type(self).__name__} name cannot be empty")

    def __eq__(self, other: object) -> bool:
        """Registered entities are equal by ID, placeholders only to themselves."""
        if not isinstance(other, ReferenceEntity) or type(other) is not type(self):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id)) if self.id else id(self)

    @property
    def is_registered(self) -> bool:
        """Check if the entity has been assigned a store identity."""
        return self.id is not None


@dataclass(eq=False)
class Author(ReferenceEntity):
    """The author of a book."""


@dataclass(eq=False)
class Genre(ReferenceEntity):
    """A book genre. Not part of the book's natural key."""


@dataclass(eq=False)
class Publisher(ReferenceEntity):
    """The publisher of a book."""


NaturalKey = Tuple[str, Optional[UUID], Optional[UUID], date]

# Page counts are 32-bit signed integers
MAX_PAGES = 2**31 - 1


@dataclass
class Book:
    """
    Represents a book in the catalog.

    The tuple (title, author_id, publisher_id, release_date) is unique
    across the store and is used to detect duplicates. The genre is not
    part of that key.
    """

    id: UUID
    """Unique identifier for this book in our system"""

    title: str
    """Book title"""

    pages: int
    """Number of pages, always positive"""

    release_date: date
    """Calendar date of publication"""

    author: Author
    """Author reference"""

    genre: Genre
    """Genre reference"""

    publisher: Publisher
    """Publisher reference"""

    def __post_init__(self) -> None:
        """Validate book data."""
        if not self.title or not self.title.strip():
            raise ValueError("Book title cannot be empty")

        if not 0 < self.pages <= MAX_PAGES:
            raise ValueError(
                f"pages must be a positive integer up to {MAX_PAGES}, got {self.pages}"
            )

    def __eq__(self, other: object) -> bool:
        """Two books are equal if they have the same ID."""
        if not isinstance(other, Book):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on book ID."""
        return hash(self.id)

    @property
    def author_id(self) -> Optional[UUID]:
        return self.author.id

    @property
    def genre_id(self) -> Optional[UUID]:
        return self.genre.id

    @property
    def publisher_id(self) -> Optional[UUID]:
        return self.publisher.id

    def natural_key(self) -> NaturalKey:
        """The identity used for duplicate detection."""
        return (self.title, self.author_id, self.publisher_id, self.release_date)

    @staticmethod
    def create_new(
        title: str,
        pages: int,
        release_date: date,
        author: Author,
        genre: Genre,
        publisher: Publisher,
    ) -> "Book":
        """
        Factory method to create a new book with auto-generated ID.

        Args:
            title: Book title
            pages: Number of pages
            release_date: Publication date
            author: Author reference (may be an unregistered placeholder)
            genre: Genre reference (may be an unregistered placeholder)
            publisher: Publisher reference (may be an unregistered placeholder)

        Returns:
            A new Book instance with generated UUID
        """
        return Book(
            id=uuid4(),
            title=title,
            pages=pages,
            release_date=release_date,
            author=author,
            genre=genre,
            publisher=publisher,
        )
