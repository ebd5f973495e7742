"""
Composable predicates over books.

A predicate is a plain conjunction of typed field-level conditions. The
same object can be evaluated in memory against a Book and compiled into
a query by a storage adapter, so the catalog filter and the duplicate
check share one definition of each comparison.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Tuple, Union
from uuid import UUID

from .entities import Book
from .value_objects import BookFilter


class BookField(str, Enum):
    """Book attributes a condition can constrain."""

    TITLE = "title"
    PAGES = "pages"
    RELEASE_DATE = "release_date"
    AUTHOR_ID = "author_id"
    PUBLISHER_ID = "publisher_id"
    AUTHOR_NAME = "author_name"
    GENRE_NAME = "genre_name"
    PUBLISHER_NAME = "publisher_name"


class Operator(str, Enum):
    """Comparison applied between a book attribute and a condition value."""

    EQUALS = "eq"
    CONTAINS = "contains"
    GREATER_THAN = "gt"
    LESS_THAN = "lt"


ConditionValue = Union[str, int, date, UUID, None]

_FIELD_GETTERS: Dict[BookField, Callable[[Book], Any]] = {
    BookField.TITLE: lambda b: b.title,
    BookField.PAGES: lambda b: b.pages,
    BookField.RELEASE_DATE: lambda b: b.release_date,
    BookField.AUTHOR_ID: lambda b: b.author_id,
    BookField.PUBLISHER_ID: lambda b: b.publisher_id,
    BookField.AUTHOR_NAME: lambda b: b.author.name,
    BookField.GENRE_NAME: lambda b: b.genre.name,
    BookField.PUBLISHER_NAME: lambda b: b.publisher.name,
}

_OPERATIONS: Dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQUALS: lambda actual, expected: actual == expected,
    Operator.CONTAINS: lambda actual, expected: expected in actual,
    Operator.GREATER_THAN: lambda actual, expected: actual > expected,
    Operator.LESS_THAN: lambda actual, expected: actual < expected,
}


@dataclass(frozen=True)
class Condition:
    """A single comparison between one book attribute and a value."""

    field: BookField
    operator: Operator
    value: ConditionValue

    def __post_init__(self) -> None:
        """Validate condition data."""
        if self.operator is Operator.CONTAINS and not isinstance(self.value, str):
            raise ValueError(
                f"contains requires a string value, got {type(self.value).__name__}"
            )

    def matches(self, book: Book) -> bool:
        """Evaluate this condition against a book held in memory."""
        actual = _FIELD_GETTERS[self.field](book)
        return _OPERATIONS[self.operator](actual, self.value)


@dataclass(frozen=True)
class BookPredicate:
    """
    Logical AND of conditions.

    A predicate without conditions matches every book. Predicates are
    immutable; and_() returns a new predicate.
    """

    conditions: Tuple[Condition, ...] = ()

    @classmethod
    def always(cls) -> "BookPredicate":
        """The predicate that matches everything."""
        return cls()

    def and_(self, condition: Condition) -> "BookPredicate":
        return BookPredicate(self.conditions + (condition,))

    def matches(self, book: Book) -> bool:
        return all(condition.matches(book) for condition in self.conditions)

    def is_trivial(self) -> bool:
        """Check if the predicate places no constraint at all."""
        return not self.conditions


def build_filter_predicate(book_filter: BookFilter) -> BookPredicate:
    """
    Convert a sparse filter into a conjunction of field-level conditions.

    Only populated fields contribute a condition, so an empty filter yields
    a predicate that matches the whole catalog.

    Args:
        book_filter: Filter with any subset of fields set

    Returns:
        Predicate combining every populated field with AND
    """
    predicate = BookPredicate.always()

    text_filters = (
        (book_filter.title, BookField.TITLE),
        (book_filter.author, BookField.AUTHOR_NAME),
        (book_filter.genre, BookField.GENRE_NAME),
        (book_filter.publisher, BookField.PUBLISHER_NAME),
    )
    for value, book_field in text_filters:
        if value:
            predicate = predicate.and_(Condition(book_field, Operator.CONTAINS, value))

    if book_filter.more_than_pages is not None:
        predicate = predicate.and_(
            Condition(BookField.PAGES, Operator.GREATER_THAN, book_filter.more_than_pages)
        )

    if book_filter.less_than_pages is not None:
        predicate = predicate.and_(
            Condition(BookField.PAGES, Operator.LESS_THAN, book_filter.less_than_pages)
        )

    if book_filter.published_after is not None:
        predicate = predicate.and_(
            Condition(BookField.RELEASE_DATE, Operator.GREATER_THAN, book_filter.published_after)
        )

    if book_filter.published_before is not None:
        predicate = predicate.and_(
            Condition(BookField.RELEASE_DATE, Operator.LESS_THAN, book_filter.published_before)
        )

    return predicate


def natural_key_predicate(book: Book) -> BookPredicate:
    """
    Predicate matching books with the same natural key as the given one.

    The key is (title, author_id, publisher_id, release_date); the genre
    does not take part in it.
    """
    title, author_id, publisher_id, release_date = book.natural_key()
    return BookPredicate((
        Condition(BookField.TITLE, Operator.EQUALS, title),
        Condition(BookField.AUTHOR_ID, Operator.EQUALS, author_id),
        Condition(BookField.PUBLISHER_ID, Operator.EQUALS, publisher_id),
        Condition(BookField.RELEASE_DATE, Operator.EQUALS, release_date),
    ))
