"""
Tests for DuplicateDetector.

The catalog side of the check is played by a fake repository that
evaluates predicates in memory against its stored books.
"""

import pytest
from datetime import date
from typing import List, Optional
from uuid import uuid4

from book_catalog.domain.entities import Author, Book, Genre, Publisher
from book_catalog.domain.predicates import BookPredicate
from book_catalog.domain.services import DuplicateDetector


class FakeBookRepository:
    """Fake book repository that evaluates predicates in memory."""

    def __init__(self, initial_books: Optional[List[Book]] = None):
        self._books: List[Book] = list(initial_books or [])
        self.exists_calls: List[BookPredicate] = []

    def exists_matching(self, predicate: BookPredicate) -> bool:
        self.exists_calls.append(predicate)
        return any(predicate.matches(book) for book in self._books)


AUTHOR = Author(name="Frank Herbert", id=uuid4())
PUBLISHER = Publisher(name="Chilton", id=uuid4())
SCIFI = Genre(name="Science Fiction", id=uuid4())


def _book(
    title: str = "Dune",
    release_date: date = date(1965, 8, 1),
    author: Author = AUTHOR,
    publisher: Publisher = PUBLISHER,
    genre: Genre = SCIFI,
) -> Book:
    return Book.create_new(
        title=title,
        pages=412,
        release_date=release_date,
        author=author,
        genre=genre,
        publisher=publisher,
    )


class TestAgainstCatalog:
    """Books already persisted are dropped."""

    def test_stored_book_is_dropped(self):
        detector = DuplicateDetector(FakeBookRepository([_book()]))

        assert detector.deduplicate([_book()]) == []

    def test_genre_difference_still_duplicate(self):
        detector = DuplicateDetector(FakeBookRepository([_book()]))
        other_genre = Genre(name="Classic", id=uuid4())

        assert detector.deduplicate([_book(genre=other_genre)]) == []

    def test_new_book_is_kept(self):
        detector = DuplicateDetector(FakeBookRepository([_book()]))
        messiah = _book(title="Dune Messiah", release_date=date(1969, 1, 1))

        assert detector.deduplicate([messiah]) == [messiah]

    def test_catalog_queried_once_per_book(self):
        repo = FakeBookRepository()
        detector = DuplicateDetector(repo)

        detector.deduplicate([_book(title="A"), _book(title="B")])

        assert len(repo.exists_calls) == 2


class TestWithinBatch:
    """Repeated keys inside one batch keep only the first occurrence."""

    def test_first_occurrence_wins(self):
        detector = DuplicateDetector(FakeBookRepository())
        first = _book()
        second = _book(genre=Genre(name="Classic", id=uuid4()))

        result = detector.deduplicate([first, second])

        assert result == [first]
        assert result[0].genre is SCIFI

    def test_order_is_preserved(self):
        detector = DuplicateDetector(FakeBookRepository())
        books = [_book(title="C"), _book(title="A"), _book(title="C"), _book(title="B")]

        result = detector.deduplicate(books)

        assert [b.title for b in result] == ["C", "A", "B"]
        assert result[0] is books[0]

    @pytest.mark.parametrize(
        "other",
        [
            {"title": "dune"},
            {"release_date": date(1965, 8, 2)},
            {"author": Author(name="Frank Herbert", id=uuid4())},
            {"publisher": Publisher(name="Ace", id=uuid4())},
        ],
    )
    def test_any_key_difference_keeps_both(self, other):
        detector = DuplicateDetector(FakeBookRepository())

        assert len(detector.deduplicate([_book(), _book(**other)])) == 2

    def test_empty_batch(self):
        assert DuplicateDetector(FakeBookRepository()).deduplicate([]) == []
