"""
Tests for book predicates and the filter predicate builder.

Predicates are evaluated in memory here; the SQLite translation of the
same conditions is covered by the repository tests.
"""

import pytest
from datetime import date
from uuid import uuid4

from book_catalog.domain.entities import Author, Book, Genre, Publisher
from book_catalog.domain.predicates import (
    BookField,
    BookPredicate,
    Condition,
    Operator,
    build_filter_predicate,
    natural_key_predicate,
)
from book_catalog.domain.value_objects import BookFilter


def _make_book(
    title: str = "The Hobbit",
    pages: int = 310,
    release_date: date = date(1937, 9, 21),
    author: str = "J.R.R. Tolkien",
    genre: str = "Fantasy",
    publisher: str = "Allen & Unwin",
) -> Book:
    return Book.create_new(
        title=title,
        pages=pages,
        release_date=release_date,
        author=Author(name=author, id=uuid4()),
        genre=Genre(name=genre, id=uuid4()),
        publisher=Publisher(name=publisher, id=uuid4()),
    )


@pytest.fixture
def hobbit() -> Book:
    return _make_book()


class TestCondition:
    """Tests for single field-level conditions."""

    def test_contains_is_case_sensitive(self, hobbit):
        assert Condition(BookField.TITLE, Operator.CONTAINS, "Hobbit").matches(hobbit)
        assert not Condition(BookField.TITLE, Operator.CONTAINS, "hobbit").matches(hobbit)

    def test_contains_on_reference_names(self, hobbit):
        assert Condition(BookField.AUTHOR_NAME, Operator.CONTAINS, "Tolkien").matches(hobbit)
        assert Condition(BookField.GENRE_NAME, Operator.CONTAINS, "anta").matches(hobbit)
        assert Condition(BookField.PUBLISHER_NAME, Operator.CONTAINS, "Unwin").matches(hobbit)

    def test_bounds_are_exclusive(self, hobbit):
        assert not Condition(BookField.PAGES, Operator.GREATER_THAN, 310).matches(hobbit)
        assert not Condition(BookField.PAGES, Operator.LESS_THAN, 310).matches(hobbit)
        assert Condition(BookField.PAGES, Operator.GREATER_THAN, 309).matches(hobbit)
        assert Condition(BookField.PAGES, Operator.LESS_THAN, 311).matches(hobbit)

    def test_contains_requires_string(self):
        with pytest.raises(ValueError, match="contains requires a string"):
            Condition(BookField.PAGES, Operator.CONTAINS, 3)


class TestBookPredicate:
    """Tests for AND-composition of conditions."""

    def test_empty_predicate_matches_everything(self, hobbit):
        predicate = BookPredicate.always()

        assert predicate.is_trivial()
        assert predicate.matches(hobbit)

    def test_and_requires_every_condition(self, hobbit):
        predicate = (
            BookPredicate.always()
            .and_(Condition(BookField.TITLE, Operator.CONTAINS, "Hobbit"))
            .and_(Condition(BookField.PAGES, Operator.GREATER_THAN, 500))
        )

        assert not predicate.matches(hobbit)

    def test_and_returns_new_predicate(self):
        base = BookPredicate.always()
        extended = base.and_(Condition(BookField.TITLE, Operator.CONTAINS, "x"))

        assert base.is_trivial()
        assert len(extended.conditions) == 1


class TestBuildFilterPredicate:
    """Tests for build_filter_predicate()."""

    def test_empty_filter_matches_everything(self, hobbit):
        predicate = build_filter_predicate(BookFilter())

        assert predicate.is_trivial()
        assert predicate.matches(hobbit)

    def test_empty_strings_add_no_condition(self):
        predicate = build_filter_predicate(BookFilter(title="", genre=""))

        assert predicate.is_trivial()

    def test_one_condition_per_populated_field(self):
        book_filter = BookFilter(
            title="Hob",
            author="Tolkien",
            genre="Fantasy",
            publisher="Unwin",
            more_than_pages=100,
            less_than_pages=400,
            published_after=date(1930, 1, 1),
            published_before=date(1940, 1, 1),
        )

        predicate = build_filter_predicate(book_filter)

        assert predicate.conditions == (
            Condition(BookField.TITLE, Operator.CONTAINS, "Hob"),
            Condition(BookField.AUTHOR_NAME, Operator.CONTAINS, "Tolkien"),
            Condition(BookField.GENRE_NAME, Operator.CONTAINS, "Fantasy"),
            Condition(BookField.PUBLISHER_NAME, Operator.CONTAINS, "Unwin"),
            Condition(BookField.PAGES, Operator.GREATER_THAN, 100),
            Condition(BookField.PAGES, Operator.LESS_THAN, 400),
            Condition(BookField.RELEASE_DATE, Operator.GREATER_THAN, date(1930, 1, 1)),
            Condition(BookField.RELEASE_DATE, Operator.LESS_THAN, date(1940, 1, 1)),
        )

    def test_more_than_pages_only(self):
        """Only the page bound constrains the result."""
        short = _make_book(title="Short", pages=100)
        long = _make_book(title="Long", pages=101, genre="Other", author="Someone")

        predicate = build_filter_predicate(BookFilter(more_than_pages=100))

        assert [b.title for b in (short, long) if predicate.matches(b)] == ["Long"]

    def test_zero_bound_is_still_a_constraint(self, hobbit):
        predicate = build_filter_predicate(BookFilter(less_than_pages=0))

        assert not predicate.matches(hobbit)

    def test_date_bounds_are_exclusive(self, hobbit):
        on_release = hobbit.release_date

        assert not build_filter_predicate(BookFilter(published_after=on_release)).matches(hobbit)
        assert not build_filter_predicate(BookFilter(published_before=on_release)).matches(hobbit)


class TestNaturalKeyPredicate:
    """Tests for natural_key_predicate()."""

    def test_conditions_follow_book_natural_key(self, hobbit):
        predicate = natural_key_predicate(hobbit)

        assert tuple(c.value for c in predicate.conditions) == hobbit.natural_key()
        assert all(c.operator is Operator.EQUALS for c in predicate.conditions)

    def test_matches_same_key_with_different_genre(self, hobbit):
        twin = Book.create_new(
            title=hobbit.title,
            pages=999,
            release_date=hobbit.release_date,
            author=hobbit.author,
            genre=Genre(name="Children", id=uuid4()),
            publisher=hobbit.publisher,
        )

        assert natural_key_predicate(hobbit).matches(twin)

    @pytest.mark.parametrize(
        "change",
        [
            {"title": "The Hobbit "},
            {"release_date": date(1937, 9, 22)},
        ],
    )
    def test_any_key_field_difference_breaks_match(self, hobbit, change):
        fields = dict(
            title=hobbit.title,
            pages=hobbit.pages,
            release_date=hobbit.release_date,
            author=hobbit.author,
            genre=hobbit.genre,
            publisher=hobbit.publisher,
        )
        fields.update(change)

        assert not natural_key_predicate(hobbit).matches(Book.create_new(**fields))

    def test_different_author_breaks_match(self, hobbit):
        other = Book.create_new(
            title=hobbit.title,
            pages=hobbit.pages,
            release_date=hobbit.release_date,
            author=Author(name=hobbit.author.name, id=uuid4()),
            genre=hobbit.genre,
            publisher=hobbit.publisher,
        )

        assert not natural_key_predicate(hobbit).matches(other)
