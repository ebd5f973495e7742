"""
Tests for domain value objects.
"""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date

from book_catalog.domain.value_objects import BookFilter, IngestionSummary, RawRecord


class TestRawRecord:
    """Tests for RawRecord."""

    def test_missing_fields_default_to_none(self):
        record = RawRecord(title="Dune")

        assert record.title == "Dune"
        assert record.pages is None
        assert record.publisher is None

    def test_is_immutable(self):
        record = RawRecord(title="Dune")

        with pytest.raises(FrozenInstanceError):
            record.title = "Other"


class TestBookFilter:
    """Tests for BookFilter."""

    def test_default_filter_is_empty(self):
        """A filter with no fields set places no restriction."""
        assert BookFilter().is_empty()

    def test_empty_strings_count_as_unset(self):
        assert BookFilter(title="", author="").is_empty()

    @pytest.mark.parametrize(
        "book_filter",
        [
            BookFilter(title="Dune"),
            BookFilter(more_than_pages=0),
            BookFilter(published_before=date(2000, 1, 1)),
        ],
    )
    def test_any_populated_field_makes_filter_non_empty(self, book_filter):
        assert not book_filter.is_empty()


class TestIngestionSummary:
    """Tests for IngestionSummary."""

    def test_valid_summary(self):
        summary = IngestionSummary(
            n_read=5, n_invalid=1, n_duplicates=2, n_inserted=2, source="books.csv"
        )

        assert summary.n_read == 5
        assert summary.errors == []

    def test_invariant_violation_raises(self):
        """Every record read must be accounted for."""
        with pytest.raises(ValueError, match="Invariant violated"):
            IngestionSummary(
                n_read=5, n_invalid=1, n_duplicates=1, n_inserted=1, source="books.csv"
            )

    def test_negative_count_raises(self):
        with pytest.raises(ValueError, match="n_duplicates cannot be negative"):
            IngestionSummary(
                n_read=0, n_invalid=1, n_duplicates=-1, n_inserted=0, source="books.csv"
            )
