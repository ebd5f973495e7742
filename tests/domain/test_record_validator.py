"""
Tests for RecordValidator.

Every rule is independent: an invalid record reports all of its problems
at once, in a fixed order.
"""

import pytest

from book_catalog.domain.services import RecordValidator
from book_catalog.domain.value_objects import RawRecord


@pytest.fixture
def validator() -> RecordValidator:
    return RecordValidator()


@pytest.fixture
def valid_record() -> RawRecord:
    return RawRecord(
        title="To Kill a Mockingbird",
        pages="336",
        genre="Fiction",
        release_date="1960-07-11",
        author="Harper Lee",
        publisher="HarperCollins",
    )


def _with(record: RawRecord, **changes) -> RawRecord:
    fields = record.__dict__.copy()
    fields.update(changes)
    return RawRecord(**fields)


class TestValidRecords:
    """Records that pass validation."""

    def test_valid_record_has_no_errors(self, validator, valid_record):
        assert validator.validate(valid_record) == []

    @pytest.mark.parametrize(
        "raw_date",
        ["1960-07-11", "1960-07-11T00:00:00", "1960/07/11", "07/11/1960", " 1960-07-11 "],
    )
    def test_accepted_date_formats(self, validator, valid_record, raw_date):
        assert validator.validate(_with(valid_record, release_date=raw_date)) == []

    def test_pages_with_surrounding_whitespace(self, validator, valid_record):
        assert validator.validate(_with(valid_record, pages=" 12 ")) == []


class TestInvalidRecords:
    """Records that fail one or more rules."""

    @pytest.mark.parametrize(
        "field_name, message",
        [
            ("title", "Title is required."),
            ("author", "Author is required."),
            ("genre", "Genre is required."),
            ("publisher", "Publisher is required."),
        ],
    )
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_required_text_fields(self, validator, valid_record, field_name, message, value):
        errors = validator.validate(_with(valid_record, **{field_name: value}))

        assert errors == [message]

    @pytest.mark.parametrize(
        "pages", [None, "", "0", "-5", "abc", "12.5", "2147483648", "99999999999999999999"]
    )
    def test_pages_must_be_positive_integer(self, validator, valid_record, pages):
        errors = validator.validate(_with(valid_record, pages=pages))

        assert errors == ["Pages must be a positive integer."]

    def test_largest_page_count_accepted(self, validator, valid_record):
        assert validator.validate(_with(valid_record, pages="2147483647")) == []

    @pytest.mark.parametrize("raw_date", ["InvalidDate", "2021-02-30", "11.07.1960"])
    def test_invalid_date_reports_raw_value(self, validator, valid_record, raw_date):
        errors = validator.validate(_with(valid_record, release_date=raw_date))

        assert errors == [f"Invalid date format for ReleaseDate: {raw_date}."]

    def test_missing_title_and_bad_pages_report_both(self, validator, valid_record):
        """Validation does not stop at the first failing rule."""
        errors = validator.validate(_with(valid_record, title="", pages="-1"))

        assert errors == ["Title is required.", "Pages must be a positive integer."]

    def test_all_rules_fail_together(self, validator):
        record = RawRecord(
            title="",
            pages="-1",
            genre="",
            release_date="InvalidDate",
            author="",
            publisher="",
        )

        errors = validator.validate(record)

        assert errors == [
            "Title is required.",
            "Author is required.",
            "Genre is required.",
            "Publisher is required.",
            "Pages must be a positive integer.",
            "Invalid date format for ReleaseDate: InvalidDate.",
        ]

    def test_validation_has_no_side_effects(self, validator, valid_record):
        invalid = _with(valid_record, title="")

        assert validator.validate(invalid) == validator.validate(invalid)
        assert invalid.title == ""
