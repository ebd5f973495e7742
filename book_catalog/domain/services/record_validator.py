"""
Validation of raw records read from an input file.
"""

from typing import List, Optional

from book_catalog.domain.entities import MAX_PAGES
from book_catalog.domain.utils import parse_pages, parse_release_date
from book_catalog.domain.value_objects import RawRecord


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class RecordValidator:
    """
    Checks a raw record for required fields and well-formed values.

    Every rule runs independently so all problems of a row are reported
    together. The validator has no side effects; deciding what to do with
    an invalid row is up to the caller.
    """

    def validate(self, record: RawRecord) -> List[str]:
        """
        Validate one record.

        Args:
            record: The record as parsed from the file

        Returns:
            Ordered list of error messages; empty when the record is valid
        """
        errors: List[str] = []

        if _is_blank(record.title):
            errors.append("Title is required.")

        if _is_blank(record.author):
            errors.append("Author is required.")

        if _is_blank(record.genre):
            errors.append("Genre is required.")

        if _is_blank(record.publisher):
            errors.append("Publisher is required.")

        pages = parse_pages(record.pages)
        if pages is None or not 0 < pages <= MAX_PAGES:
            errors.append("Pages must be a positive integer.")

        if parse_release_date(record.release_date) is None:
            errors.append(f"Invalid date format for ReleaseDate: {record.release_date or ''}.")

        return errors
