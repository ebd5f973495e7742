"""
Conversion of validated raw records into Book entities.
"""

from book_catalog.domain.entities import Author, Book, Genre, Publisher
from book_catalog.domain.errors import RecordFormatError
from book_catalog.domain.utils import parse_pages, parse_release_date
from book_catalog.domain.value_objects import RawRecord


class RecordNormalizer:
    """
    Builds a Book from a record that already passed validation.

    Author, genre and publisher become name-only placeholders without an
    id; the reference resolver later binds them to stored entities.
    """

    def normalize(self, record: RawRecord) -> Book:
        """
        Convert one validated record into a Book.

        Args:
            record: A record for which RecordValidator reported no errors

        Returns:
            A new Book with unregistered reference placeholders

        Raises:
            RecordFormatError: If the pages or release date cannot be parsed,
                which means the record did not go through validation
        """
        release_date = parse_release_date(record.release_date)
        if release_date is None:
            raise RecordFormatError(f"Invalid date format for book '{record.title}'.")

        pages = parse_pages(record.pages)
        if pages is None:
            raise RecordFormatError(f"Invalid page number for book '{record.title}'.")

        try:
            return Book.create_new(
                title=record.title,
                pages=pages,
                release_date=release_date,
                author=Author(name=record.author),
                genre=Genre(name=record.genre),
                publisher=Publisher(name=record.publisher),
            )
        except (TypeError, ValueError) as e:
            raise RecordFormatError(f"Invalid record for book '{record.title}': {e}") from e
