"""
Domain service for catalog ingestion and search.

The catalog service orchestrates the two public use cases:

    ingest:  file --> validate --> normalize --> resolve references
                  --> deduplicate --> bulk add + single commit

    search:  filter file --> predicate --> query --> export to CSV

It depends only on domain ports, so it knows nothing about SQLite, CSV
parsing or JSON. Failures are caught at this boundary: they are logged,
staged writes are rolled back, and the call returns None instead of
raising.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from book_catalog.domain.entities import Author, Book, Genre, Publisher
from book_catalog.domain.errors import CatalogError, InputNotFoundError
from book_catalog.domain.ports import (
    BookFileProvider,
    BookRepository,
    FilterProvider,
    PathLike,
    ReferenceRepository,
)
from book_catalog.domain.predicates import build_filter_predicate
from book_catalog.domain.value_objects import IngestionSummary, SearchSummary

from .duplicate_detector import DuplicateDetector
from .record_normalizer import RecordNormalizer
from .record_validator import RecordValidator
from .reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)

OUTPUT_FOLDER = "BookSearchHistory"
OUTPUT_FILE_TEMPLATE = "books_output_{timestamp}.csv"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


class CatalogService:
    """
    Orchestrates ingestion from files and filtered export of the catalog.

    Usage:
        service = CatalogService(
            book_repo=books,
            author_repo=authors,
            genre_repo=genres,
            publisher_repo=publishers,
            file_provider=CsvBookFileProvider(),
            filter_provider=JsonFilterProvider(),
            filter_path=Path("filter.json"),
        )
        summary = service.ingest("books.csv")
        result = service.search("exports")
    """

    def __init__(
        self,
        book_repo: BookRepository,
        author_repo: ReferenceRepository[Author],
        genre_repo: ReferenceRepository[Genre],
        publisher_repo: ReferenceRepository[Publisher],
        file_provider: BookFileProvider,
        filter_provider: FilterProvider,
        filter_path: PathLike,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize the catalog service with required dependencies.

        Args:
            book_repo: Repository of books
            author_repo: Repository of authors
            genre_repo: Repository of genres
            publisher_repo: Repository of publishers
            file_provider: Reads input records and writes exported books
            filter_provider: Loads the filter description
            filter_path: Well-known location of the filter description
            clock: Source of the timestamp used in export file names
        """
        self._book_repo = book_repo
        self._file_provider = file_provider
        self._filter_provider = filter_provider
        self._filter_path = Path(filter_path)
        self._clock = clock

        self._validator = RecordValidator()
        self._normalizer = RecordNormalizer()
        self._resolver = ReferenceResolver(author_repo, genre_repo, publisher_repo)
        self._detector = DuplicateDetector(book_repo)

    def ingest(self, file_path: PathLike) -> Optional[IngestionSummary]:
        """
        Add the books of a file to the catalog, skipping invalid rows and duplicates.

        Workflow:
        1. Read raw records from the file
        2. Validate each record; invalid rows are logged and skipped
        3. Normalize valid records into books
        4. Resolve authors, genres and publishers over the whole batch
        5. Drop books already in the catalog or earlier in the batch
        6. Add the remaining books and commit once

        Args:
            file_path: Path of the file to ingest

        Returns:
            IngestionSummary with the outcome of every row, or None if the
            operation was aborted (nothing from this call is persisted)
        """
        logger.info(f"Starting ingestion from '{file_path}'")

        try:
            return self._ingest(file_path)
        except InputNotFoundError as e:
            logger.error(f"Ingestion aborted, file not found: {e}")
        except CatalogError as e:
            logger.error(f"Ingestion aborted: {e}")
        except Exception:
            logger.exception(f"Unexpected error while ingesting '{file_path}'")

        self._book_repo.rollback()
        return None

    def _ingest(self, file_path: PathLike) -> IngestionSummary:
        records = list(self._file_provider.read_records(file_path))
        logger.info(f"Read {len(records)} records from '{file_path}'")

        books: List[Book] = []
        errors: List[str] = []
        for row_number, record in records:
            validation_errors = self._validator.validate(record)
            if validation_errors:
                message = (
                    f"Skipping record at row {row_number} due to validation errors: "
                    f"{', '.join(validation_errors)}"
                )
                logger.warning(message)
                errors.append(message)
                continue

            books.append(self._normalizer.normalize(record))

        resolved = self._resolver.resolve(books)
        unique_books = self._detector.deduplicate(resolved)

        if unique_books:
            self._book_repo.add_many(unique_books)
            self._book_repo.commit()
        else:
            # Nothing new: discard any reference entities staged by the resolver
            self._book_repo.rollback()

        summary = IngestionSummary(
            n_read=len(records),
            n_invalid=len(errors),
            n_duplicates=len(books) - len(unique_books),
            n_inserted=len(unique_books),
            source=str(file_path),
            errors=errors,
        )
        logger.info(
            f"Ingestion complete: {summary.n_inserted} inserted, "
            f"{summary.n_duplicates} duplicates, {summary.n_invalid} invalid"
        )
        return summary

    def search(self, output_directory: PathLike) -> Optional[SearchSummary]:
        """
        Export the books matching the configured filter to a new CSV file.

        The filter is loaded from the service's filter path. Matches are
        written to <output_directory>/BookSearchHistory/books_output_<timestamp>.csv;
        when nothing matches no file is written.

        Args:
            output_directory: Directory under which the export folder lives

        Returns:
            SearchSummary with the matches and the output path (None when
            nothing matched), or None if the operation failed
        """
        try:
            return self._search(output_directory)
        except InputNotFoundError as e:
            logger.error(f"Search aborted, filter file not found: {e}")
        except CatalogError as e:
            logger.error(f"An error occurred while searching books: {e}")
        except Exception:
            logger.exception("Unexpected error while searching books")

        return None

    def _search(self, output_directory: PathLike) -> SearchSummary:
        book_filter = self._filter_provider.read_filter(self._filter_path)
        if book_filter.is_empty():
            logger.info("Filter has no criteria, exporting the whole catalog")
        predicate = build_filter_predicate(book_filter)

        books = self._book_repo.find_matching(predicate)
        if not books:
            logger.info("No books were found based on the filter criteria.")
            return SearchSummary(books=[])

        logger.info(f"Number of books found: {len(books)}")
        for book in books:
            logger.info(book.title)

        output_path = self._build_output_path(Path(output_directory))
        self._file_provider.write_books(books, output_path)
        logger.info(f"Books have been saved to {output_path}")

        return SearchSummary(books=books, output_path=output_path)

    def _build_output_path(self, output_directory: Path) -> Path:
        """Create the export folder if needed and return a timestamped file path."""
        folder = output_directory / OUTPUT_FOLDER
        if not folder.exists():
            folder.mkdir(parents=True)
            logger.info(f"Directory '{folder}' has been created.")

        timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
        return folder / OUTPUT_FILE_TEMPLATE.format(timestamp=timestamp)
