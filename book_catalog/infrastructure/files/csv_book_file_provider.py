"""
CSV implementation of the BookFileProvider port.

Reads every column as text so that validation sees exactly what the file
contains, and writes books back using the same six columns.
"""

import logging
from typing import List, Optional, Tuple

import pandas as pd

from book_catalog.domain.entities import Book
from book_catalog.domain.errors import InputNotFoundError, InputParseError, OutputWriteError
from book_catalog.domain.ports import PathLike
from book_catalog.domain.value_objects import RawRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["Title", "Pages", "Genre", "ReleaseDate", "Author", "Publisher"]

# Data rows start after the header line
_FIRST_DATA_ROW = 2


class CsvBookFileProvider:
    """
    Reads raw book records from CSV files and exports books to CSV.

    Unknown columns are ignored and missing columns read as None, so a
    file with an incomplete header still loads; the affected rows are then
    rejected by validation.
    """

    def read_records(self, file_path: PathLike) -> List[Tuple[int, RawRecord]]:
        """
        Load all records of a CSV file.

        Args:
            file_path: Path to the CSV file

        Returns:
            (row number, record) pairs; the header is row 1

        Raises:
            InputNotFoundError: If the file does not exist
            InputParseError: If the file cannot be parsed as CSV
        """
        logger.info(f"Loading book records from {file_path}")

        try:
            # Blank lines are kept so the index still maps to file lines
            df = pd.read_csv(file_path, dtype=str, keep_default_na=False, skip_blank_lines=False)
        except FileNotFoundError as e:
            raise InputNotFoundError(str(file_path)) from e
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as e:
            raise InputParseError(f"Error parsing CSV file '{file_path}': {e}") from e

        df.columns = [str(column).strip() for column in df.columns]
        df = df.fillna("")
        blank = pd.Series(True, index=df.index)
        for column in df.columns:
            blank &= df[column].str.strip() == ""
        df = df[~blank]

        records = [
            (int(index) + _FIRST_DATA_ROW, self._row_to_record(row))
            for index, row in df.iterrows()
        ]
        logger.debug(f"Loaded {len(records)} records from {file_path}")
        return records

    def _row_to_record(self, row: pd.Series) -> RawRecord:
        """Convert a CSV row to a RawRecord."""

        def cell(column: str) -> Optional[str]:
            value = row.get(column)
            return None if value is None else str(value)

        return RawRecord(
            title=cell("Title"),
            pages=cell("Pages"),
            genre=cell("Genre"),
            release_date=cell("ReleaseDate"),
            author=cell("Author"),
            publisher=cell("Publisher"),
        )

    def write_books(self, books: List[Book], file_path: PathLike) -> None:
        """
        Write books to a CSV file.

        Args:
            books: Books with their references resolved
            file_path: Destination file, overwritten if it exists

        Raises:
            OutputWriteError: If the file cannot be written
        """
        rows = [self._book_to_row(book) for book in books]
        df = pd.DataFrame(rows, columns=CSV_COLUMNS)

        try:
            df.to_csv(file_path, index=False)
        except OSError as e:
            raise OutputWriteError(f"Error writing CSV file '{file_path}': {e}") from e

        logger.debug(f"Wrote {len(rows)} books to {file_path}")

    @staticmethod
    def _book_to_row(book: Book) -> dict:
        return {
            "Title": book.title,
            "Pages": book.pages,
            "Genre": book.genre.name,
            "ReleaseDate": book.release_date.isoformat(),
            "Author": book.author.name,
            "Publisher": book.publisher.name,
        }
