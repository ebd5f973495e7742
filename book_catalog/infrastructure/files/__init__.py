"""
File adapters: CSV input/output of books and the JSON filter description.
"""

from .csv_book_file_provider import CSV_COLUMNS, CsvBookFileProvider
from .json_filter_provider import JsonFilterProvider

__all__ = ["CSV_COLUMNS", "CsvBookFileProvider", "JsonFilterProvider"]
