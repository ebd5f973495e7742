"""
JSON implementation of the FilterProvider port.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from book_catalog.domain.errors import InputNotFoundError, InputParseError
from book_catalog.domain.ports import PathLike
from book_catalog.domain.value_objects import BookFilter

from .filter_schema import FilterDocument

logger = logging.getLogger(__name__)


class JsonFilterProvider:
    """Loads a BookFilter from a JSON document."""

    def read_filter(self, file_path: PathLike) -> BookFilter:
        """
        Read and validate a filter file.

        Args:
            file_path: Path to the JSON filter

        Returns:
            The filter; fields absent from the document are None

        Raises:
            InputNotFoundError: If the file does not exist
            InputParseError: If the file is not a valid filter document
        """
        path = Path(file_path)

        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise InputNotFoundError(str(path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise InputParseError(f"Error reading JSON file '{path}': {e}") from e

        try:
            document = FilterDocument.model_validate_json(text)
        except ValidationError as e:
            raise InputParseError(f"Error parsing JSON file '{path}': {e}") from e

        book_filter = document.to_domain()
        logger.debug(f"Loaded filter from {path}: {book_filter}")
        return book_filter
