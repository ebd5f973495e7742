"""
Errors raised across the catalog.

File- and store-level errors abort the current ingest or search only; the
catalog service catches them at its boundary. Per-row validation problems
are not exceptions at all, they are returned as messages and the row is
skipped.
"""


class CatalogError(Exception):
    """Base class for every error raised by the catalog."""


class InputNotFoundError(CatalogError):
    """A source file or the filter file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File '{path}' was not found.")
        self.path = path


class InputParseError(CatalogError):
    """A file exists but its contents could not be parsed."""


class RecordFormatError(InputParseError):
    """A record passed validation but still could not be converted."""


class StoreError(CatalogError):
    """The underlying persistence layer failed."""


class ConstraintViolationError(StoreError):
    """A unique constraint of the catalog was violated on write."""


class OutputWriteError(CatalogError):
    """An export file could not be written."""
