"""
SQLite adapters for the catalog repositories.
"""

from .sqlite_book_repository import SqliteBookRepository
from .sqlite_catalog_database import SqliteCatalogDatabase
from .sqlite_reference_repository import SqliteReferenceRepository

__all__ = ["SqliteBookRepository", "SqliteCatalogDatabase", "SqliteReferenceRepository"]
