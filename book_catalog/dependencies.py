"""
Configuration and wiring of the catalog.

This module provides lazily-built singleton instances of the database and
the catalog service. Configuration comes from the environment and can be
overridden by passing explicit paths to configure().
"""

import os
from pathlib import Path
from typing import Optional, Union

from book_catalog.domain.entities import Author, Genre, Publisher
from book_catalog.domain.services import CatalogService
from book_catalog.infrastructure.db import (
    SqliteBookRepository,
    SqliteCatalogDatabase,
    SqliteReferenceRepository,
)
from book_catalog.infrastructure.files import CsvBookFileProvider, JsonFilterProvider

# Configuration from environment
DB_PATH = Path(os.getenv("CATALOG_DB_PATH", "data/catalog.db"))
FILTER_PATH = Path(os.getenv("FILTER_PATH", "filter.json"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Module-level singletons (initialized lazily)
_database: Optional[SqliteCatalogDatabase] = None
_catalog_service: Optional[CatalogService] = None


def configure(
    db_path: Optional[Union[Path, str]] = None,
    filter_path: Optional[Union[Path, str]] = None,
) -> None:
    """
    Override the environment configuration.

    Must be called before the first get_*() call to take effect.
    """
    global DB_PATH, FILTER_PATH
    if db_path is not None:
        DB_PATH = Path(db_path)
    if filter_path is not None:
        FILTER_PATH = Path(filter_path)


def get_database() -> SqliteCatalogDatabase:
    """Provide a singleton instance of the catalog database."""
    global _database
    if _database is None:
        _database = SqliteCatalogDatabase(DB_PATH)
    return _database


def get_catalog_service() -> CatalogService:
    """Provide the Catalog Service with all dependencies wired."""
    global _catalog_service
    if _catalog_service is None:
        database = get_database()
        _catalog_service = CatalogService(
            book_repo=SqliteBookRepository(database),
            author_repo=SqliteReferenceRepository(database, Author),
            genre_repo=SqliteReferenceRepository(database, Genre),
            publisher_repo=SqliteReferenceRepository(database, Publisher),
            file_provider=CsvBookFileProvider(),
            filter_provider=JsonFilterProvider(),
            filter_path=FILTER_PATH,
        )
    return _catalog_service


def reset_dependencies() -> None:
    """
    Close the database and reset all singletons. Useful for testing.
    """
    global _database, _catalog_service

    if _database is not None:
        _database.close()

    _database = None
    _catalog_service = None
