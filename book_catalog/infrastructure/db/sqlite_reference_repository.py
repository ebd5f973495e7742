"""
SQLite implementation of the ReferenceRepository port.

One generic class serves authors, genres and publishers. Each instance is
bound to a single entity class, and the table it reads from is looked up
in an explicit per-kind registry rather than derived at runtime.
"""

import sqlite3
from typing import Dict, Generic, Iterable, List, Type
from uuid import UUID, uuid4

from book_catalog.domain.entities import Author, Genre, Publisher, ReferenceEntity
from book_catalog.domain.ports import RefT

from .sqlite_catalog_database import SqliteCatalogDatabase, translate_errors

REFERENCE_TABLES: Dict[Type[ReferenceEntity], str] = {
    Author: "authors",
    Genre: "genres",
    Publisher: "publishers",
}


class SqliteReferenceRepository(Generic[RefT]):
    """
    Stores one kind of reference entity in its own table.

    Usage:
        authors = SqliteReferenceRepository(database, Author)
        found = authors.get_by_names({"Harper Lee"})
    """

    def __init__(self, database: SqliteCatalogDatabase, entity_type: Type[RefT]) -> None:
        """
        Bind the repository to a database and an entity kind.

        Raises:
            ValueError: If the entity kind has no table
        """
        if entity_type not in REFERENCE_TABLES:
            raise ValueError(f"No table registered for {entity_type.__name__}")

        self._database = database
        self._entity_type = entity_type
        self._table = REFERENCE_TABLES[entity_type]

    def _row_to_entity(self, row: sqlite3.Row) -> RefT:
        return self._entity_type(name=row["name"], id=UUID(row["id"]))

    def get_all(self) -> List[RefT]:
        with translate_errors(f"loading {self._table}"):
            rows = self._database.connection.execute(
                f"SELECT id, name FROM {self._table} ORDER BY name"
            ).fetchall()
        return [self._row_to_entity(row) for row in rows]

    def get_by_names(self, names: Iterable[str]) -> Dict[str, RefT]:
        """Retrieve the entities whose name is in the given set, keyed by name."""
        unique_names = sorted(set(names))
        if not unique_names:
            return {}

        placeholders = ", ".join("?" * len(unique_names))
        with translate_errors(f"looking up {self._table} by name"):
            rows = self._database.connection.execute(
                f"SELECT id, name FROM {self._table} WHERE name IN ({placeholders})",
                unique_names,
            ).fetchall()

        return {row["name"]: self._row_to_entity(row) for row in rows}

    def add(self, entity: RefT) -> None:
        """Stage an entity, assigning its id if it has none."""
        self.add_many([entity])

    def add_many(self, entities: List[RefT]) -> None:
        if not entities:
            return

        for entity in entities:
            if entity.id is None:
                entity.id = uuid4()

        with translate_errors(f"adding to {self._table}"):
            self._database.connection.executemany(
                f"INSERT INTO {self._table} (id, name) VALUES (?, ?)",
                [(str(entity.id), entity.name) for entity in entities],
            )

    def commit(self) -> None:
        self._database.commit()

    def rollback(self) -> None:
        self._database.rollback()
