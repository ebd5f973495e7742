"""
Domain layer - Core business logic and entities.

This layer contains the business entities, value objects, and defines
the ports (interfaces) that the infrastructure layer must implement.

It has NO dependencies on external frameworks, databases, or file formats.
"""

from .entities import Author, Book, Genre, Publisher, ReferenceEntity
from .predicates import BookPredicate, Condition, build_filter_predicate
from .value_objects import BookFilter, IngestionSummary, RawRecord, SearchSummary

__all__ = [
    # Entities
    "Book",
    "Author",
    "Genre",
    "Publisher",
    "ReferenceEntity",
    # Value Objects
    "BookFilter",
    "RawRecord",
    "IngestionSummary",
    "SearchSummary",
    # Predicates
    "BookPredicate",
    "Condition",
    "build_filter_predicate",
]
