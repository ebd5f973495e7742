"""
Domain services package.

Services orchestrate domain logic that doesn't naturally belong to a single
entity. They coordinate between entities and ports to implement use cases.

Following Hexagonal Architecture principles, services depend only on domain
entities, value objects, and port protocols (never on concrete implementations).
"""

from .catalog_service import CatalogService
from .duplicate_detector import DuplicateDetector
from .record_normalizer import RecordNormalizer
from .record_validator import RecordValidator
from .reference_resolver import ReferenceResolver

__all__ = [
    "CatalogService",
    "DuplicateDetector",
    "RecordNormalizer",
    "RecordValidator",
    "ReferenceResolver",
]
