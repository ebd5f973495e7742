"""
Book catalog: CSV ingestion with deduplication, filtered CSV export.
"""

__version__ = "1.0.0"
