"""
Domain utilities module.

Provides shared parsing helpers for the loosely typed text read from
input files. They remain independent of infrastructure concerns.
"""

from .parsing import parse_pages, parse_release_date

__all__ = ["parse_pages", "parse_release_date"]
