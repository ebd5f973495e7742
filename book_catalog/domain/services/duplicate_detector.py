"""
Duplicate detection for a batch of resolved books.
"""

import logging
from typing import List

from book_catalog.domain.entities import Book
from book_catalog.domain.ports import BookRepository
from book_catalog.domain.predicates import natural_key_predicate

logger = logging.getLogger(__name__)


class DuplicateDetector:
    """
    Drops books that are already in the catalog or earlier in the batch.

    Two books are duplicates when they share the natural key
    (title, author_id, publisher_id, release_date). Books are checked in
    input order, so the first occurrence of a key wins. Skipping a
    duplicate is an expected outcome, not an error.
    """

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def deduplicate(self, books: List[Book]) -> List[Book]:
        """
        Keep only books whose natural key is new.

        Args:
            books: Books whose references have already been resolved

        Returns:
            The accepted books, in input order

        Raises:
            StoreError: If the catalog lookup fails
        """
        unique_books: List[Book] = []

        for book in books:
            key = natural_key_predicate(book)

            if self._book_repo.exists_matching(key):
                logger.debug(f"Skipping duplicate already in catalog: {book.title}")
                continue

            if any(key.matches(accepted) for accepted in unique_books):
                logger.debug(f"Skipping duplicate within batch: {book.title}")
                continue

            unique_books.append(book)

        logger.info(
            f"Duplicate check complete: {len(unique_books)} new, "
            f"{len(books) - len(unique_books)} duplicates"
        )
        return unique_books
