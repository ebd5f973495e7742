"""
Resolution of a batch's author, genre and publisher placeholders.

Books coming out of the normalizer carry name-only reference entities.
The resolver binds each of them to the stored entity with that name, or
registers a new one, so that every name maps to exactly one entity.
"""

import logging
from typing import Callable, Dict, List, Set, Tuple

from book_catalog.domain.entities import Author, Book, Genre, Publisher
from book_catalog.domain.ports import RefT, ReferenceRepository

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """
    Rewrites the references of a batch of books to resolved entities.

    The name-to-entity caches built here are scoped to a single call to
    resolve() and discarded afterwards.

    Usage:
        resolver = ReferenceResolver(author_repo, genre_repo, publisher_repo)
        books = resolver.resolve(books)
    """

    def __init__(
        self,
        author_repo: ReferenceRepository[Author],
        genre_repo: ReferenceRepository[Genre],
        publisher_repo: ReferenceRepository[Publisher],
    ) -> None:
        """
        Initialize the resolver with one repository per reference kind.

        Args:
            author_repo: Repository of authors
            genre_repo: Repository of genres
            publisher_repo: Repository of publishers
        """
        self._author_repo = author_repo
        self._genre_repo = genre_repo
        self._publisher_repo = publisher_repo

    def resolve(self, books: List[Book]) -> List[Book]:
        """
        Bind every reference of every book to a registered entity.

        Books are processed in their original order. A name already known
        to the store binds to the stored entity; an unseen name is added to
        its repository once and every later book naming it shares that
        same instance.

        Args:
            books: Normalized books, possibly holding unregistered placeholders

        Returns:
            The same list; each book now points at registered entities, and
            the newly registered ones are staged for the next commit

        Raises:
            StoreError: If a repository lookup or registration fails
        """
        if not books:
            return books

        authors = self._load_existing(self._author_repo, books, lambda b: b.author.name)
        genres = self._load_existing(self._genre_repo, books, lambda b: b.genre.name)
        publishers = self._load_existing(self._publisher_repo, books, lambda b: b.publisher.name)

        created = 0
        for book in books:
            book.author, new_author = self._bind(self._author_repo, authors, book.author)
            book.genre, new_genre = self._bind(self._genre_repo, genres, book.genre)
            book.publisher, new_publisher = self._bind(self._publisher_repo, publishers, book.publisher)
            created += new_author + new_genre + new_publisher

        logger.info(f"Resolved references for {len(books)} books ({created} new entities)")
        return books

    @staticmethod
    def _load_existing(
        repo: ReferenceRepository[RefT],
        books: List[Book],
        name_of: Callable[[Book], str],
    ) -> Dict[str, RefT]:
        """Fetch the stored entities named anywhere in the batch."""
        names: Set[str] = {name_of(book) for book in books}
        return dict(repo.get_by_names(names))

    @staticmethod
    def _bind(
        repo: ReferenceRepository[RefT],
        known: Dict[str, RefT],
        placeholder: RefT,
    ) -> Tuple[RefT, bool]:
        """Return the entity to bind and whether it was newly registered."""
        existing = known.get(placeholder.name)
        if existing is not None:
            return existing, False

        repo.add(placeholder)
        known[placeholder.name] = placeholder
        logger.debug(f"Registered new {type(placeholder).__name__}: {placeholder.name}")
        return placeholder, True
