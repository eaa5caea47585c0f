"""In-memory book store shared by every request handler.

All reads and writes go through one ``threading.Lock``. Handlers run on the
server's worker threads and call the store directly; every operation holds
the lock for its whole duration, so operations are linearizable.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from loguru import logger

from src.bookshelf.core.errors import (
    BookNotFoundError,
    BookshelfError,
    StoreUnavailableError,
)
from src.bookshelf.entities.book import SEED_BOOKS, Book, BookChange, BookDraft

WAIT_FOREVER = -1


class BookStore:
    """Concurrency-safe mapping of book id to book.

    Ids handed out by :meth:`create` only ever grow: the store remembers the
    highest id it has seen, so a deleted id is never assigned again.

    If an operation fails with an unexpected exception while mutating the
    map, the store is marked poisoned and every later operation raises
    :class:`StoreUnavailableError` until :meth:`reset` is called.
    """

    def __init__(
        self,
        books: Iterable[Book] = (),
        lock_timeout_seconds: float = WAIT_FOREVER,
    ) -> None:
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout_seconds
        self._books: dict[int, Book] = {}
        self._high_water = 0
        self._poisoned = False
        self._load(books)

    @classmethod
    def with_seed(cls, lock_timeout_seconds: float = WAIT_FOREVER) -> BookStore:
        """Create a store holding the three seed books."""
        return cls(SEED_BOOKS, lock_timeout_seconds=lock_timeout_seconds)

    def _load(self, books: Iterable[Book]) -> None:
        self._books = {book.id: book.model_copy() for book in books}
        self._high_water = max(self._books, default=0)
        self._poisoned = False

    @contextmanager
    def _exclusive(
        self, operation: str, *, mutating: bool = False, recover: bool = False
    ) -> Iterator[dict[int, Book]]:
        """Hold the store lock for the duration of the ``with`` block.

        The lock is released on every exit path. Domain errors pass through
        untouched; any other exception raised by a mutating block poisons
        the store.
        """
        if not self._lock.acquire(timeout=self._lock_timeout):
            logger.bind(operation=operation).error("book_store.lock_timeout")
            raise StoreUnavailableError(
                f"Timed out waiting for the book store during {operation}"
            )
        try:
            if self._poisoned and not recover:
                raise StoreUnavailableError(
                    "Book store is unavailable after a failed update"
                )
            try:
                yield self._books
            except BookshelfError:
                raise
            except Exception:
                if mutating:
                    self._poisoned = True
                    logger.bind(operation=operation).exception("book_store.poisoned")
                raise
        finally:
            self._lock.release()

    def list(self) -> list[Book]:
        """Return every book, sorted by title."""
        with self._exclusive("list") as books:
            ordered = sorted(books.values(), key=lambda book: book.title)
            return [book.model_copy() for book in ordered]

    def get(self, book_id: int) -> Book | None:
        """Return the book with ``book_id``, or ``None`` when there is none."""
        with self._exclusive("get") as books:
            book = books.get(book_id)
            return book.model_copy() if book is not None else None

    def create(self, draft: BookDraft) -> Book:
        """Store ``draft`` under a freshly allocated id and return it."""
        with self._exclusive("create", mutating=True) as books:
            new_id = max(max(books, default=0), self._high_water) + 1
            book = Book(id=new_id, title=draft.title, author=draft.author)
            books[new_id] = book
            self._high_water = new_id
            logger.bind(book_id=new_id).debug("book_store.created")
            return book.model_copy()

    def put(self, book: Book) -> Book:
        """Insert ``book`` at ``book.id``, replacing any book already there."""
        with self._exclusive("put", mutating=True) as books:
            replaced = book.id in books
            books[book.id] = book.model_copy()
            self._high_water = max(self._high_water, book.id)
            logger.bind(book_id=book.id, replaced=replaced).debug("book_store.put")
            return book.model_copy()

    def patch(self, book_id: int, change: BookChange) -> Book:
        """Apply the non-``None`` fields of ``change`` to an existing book.

        Raises:
            BookNotFoundError: no book has ``book_id``.
        """
        with self._exclusive("patch", mutating=True) as books:
            current = books.get(book_id)
            if current is None:
                raise BookNotFoundError(book_id)
            if not change.is_empty():
                updates = change.model_dump(
                    include={"title", "author"}, exclude_none=True
                )
                current = current.model_copy(update=updates)
                books[book_id] = current
                logger.bind(book_id=book_id, fields=sorted(updates)).debug(
                    "book_store.patched"
                )
            return current.model_copy()

    def delete(self, book_id: int) -> None:
        """Remove the book with ``book_id``.

        Raises:
            BookNotFoundError: no book has ``book_id``.
        """
        with self._exclusive("delete", mutating=True) as books:
            if book_id not in books:
                raise BookNotFoundError(book_id)
            del books[book_id]
            logger.bind(book_id=book_id).debug("book_store.deleted")

    def count(self) -> int:
        with self._exclusive("count") as books:
            return len(books)

    def reset(self, books: Iterable[Book] = SEED_BOOKS) -> None:
        """Replace the whole contents and clear a poisoned state."""
        snapshot = list(books)
        with self._exclusive("reset", recover=True):
            self._load(snapshot)
            logger.bind(count=len(self._books)).info("book_store.reset")

    def is_available(self) -> bool:
        """Check whether the store accepts operations."""
        return not self._poisoned
