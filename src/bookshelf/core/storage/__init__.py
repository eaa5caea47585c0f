"""Book storage for the HTTP layer."""

from .book_store import WAIT_FOREVER, BookStore

__all__ = ["BookStore", "WAIT_FOREVER"]
