"""Entity package: Book."""

from .entity import SEED_BOOKS, Book, BookChange, BookDraft

__all__ = ["Book", "BookChange", "BookDraft", "SEED_BOOKS"]
