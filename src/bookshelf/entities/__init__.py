"""Entities module.

Each entity has its own package containing the domain model and the
values it is seeded with.
"""

from .book import SEED_BOOKS, Book, BookChange, BookDraft

__all__ = ["Book", "BookChange", "BookDraft", "SEED_BOOKS"]
