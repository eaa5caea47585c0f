from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.bookshelf.api.http.app import create_app
from src.bookshelf.core.storage import BookStore
from src.bookshelf.entities.book import Book

__all__ = [
    "book_store",
    "empty_store",
    "seed_books",
    "test_app",
    "client",
]


@pytest.fixture
def seed_books() -> list[Book]:
    return [
        Book(id=1, title="Antigone", author="Sophocles"),
        Book(id=2, title="Beloved", author="Toni Morrison"),
        Book(id=3, title="Candide", author="Voltaire"),
    ]


@pytest.fixture
def book_store() -> BookStore:
    """A fresh store holding the three seed books."""
    return BookStore.with_seed(lock_timeout_seconds=1.0)


@pytest.fixture
def empty_store() -> BookStore:
    return BookStore(lock_timeout_seconds=1.0)


@pytest.fixture
def test_app(book_store: BookStore) -> FastAPI:
    return create_app(store=book_store)


@pytest.fixture
def client(test_app: FastAPI) -> Generator[TestClient]:
    """Create a test client around an app with its own seeded store."""
    with TestClient(test_app) as test_client:
        yield test_client
