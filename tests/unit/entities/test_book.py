"""Unit tests for the book entities."""

import pytest
from pydantic import ValidationError

from src.bookshelf.entities.book import SEED_BOOKS, Book, BookChange, BookDraft


class TestBook:
    def test_str(self):
        assert str(Book(id=1, title="Antigone", author="Sophocles")) == (
            "Antigone by Sophocles"
        )

    def test_negative_id_is_invalid(self):
        with pytest.raises(ValidationError):
            Book(id=-1, title="x", author="y")

    def test_equality_is_by_value(self):
        assert Book(id=1, title="a", author="b") == Book(id=1, title="a", author="b")
        assert Book(id=1, title="a", author="b") != Book(id=2, title="a", author="b")

    def test_seed_books(self):
        assert [(book.id, str(book)) for book in SEED_BOOKS] == [
            (1, "Antigone by Sophocles"),
            (2, "Beloved by Toni Morrison"),
            (3, "Candide by Voltaire"),
        ]


class TestBookDraft:
    def test_requires_title_and_author(self):
        with pytest.raises(ValidationError):
            BookDraft(title="Emma")

    def test_ignores_unknown_fields(self):
        draft = BookDraft.model_validate({"title": "Emma", "author": "Austen", "year": 1815})

        assert draft.model_dump() == {"title": "Emma", "author": "Austen"}


class TestBookChange:
    def test_empty_change(self):
        assert BookChange().is_empty()
        assert BookChange(id=3).is_empty()

    def test_non_empty_change(self):
        assert not BookChange(author="Voltaire").is_empty()
