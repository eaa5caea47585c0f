"""Conversions between wire data and books, and the read views of books."""

from collections.abc import Iterable, Mapping, Sequence
from html import escape
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.bookshelf.core.errors import BookDecodeError, not_found_message
from src.bookshelf.entities.book import Book, BookChange, BookDraft

M = TypeVar("M", bound=BaseModel)


def _field_errors(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]) or "body",
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]


def describe_field_errors(fields: Sequence[Mapping[str, Any]]) -> str:
    """Render field errors as one human readable sentence."""
    parts = [f"{field['field']}: {field['message']}" for field in fields]
    return "Invalid book data: " + "; ".join(parts)


def _decode(model: type[M], data: Any) -> M:
    if not isinstance(data, Mapping):
        raise BookDecodeError(
            "Invalid book data: expected an object",
            [{"field": "body", "message": "expected an object", "type": "type_error"}],
        )
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        fields = _field_errors(exc)
        raise BookDecodeError(describe_field_errors(fields), fields) from exc


def decode_book(data: Any) -> Book:
    """Decode a complete book, id included."""
    return _decode(Book, data)


def decode_draft(data: Any) -> BookDraft:
    """Decode the fields of a book that is about to be created."""
    return _decode(BookDraft, data)


def decode_change(data: Any) -> BookChange:
    """Decode a partial update; absent fields stay ``None``."""
    return _decode(BookChange, data)


def book_line(book: Book) -> str:
    return f"{book.title} by {book.author}"


def book_lines(books: Iterable[Book]) -> list[str]:
    """One ``"{title} by {author}"`` line per book, in the given order."""
    return [book_line(book) for book in books]


def render_books_html(books: Iterable[Book]) -> str:
    return "".join(f"<p>{escape(line)}</p>\n" for line in book_lines(books))


def render_book_html(book: Book | None, book_id: int) -> str:
    """Render one book, or the not-found paragraph when ``book`` is ``None``."""
    if book is None:
        return f"<p>{not_found_message(book_id)}</p>"
    return f"<p>{escape(book_line(book))}</p>\n"


def render_book_form(book: Book) -> str:
    """Render an edit form that posts back to the book's form route."""
    return (
        f'<form method="post" action="/html/books/{book.id}/form">\n'
        f'<input type="hidden" name="id" value="{book.id}">\n'
        f'<p><input name="title" value="{escape(book.title)}"></p>\n'
        f'<p><input name="author" value="{escape(book.author)}"></p>\n'
        '<input type="submit" value="Save">\n'
        "</form>\n"
    )


def html_table(rows: Iterable[Iterable[Any]]) -> str:
    """Render rows of cells into an HTML table."""
    body = "".join(
        "<tr>" + "".join(f"<td>{escape(str(cell))}</td>" for cell in row) + "</tr>\n"
        for row in rows
    )
    return f"<table>\n{body}</table>\n"


def render_books_table(books: Iterable[Book]) -> str:
    return html_table([book.id, book.title, book.author] for book in books)
