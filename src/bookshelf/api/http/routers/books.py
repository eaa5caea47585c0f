"""Book JSON API: the resource routes of the book store."""

from collections.abc import Mapping
from typing import Annotated, Any

from fastapi import Depends, Path
from starlette.responses import Response

from src.bookshelf.api.http.deps import get_book_store, get_json_body
from src.bookshelf.api.http.routing import Route, build_router
from src.bookshelf.core.codec import decode_book, decode_change, decode_draft
from src.bookshelf.core.errors import BookDecodeError, BookNotFoundError
from src.bookshelf.core.storage import BookStore
from src.bookshelf.entities.book import Book, BookChange

BookId = Annotated[int, Path(ge=0, description="Book id")]


def ensure_matching_id(change: BookChange, book_id: int) -> None:
    """Reject a change whose body id names a different book than the path."""
    if change.id is not None and change.id != book_id:
        raise BookDecodeError(
            f"Invalid book data: id: {change.id} does not match path id {book_id}",
            [
                {
                    "field": "id",
                    "message": f"does not match path id {book_id}",
                    "type": "value_error",
                }
            ],
        )


def list_books(store: BookStore = Depends(get_book_store)) -> list[Book]:
    """List all books, ordered by title."""
    return store.list()


def create_book(
    payload: Any = Depends(get_json_body),
    store: BookStore = Depends(get_book_store),
) -> Book:
    """Create a book; the store assigns its id."""
    return store.create(decode_draft(payload))


def get_book(
    book_id: BookId,
    store: BookStore = Depends(get_book_store),
) -> Book:
    """Get a book by id."""
    book = store.get(book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return book


def put_book(
    book_id: BookId,
    payload: Any = Depends(get_json_body),
    store: BookStore = Depends(get_book_store),
) -> Book:
    """Create or replace the book at the path id."""
    if isinstance(payload, Mapping):
        payload = {**payload, "id": book_id}
    return store.put(decode_book(payload))


def patch_book(
    book_id: BookId,
    payload: Any = Depends(get_json_body),
    store: BookStore = Depends(get_book_store),
) -> Book:
    """Change only the supplied fields of a book."""
    change = decode_change(payload)
    ensure_matching_id(change, book_id)
    return store.patch(book_id, change)


def delete_book(
    book_id: BookId,
    store: BookStore = Depends(get_book_store),
) -> Response:
    """Delete a book."""
    store.delete(book_id)
    return Response(status_code=204)


BOOK_ROUTES: tuple[Route, ...] = (
    Route("GET", "/books", list_books, name="list_books"),
    Route("POST", "/books", create_book, name="create_book", status_code=201),
    Route("GET", "/books/{book_id}", get_book, name="get_book"),
    Route("PUT", "/books/{book_id}", put_book, name="put_book"),
    Route("PATCH", "/books/{book_id}", patch_book, name="patch_book"),
    Route(
        "DELETE",
        "/books/{book_id}",
        delete_book,
        name="delete_book",
        status_code=204,
        response_class=Response,
    ),
)

router = build_router(BOOK_ROUTES, tags=["books"])
