"""HTML views of the book store: listings, single books and an edit form."""

from html import escape

from fastapi import Depends
from fastapi.responses import HTMLResponse

from src.bookshelf.api.http.deps import get_book_store, get_form_fields
from src.bookshelf.api.http.routers.books import BookId, ensure_matching_id
from src.bookshelf.api.http.routing import Route, build_router
from src.bookshelf.core.codec import (
    decode_change,
    decode_draft,
    render_book_form,
    render_book_html,
    render_books_html,
    render_books_table,
)
from src.bookshelf.core.errors import BookNotFoundError
from src.bookshelf.core.storage import BookStore


def books_page(store: BookStore = Depends(get_book_store)) -> str:
    return render_books_html(store.list())


def books_table_page(store: BookStore = Depends(get_book_store)) -> str:
    return render_books_table(store.list())


def book_page(
    book_id: BookId, store: BookStore = Depends(get_book_store)
) -> HTMLResponse:
    """One book, or the not-found paragraph with a 404."""
    book = store.get(book_id)
    return HTMLResponse(
        render_book_html(book, book_id),
        status_code=200 if book is not None else 404,
    )


def book_form_page(
    book_id: BookId, store: BookStore = Depends(get_book_store)
) -> str:
    """Edit form pre-filled with the book's current fields."""
    book = store.get(book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return render_book_form(book)


def submit_book_form(
    book_id: BookId,
    form: dict[str, str] = Depends(get_form_fields),
    store: BookStore = Depends(get_book_store),
) -> str:
    """Apply a submitted edit form as a partial update."""
    change = decode_change(form)
    ensure_matching_id(change, book_id)
    book = store.patch(book_id, change)
    return f"Post book: {escape(str(book))}"


def submit_new_book_form(
    form: dict[str, str] = Depends(get_form_fields),
    store: BookStore = Depends(get_book_store),
) -> str:
    book = store.create(decode_draft(form))
    return f"Created book: {escape(str(book))}"


HTML_ROUTES: tuple[Route, ...] = (
    Route("GET", "/books", books_page, name="books_page"),
    Route(
        "POST",
        "/books",
        submit_new_book_form,
        name="submit_new_book_form",
        status_code=201,
    ),
    Route("GET", "/books/table", books_table_page, name="books_table_page"),
    Route("GET", "/books/{book_id}", book_page, name="book_page"),
    Route("GET", "/books/{book_id}/form", book_form_page, name="book_form_page"),
    Route("POST", "/books/{book_id}/form", submit_book_form, name="submit_book_form"),
)

router = build_router(
    HTML_ROUTES,
    prefix="/html",
    tags=["books-html"],
    default_response_class=HTMLResponse,
)
