"""Book codec: decoding wire data and rendering book views."""

from .book_codec import (
    book_lines,
    decode_book,
    decode_change,
    decode_draft,
    html_table,
    not_found_message,
    render_book_form,
    render_book_html,
    render_books_html,
    render_books_table,
)

__all__ = [
    "book_lines",
    "decode_book",
    "decode_change",
    "decode_draft",
    "html_table",
    "not_found_message",
    "render_book_form",
    "render_book_html",
    "render_books_html",
    "render_books_table",
]
