"""Error hierarchy for the book service.

Invariants:
    - NotFound is an expected outcome; it carries the requested id and is
      never logged as an error
    - StoreUnavailable means the store itself is unusable, distinct from
      "no such book"
    - Decode failures name the offending fields
"""

from typing import Any


def not_found_message(book_id: int) -> str:
    return f"Book id {book_id} not found"


class BookshelfError(Exception):
    """Base exception for all book service errors."""

    http_status: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, Any]:
        """Convert to the REST error body."""
        return {"detail": self.message, "code": self.code}


class BookNotFoundError(BookshelfError):
    """The requested book id does not exist."""

    http_status = 404
    code = "BOOK_NOT_FOUND"

    def __init__(self, book_id: int):
        super().__init__(not_found_message(book_id))
        self.book_id = book_id


class StoreUnavailableError(BookshelfError):
    """Exclusive access to the book store could not be obtained."""

    http_status = 503
    code = "STORE_UNAVAILABLE"


class BookDecodeError(BookshelfError):
    """External input could not be decoded into a book."""

    http_status = 400
    code = "BOOK_DECODE_ERROR"

    def __init__(self, message: str, fields: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.fields = fields or []

    def to_response(self) -> dict[str, Any]:
        body = super().to_response()
        body["fields"] = self.fields
        return body
