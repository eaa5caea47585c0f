"""FastAPI dependencies shared by the routers."""

import threading
from json import JSONDecodeError

from fastapi import Request

from src.bookshelf.core.errors import BookDecodeError
from src.bookshelf.core.storage import BookStore


class HitCounter:
    """Thread-safe counter of requests to the count route."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value


def request_target(request: Request) -> str:
    """Path plus query string, as the client sent it."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def get_book_store(request: Request) -> BookStore:
    """Return the store owned by the running application."""
    return request.app.state.book_store


def get_hit_counter(request: Request) -> HitCounter:
    return request.app.state.hit_counter


def get_started_at(request: Request) -> float:
    return request.app.state.started_at


async def get_form_fields(request: Request) -> dict[str, str]:
    """Read an url-encoded or multipart form body into a plain dict."""
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


async def get_json_body(request: Request) -> object:
    """Parse the request body as JSON.

    Raises:
        BookDecodeError: the body is not valid JSON.
    """
    try:
        return await request.json()
    except (JSONDecodeError, UnicodeDecodeError) as exc:
        raise BookDecodeError(
            "Invalid request body: not valid JSON",
            [{"field": "body", "message": str(exc), "type": "json_invalid"}],
        ) from exc
