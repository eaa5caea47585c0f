"""Global exception handlers for the book service.

Invariants:
    - BookNotFoundError -> 404, logged at debug level only
    - BookDecodeError / RequestValidationError -> 400 with field details
    - StoreUnavailableError -> 503
    - An unmatched route -> 404 plain text "No route for {path}"
    - Routes under /html/ get HTML bodies, everything else JSON
"""

from html import escape

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from src.bookshelf.api.http.deps import request_target
from src.bookshelf.core.codec.book_codec import describe_field_errors
from src.bookshelf.core.errors import (
    BookDecodeError,
    BookNotFoundError,
    BookshelfError,
)

HTML_PREFIX = "/html/"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(BookshelfError, bookshelf_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _wants_html(request: Request) -> bool:
    return request.url.path.startswith(HTML_PREFIX)


def _error_response(
    request: Request, status_code: int, body: dict, headers: dict | None = None
) -> Response:
    if _wants_html(request):
        return HTMLResponse(
            f"<p>{escape(body['detail'])}</p>",
            status_code=status_code,
            headers=headers,
        )
    body = {**body, "request_id": _request_id(request)}
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def bookshelf_error_handler(request: Request, exc: BookshelfError) -> Response:
    if isinstance(exc, BookNotFoundError):
        logger.bind(book_id=exc.book_id).debug("request.not_found")
    elif isinstance(exc, BookDecodeError):
        logger.bind(fields=exc.fields).info("request.decode_error")
    else:
        logger.bind(error_code=exc.code, path=request.url.path).error(
            "request.{}", exc.code.lower()
        )
    return _error_response(request, exc.http_status, exc.to_response())


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    fields = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.bind(fields=fields).info("request.validation_error")
    body = {
        "detail": describe_field_errors(fields),
        "code": BookDecodeError.code,
        "fields": fields,
    }
    return _error_response(request, status.HTTP_400_BAD_REQUEST, body)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return PlainTextResponse(
            f"No route for {request_target(request)}", status_code=exc.status_code
        )
    return _error_response(
        request,
        exc.status_code,
        {"detail": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )
