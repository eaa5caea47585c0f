"""Small demonstration routes: plain text, status, clocks, extractors, media types."""

import base64
import time
from pathlib import Path
from typing import Any

from fastapi import Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from starlette.responses import Response

from src.bookshelf.api.http.deps import (
    HitCounter,
    get_hit_counter,
    get_json_body,
    get_started_at,
    request_target,
)
from src.bookshelf.api.http.routing import Route, build_router

PAGES_DIR = Path(__file__).resolve().parent.parent / "pages"

FILE_HTML = (PAGES_DIR / "file.html").read_text(encoding="utf-8")

STRING_HTML = "<html><body><h1>Headline</h1><p>Paragraph</b></body></html>"

# A 1x1 PNG
DEMO_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mPk+89QDwADvgGOSHzRgAAAAABJRU5ErkJggg=="
)

DEMO_CSS = "b: { font-color: red; }\ni: { font-color: blue; }\n"

DEMO_CSV = "alpha,bravo,charlie\ndelta,echo,foxtrot\n"


def hello() -> str:
    return "Hello, World!"


def string_html() -> str:
    return STRING_HTML


def file_html() -> str:
    return FILE_HTML


def status_text() -> str:
    return "OK"


def epoch() -> str:
    """Seconds since the Unix epoch."""
    return str(int(time.time()))


def uptime(started_at: float = Depends(get_started_at)) -> str:
    """Whole seconds since the application was created."""
    return str(int(time.monotonic() - started_at))


def count(counter: HitCounter = Depends(get_hit_counter)) -> str:
    return str(counter.increment())


def request_uri(request: Request) -> str:
    return f"The URI is: {request_target(request)}"


def demo_html() -> str:
    return "<h1>Hello</h1>"


def demo_png() -> Response:
    return Response(content=DEMO_PNG, media_type="image/png")


def demo_css() -> Response:
    return Response(content=DEMO_CSS, media_type="text/css")


def demo_csv() -> Response:
    return Response(content=DEMO_CSV, media_type="text/csv")


def get_demo_json() -> dict[str, str]:
    return {"a": "b"}


def put_demo_json(payload: Any = Depends(get_json_body)) -> str:
    return f"Put demo JSON data: {payload!r}"


def get_foo() -> str:
    return "GET foo"


def put_foo() -> str:
    return "PUT foo"


def patch_foo() -> str:
    return "PATCH foo"


def post_foo() -> str:
    return "POST foo"


def delete_foo() -> str:
    return "DELETE foo"


def get_items(request: Request) -> str:
    return f"Get items with query params: {dict(request.query_params)!r}"


def get_item(item_id: str) -> str:
    return f"Get items with path id: {item_id!r}"


DEMO_ROUTES: tuple[Route, ...] = (
    Route("GET", "/", hello, name="hello"),
    Route(
        "GET",
        "/string.html",
        string_html,
        name="string_html",
        response_class=HTMLResponse,
    ),
    Route(
        "GET", "/file.html", file_html, name="file_html", response_class=HTMLResponse
    ),
    Route("GET", "/status", status_text, name="status"),
    Route("GET", "/epoch", epoch, name="epoch"),
    Route("GET", "/uptime", uptime, name="uptime"),
    Route("GET", "/count", count, name="count"),
    Route("GET", "/request-uri", request_uri, name="request_uri"),
    Route("GET", "/demo.html", demo_html, name="demo_html", response_class=HTMLResponse),
    Route("GET", "/demo.png", demo_png, name="demo_png"),
    Route("GET", "/demo-css", demo_css, name="demo_css"),
    Route("GET", "/demo-csv", demo_csv, name="demo_csv"),
    Route(
        "GET",
        "/demo.json",
        get_demo_json,
        name="get_demo_json",
        response_class=JSONResponse,
    ),
    Route("PUT", "/demo.json", put_demo_json, name="put_demo_json"),
    Route("GET", "/foo", get_foo, name="get_foo"),
    Route("PUT", "/foo", put_foo, name="put_foo"),
    Route("PATCH", "/foo", patch_foo, name="patch_foo"),
    Route("POST", "/foo", post_foo, name="post_foo"),
    Route("DELETE", "/foo", delete_foo, name="delete_foo"),
    Route("GET", "/items", get_items, name="get_items"),
    Route("GET", "/items/{item_id}", get_item, name="get_item"),
)

router = build_router(
    DEMO_ROUTES,
    tags=["demo"],
    default_response_class=PlainTextResponse,
)
