"""Declarative route tables.

Routers are described as tuples of :class:`Route` entries (method + path ->
endpoint) and turned into an ``APIRouter`` by :func:`build_router`. Entries
are registered in table order, so a literal path must come before a
parameterized path that would also match it.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from fastapi import APIRouter
from starlette.responses import Response


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    endpoint: Callable[..., Any]
    name: str
    status_code: int = 200
    response_class: type[Response] | None = None
    response_model: Any = None
    summary: str | None = None
    tags: list[str] = field(default_factory=list)


def build_router(routes: Iterable[Route], **router_kwargs: Any) -> APIRouter:
    """Create an ``APIRouter`` with one API route per table entry."""
    router = APIRouter(**router_kwargs)
    for route in routes:
        extra: dict[str, Any] = {}
        if route.response_class is not None:
            extra["response_class"] = route.response_class
        router.add_api_route(
            route.path,
            route.endpoint,
            methods=[route.method],
            name=route.name,
            status_code=route.status_code,
            response_model=route.response_model,
            summary=route.summary,
            tags=list(route.tags) or None,
            **extra,
        )
    return router
