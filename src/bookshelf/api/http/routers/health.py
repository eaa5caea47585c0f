"""Liveness and readiness probes."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.bookshelf.api.http.deps import get_book_store
from src.bookshelf.core.errors import StoreUnavailableError
from src.bookshelf.core.storage import BookStore
from src.bookshelf.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness: answers while the process is up, without touching the store."""
    return {"status": "healthy", "service": get_config().app.name}


@router.get("/ready", response_model=None)
def readiness(
    store: BookStore = Depends(get_book_store),
) -> dict[str, Any] | JSONResponse:
    """Readiness check - returns 503 when the book store is unusable."""
    checks: dict[str, Any] = {}
    healthy = False
    if not store.is_available():
        checks["store"] = {"status": "unhealthy", "error": "poisoned by a failed update"}
    else:
        try:
            checks["store"] = {"status": "healthy", "books": store.count()}
            healthy = True
        except StoreUnavailableError as e:
            checks["store"] = {"status": "unhealthy", "error": e.message}

    body = {"status": "ready" if healthy else "not_ready", "checks": checks}
    if not healthy:
        return JSONResponse(status_code=503, content=body)
    return body
