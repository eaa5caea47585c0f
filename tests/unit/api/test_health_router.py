"""Tests for the health endpoints and request middleware."""

from fastapi.testclient import TestClient

from src.bookshelf.core.storage import BookStore


class TestHealth:
    def test_liveness(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_reports_book_count(self, client: TestClient):
        response = client.get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ready"
        assert body["checks"]["store"] == {"status": "healthy", "books": 3}

    def test_readiness_fails_when_store_is_poisoned(
        self, client: TestClient, book_store: BookStore
    ):
        book_store._poisoned = True

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"
        assert response.json()["checks"]["store"]["error"] == "poisoned by a failed update"

        book_store.reset()
        assert client.get("/health/ready").status_code == 200

    def test_readiness_fails_when_store_lock_is_held(
        self, client: TestClient, book_store: BookStore
    ):
        book_store._lock_timeout = 0.01
        book_store._lock.acquire()
        try:
            response = client.get("/health/ready")
        finally:
            book_store._lock.release()

        assert response.status_code == 503
        assert response.json()["checks"]["store"]["error"].startswith("Timed out")


class TestRequestMiddleware:
    def test_request_id_is_generated(self, client: TestClient):
        response = client.get("/status")

        assert response.headers["X-Request-ID"]

    def test_request_id_is_propagated(self, client: TestClient):
        response = client.get("/books/99", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert response.json()["request_id"] == "abc-123"

    def test_security_headers(self, client: TestClient):
        response = client.get("/")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
