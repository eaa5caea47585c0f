"""Tests for the demonstration routes and the unmatched route fallback."""

import time

import pytest
from fastapi.testclient import TestClient

from src.bookshelf.api.http.routers.demo import FILE_HTML


class TestTextRoutes:
    def test_hello(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.text == "Hello, World!"
        assert response.headers["content-type"].startswith("text/plain")

    def test_status(self, client: TestClient):
        assert client.get("/status").text == "OK"

    def test_epoch_is_current_time(self, client: TestClient):
        before = int(time.time())

        value = int(client.get("/epoch").text)

        assert before <= value <= int(time.time())

    def test_uptime_is_non_negative(self, client: TestClient):
        assert int(client.get("/uptime").text) >= 0

    def test_count_increments_per_request(self, client: TestClient):
        assert [client.get("/count").text for _ in range(3)] == ["1", "2", "3"]

    def test_request_uri_without_query(self, client: TestClient):
        assert client.get("/request-uri").text == "The URI is: /request-uri"

    def test_request_uri(self, client: TestClient):
        response = client.get("/request-uri?x=1")

        assert response.text == "The URI is: /request-uri?x=1"


class TestDemoDocuments:
    def test_demo_html(self, client: TestClient):
        response = client.get("/demo.html")

        assert response.text == "<h1>Hello</h1>"
        assert response.headers["content-type"].startswith("text/html")

    def test_string_html(self, client: TestClient):
        response = client.get("/string.html")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "<h1>Headline</h1>" in response.text

    def test_file_html_is_served_from_package(self, client: TestClient):
        response = client.get("/file.html")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.text == FILE_HTML
        assert "<h1>Bookshelf</h1>" in response.text

    def test_demo_png(self, client: TestClient):
        response = client.get("/demo.png")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG\r\n\x1a\n")

    def test_demo_css(self, client: TestClient):
        response = client.get("/demo-css")

        assert response.headers["content-type"].startswith("text/css")
        assert response.text == "b: { font-color: red; }\ni: { font-color: blue; }\n"

    def test_demo_csv(self, client: TestClient):
        response = client.get("/demo-csv")

        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.splitlines() == [
            "alpha,bravo,charlie",
            "delta,echo,foxtrot",
        ]

    def test_get_demo_json(self, client: TestClient):
        response = client.get("/demo.json")

        assert response.json() == {"a": "b"}

    def test_put_demo_json_echoes_payload(self, client: TestClient):
        response = client.put("/demo.json", json={"x": 1})

        assert response.text == "Put demo JSON data: {'x': 1}"

    def test_put_demo_json_invalid(self, client: TestClient):
        response = client.put(
            "/demo.json",
            content=b"nope",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


class TestVerbs:
    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "POST", "DELETE"])
    def test_foo_answers_every_verb(self, client: TestClient, method: str):
        response = client.request(method, "/foo")

        assert response.status_code == 200
        assert response.text == f"{method} foo"

    def test_foo_rejects_other_verbs(self, client: TestClient):
        assert client.request("OPTIONS", "/foo").status_code == 405


class TestExtractors:
    def test_items_query_params(self, client: TestClient):
        response = client.get("/items", params={"a": "1", "b": "2"})

        assert response.text == "Get items with query params: {'a': '1', 'b': '2'}"

    def test_item_path_id(self, client: TestClient):
        assert client.get("/items/abc").text == "Get items with path id: 'abc'"


class TestFallback:
    def test_unmatched_route(self, client: TestClient):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.text == "No route for /nope"

    def test_unmatched_nested_route(self, client: TestClient):
        response = client.get("/books/1/chapters")

        assert response.status_code == 404
        assert response.text == "No route for /books/1/chapters"

    def test_unmatched_route_keeps_query(self, client: TestClient):
        response = client.get("/nope?x=1")

        assert response.status_code == 404
        assert response.text == "No route for /nope?x=1"
