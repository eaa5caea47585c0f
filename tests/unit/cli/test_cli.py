"""Unit tests for the command line interface."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from src.cli import app as cli_app
from src.cli import book_commands, server_commands

runner = CliRunner()


@pytest.fixture
def service(monkeypatch, test_app: FastAPI) -> FastAPI:
    """Route the book commands to an in-process app instead of the network."""
    monkeypatch.setattr(
        book_commands, "_client", lambda base_url: TestClient(test_app)
    )
    return test_app


class TestBookCommands:
    def test_list(self, service: FastAPI):
        result = runner.invoke(cli_app, ["books", "list"])

        assert result.exit_code == 0
        assert "Antigone" in result.output
        assert "Toni Morrison" in result.output

    def test_add(self, service: FastAPI):
        result = runner.invoke(cli_app, ["books", "add", "Emma", "Jane Austen"])

        assert result.exit_code == 0
        assert "Created book 4" in result.output
        assert service.state.book_store.get(4).title == "Emma"

    def test_remove(self, service: FastAPI):
        result = runner.invoke(cli_app, ["books", "remove", "2"])

        assert result.exit_code == 0
        assert service.state.book_store.get(2) is None

    def test_remove_missing_book_fails(self, service: FastAPI):
        result = runner.invoke(cli_app, ["books", "remove", "99"])

        assert result.exit_code == 1
        assert "Book id 99 not found" in result.output


class TestServerCommands:
    def test_serve_uses_config_defaults(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            server_commands.uvicorn,
            "run",
            lambda *args, **kwargs: calls.append((args, kwargs)),
        )

        result = runner.invoke(cli_app, ["serve", "--port", "3100"])

        assert result.exit_code == 0
        args, kwargs = calls[0]
        assert args == (server_commands.APP_PATH,)
        assert kwargs["port"] == 3100
        assert kwargs["reload"] is False

    def test_config_show(self):
        result = runner.invoke(cli_app, ["config", "show"])

        assert result.exit_code == 0
        assert '"bookshelf"' in result.output
        assert "lock_timeout_seconds" in result.output
