"""Book commands that talk to a running service over HTTP."""

import httpx
import typer
from rich.table import Table

from src.bookshelf.runtime.context import get_config

from .utils import console

books_app = typer.Typer(help="📖 Book commands against a running service")


def _client(base_url: str) -> httpx.Client:
    return httpx.Client(base_url=base_url, timeout=10.0)


def _base_url(url: str | None) -> str:
    return url or get_config().app.base_url


def _fail(response: httpx.Response) -> None:
    try:
        detail = response.json().get("detail", response.text)
    except ValueError:
        detail = response.text
    console.print(f"[red]❌ {response.status_code}: {detail}[/red]")
    raise typer.Exit(1)


@books_app.command(name="list")
def list_books(
    url: str | None = typer.Option(None, help="Service base URL"),
) -> None:
    """List all books ordered by title."""
    with _client(_base_url(url)) as client:
        response = client.get("/books")
    if response.status_code != 200:
        _fail(response)

    table = Table(title="Books")
    table.add_column("Id", justify="right", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Author")
    for book in response.json():
        table.add_row(str(book["id"]), book["title"], book["author"])
    console.print(table)


@books_app.command(name="add")
def add_book(
    title: str = typer.Argument(..., help="Book title"),
    author: str = typer.Argument(..., help="Book author"),
    url: str | None = typer.Option(None, help="Service base URL"),
) -> None:
    """Create a book and print the id it was given."""
    with _client(_base_url(url)) as client:
        response = client.post("/books", json={"title": title, "author": author})
    if response.status_code != 201:
        _fail(response)
    book = response.json()
    console.print(f"[green]✅ Created book {book['id']}: {title} by {author}[/green]")


@books_app.command(name="remove")
def remove_book(
    book_id: int = typer.Argument(..., help="Book id"),
    url: str | None = typer.Option(None, help="Service base URL"),
) -> None:
    """Delete a book."""
    with _client(_base_url(url)) as client:
        response = client.delete(f"/books/{book_id}")
    if response.status_code != 204:
        _fail(response)
    console.print(f"[green]✅ Deleted book {book_id}[/green]")
