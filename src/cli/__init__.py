"""Main CLI application module."""

import typer

from .book_commands import books_app
from .server_commands import config_app, serve

app = typer.Typer(
    help="📚 Bookshelf CLI - run the book service and talk to it",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.add_typer(books_app, name="books")
app.add_typer(config_app, name="config")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
