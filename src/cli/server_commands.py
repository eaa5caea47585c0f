"""Commands that run the service and inspect its configuration."""

import typer
import uvicorn
from rich.panel import Panel
from rich.syntax import Syntax

from src.bookshelf.runtime.context import get_config

from .utils import console

config_app = typer.Typer(help="⚙️  Configuration commands")

APP_PATH = "src.bookshelf.api.http.app:app"


def serve(
    host: str | None = typer.Option(None, help="Host to bind (default: config)"),
    port: int | None = typer.Option(None, help="Port to bind (default: config)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """
    🚀 Start the book service.

    Ctrl+C (SIGINT) or SIGTERM stop the server gracefully: in-flight
    requests finish before the process exits.
    """
    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Starting {config.app.name}[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Listening on:[/blue] http://{bind_host}:{bind_port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        APP_PATH,
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,  # We handle access logging in middleware
    )


@config_app.command(name="show")
def show_config() -> None:
    """Print the effective configuration as JSON."""
    payload = get_config().model_dump_json(indent=2)
    console.print(Syntax(payload, "json", theme="ansi_dark"))
