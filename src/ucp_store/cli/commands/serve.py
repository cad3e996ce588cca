"""Run the store server."""
from __future__ import annotations

import click
import uvicorn
from rich.console import Console
from rich.panel import Panel

from ...api.main import create_app
from ...config import StoreSettings

console = Console()


def _banner(settings: StoreSettings, available: int) -> Panel:
    url = settings.endpoint
    return Panel(
        f"[green]Server running on:[/green] [cyan]{url}[/cyan]\n"
        f"[green]Discovery URL:[/green] [cyan]{url}/.well-known/ucp[/cyan]\n"
        f"[green]Products available:[/green] {available}\n\n"
        "[bold]Quick test commands:[/bold]\n"
        f"  curl {url}/.well-known/ucp\n"
        f"  curl {url}/products\n"
        "  ucp-store demo",
        title="[bold blue]UCP Store Server[/bold blue]",
        border_style="blue",
    )


@click.command()
@click.option("--host", default=None, help="Interface to bind (default from UCP_STORE_HOST)")
@click.option("--port", type=int, default=None, help="Port to listen on (default from UCP_STORE_PORT)")
@click.option("--catalog", "catalog_path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="JSON catalog file (default: built-in demo catalog)")
@click.pass_context
def serve(ctx, host: str | None, port: int | None, catalog_path: str | None):
    """Serve the store over HTTP."""
    settings: StoreSettings = ctx.obj["settings"]

    overrides = {}
    if host:
        overrides["host"] = host
    if port:
        overrides["port"] = port
    if catalog_path:
        overrides["catalog_path"] = catalog_path
    if overrides:
        settings = settings.model_copy(update=overrides)

    app = create_app(settings)
    console.print(_banner(settings, len(app.state.engine.list_available())))

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
