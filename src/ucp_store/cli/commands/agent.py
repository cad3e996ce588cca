"""Agent-side commands: talk to a running store the way an AI agent would."""
from __future__ import annotations

import json

import click
import httpx
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...client import StoreAPIError, UCPStoreClient
from ...money import format_minor

console = Console()

url_option = click.option(
    "--url",
    envvar="UCP_STORE_URL",
    default=None,
    help="Store base URL (default: the configured public URL)",
)


def _store_url(ctx: click.Context, url: str | None) -> str:
    return url or ctx.obj["settings"].endpoint


def _products_table(products: list[dict]) -> Table:
    table = Table(title="Available Products")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Price", justify="right", style="green")
    for product in products:
        table.add_row(
            product["id"],
            product["title"],
            f"{format_minor(product['price'], product['currency'])} {product['currency']}",
        )
    return table


@click.command()
@url_option
@click.pass_context
def discover(ctx, url: str | None):
    """Print a store's UCP discovery document."""
    with UCPStoreClient(_store_url(ctx, url)) as client:
        try:
            document = client.discover()
        except (StoreAPIError, httpx.HTTPError) as e:
            console.print(f"[red]Failed to discover store: {e}[/red]")
            ctx.exit(1)
    console.print_json(json.dumps(document))


@click.command()
@url_option
@click.pass_context
def products(ctx, url: str | None):
    """List a store's available products."""
    with UCPStoreClient(_store_url(ctx, url)) as client:
        try:
            data = client.list_products()
        except (StoreAPIError, httpx.HTTPError) as e:
            console.print(f"[red]Failed to browse products: {e}[/red]")
            ctx.exit(1)
    console.print(_products_table(data["products"]))
    console.print(f"Found [bold]{data['total']}[/bold] products")


@click.command()
@url_option
@click.option("--product", "product_id", default="prod_coffee_latte", show_default=True,
              help="Product to buy")
@click.option("--quantity", type=click.IntRange(min=1), default=2, show_default=True)
@click.pass_context
def demo(ctx, url: str | None, product_id: str, quantity: int):
    """Run a scripted shopping agent: discover, browse, check out, pay."""
    store_url = _store_url(ctx, url)
    console.print(Panel(
        "[bold blue]AI Agent Test - Shopping at UCP Store[/bold blue]\n\n"
        f"Store: [cyan]{store_url}[/cyan]",
        border_style="blue",
    ))

    with UCPStoreClient(store_url) as client:
        try:
            console.print("\n[bold]Step 1: Discover the store[/bold]")
            document = client.discover()
            console.print("[green]✓ Store discovered[/green]")
            console.print_json(json.dumps(document))

            console.print("\n[bold]Step 2: Browse products[/bold]")
            data = client.list_products()
            console.print(_products_table(data["products"]))

            console.print(f"\n[bold]Step 3: Check out {quantity}x {product_id}[/bold]")
            session = client.create_checkout([(product_id, quantity)])
            total = session["total"]
            console.print(f"[green]✓ Checkout created: {session['id']}[/green]")
            console.print(
                f"[yellow]Total: {format_minor(int(total['amount']), total['currency'])} "
                f"{total['currency']}[/yellow]"
            )

            console.print("\n[bold]Step 4: Complete payment[/bold]")
            result = client.complete_checkout(session["id"])
            console.print(f"[green]✓ {result['message']}[/green]")
        except StoreAPIError as e:
            console.print(f"[red]✗ Store rejected the request: {e}[/red]")
            ctx.exit(1)
        except httpx.HTTPError as e:
            console.print(f"[red]✗ Could not reach the store: {e}[/red]")
            ctx.exit(1)

    console.print(Panel("[bold green]Shopping flow completed![/bold green]", border_style="green"))
