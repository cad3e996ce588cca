"""
UCP store CLI entry point.

Usage:
    ucp-store [OPTIONS] COMMAND [ARGS]...
"""
from __future__ import annotations

import click

from ..config import load_settings
from ..logging import configure_logging
from .commands import agent, serve


@click.group()
@click.version_option(package_name="ucp-store", message="%(prog)s %(version)s")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose: bool):
    """UCP store - serve an AI-ready store or shop at one as an agent."""
    ctx.ensure_object(dict)

    settings = load_settings()
    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_json,
    )

    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose


# Register commands
cli.add_command(serve.serve)
cli.add_command(agent.discover)
cli.add_command(agent.products)
cli.add_command(agent.demo)


if __name__ == "__main__":
    cli()
