"""CLI interface for Dirview."""

import logging
import sys
from pathlib import Path

import click

from dirview.config import Config
from dirview.core.paths import PATH_STYLES


@click.group()
def cli() -> None:
    """Dirview - browse a directory tree from your browser."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover dirview.toml)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--root",
    "-r",
    type=click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path),
    default=None,
    help="Directory to serve; requests outside it are rejected (overrides config)",
)
@click.option(
    "--path-style",
    type=click.Choice(PATH_STYLES),
    default=None,
    help="Native path syntax (overrides config, default: auto)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def serve(
    config_path: Path | None,
    host: str | None,
    port: int | None,
    root: Path | None,
    path_style: str | None,
    verbose: bool,
) -> None:
    """Start the directory browser server."""
    from dirview.server import run_server

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.load(config_path)
    except ValueError as e:
        click.echo(click.style(f"Error: invalid configuration: {e}", fg="red"), err=True)
        sys.exit(1)

    config = config.with_overrides(
        host=host,
        port=port,
        root=root,
        path_style=path_style,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    if config.browse.root is not None:
        click.echo(f"Serving: {config.browse.root}")
    else:
        click.echo("Serving: entire filesystem (no root configured)")
    click.echo(f"Path style: {config.browse.path_style}")

    run_server(config)


if __name__ == "__main__":
    cli()
