# ABOUTME: CLI package for Bookprice, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from bookprice.cli.commands import fallback_cmd, search_cmd


def _configure_logging(verbosity: int) -> None:
    """Route library logging through rich; -v for INFO, -vv for DEBUG."""
    if verbosity <= 0:
        return
    level = logging.INFO if verbosity == 1 else logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


@click.group()
@click.version_option(package_name="bookprice")
@click.option("-v", "--verbose", count=True, help="Increase log output (-v, -vv).")
def cli(verbose: int) -> None:
    """Bookprice - compare book prices by title, author, or ISBN."""
    _configure_logging(verbose)


cli.add_command(search_cmd.search)
cli.add_command(fallback_cmd.fallback)
