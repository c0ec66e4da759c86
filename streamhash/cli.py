"""Command-line interface for streamhash using Click command groups."""

from __future__ import annotations

import logging
from typing import NoReturn

import click

from streamhash import __version__


@click.group()
@click.version_option(version=__version__)
@click.option("verbose", "-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """streamhash: chunked SHA-256 digests of large files."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from streamhash.commands.digest import digest  # noqa: E402

cli.add_command(digest)


def main() -> NoReturn:
    """Entry point for the CLI."""
    cli()
