"""Command-line interface for phraseset using Click command groups."""

from __future__ import annotations

from typing import NoReturn
import logging

import click

from phraseset import __version__


LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True, help="Log progress (-v info, -vv debug)")
def cli(verbose: int) -> None:
    """phraseset: sample statistically representative phrase sets from text corpora."""

    if verbose:
        level = logging.DEBUG if verbose > 1 else logging.INFO
        logging.basicConfig(level=level, format=LOG_FORMAT)


# Register subcommands
from phraseset.commands.reduce import reduce  # noqa: E402
from phraseset.commands.stats import stats  # noqa: E402
from phraseset.commands.compete import compete  # noqa: E402
from phraseset.commands.evolve import evolve  # noqa: E402
from phraseset.commands.verify import verify  # noqa: E402

cli.add_command(reduce)
cli.add_command(stats)
cli.add_command(compete)
cli.add_command(evolve)
cli.add_command(verify)


def main() -> NoReturn:
    """Entry point for the CLI."""
    cli()
