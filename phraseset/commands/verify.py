"""Recompute the KLD of a written phrase set against the source distribution.

Used to cross-check the score reported in a trial or GA log.

Examples
--------
  phraseset verify --letters out/letters_sc.csv --digrams out/digrams_sc.csv \
      --phrase-set out/phrase_set.txt --charset charset.txt
"""

from __future__ import annotations

from pathlib import Path

import click

from phraseset.commands.common import charset_options, resolve_charset
from phraseset.errors import PhraseSetError
from phraseset.pipeline import verify_phrase_set


@click.command(name="verify")
@click.option(
    "letters",
    "--letters",
    type=click.Path(path_type=Path),
    required=True,
    help="Source corpus letter distribution CSV",
)
@click.option(
    "digrams",
    "--digrams",
    type=click.Path(path_type=Path),
    required=True,
    help="Source corpus digram distribution CSV",
)
@click.option(
    "phrase_set",
    "--phrase-set",
    type=click.Path(path_type=Path),
    required=True,
    help="Phrase set file to score",
)
@charset_options
def verify(
    letters: Path,
    digrams: Path,
    phrase_set: Path,
    charset_path: Path | None,
    charset_name: str | None,
) -> None:
    """Print the digram KLD between a phrase set and the source corpus."""

    try:
        charset = resolve_charset(charset_path, charset_name)
        kld = verify_phrase_set(letters, digrams, phrase_set, charset)
        click.echo(f"KLD: {kld}")
    except click.ClickException:
        raise
    except PhraseSetError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
