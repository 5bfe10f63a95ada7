"""Extract the reduced corpus (RC) from a source corpus.

Examples
--------
  phraseset reduce --corpus subtitles.txt --charset-name Croatian-28 --words 2,3
  phraseset reduce --corpus corpus.txt --charset charset.txt --output rc.txt
"""

from __future__ import annotations

from pathlib import Path

import click

from phraseset.commands.common import DEFAULT_WORDS, charset_options, parse_word_counts, resolve_charset
from phraseset.config import Config
from phraseset.errors import PhraseSetError
from phraseset.pipeline import reduce_only


@click.command(name="reduce")
@click.option(
    "corpus",
    "--corpus",
    type=click.Path(path_type=Path),
    required=True,
    help="Source corpus: one sentence per line",
)
@charset_options
@click.option(
    "words",
    "--words",
    type=str,
    default=DEFAULT_WORDS,
    show_default=True,
    help="Accepted word counts per sentence, comma-separated",
)
@click.option(
    "output",
    "--output",
    type=click.Path(path_type=Path),
    default=Config.OUTPUT_DIR / Config.REDUCED_CORPUS_FILE,
    show_default=True,
    help="Reduced corpus output file",
)
def reduce(
    corpus: Path,
    charset_path: Path | None,
    charset_name: str | None,
    words: str,
    output: Path,
) -> None:
    """Normalize the corpus and keep unique charset-clean sentences."""

    try:
        charset = resolve_charset(charset_path, charset_name)
        word_counts = parse_word_counts(words)
        reduced = reduce_only(corpus, charset, word_counts, output)
        if len(reduced) == 0:
            click.secho("Warning: no sentence matched the charset and word counts.", fg="yellow")
        click.secho(f"OK: {len(reduced)} sentences -> {output}", fg="green")
    except click.ClickException:
        raise
    except PhraseSetError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
