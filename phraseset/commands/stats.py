"""Compute the letter/digram distribution of a source corpus.

Examples
--------
  phraseset stats --corpus corpus.txt --charset charset.txt
  phraseset stats --corpus corpus.txt --charset-name English-27 --reduce --words 4,5
"""

from __future__ import annotations

from pathlib import Path

import click

from phraseset.commands.common import DEFAULT_WORDS, charset_options, parse_word_counts, resolve_charset
from phraseset.config import Config
from phraseset.errors import PhraseSetError
from phraseset.pipeline import SamplingOutputs, corpus_statistics


@click.command(name="stats")
@click.option(
    "corpus",
    "--corpus",
    type=click.Path(path_type=Path),
    required=True,
    help="Source corpus: one sentence per line",
)
@charset_options
@click.option(
    "reduce_flag",
    "--reduce",
    is_flag=True,
    help="Also extract the reduced corpus in the same pass",
)
@click.option(
    "words",
    "--words",
    type=str,
    default=DEFAULT_WORDS,
    show_default=True,
    help="Accepted word counts per sentence (with --reduce)",
)
@click.option(
    "output_dir",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Config.OUTPUT_DIR,
    show_default=True,
    help="Directory for the distribution CSVs (and reduced corpus)",
)
def stats(
    corpus: Path,
    charset_path: Path | None,
    charset_name: str | None,
    reduce_flag: bool,
    words: str,
    output_dir: Path,
) -> None:
    """Write letter and digram distribution CSVs for the source corpus."""

    try:
        charset = resolve_charset(charset_path, charset_name)
        outputs = SamplingOutputs.in_dir(output_dir)
        word_counts = parse_word_counts(words) if reduce_flag else None
        distribution, reduced = corpus_statistics(
            corpus,
            charset,
            outputs.sc_letters,
            outputs.sc_digrams,
            word_counts=word_counts,
            reduced_out=outputs.reduced_corpus if reduce_flag else None,
        )
        click.echo(f"Letters: {distribution.letters_total} | Digrams: {distribution.digrams_total}")
        if reduced is not None and len(reduced) == 0:
            click.secho("Warning: no sentence matched the charset and word counts.", fg="yellow")
        elif reduced is not None:
            click.echo(f"Reduced corpus: {len(reduced)} sentences -> {outputs.reduced_corpus}")
        click.secho(f"OK: {outputs.sc_letters}, {outputs.sc_digrams}", fg="green")
    except click.ClickException:
        raise
    except PhraseSetError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
