"""Brute-force phrase-set sampling by competition among random candidates.

Examples
--------
  phraseset compete --corpus corpus.txt --charset charset.txt --trials 200 --phrases 200 --words 2,3
  phraseset compete --letters out/letters_sc.csv --digrams out/digrams_sc.csv \
      --reduced out/reduced_corpus.txt --charset charset.txt --trials 1000
"""

from __future__ import annotations

from pathlib import Path

import click
import numpy as np

from phraseset.commands.common import DEFAULT_WORDS, charset_options, parse_word_counts, resolve_charset
from phraseset.config import Config
from phraseset.corpus import chars_per_word
from phraseset.errors import PhraseSetError
from phraseset.pipeline import SamplingOutputs, sample_from_scratch, sample_with_known_distribution


@click.command(name="compete")
@click.option(
    "corpus",
    "--corpus",
    type=click.Path(path_type=Path),
    default=None,
    help="Source corpus; statistics and reduced corpus are computed from scratch",
)
@click.option(
    "letters",
    "--letters",
    type=click.Path(path_type=Path),
    default=None,
    help="Known source corpus letter distribution CSV",
)
@click.option(
    "digrams",
    "--digrams",
    type=click.Path(path_type=Path),
    default=None,
    help="Known source corpus digram distribution CSV",
)
@click.option(
    "reduced",
    "--reduced",
    type=click.Path(path_type=Path),
    default=None,
    help="Known reduced corpus file",
)
@charset_options
@click.option(
    "trials",
    "--trials",
    type=int,
    default=Config.DEFAULT_TRIALS,
    show_default=True,
    help="Number of random candidates",
)
@click.option(
    "phrases",
    "--phrases",
    type=int,
    default=Config.DEFAULT_PHRASE_NUM,
    show_default=True,
    help="Phrase-set size",
)
@click.option(
    "words",
    "--words",
    type=str,
    default=DEFAULT_WORDS,
    show_default=True,
    help="Accepted word counts per sentence (with --corpus)",
)
@click.option(
    "seed",
    "--seed",
    type=int,
    default=Config.RANDOM_SEED,
    show_default=True,
    help="Random seed",
)
@click.option(
    "output_dir",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Config.OUTPUT_DIR,
    show_default=True,
    help="Directory for all outputs",
)
@click.option("no_progress", "--no-progress", is_flag=True, help="Hide the progress bar")
def compete(
    corpus: Path | None,
    letters: Path | None,
    digrams: Path | None,
    reduced: Path | None,
    charset_path: Path | None,
    charset_name: str | None,
    trials: int,
    phrases: int,
    words: str,
    seed: int,
    output_dir: Path,
    no_progress: bool,
) -> None:
    """Pick the lowest-KLD phrase set among random trials."""

    try:
        known = (letters, digrams, reduced)
        if corpus is not None and any(p is not None for p in known):
            raise click.ClickException("--corpus cannot be combined with --letters/--digrams/--reduced")
        if corpus is None and any(p is None for p in known):
            raise click.ClickException("Provide --corpus, or all of --letters, --digrams and --reduced")
        if trials < 1:
            raise click.ClickException("--trials must be >= 1")
        if phrases < 1:
            raise click.ClickException("--phrases must be >= 1")

        charset = resolve_charset(charset_path, charset_name)
        outputs = SamplingOutputs.in_dir(output_dir)
        rng = np.random.default_rng(seed)

        if corpus is not None:
            click.echo(f"Sampling from scratch: {corpus} ({trials} trials, {phrases} phrases)...")
            result = sample_from_scratch(
                corpus,
                charset,
                trials=trials,
                phrase_num=phrases,
                word_counts=parse_word_counts(words),
                outputs=outputs,
                rng=rng,
                progress=not no_progress,
            )
        else:
            click.echo(f"Sampling with known distribution: {reduced} ({trials} trials, {phrases} phrases)...")
            result = sample_with_known_distribution(
                letters,  # type: ignore[arg-type]
                digrams,  # type: ignore[arg-type]
                reduced,  # type: ignore[arg-type]
                charset,
                trials=trials,
                phrase_num=phrases,
                outputs=outputs,
                rng=rng,
                progress=not no_progress,
            )

        click.echo(f"Best trial: {result.best_trial} | KLD: {result.kld:.9f}")
        click.echo(f"Characters per word: {chars_per_word(result.sentences):.2f}")
        click.secho(f"OK: phrase set -> {outputs.phrase_set}", fg="green")
    except click.ClickException:
        raise
    except PhraseSetError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
