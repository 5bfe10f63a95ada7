"""Genetic-algorithm phrase-set sampling.

Examples
--------
  phraseset evolve --letters out/letters_sc.csv --digrams out/digrams_sc.csv \
      --reduced out/reduced_corpus.txt --charset charset.txt
  phraseset evolve ... --population 100 --generations 50 --mutation 0.3 --genes 10
"""

from __future__ import annotations

from pathlib import Path

import click
import numpy as np

from phraseset.commands.common import charset_options, resolve_charset
from phraseset.config import Config, GeneticConfig
from phraseset.corpus import chars_per_word
from phraseset.errors import PhraseSetError
from phraseset.pipeline import SamplingOutputs, evolve_phrase_set


@click.command(name="evolve")
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
    "reduced",
    "--reduced",
    type=click.Path(path_type=Path),
    required=True,
    help="Reduced corpus file",
)
@charset_options
@click.option(
    "phrases",
    "--phrases",
    type=int,
    default=Config.DEFAULT_PHRASE_NUM,
    show_default=True,
    help="Phrase-set size (genes per chromosome)",
)
@click.option(
    "population",
    "--population",
    type=int,
    default=Config.GA_POPULATION_SIZE,
    show_default=True,
    help="Population size",
)
@click.option(
    "elitism",
    "--elitism/--no-elitism",
    default=Config.GA_ELITISM,
    show_default=True,
    help="Preserve the fittest chromosomes unchanged",
)
@click.option(
    "elite_pct",
    "--elite-percentage",
    type=int,
    default=Config.GA_ELITISM_PERCENTAGE,
    show_default=True,
    help="Share of the population kept as elite (%)",
)
@click.option(
    "crossover",
    "--crossover",
    type=float,
    default=Config.GA_CROSSOVER_PROBABILITY,
    show_default=True,
    help="Crossover probability",
)
@click.option(
    "mutation",
    "--mutation",
    type=float,
    default=Config.GA_MUTATION_PROBABILITY,
    show_default=True,
    help="Mutation probability per chromosome",
)
@click.option(
    "genes",
    "--genes",
    type=int,
    default=Config.GA_GENES_TO_CHANGE,
    show_default=True,
    help="Genes replaced by one mutation",
)
@click.option(
    "generations",
    "--generations",
    type=int,
    default=Config.GA_MAX_GENERATIONS,
    show_default=True,
    help="Stop once the generation counter exceeds this bound",
)
@click.option(
    "repair",
    "--repair-duplicates/--allow-duplicates",
    default=Config.GA_REPAIR_DUPLICATES,
    show_default=True,
    help="Replace duplicate genes produced by crossover",
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
def evolve(
    letters: Path,
    digrams: Path,
    reduced: Path,
    charset_path: Path | None,
    charset_name: str | None,
    phrases: int,
    population: int,
    elitism: bool,
    elite_pct: int,
    crossover: float,
    mutation: float,
    genes: int,
    generations: int,
    repair: bool,
    seed: int,
    output_dir: Path,
    no_progress: bool,
) -> None:
    """Evolve a phrase set whose digram profile matches the source corpus."""

    try:
        try:
            config = GeneticConfig(
                population_size=population,
                elitism=elitism,
                elitism_percentage=elite_pct,
                crossover_probability=crossover,
                mutation_probability=mutation,
                genes_to_change=genes,
                max_generations=generations,
                repair_duplicates=repair,
            )
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc

        charset = resolve_charset(charset_path, charset_name)
        outputs = SamplingOutputs.in_dir(output_dir)
        click.echo(f"Evolving {phrases}-phrase set: population {population}, {generations} generations...")
        result = evolve_phrase_set(
            letters,
            digrams,
            reduced,
            charset,
            phrase_num=phrases,
            config=config,
            outputs=outputs,
            rng=np.random.default_rng(seed),
            progress=not no_progress,
        )
        click.echo(f"Max fitness: {result.max_fitness}")
        click.echo(f"Min fitness: {result.min_fitness}")
        click.echo(f"Fittest chromosome fitness: {result.fitness}")
        click.echo(f"Fittest chromosome KLD: {result.kld}")
        click.echo(f"Characters per word: {chars_per_word(result.sentences):.2f}")
        click.secho(f"OK: phrase set -> {outputs.ga_phrase_set}", fg="green")
    except click.ClickException:
        raise
    except (PhraseSetError, ValueError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
