"""Centralized configuration for reproducible phrase-set sampling runs.

Defines immutable defaults for random seeds, output locations, brute-force
competition settings and genetic-algorithm hyperparameters so that the CLI
and library entry points share a single source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Config:
    """Immutable configuration defaults for the project."""

    # Random seeds
    RANDOM_SEED: int = 42

    # Reduction
    DEFAULT_WORD_COUNTS: tuple[int, ...] = (2, 3)

    # Brute-force competition
    DEFAULT_TRIALS: int = 200
    DEFAULT_PHRASE_NUM: int = 200

    # Genetic algorithm
    GA_POPULATION_SIZE: int = 500
    GA_ELITISM: bool = True
    GA_ELITISM_PERCENTAGE: int = 5
    GA_CROSSOVER_PROBABILITY: float = 0.8
    GA_MUTATION_PROBABILITY: float = 0.2
    GA_GENES_TO_CHANGE: int = 20
    GA_MAX_GENERATIONS: int = 200
    GA_REPAIR_DUPLICATES: bool = True
    GA_TOURNAMENT_SIZE: int = 3

    # Output formatting
    PROBABILITY_DECIMALS: int = 9
    MEAN_LETTERS_DECIMALS: int = 2

    # Output paths
    OUTPUT_DIR: Path = Path("output")
    REDUCED_CORPUS_FILE: str = "reduced_corpus.txt"
    PHRASE_SET_FILE: str = "phrase_set.txt"
    GA_PHRASE_SET_FILE: str = "phrase_set_ga.txt"
    SC_LETTERS_FILE: str = "letters_sc.csv"
    SC_DIGRAMS_FILE: str = "digrams_sc.csv"
    PS_LETTERS_FILE: str = "letters_ps.csv"
    PS_DIGRAMS_FILE: str = "digrams_ps.csv"
    TRIAL_LOG_FILE: str = "trial_log.csv"
    GA_LOG_FILE: str = "ga_log.csv"


# Convenience re-exports and constants
RANDOM_SEED: int = Config.RANDOM_SEED
CSV_DELIMITER: str = ";"


@dataclass(frozen=True)
class GeneticConfig:
    """Parameters of a single genetic search run.

    Defaults mirror :class:`Config`; validation happens at construction so a
    bad value fails before any population is built.
    """

    population_size: int = Config.GA_POPULATION_SIZE
    elitism: bool = Config.GA_ELITISM
    elitism_percentage: int = Config.GA_ELITISM_PERCENTAGE
    crossover_probability: float = Config.GA_CROSSOVER_PROBABILITY
    mutation_probability: float = Config.GA_MUTATION_PROBABILITY
    genes_to_change: int = Config.GA_GENES_TO_CHANGE
    max_generations: int = Config.GA_MAX_GENERATIONS
    repair_duplicates: bool = Config.GA_REPAIR_DUPLICATES
    tournament_size: int = Config.GA_TOURNAMENT_SIZE

    def __post_init__(self) -> None:
        if self.population_size < 2:
            raise ValueError("population_size must be >= 2")
        if not (0 <= self.elitism_percentage <= 100):
            raise ValueError("elitism_percentage must be in [0, 100]")
        if not (0.0 <= self.crossover_probability <= 1.0):
            raise ValueError("crossover_probability must be in [0, 1]")
        if not (0.0 <= self.mutation_probability <= 1.0):
            raise ValueError("mutation_probability must be in [0, 1]")
        if self.genes_to_change < 0:
            raise ValueError("genes_to_change must be >= 0")
        if self.max_generations < 0:
            raise ValueError("max_generations must be >= 0")
        if self.tournament_size < 1:
            raise ValueError("tournament_size must be >= 1")


_CONFIG_SINGLETON: Optional[Config] = None


def get_config() -> Config:
    """Return a singleton `Config` instance."""

    global _CONFIG_SINGLETON
    if _CONFIG_SINGLETON is None:
        _CONFIG_SINGLETON = Config()
    return _CONFIG_SINGLETON
