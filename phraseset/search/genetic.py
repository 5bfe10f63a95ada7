"""Genetic search for a representative phrase set.

A chromosome is a list of ``phrase_num`` reduced-corpus indices. Fitness is
``1 - KLD(candidate, reference)``. The generic engine in :mod:`phraseset.ga`
runs elitism, double-point crossover, optional duplicate repair and the
:class:`~phraseset.search.mutation.NovelGeneMutation` operator, in that
order, each generation. The set of genes used by the population is
recomputed after every generation and handed to the mutation operator of
the next one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO
import logging

import numpy as np
from tqdm import tqdm

from phraseset.charset import Charset
from phraseset.config import CSV_DELIMITER, Config, GeneticConfig
from phraseset.corpus.reduced import ReducedCorpus
from phraseset.distribution import Distribution
from phraseset.errors import InsufficientPoolError
from phraseset.ga import Chromosome, Crossover, Elite, GenerationEvent, GeneticAlgorithm, Mutate, Population
from phraseset.search.mutation import DuplicateRepair, NovelGeneMutation
from phraseset.search.sampling import draw_distinct_indices
from phraseset.utils import ensure_dir, write_lines


_LOGGER = logging.getLogger(__name__)

GA_LOG_HEADER: list[str] = ["Fitness", "KLD"]


@dataclass
class GeneticResult:
    indices: list[int]
    sentences: list[str]
    distribution: Distribution
    fitness: float
    kld: float
    max_fitness: float
    min_fitness: float
    generations: int
    evaluations: int
    history: list[tuple[float, float]] = field(default_factory=list)


class GeneticSearch:
    """Evolve a fixed-size phrase set minimizing digram KLD to ``reference``.

    Parameters
    ----------
    reference:
        Source corpus distribution.
    reduced:
        Candidate pool indexed by the chromosomes.
    charset:
        Charset used for candidate distributions.
    phrase_num:
        Genes per chromosome (phrase-set size).
    config:
        GA hyperparameters; defaults to :class:`GeneticConfig`.
    rng:
        Random generator shared by initialization and every operator.
    log_path:
        Optional GA log CSV (``Fitness;KLD`` per generation plus a final row).
    phrase_set_path:
        Optional output file for the fittest chromosome's sentences.
    progress:
        Show a tqdm progress bar over generations.
    """

    def __init__(
        self,
        reference: Distribution,
        reduced: ReducedCorpus,
        charset: Charset,
        phrase_num: int,
        config: GeneticConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
        log_path: Path | None = None,
        phrase_set_path: Path | None = None,
        progress: bool = False,
    ) -> None:
        self.config = config or GeneticConfig()
        if phrase_num < 1:
            raise ValueError("phrase_num must be >= 1")
        if len(reduced) < phrase_num:
            raise InsufficientPoolError(phrase_num, len(reduced))
        if self.config.genes_to_change > phrase_num:
            raise ValueError(
                f"genes_to_change ({self.config.genes_to_change}) exceeds phrase_num ({phrase_num})"
            )
        worst_case = self.config.population_size * phrase_num + self.config.genes_to_change
        if worst_case > len(reduced):
            _LOGGER.warning(
                "Reduced corpus has %d sentences but population %d x %d phrases + %d genes to change "
                "needs up to %d; mutation may run out of unused sentences",
                len(reduced),
                self.config.population_size,
                phrase_num,
                self.config.genes_to_change,
                worst_case,
            )

        self.reference = reference
        self.reduced = reduced
        self.charset = charset
        self.phrase_num = phrase_num
        self.rng = rng if rng is not None else np.random.default_rng()
        self.log_path = Path(log_path) if log_path is not None else None
        self.phrase_set_path = Path(phrase_set_path) if phrase_set_path is not None else None
        self.progress = progress

        self.history: list[tuple[float, float]] = []
        self.result: GeneticResult | None = None
        self._log: TextIO | None = None
        self._pbar: tqdm | None = None

        population = self.initial_population()
        self.used_genes: frozenset[int] = population.used_genes()

        cfg = self.config
        self.mutation = NovelGeneMutation(cfg.mutation_probability, cfg.genes_to_change, len(reduced))
        self.engine = GeneticAlgorithm(population, self.fitness, self.rng)
        if cfg.elitism:
            self.engine.operators.append(Elite(cfg.elitism_percentage))
        self.engine.operators.append(Crossover(cfg.crossover_probability, cfg.tournament_size))
        if cfg.repair_duplicates:
            self.engine.operators.append(DuplicateRepair(len(reduced)))
        self.engine.operators.append(Mutate(self.mutation, lambda: self.used_genes))
        self.engine.on_generation_complete.append(self._on_generation_complete)
        self.engine.on_run_complete.append(self._on_run_complete)

    # Model --------------------------------------------------------------------
    def initial_population(self) -> Population:
        """Random chromosomes of ``phrase_num`` distinct indices each."""

        return Population(
            [
                Chromosome(genes=draw_distinct_indices(self.rng, len(self.reduced), self.phrase_num))
                for _ in range(self.config.population_size)
            ]
        )

    def distribution_for(self, chromosome: Chromosome) -> Distribution:
        return Distribution.from_indices(self.reduced, self.charset, chromosome.genes)

    def kld_for(self, chromosome: Chromosome) -> float:
        return self.distribution_for(chromosome).kl_divergence(self.reference)

    def fitness(self, chromosome: Chromosome) -> float:
        return 1.0 - self.kld_for(chromosome)

    def terminate(self, population: Population, generation: int, evaluations: int) -> bool:
        """Stop once the generation counter exceeds ``max_generations``."""

        return generation > self.config.max_generations

    # Event handlers -----------------------------------------------------------
    def _log_row(self, fitness: float, kld: float) -> None:
        if self._log is not None:
            decimals = Config.PROBABILITY_DECIMALS
            self._log.write(CSV_DELIMITER.join([str(round(fitness, decimals)), str(round(kld, decimals))]) + "\n")

    def _on_generation_complete(self, event: GenerationEvent) -> None:
        fittest = event.population.top(1)[0]
        kld = self.kld_for(fittest)
        fitness = float(fittest.fitness) if fittest.fitness is not None else 1.0 - kld
        _LOGGER.info("Generation: %d, Fitness: %s, KLD: %s", event.generation, fitness, kld)
        self.history.append((fitness, kld))
        self._log_row(fitness, kld)
        self.used_genes = event.population.used_genes()
        if self._pbar is not None:
            self._pbar.update(1)

    def _on_run_complete(self, event: GenerationEvent) -> None:
        population = event.population
        fittest = population.top(1)[0]
        distribution = self.distribution_for(fittest)
        kld = distribution.kl_divergence(self.reference)
        fitness = float(fittest.fitness) if fittest.fitness is not None else 1.0 - kld
        sentences = [self.reduced[g] for g in fittest.genes]

        if self.phrase_set_path is not None:
            write_lines(self.phrase_set_path, sentences)
        self._log_row(fitness, kld)

        _LOGGER.info("Max fitness: %s", population.maximum_fitness)
        _LOGGER.info("Min fitness: %s", population.minimum_fitness)
        _LOGGER.info("Fittest chromosome fitness: %s", fitness)
        _LOGGER.info("Fittest chromosome KLD: %s", kld)

        self.result = GeneticResult(
            indices=list(fittest.genes),
            sentences=sentences,
            distribution=distribution,
            fitness=fitness,
            kld=kld,
            max_fitness=population.maximum_fitness,
            min_fitness=population.minimum_fitness,
            generations=event.generation,
            evaluations=event.evaluations,
            history=list(self.history),
        )

    # Run ----------------------------------------------------------------------
    def run(self) -> GeneticResult:
        """Evolve until the generation bound is exceeded and return the fittest set."""

        if self.log_path is not None:
            ensure_dir(self.log_path.parent)
            self._log = self.log_path.open("w", encoding="utf-8", newline="\n")
            self._log.write(CSV_DELIMITER.join(GA_LOG_HEADER) + "\n")
        self._pbar = tqdm(total=self.config.max_generations + 1, desc="generations", disable=not self.progress)
        try:
            self.engine.run(self.terminate)
        finally:
            self._pbar.close()
            self._pbar = None
            if self._log is not None:
                self._log.close()
                self._log = None

        assert self.result is not None
        return self.result
