"""Generation loop of the genetic algorithm engine.

The engine owns the population for the duration of a run. Each generation
runs the registered operators in order, pads the new population to size,
evaluates every chromosome once and notifies generation listeners. The
termination predicate is polled before each generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
import logging

import numpy as np

from phraseset.ga.operators import GeneticOperator
from phraseset.ga.population import Chromosome, Population


_LOGGER = logging.getLogger(__name__)

FitnessFunction = Callable[[Chromosome], float]
TerminateFunction = Callable[[Population, int, int], bool]


@dataclass(frozen=True)
class GenerationEvent:
    population: Population
    generation: int
    evaluations: int


class GeneticAlgorithm:
    """Maximizes ``fitness_fn`` over a population of integer chromosomes.

    Parameters
    ----------
    population:
        Initial population; its size is kept constant across generations.
    fitness_fn:
        Chromosome -> float, higher is fitter.
    rng:
        Random generator handed to every operator.
    """

    def __init__(
        self,
        population: Population,
        fitness_fn: FitnessFunction,
        rng: np.random.Generator | None = None,
    ) -> None:
        if len(population) == 0:
            raise ValueError("population must not be empty")
        self.population = population
        self.fitness_fn = fitness_fn
        self.rng = rng if rng is not None else np.random.default_rng()
        self.operators: list[GeneticOperator] = []
        self.on_generation_complete: list[Callable[[GenerationEvent], None]] = []
        self.on_run_complete: list[Callable[[GenerationEvent], None]] = []
        self.generation = 0
        self.evaluations = 0

    def _evaluate(self, population: Population) -> None:
        for chromosome in population:
            chromosome.fitness = float(self.fitness_fn(chromosome))
            self.evaluations += 1

    def _event(self) -> GenerationEvent:
        return GenerationEvent(self.population, self.generation, self.evaluations)

    def step(self) -> None:
        """Advance the population by one generation."""

        current = self.population
        new = Population()
        for operator in self.operators:
            operator.invoke(current, new, self.rng)

        size = len(current)
        i = 0
        while len(new) < size:
            new.append(current[i % size].clone())
            i += 1
        if len(new) > size:
            del new.chromosomes[size:]

        self._evaluate(new)
        self.population = new
        self.generation += 1
        event = self._event()
        for listener in self.on_generation_complete:
            listener(event)

    def run(self, terminate: TerminateFunction) -> Population:
        """Evaluate the initial population and evolve until ``terminate`` is true."""

        self._evaluate(self.population)
        while not terminate(self.population, self.generation, self.evaluations):
            self.step()
        _LOGGER.debug(
            "GA run finished after %d generations (%d evaluations)", self.generation, self.evaluations
        )
        event = self._event()
        for listener in self.on_run_complete:
            listener(event)
        return self.population
