"""Generation operators: elitism, double-point crossover and mutation.

Every operator exposes ``invoke(current, new, rng)``: it reads the current
population and appends to (or edits) the population being built for the
next generation. Operators run once per generation in registration order.
"""

from __future__ import annotations

from typing import Callable, Protocol
import math

import numpy as np

from phraseset.ga.population import Chromosome, Population


class GeneticOperator(Protocol):
    def invoke(self, current: Population, new: Population, rng: np.random.Generator) -> None: ...


class MutationStrategy(Protocol):
    """Alters one chromosome in place given the population's used genes."""

    def apply(self, chromosome: Chromosome, used_genes: frozenset[int], rng: np.random.Generator) -> bool: ...


class Elite:
    """Copy the top ``percentage`` % of the current population, marked elite."""

    def __init__(self, percentage: float) -> None:
        if not (0 <= percentage <= 100):
            raise ValueError("percentage must be in [0, 100]")
        self.percentage = percentage

    def elite_count(self, size: int) -> int:
        return min(size, math.ceil(size * self.percentage / 100.0))

    def invoke(self, current: Population, new: Population, rng: np.random.Generator) -> None:
        for chromosome in current.top(self.elite_count(len(current))):
            new.append(chromosome.clone(elite=True))


def tournament_select(population: Population, rng: np.random.Generator, tournament_size: int) -> Chromosome:
    """Tournament selection: best of ``tournament_size`` random contestants."""

    k = min(tournament_size, len(population))
    picks = rng.choice(len(population), size=k, replace=False)
    contestants = [population[int(i)] for i in picks]
    return max(contestants, key=lambda c: c.fitness if c.fitness is not None else float("-inf"))


def crossover_double_point(
    parent1: Chromosome, parent2: Chromosome, rng: np.random.Generator
) -> tuple[Chromosome, Chromosome]:
    """Swap the gene segment between two random cut points."""

    n = min(len(parent1), len(parent2))
    if n < 2:
        return parent1.clone(), parent2.clone()
    if n == 2:
        a, b = 1, 2
    else:
        a, b = sorted(int(x) for x in rng.choice(np.arange(1, n), size=2, replace=False))
    g1, g2 = parent1.genes, parent2.genes
    child1 = Chromosome(genes=g1[:a] + g2[a:b] + g1[b:])
    child2 = Chromosome(genes=g2[:a] + g1[a:b] + g2[b:])
    return child1, child2


class Crossover:
    """Fill the next population with children of tournament-selected parents.

    With probability ``probability`` a pair of parents is recombined by
    double-point crossover, otherwise the parents are copied unchanged.
    """

    def __init__(self, probability: float, tournament_size: int = 3) -> None:
        if not (0.0 <= probability <= 1.0):
            raise ValueError("probability must be in [0, 1]")
        if tournament_size < 1:
            raise ValueError("tournament_size must be >= 1")
        self.probability = probability
        self.tournament_size = tournament_size

    def invoke(self, current: Population, new: Population, rng: np.random.Generator) -> None:
        target = len(current)
        while len(new) < target:
            p1 = tournament_select(current, rng, self.tournament_size)
            p2 = tournament_select(current, rng, self.tournament_size)
            if rng.random() < self.probability:
                children = crossover_double_point(p1, p2, rng)
            else:
                children = (p1.clone(), p2.clone())
            for child in children:
                if len(new) < target:
                    new.append(child)


class Mutate:
    """Apply a :class:`MutationStrategy` to every non-elite chromosome.

    ``used_genes`` is called once per invocation; every chromosome of the
    generation sees the same snapshot.
    """

    def __init__(self, strategy: MutationStrategy, used_genes: Callable[[], frozenset[int]]) -> None:
        self.strategy = strategy
        self.used_genes = used_genes

    def invoke(self, current: Population, new: Population, rng: np.random.Generator) -> None:
        snapshot = self.used_genes()
        for chromosome in new:
            if chromosome.is_elite:
                continue
            if self.strategy.apply(chromosome, snapshot, rng):
                chromosome.fitness = None
