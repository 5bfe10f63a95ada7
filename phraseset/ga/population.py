"""Chromosome and population containers for the genetic algorithm engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class Chromosome:
    """Ordered list of integer genes with its last evaluated fitness."""

    genes: list[int]
    fitness: float | None = None
    is_elite: bool = False

    def clone(self, *, elite: bool = False) -> "Chromosome":
        """Copy genes and fitness; the copy is elite only if requested."""

        return Chromosome(genes=list(self.genes), fitness=self.fitness, is_elite=elite)

    def __len__(self) -> int:
        return len(self.genes)

    def __repr__(self) -> str:
        fit = "None" if self.fitness is None else f"{self.fitness:.6f}"
        return f"Chromosome(genes={len(self.genes)}, fitness={fit}, elite={self.is_elite})"


def _fitness_key(chromosome: Chromosome) -> float:
    return chromosome.fitness if chromosome.fitness is not None else float("-inf")


@dataclass
class Population:
    """Ordered collection of chromosomes owned by one GA run."""

    chromosomes: list[Chromosome] = field(default_factory=list)

    def append(self, chromosome: Chromosome) -> None:
        self.chromosomes.append(chromosome)

    def top(self, n: int) -> list[Chromosome]:
        """Return the ``n`` fittest chromosomes, fittest first (ties keep order)."""

        return sorted(self.chromosomes, key=_fitness_key, reverse=True)[:n]

    @property
    def maximum_fitness(self) -> float:
        return max(_fitness_key(c) for c in self.chromosomes)

    @property
    def minimum_fitness(self) -> float:
        return min(_fitness_key(c) for c in self.chromosomes)

    def used_genes(self) -> frozenset[int]:
        """Union of gene values over every chromosome."""

        return frozenset(g for c in self.chromosomes for g in c.genes)

    def __len__(self) -> int:
        return len(self.chromosomes)

    def __iter__(self) -> Iterator[Chromosome]:
        return iter(self.chromosomes)

    def __getitem__(self, index: int) -> Chromosome:
        return self.chromosomes[index]
