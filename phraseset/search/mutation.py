"""Diversity-preserving mutation and duplicate repair for phrase-set chromosomes.

Swap-style mutation only reorders genes that already exist, so it can never
bring a sentence into play that is absent from the whole population.
:class:`NovelGeneMutation` instead overwrites randomly chosen gene positions
with reduced-corpus indices that no chromosome of the population currently
uses.
"""

from __future__ import annotations

import numpy as np

from phraseset.errors import InsufficientPoolError
from phraseset.ga.population import Chromosome, Population


class NovelGeneMutation:
    """Replace ``genes_to_change`` genes with indices unused by the population.

    Parameters
    ----------
    mutation_probability:
        Chance in [0, 1] that a non-elite chromosome mutates. It is evaluated
        on a 0-100 integer scale: a draw in ``[0, 100)`` below
        ``round(100 * mutation_probability)`` fires the mutation.
    genes_to_change:
        Number of distinct positions rewritten per mutation.
    pool_size:
        Size of the reduced corpus; replacement values come from ``[0, pool_size)``.
    """

    def __init__(self, mutation_probability: float, genes_to_change: int, pool_size: int) -> None:
        if not (0.0 <= mutation_probability <= 1.0):
            raise ValueError("mutation_probability must be in [0, 1]")
        if genes_to_change < 0:
            raise ValueError("genes_to_change must be >= 0")
        self.mutation_probability = mutation_probability
        self.genes_to_change = genes_to_change
        self.pool_size = pool_size
        self._threshold = int(round(100 * mutation_probability))
        self._snapshot: frozenset[int] | None = None
        self._snapshot_in_pool = 0

    def should_mutate(self, rng: np.random.Generator) -> bool:
        return int(rng.integers(100)) < self._threshold

    def _used_in_pool(self, used_genes: frozenset[int]) -> int:
        """Count of ``used_genes`` inside the pool, computed once per snapshot."""

        if used_genes is not self._snapshot:
            self._snapshot = used_genes
            self._snapshot_in_pool = sum(1 for g in used_genes if 0 <= g < self.pool_size)
        return self._snapshot_in_pool

    def apply(self, chromosome: Chromosome, used_genes: frozenset[int], rng: np.random.Generator) -> bool:
        """Mutate ``chromosome`` in place; return True if it changed.

        Replacement values lie outside ``used_genes`` and outside the
        chromosome's own genes, so a chromosome with distinct genes keeps
        distinct genes.

        Raises
        ------
        ValueError
            If ``genes_to_change`` exceeds the chromosome length.
        InsufficientPoolError
            If fewer than ``genes_to_change`` indices lie outside ``used_genes``
            and the chromosome.
        """

        if chromosome.is_elite or self.genes_to_change == 0:
            return False
        if not self.should_mutate(rng):
            return False

        k = self.genes_to_change
        if k > len(chromosome.genes):
            raise ValueError(f"genes_to_change ({k}) exceeds chromosome length ({len(chromosome.genes)})")
        own_extra = {g for g in chromosome.genes if 0 <= g < self.pool_size and g not in used_genes}
        available = self.pool_size - self._used_in_pool(used_genes) - len(own_extra)
        if available < k:
            raise InsufficientPoolError(k, available, "unused sentence indices")

        positions = rng.choice(len(chromosome.genes), size=k, replace=False)
        replacements: dict[int, None] = {}
        while len(replacements) < k:
            candidate = int(rng.integers(self.pool_size))
            if candidate in used_genes or candidate in own_extra or candidate in replacements:
                continue
            replacements[candidate] = None

        for position, value in zip(positions, replacements):
            chromosome.genes[int(position)] = value
        return True


class DuplicateRepair:
    """Operator replacing repeated genes inside a chromosome.

    Crossover can copy the same index into a child twice. Each repeat after
    the first occurrence is replaced by a random index absent from the
    chromosome, restoring the distinct-indices invariant.
    """

    def __init__(self, pool_size: int) -> None:
        self.pool_size = pool_size

    def repair(self, chromosome: Chromosome, rng: np.random.Generator) -> bool:
        genes = chromosome.genes
        present = set(genes)
        if len(present) == len(genes):
            return False
        if len(genes) > self.pool_size:
            raise InsufficientPoolError(len(genes), self.pool_size)
        seen: set[int] = set()
        for i, gene in enumerate(genes):
            if gene not in seen:
                seen.add(gene)
                continue
            candidate = int(rng.integers(self.pool_size))
            while candidate in present:
                candidate = int(rng.integers(self.pool_size))
            genes[i] = candidate
            present.add(candidate)
            seen.add(candidate)
        return True

    def invoke(self, current: Population, new: Population, rng: np.random.Generator) -> None:
        for chromosome in new:
            if chromosome.is_elite:
                continue
            if self.repair(chromosome, rng):
                chromosome.fitness = None
