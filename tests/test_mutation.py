from __future__ import annotations

import numpy as np
import pytest

from phraseset.errors import InsufficientPoolError
from phraseset.ga import Chromosome, Mutate, Population
from phraseset.search.mutation import DuplicateRepair, NovelGeneMutation


@pytest.fixture
def population() -> Population:
    """Three chromosomes drawing from indices 0..11 of a 50-sentence pool."""

    return Population(
        [
            Chromosome(genes=[0, 1, 2, 3, 4]),
            Chromosome(genes=[5, 6, 7, 8, 9]),
            Chromosome(genes=[10, 11, 0, 1, 2]),
        ]
    )


def test_mutation_injects_only_unused_genes(population: Population):
    used = population.used_genes()
    mutation = NovelGeneMutation(1.0, 3, pool_size=50)
    rng = np.random.default_rng(3)

    chromosome = population[0]
    before = list(chromosome.genes)
    assert mutation.apply(chromosome, used, rng) is True

    changed = [(i, g) for i, (g, old) in enumerate(zip(chromosome.genes, before)) if g != old]
    assert len(changed) == 3
    new_values = {g for _, g in changed}
    assert len(new_values) == 3
    assert new_values.isdisjoint(used)
    assert all(0 <= g < 50 for g in new_values)
    assert len(set(chromosome.genes)) == len(chromosome.genes)


def test_zero_probability_never_mutates(population: Population):
    mutation = NovelGeneMutation(0.0, 2, pool_size=50)
    rng = np.random.default_rng(0)
    used = population.used_genes()
    for _ in range(200):
        assert mutation.apply(population[1], used, rng) is False
    assert population[1].genes == [5, 6, 7, 8, 9]


def test_probability_threshold():
    mutation = NovelGeneMutation(0.2, 1, pool_size=10)
    rng = np.random.default_rng(11)
    fired = sum(mutation.should_mutate(rng) for _ in range(5000))
    assert 800 < fired < 1200


def test_elite_is_never_mutated(population: Population):
    elite = population[0].clone(elite=True)
    mutation = NovelGeneMutation(1.0, 2, pool_size=50)
    assert mutation.apply(elite, population.used_genes(), np.random.default_rng(0)) is False
    assert elite.genes == [0, 1, 2, 3, 4]


def test_zero_genes_to_change_is_noop(population: Population):
    mutation = NovelGeneMutation(1.0, 0, pool_size=50)
    assert mutation.apply(population[0], population.used_genes(), np.random.default_rng(0)) is False


def test_too_many_genes_to_change(population: Population):
    mutation = NovelGeneMutation(1.0, 6, pool_size=50)
    with pytest.raises(ValueError):
        mutation.apply(population[0], population.used_genes(), np.random.default_rng(0))


def test_exhausted_pool_raises(population: Population):
    """Every index of a 12-sentence pool is already in use."""

    mutation = NovelGeneMutation(1.0, 1, pool_size=12)
    with pytest.raises(InsufficientPoolError):
        mutation.apply(population[0], population.used_genes(), np.random.default_rng(0))


def test_invalid_probability():
    with pytest.raises(ValueError):
        NovelGeneMutation(1.5, 1, pool_size=10)


def test_duplicate_repair_restores_distinct_genes():
    chromosome = Chromosome(genes=[1, 1, 2, 2, 3])
    repair = DuplicateRepair(pool_size=10)
    assert repair.repair(chromosome, np.random.default_rng(0)) is True
    assert len(set(chromosome.genes)) == 5
    assert chromosome.genes[0] == 1
    assert chromosome.genes[2] == 2
    assert chromosome.genes[4] == 3


def test_duplicate_repair_leaves_clean_chromosome():
    chromosome = Chromosome(genes=[4, 3, 2])
    assert DuplicateRepair(pool_size=10).repair(chromosome, np.random.default_rng(0)) is False
    assert chromosome.genes == [4, 3, 2]


def test_duplicate_repair_operator_skips_elites():
    current = Population([Chromosome(genes=[0, 1])])
    new = Population(
        [
            Chromosome(genes=[5, 5], fitness=0.5, is_elite=True),
            Chromosome(genes=[6, 6], fitness=0.4),
        ]
    )
    DuplicateRepair(pool_size=10).invoke(current, new, np.random.default_rng(0))
    assert new[0].genes == [5, 5]
    assert new[0].fitness == 0.5
    assert len(set(new[1].genes)) == 2
    assert new[1].fitness is None


@pytest.mark.parametrize("seed", range(40))
def test_repair_then_mutation_keeps_genes_distinct(seed: int):
    """Values inserted by repair are outside the snapshot but must not be drawn again."""

    current = Population([Chromosome(genes=[0, 1, 2, 3, 4]), Chromosome(genes=[5, 6, 7, 8, 9])])
    new = Population([Chromosome(genes=[0, 0, 1, 2, 3, 4])])
    rng = np.random.default_rng(seed)

    DuplicateRepair(pool_size=12).invoke(current, new, rng)
    Mutate(NovelGeneMutation(1.0, 1, pool_size=12), current.used_genes).invoke(current, new, rng)

    genes = new[0].genes
    assert len(set(genes)) == len(genes)


def test_mutation_avoids_own_genes_outside_snapshot():
    used = frozenset(range(10))
    chromosome = Chromosome(genes=[10, 1, 2])
    mutation = NovelGeneMutation(1.0, 1, pool_size=12)
    for seed in range(20):
        candidate = chromosome.clone()
        mutation.apply(candidate, used, np.random.default_rng(seed))
        assert 11 in candidate.genes
        assert len(set(candidate.genes)) == 3


def test_own_genes_count_against_available_pool():
    used = frozenset(range(10))
    chromosome = Chromosome(genes=[10, 1, 2])
    with pytest.raises(InsufficientPoolError) as info:
        NovelGeneMutation(1.0, 2, pool_size=12).apply(chromosome, used, np.random.default_rng(0))
    assert info.value.available == 1
