"""Generic genetic algorithm engine over integer-gene chromosomes.

Public API:
- Chromosome, Population
- GeneticAlgorithm, GenerationEvent
- Elite, Crossover, Mutate (operators) and the MutationStrategy protocol
"""

from __future__ import annotations

from phraseset.ga.engine import GeneticAlgorithm, GenerationEvent
from phraseset.ga.operators import (
    Crossover,
    Elite,
    GeneticOperator,
    Mutate,
    MutationStrategy,
    crossover_double_point,
    tournament_select,
)
from phraseset.ga.population import Chromosome, Population

__all__ = [
    "Chromosome",
    "Population",
    "GeneticAlgorithm",
    "GenerationEvent",
    "GeneticOperator",
    "MutationStrategy",
    "Elite",
    "Crossover",
    "Mutate",
    "crossover_double_point",
    "tournament_select",
]
