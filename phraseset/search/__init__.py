"""Subset search strategies: brute-force competition and genetic search.

Public API:
- compete_random_datasets, CompetitionResult, TrialRecord
- GeneticSearch, GeneticResult
- NovelGeneMutation, DuplicateRepair
- draw_distinct_indices
"""

from __future__ import annotations

from phraseset.search.competition import (
    TRIAL_LOG_HEADER,
    CompetitionResult,
    TrialRecord,
    compete_random_datasets,
)
from phraseset.search.genetic import GA_LOG_HEADER, GeneticResult, GeneticSearch
from phraseset.search.mutation import DuplicateRepair, NovelGeneMutation
from phraseset.search.sampling import draw_distinct_indices

__all__ = [
    "TRIAL_LOG_HEADER",
    "GA_LOG_HEADER",
    "CompetitionResult",
    "TrialRecord",
    "compete_random_datasets",
    "GeneticResult",
    "GeneticSearch",
    "NovelGeneMutation",
    "DuplicateRepair",
    "draw_distinct_indices",
]
