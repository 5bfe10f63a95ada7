"""
phraseset: Sample statistically representative phrase sets from text corpora.

Selects a small, fixed-size subset of sentences whose letter and digram
frequency profile matches that of a much larger reference corpus, using
either a brute-force competition among random candidates or a genetic
algorithm with a diversity-preserving mutation operator.
"""

__all__ = [
    "Charset",
    "ENGLISH_CHARSET",
    "CROATIAN_CHARSET",
    "Config",
    "GeneticConfig",
    "RANDOM_SEED",
    "DataFormatError",
    "InsufficientPoolError",
    "__version__",
    # Model (lazy-imported via __getattr__)
    "Distribution",
    "TargetEntity",
    "ReducedCorpus",
    "reduce_corpus",
    # Search (lazy-imported via __getattr__)
    "compete_random_datasets",
    "GeneticSearch",
    "NovelGeneMutation",
]

__version__ = "0.1.0"

from typing import Any

from phraseset.charset import Charset, ENGLISH_CHARSET, CROATIAN_CHARSET
from phraseset.config import Config, GeneticConfig, RANDOM_SEED
from phraseset.errors import DataFormatError, InsufficientPoolError


def __getattr__(name: str) -> Any:  # lazy attribute access to avoid numpy/tqdm at import time
    if name in ("Distribution", "TargetEntity"):
        from phraseset import distribution as _d

        return getattr(_d, name)
    if name == "ReducedCorpus":
        from phraseset.corpus.reduced import ReducedCorpus as _RC

        return _RC
    if name == "reduce_corpus":
        from phraseset.corpus.reducer import reduce_corpus as _rc

        return _rc
    if name == "compete_random_datasets":
        from phraseset.search.competition import compete_random_datasets as _crd

        return _crd
    if name == "GeneticSearch":
        from phraseset.search.genetic import GeneticSearch as _GS

        return _GS
    if name == "NovelGeneMutation":
        from phraseset.search.mutation import NovelGeneMutation as _NGM

        return _NGM
    raise AttributeError(f"module 'phraseset' has no attribute {name!r}")
