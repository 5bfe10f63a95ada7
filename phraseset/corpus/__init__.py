"""Corpus handling: normalization, reduction and the reduced candidate pool."""

from __future__ import annotations

# Public API re-exports (keep minimal to avoid circular imports)
from phraseset.corpus.reduced import ReducedCorpus  # noqa: F401
from phraseset.corpus.reducer import (  # noqa: F401
    chars_per_word,
    letter_count,
    normalize_line,
    reduce_corpus,
    word_count,
)
