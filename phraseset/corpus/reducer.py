"""Corpus reduction: normalize raw lines and keep charset-clean sentences.

Only sentences whose word count is one of the accepted counts and whose
characters all belong to the target charset enter the reduced corpus.
Duplicates are dropped, keeping first-seen order.
"""

from __future__ import annotations

import logging
import unicodedata as _ud
from typing import Iterable

from phraseset.charset import Charset
from phraseset.corpus.reduced import ReducedCorpus


_LOGGER = logging.getLogger(__name__)


def normalize_line(line: str) -> str:
    """NFC-normalize, lowercase, keep only letters and whitespace, collapse spaces.

    >>> normalize_line("  Hello,   World!! 42 ")
    'hello world'
    """

    lowered = _ud.normalize("NFC", line).lower()
    kept = "".join(ch for ch in lowered if ch.isalpha() or ch.isspace())
    return " ".join(kept.split())


def word_count(line: str) -> int:
    """Number of whitespace-delimited non-empty tokens in ``line``."""

    return len(line.split())


def letter_count(line: str) -> int:
    """Number of non-space characters in ``line``."""

    return sum(1 for ch in line if ch != " ")


def chars_per_word(lines: Iterable[str]) -> float:
    """Average non-space characters per word over ``lines``.

    Returns 0.0 when the lines contain no words.
    """

    chars = 0
    words = 0
    for line in lines:
        chars += letter_count(line)
        words += word_count(line)
    if words == 0:
        return 0.0
    return chars / words


def reduce_corpus(
    lines: Iterable[str],
    charset: Charset,
    accepted_word_counts: Iterable[int],
) -> ReducedCorpus:
    """Build the reduced corpus from raw corpus lines.

    Each line is normalized with :func:`normalize_line`; it is kept iff every
    character is in ``charset``, its word count is accepted, and it has not
    been seen before. Output order is first-seen order.
    """

    accepted = frozenset(accepted_word_counts)
    reduced = ReducedCorpus()
    n_lines = 0
    for raw in lines:
        n_lines += 1
        line = normalize_line(raw)
        if word_count(line) in accepted and charset.contains_all(line):
            reduced.add(line)
    _LOGGER.info("Reduced %d corpus lines to %d unique sentences", n_lines, len(reduced))
    return reduced
