"""Letter and digram occurrence model over a fixed charset.

A :class:`Distribution` holds occurrence counts for every symbol and every
ordered symbol pair (digram) of a target charset. Keys outside the charset
are never counted. Two metrics compare a candidate distribution ``p`` to a
reference ``q``:

- digram KL divergence ``sum_k p(k) * log2(p(k) / q(k))`` where terms with
  ``p(k) == 0`` or ``q(k) == 0`` are skipped. Because of the skipped terms
  the score is a monotone dissimilarity (lower is better), not a calibrated
  information quantity, and it is not symmetric. A side without any digram
  scores ``inf``;
- Pearson correlation of raw counts, using ``mean = total / key_count``.

Distributions are read-only after construction. Every constructor builds
fresh count mappings, so no state is shared between candidates.

Examples
--------
>>> from phraseset.charset import Charset
>>> from phraseset.corpus import ReducedCorpus
>>> cs = Charset.from_string("abc ")
>>> rc = ReducedCorpus(["aab", "abc", "bca"])
>>> d = Distribution.from_indices(rc, cs, [0, 1, 2])
>>> d.letter_counts["a"], d.letter_counts["b"], d.letter_counts["c"]
(4, 3, 2)
>>> d.kl_divergence(d)
0.0
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence, Self
import math
import unicodedata

import numpy as np

from phraseset.charset import Charset
from phraseset.config import CSV_DELIMITER, Config
from phraseset.corpus.reduced import ReducedCorpus
from phraseset.corpus.reducer import word_count
from phraseset.errors import DataFormatError
from phraseset.utils import ensure_dir, iter_lines


class TargetEntity(Enum):
    """Which count table a metric or CSV file refers to."""

    LETTERS = "Letter"
    DIGRAMS = "Digram"

    @property
    def csv_header(self) -> str:
        ent = self.value
        return CSV_DELIMITER.join([ent, f"{ent} occurences", f"{ent} probability"])


def _accumulate(line: str, letters: dict[str, int], digrams: dict[str, int]) -> bool:
    """Add the letters and digrams of ``line`` to the count mappings in place.

    Only keys already present in the mappings are counted. Returns True if
    every character of ``line`` was a known letter key.
    """

    all_known = True
    for ch in line:
        if ch in letters:
            letters[ch] += 1
        else:
            all_known = False
    for a, b in zip(line, line[1:]):
        key = a + b
        if key in digrams:
            digrams[key] += 1
    return all_known


def _read_counts_csv(path: Path) -> dict[str, int]:
    """Parse ``symbol;count;probability`` rows after a header row.

    The probability column is ignored; it is always recomputed from counts.
    """

    counts: dict[str, int] = {}
    lines = iter_lines(path)
    try:
        header = next(lines)
    except StopIteration:
        raise DataFormatError(f"Distribution file is empty: {path}") from None
    if header.count(CSV_DELIMITER) < 2:
        raise DataFormatError(f"Distribution file has a malformed header: {path}")

    for row_no, line in enumerate(lines, start=2):
        if not line:
            continue
        # rsplit keeps symbols that contain the delimiter intact
        parts = line.rsplit(CSV_DELIMITER, 2)
        if len(parts) != 3 or not parts[0]:
            raise DataFormatError(f"{path}:{row_no}: expected 'symbol;count;probability', got {line!r}")
        symbol, raw_count, _ = parts
        try:
            count = int(raw_count)
        except ValueError as exc:
            raise DataFormatError(f"{path}:{row_no}: non-numeric count {raw_count!r}") from exc
        if count < 0:
            raise DataFormatError(f"{path}:{row_no}: negative count {count}")
        if symbol in counts:
            raise DataFormatError(f"{path}:{row_no}: duplicate symbol {symbol!r}")
        counts[symbol] = count
    return counts


class Distribution:
    """Immutable letter/digram occurrence counts with derived metrics.

    Parameters
    ----------
    letter_counts:
        Mapping symbol -> occurrences. Copied.
    digram_counts:
        Mapping two-symbol string -> occurrences. Copied.

    Notes
    -----
    No charset consistency check is made here; the ``from_*`` constructors
    that take a :class:`Charset` seed every key with zero.
    """

    def __init__(self, letter_counts: Mapping[str, int], digram_counts: Mapping[str, int]) -> None:
        self._letters: dict[str, int] = dict(letter_counts)
        self._digrams: dict[str, int] = dict(digram_counts)
        self._letters_total: int = sum(self._letters.values())
        self._digrams_total: int = sum(self._digrams.values())

    # Constructors -------------------------------------------------------------
    @classmethod
    def from_counts(cls, letter_counts: Mapping[str, int], digram_counts: Mapping[str, int]) -> Self:
        """Build from in-memory count mappings (copied)."""

        return cls(letter_counts, digram_counts)

    @classmethod
    def from_csv(cls, letters_path: Path, digrams_path: Path) -> Self:
        """Load counts from a pair of letter/digram CSV files.

        Raises
        ------
        DataFormatError
            If either file is missing or a row is malformed.
        """

        letters = _read_counts_csv(Path(letters_path))
        digrams = _read_counts_csv(Path(digrams_path))
        return cls(letters, digrams)

    @classmethod
    def from_corpus(
        cls,
        lines: Iterable[str],
        charset: Charset,
        reduce: bool = False,
        accepted_word_counts: Iterable[int] = (),
    ) -> tuple[Self, ReducedCorpus | None]:
        """Count letters and digrams over raw corpus lines in a single pass.

        Each line is NFC-normalized and lowercased (no punctuation stripping).
        When ``reduce`` is true, lines made only of charset symbols whose word
        count is accepted are collected, deduplicated, into a
        :class:`ReducedCorpus` returned as the second element; otherwise the
        second element is None.
        """

        letters, digrams = charset.empty_counts()
        accepted = frozenset(accepted_word_counts)
        reduced = ReducedCorpus() if reduce else None

        for line in lines:
            lowered = unicodedata.normalize("NFC", line).lower()
            all_in_charset = _accumulate(lowered, letters, digrams)
            if reduced is not None and all_in_charset and word_count(lowered) in accepted:
                reduced.add(lowered)

        return cls(letters, digrams), reduced

    @classmethod
    def from_indices(cls, reduced: ReducedCorpus | Sequence[str], charset: Charset, indices: Iterable[int]) -> Self:
        """Count letters and digrams over the reduced-corpus sentences at ``indices``.

        Sentences are assumed already normalized; they are not re-validated.
        A repeated index counts its sentence again.
        """

        letters, digrams = charset.empty_counts()
        for idx in indices:
            _accumulate(reduced[idx], letters, digrams)
        return cls(letters, digrams)

    # Accessors ----------------------------------------------------------------
    @property
    def letter_counts(self) -> Mapping[str, int]:
        return MappingProxyType(self._letters)

    @property
    def digram_counts(self) -> Mapping[str, int]:
        return MappingProxyType(self._digrams)

    @property
    def letters_total(self) -> int:
        return self._letters_total

    @property
    def digrams_total(self) -> int:
        return self._digrams_total

    def counts(self, entity: TargetEntity) -> Mapping[str, int]:
        if entity is TargetEntity.LETTERS:
            return self.letter_counts
        return self.digram_counts

    def total(self, entity: TargetEntity) -> int:
        if entity is TargetEntity.LETTERS:
            return self._letters_total
        return self._digrams_total

    def probabilities(self, entity: TargetEntity) -> dict[str, float]:
        """Relative frequencies; all zero when the total is zero."""

        table = self._letters if entity is TargetEntity.LETTERS else self._digrams
        total = self.total(entity)
        if total == 0:
            return dict.fromkeys(table, 0.0)
        return {k: v / total for k, v in table.items()}

    # Metrics ------------------------------------------------------------------
    def kl_divergence(self, reference: Distribution) -> float:
        """Digram KL divergence of this distribution (p) from ``reference`` (q).

        Iterates this distribution's digram keys; terms where either
        probability is zero contribute nothing. Returns ``inf`` if either
        side has no digrams, so an empty candidate never scores best.
        """

        if self._digrams_total == 0 or reference._digrams_total == 0:
            return math.inf
        keys = list(self._digrams)
        p = np.fromiter(self._digrams.values(), dtype=float, count=len(keys)) / self._digrams_total
        q = np.array([reference._digrams.get(k, 0) for k in keys], dtype=float) / reference._digrams_total
        mask = (p > 0.0) & (q > 0.0)
        if not mask.any():
            return 0.0
        return float(np.sum(p[mask] * np.log2(p[mask] / q[mask])))

    def correlation(self, reference: Distribution, entity: TargetEntity) -> float:
        """Pearson correlation between this and ``reference``'s counts.

        Means are ``total / key_count`` on each side. A zero denominator
        (no variance on either side) yields 0.0.
        """

        mine = self._letters if entity is TargetEntity.LETTERS else self._digrams
        theirs = reference._letters if entity is TargetEntity.LETTERS else reference._digrams
        if not mine or not theirs:
            return 0.0

        avg_p = self.total(entity) / len(mine)
        avg_q = reference.total(entity) / len(theirs)
        p = np.fromiter(mine.values(), dtype=float, count=len(mine)) - avg_p
        q = np.array([theirs.get(k, 0) for k in mine], dtype=float) - avg_q

        denominator = math.sqrt(float(np.sum(p * p)) * float(np.sum(q * q)))
        if denominator == 0.0:
            return 0.0
        return float(np.sum(p * q)) / denominator

    # Serialization ------------------------------------------------------------
    def write_csv(self, entity: TargetEntity, path: Path, decimals: int = Config.PROBABILITY_DECIMALS) -> None:
        """Write header plus one ``symbol;count;probability`` row per key.

        Rows follow mapping order (charset order), not sorted order.
        """

        path = Path(path)
        ensure_dir(path.parent)
        table = self._letters if entity is TargetEntity.LETTERS else self._digrams
        total = self.total(entity)
        with path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(entity.csv_header + "\n")
            for key, count in table.items():
                probability = count / total if total else 0.0
                f.write(CSV_DELIMITER.join([key, str(count), f"{round(probability, decimals):.{decimals}f}"]) + "\n")

    def write_csv_pair(self, letters_path: Path, digrams_path: Path) -> None:
        """Write both the letter and the digram CSV files."""

        self.write_csv(TargetEntity.LETTERS, letters_path)
        self.write_csv(TargetEntity.DIGRAMS, digrams_path)

    # Dunder -------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Distribution):
            return NotImplemented
        return self._letters == other._letters and self._digrams == other._digrams

    def __repr__(self) -> str:
        return (
            f"Distribution(letters={len(self._letters)}, digrams={len(self._digrams)}, "
            f"letters_total={self._letters_total}, digrams_total={self._digrams_total})"
        )
