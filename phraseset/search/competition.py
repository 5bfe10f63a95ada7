"""Brute-force competition among random phrase-set candidates.

Each trial draws a fixed-size subset of distinct reduced-corpus sentences,
builds its distribution and scores it by digram KL divergence from the
reference (source corpus) distribution. The lowest score wins; ties keep
the earliest trial. Letter and digram correlations are computed for the
trial log only and never influence selection.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass, field
from pathlib import Path
from typing import TextIO
import logging

import numpy as np
from tqdm import tqdm

from phraseset.charset import Charset
from phraseset.config import CSV_DELIMITER, Config
from phraseset.corpus.reduced import ReducedCorpus
from phraseset.distribution import Distribution, TargetEntity
from phraseset.errors import InsufficientPoolError
from phraseset.search.sampling import draw_distinct_indices
from phraseset.utils import ensure_dir, write_lines


_LOGGER = logging.getLogger(__name__)

TRIAL_LOG_HEADER: list[str] = [
    "Number of letters in the source corpus",
    "Number of digrams in the source corpus",
    "Number of sentences in the N-gram corpus subset",
    "Trial",
    "Number of sentences in the instance Phrase set",
    "Number of letters in the instance Phrase set",
    "Number of digrams in the instance Phrase set",
    "Average number of letters per sentence in the instance Phrase set",
    "Correlation coefficient (letter-based) between the SC and the instance Phrase set",
    "Correlation coefficient (digram-based) between the SC and the instance Phrase set",
    "Relative entropy between the SC and the instance Phrase set",
]


@dataclass(frozen=True)
class TrialRecord:
    """One row of the brute-force trial log."""

    corpus_letters: int
    corpus_digrams: int
    reduced_size: int
    trial: int
    phrase_count: int
    letters: int
    digrams: int
    mean_letters: float
    letters_correlation: float
    digrams_correlation: float
    kld: float

    def to_row(self) -> str:
        return CSV_DELIMITER.join(str(v) for v in astuple(self))


@dataclass
class CompetitionResult:
    distribution: Distribution
    sentences: list[str]
    indices: list[int]
    kld: float
    records: list[TrialRecord] = field(default_factory=list)

    @property
    def best_trial(self) -> int:
        return min(self.records, key=lambda r: r.kld).trial if self.records else 0


def _write_row(log: TextIO | None, row: str) -> None:
    if log is not None:
        log.write(row + "\n")


def compete_random_datasets(
    reference: Distribution,
    reduced: ReducedCorpus,
    charset: Charset,
    phrase_num: int,
    trials: int,
    *,
    rng: np.random.Generator | None = None,
    log_path: Path | None = None,
    phrase_set_path: Path | None = None,
    progress: bool = False,
) -> CompetitionResult:
    """Run ``trials`` random phrase-set candidates and keep the lowest-KLD one.

    Parameters
    ----------
    reference:
        Source corpus distribution the candidates are compared to.
    reduced:
        Candidate pool; must hold at least ``phrase_num`` sentences.
    charset:
        Charset used to count candidate letters and digrams.
    phrase_num:
        Number of sentences per candidate.
    trials:
        Number of random candidates.
    rng:
        Random generator (defaults to an unseeded ``numpy.random.default_rng``).
    log_path:
        Optional trial log CSV; header plus one row per trial.
    phrase_set_path:
        Optional output file for the winning sentences.
    progress:
        Show a tqdm progress bar.

    Raises
    ------
    InsufficientPoolError
        If the reduced corpus is smaller than ``phrase_num``.
    """

    if trials < 1:
        raise ValueError("trials must be >= 1")
    if phrase_num < 1:
        raise ValueError("phrase_num must be >= 1")
    if len(reduced) < phrase_num:
        raise InsufficientPoolError(phrase_num, len(reduced))

    rng = rng if rng is not None else np.random.default_rng()
    best: CompetitionResult | None = None
    records: list[TrialRecord] = []

    log: TextIO | None = None
    if log_path is not None:
        log_path = Path(log_path)
        ensure_dir(log_path.parent)
        log = log_path.open("w", encoding="utf-8", newline="\n")

    try:
        _write_row(log, CSV_DELIMITER.join(TRIAL_LOG_HEADER))
        for trial in tqdm(range(1, trials + 1), desc="trials", disable=not progress):
            indices = draw_distinct_indices(rng, len(reduced), phrase_num)
            candidate = Distribution.from_indices(reduced, charset, indices)

            kld = candidate.kl_divergence(reference)
            letters_corr = candidate.correlation(reference, TargetEntity.LETTERS)
            digrams_corr = candidate.correlation(reference, TargetEntity.DIGRAMS)

            if best is None or kld < best.kld:
                best = CompetitionResult(
                    distribution=candidate,
                    sentences=[reduced[i] for i in indices],
                    indices=indices,
                    kld=kld,
                )

            record = TrialRecord(
                corpus_letters=reference.letters_total,
                corpus_digrams=reference.digrams_total,
                reduced_size=len(reduced),
                trial=trial,
                phrase_count=len(indices),
                letters=candidate.letters_total,
                digrams=candidate.digrams_total,
                mean_letters=round(candidate.letters_total / len(indices), Config.MEAN_LETTERS_DECIMALS),
                letters_correlation=letters_corr,
                digrams_correlation=digrams_corr,
                kld=kld,
            )
            records.append(record)
            _write_row(log, record.to_row())
            _LOGGER.debug(
                "Trial %d -- KLD: %s -- COR(let): %s -- COR(dig): %s", trial, kld, letters_corr, digrams_corr
            )
    finally:
        if log is not None:
            log.close()

    assert best is not None
    best.records = records
    _LOGGER.info("Best of %d trials: KLD %.9f (trial %d)", trials, best.kld, best.best_trial)

    if phrase_set_path is not None:
        write_lines(Path(phrase_set_path), best.sentences)
    return best
