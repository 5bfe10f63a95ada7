from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import pytest

from phraseset.charset import ENGLISH_CHARSET
from phraseset.corpus import ReducedCorpus
from phraseset.distribution import Distribution
from phraseset.errors import InsufficientPoolError
from phraseset.search.competition import TRIAL_LOG_HEADER, compete_random_datasets

WORDS = ["red", "blue", "green", "quick", "lazy", "brown", "fox", "dog", "jumps", "over"]


@pytest.fixture
def reduced() -> ReducedCorpus:
    """One hundred distinct two-word sentences."""

    return ReducedCorpus(f"{a} {b}" for a in WORDS for b in WORDS)


@pytest.fixture
def reference(reduced: ReducedCorpus) -> Distribution:
    """Distribution of the whole reduced corpus, standing in for the source corpus."""

    return Distribution.from_indices(reduced, ENGLISH_CHARSET, range(len(reduced)))


def test_single_trial_returns_that_trial(reference: Distribution, reduced: ReducedCorpus):
    result = compete_random_datasets(reference, reduced, ENGLISH_CHARSET, 10, 1, rng=np.random.default_rng(0))
    assert len(result.records) == 1
    assert result.best_trial == 1
    assert result.kld == result.records[0].kld
    assert result.distribution == Distribution.from_indices(reduced, ENGLISH_CHARSET, result.indices)
    assert result.sentences == [reduced[i] for i in result.indices]


def test_winner_has_minimum_kld(reference: Distribution, reduced: ReducedCorpus):
    result = compete_random_datasets(reference, reduced, ENGLISH_CHARSET, 8, 25, rng=np.random.default_rng(1))
    assert len(result.records) == 25
    assert [r.trial for r in result.records] == list(range(1, 26))
    assert result.kld == min(r.kld for r in result.records)
    assert len(set(result.indices)) == 8


def test_full_pool_trials_score_identically(reference: Distribution, reduced: ReducedCorpus):
    result = compete_random_datasets(
        reference, reduced, ENGLISH_CHARSET, len(reduced), 4, rng=np.random.default_rng(2)
    )
    scores = {r.kld for r in result.records}
    assert len(scores) == 1
    assert result.kld == pytest.approx(0.0)
    assert result.best_trial == 1


def test_trial_record_fields(reference: Distribution, reduced: ReducedCorpus):
    result = compete_random_datasets(reference, reduced, ENGLISH_CHARSET, 5, 2, rng=np.random.default_rng(3))
    record = result.records[0]
    assert record.corpus_letters == reference.letters_total
    assert record.corpus_digrams == reference.digrams_total
    assert record.reduced_size == 100
    assert record.phrase_count == 5
    assert record.mean_letters == round(record.letters / 5, 2)
    assert -1.0 <= record.letters_correlation <= 1.0


def test_seeded_runs_are_reproducible(reference: Distribution, reduced: ReducedCorpus):
    a = compete_random_datasets(reference, reduced, ENGLISH_CHARSET, 6, 10, rng=np.random.default_rng(9))
    b = compete_random_datasets(reference, reduced, ENGLISH_CHARSET, 6, 10, rng=np.random.default_rng(9))
    assert a.indices == b.indices
    assert a.kld == b.kld


def test_writes_log_and_phrase_set(tmp_path: Path, reference: Distribution, reduced: ReducedCorpus):
    log = tmp_path / "logs" / "trial_log.csv"
    phrase_set = tmp_path / "phrase_set.txt"
    result = compete_random_datasets(
        reference,
        reduced,
        ENGLISH_CHARSET,
        4,
        3,
        rng=np.random.default_rng(4),
        log_path=log,
        phrase_set_path=phrase_set,
    )
    rows = log.read_text(encoding="utf-8").splitlines()
    assert rows[0] == ";".join(TRIAL_LOG_HEADER)
    assert len(rows) == 4
    assert all(len(row.split(";")) == 11 for row in rows[1:])
    assert phrase_set.read_text(encoding="utf-8").splitlines() == result.sentences


def test_pool_smaller_than_phrase_set(reference: Distribution):
    small = ReducedCorpus(["red fox", "blue dog"])
    with pytest.raises(InsufficientPoolError):
        compete_random_datasets(reference, small, ENGLISH_CHARSET, 3, 5, rng=np.random.default_rng(0))


@pytest.mark.parametrize("phrase_num,trials", [(0, 5), (3, 0)])
def test_invalid_arguments(reference: Distribution, reduced: ReducedCorpus, phrase_num: int, trials: int):
    with pytest.raises(ValueError):
        compete_random_datasets(reference, reduced, ENGLISH_CHARSET, phrase_num, trials)


def test_candidate_without_digrams_never_wins(reference: Distribution):
    pool = ReducedCorpus(["a", "red fox"])
    result = compete_random_datasets(reference, pool, ENGLISH_CHARSET, 1, 20, rng=np.random.default_rng(0))
    assert math.inf in {r.kld for r in result.records}
    assert result.sentences == ["red fox"]
    assert math.isfinite(result.kld)
