"""End-to-end sampling workflows used by the CLI.

Each workflow reads its inputs, runs one search strategy and writes every
artifact (reduced corpus, distribution CSVs, phrase set, log) under a
single output directory using the file names from :class:`Config`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Self
import logging

import numpy as np

from phraseset.charset import Charset
from phraseset.config import Config, GeneticConfig
from phraseset.corpus.reduced import ReducedCorpus
from phraseset.corpus.reducer import reduce_corpus
from phraseset.distribution import Distribution
from phraseset.search.competition import CompetitionResult, compete_random_datasets
from phraseset.search.genetic import GeneticResult, GeneticSearch
from phraseset.utils import iter_lines


_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SamplingOutputs:
    """Output file locations of a sampling run."""

    reduced_corpus: Path
    phrase_set: Path
    ga_phrase_set: Path
    sc_letters: Path
    sc_digrams: Path
    ps_letters: Path
    ps_digrams: Path
    trial_log: Path
    ga_log: Path

    @classmethod
    def in_dir(cls, output_dir: Path) -> Self:
        d = Path(output_dir)
        return cls(
            reduced_corpus=d / Config.REDUCED_CORPUS_FILE,
            phrase_set=d / Config.PHRASE_SET_FILE,
            ga_phrase_set=d / Config.GA_PHRASE_SET_FILE,
            sc_letters=d / Config.SC_LETTERS_FILE,
            sc_digrams=d / Config.SC_DIGRAMS_FILE,
            ps_letters=d / Config.PS_LETTERS_FILE,
            ps_digrams=d / Config.PS_DIGRAMS_FILE,
            trial_log=d / Config.TRIAL_LOG_FILE,
            ga_log=d / Config.GA_LOG_FILE,
        )


def reduce_only(
    corpus_path: Path,
    charset: Charset,
    word_counts: Iterable[int],
    reduced_out: Path,
) -> ReducedCorpus:
    """Normalize and reduce a source corpus file without computing statistics."""

    reduced = reduce_corpus(iter_lines(corpus_path), charset, word_counts)
    reduced.write(reduced_out)
    return reduced


def corpus_statistics(
    corpus_path: Path,
    charset: Charset,
    letters_out: Path,
    digrams_out: Path,
    word_counts: Iterable[int] | None = None,
    reduced_out: Path | None = None,
) -> tuple[Distribution, ReducedCorpus | None]:
    """Compute and write the source corpus distribution, optionally reducing it too."""

    reduce = word_counts is not None and reduced_out is not None
    distribution, reduced = Distribution.from_corpus(
        iter_lines(corpus_path), charset, reduce=reduce, accepted_word_counts=word_counts or ()
    )
    distribution.write_csv_pair(letters_out, digrams_out)
    if reduced is not None and reduced_out is not None:
        reduced.write(reduced_out)
    _LOGGER.info(
        "Source corpus: %d letters, %d digrams", distribution.letters_total, distribution.digrams_total
    )
    return distribution, reduced


def sample_from_scratch(
    corpus_path: Path,
    charset: Charset,
    *,
    trials: int,
    phrase_num: int,
    word_counts: Iterable[int],
    outputs: SamplingOutputs,
    rng: np.random.Generator | None = None,
    progress: bool = False,
) -> CompetitionResult:
    """Source corpus -> statistics and reduced corpus -> brute-force competition.

    Writes the reduced corpus, the source corpus and winning phrase-set
    distribution CSVs, the phrase set and the trial log.
    """

    corpus_distribution, reduced = corpus_statistics(
        corpus_path,
        charset,
        outputs.sc_letters,
        outputs.sc_digrams,
        word_counts=word_counts,
        reduced_out=outputs.reduced_corpus,
    )
    assert reduced is not None
    result = compete_random_datasets(
        corpus_distribution,
        reduced,
        charset,
        phrase_num,
        trials,
        rng=rng,
        log_path=outputs.trial_log,
        phrase_set_path=outputs.phrase_set,
        progress=progress,
    )
    result.distribution.write_csv_pair(outputs.ps_letters, outputs.ps_digrams)
    return result


def sample_with_known_distribution(
    letters_path: Path,
    digrams_path: Path,
    reduced_path: Path,
    charset: Charset,
    *,
    trials: int,
    phrase_num: int,
    outputs: SamplingOutputs,
    rng: np.random.Generator | None = None,
    progress: bool = False,
) -> CompetitionResult:
    """Brute-force competition using a stored distribution and reduced corpus."""

    corpus_distribution = Distribution.from_csv(letters_path, digrams_path)
    reduced = ReducedCorpus.load(reduced_path)
    result = compete_random_datasets(
        corpus_distribution,
        reduced,
        charset,
        phrase_num,
        trials,
        rng=rng,
        log_path=outputs.trial_log,
        phrase_set_path=outputs.phrase_set,
        progress=progress,
    )
    result.distribution.write_csv_pair(outputs.ps_letters, outputs.ps_digrams)
    return result


def evolve_phrase_set(
    letters_path: Path,
    digrams_path: Path,
    reduced_path: Path,
    charset: Charset,
    *,
    phrase_num: int,
    config: GeneticConfig,
    outputs: SamplingOutputs,
    rng: np.random.Generator | None = None,
    progress: bool = False,
) -> GeneticResult:
    """Genetic search using a stored distribution and reduced corpus."""

    corpus_distribution = Distribution.from_csv(letters_path, digrams_path)
    reduced = ReducedCorpus.load(reduced_path)
    search = GeneticSearch(
        corpus_distribution,
        reduced,
        charset,
        phrase_num,
        config,
        rng=rng,
        log_path=outputs.ga_log,
        phrase_set_path=outputs.ga_phrase_set,
        progress=progress,
    )
    return search.run()


def verify_phrase_set(
    letters_path: Path,
    digrams_path: Path,
    phrase_set_path: Path,
    charset: Charset,
) -> float:
    """Recompute the KLD of a written phrase set against the stored source distribution."""

    corpus_distribution = Distribution.from_csv(letters_path, digrams_path)
    phrase_distribution, _ = Distribution.from_corpus(iter_lines(phrase_set_path), charset)
    return phrase_distribution.kl_divergence(corpus_distribution)
