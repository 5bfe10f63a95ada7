import unicodedata
from pathlib import Path

import pytest

from phraseset.charset import Charset, CROATIAN_CHARSET, ENGLISH_CHARSET
from phraseset.corpus import (
    ReducedCorpus,
    chars_per_word,
    letter_count,
    normalize_line,
    reduce_corpus,
    word_count,
)
from phraseset.errors import DataFormatError


def test_normalize_line_strips_punctuation_and_digits():
    assert normalize_line("  Hello,   World!! 42 ") == "hello world"


def test_normalize_line_collapses_whitespace():
    assert normalize_line("a\t\tb \n c") == "a b c"


def test_normalize_line_keeps_diacritics():
    assert normalize_line("Dobar DAN, Đuro!") == "dobar dan đuro"


def test_word_count():
    assert word_count("one two  three") == 3
    assert word_count("   ") == 0
    assert word_count("") == 0


def test_letter_count_and_chars_per_word():
    assert letter_count("ab cd") == 4
    assert chars_per_word(["ab cd", "efgh"]) == pytest.approx(8 / 3)
    assert chars_per_word([]) == 0.0


def test_reduce_concrete_scenario():
    """Dedup of repeated 'aab', single-word sentences only."""

    cs = Charset.from_string("abc ")
    reduced = reduce_corpus(["aab", "abc", "bca", "aab"], cs, {1})
    assert list(reduced) == ["aab", "abc", "bca"]
    assert len(reduced) == 3


def test_reduce_filters_charset_and_word_counts():
    lines = [
        "Hello, World!",      # -> "hello world", 2 words, kept
        "hello world",        # duplicate after normalization
        "Zdravo svijete šš",  # 3 words, contains š (not in English charset)
        "one two three",      # 3 words, kept if 3 accepted
        "single",             # 1 word
    ]
    reduced = reduce_corpus(lines, ENGLISH_CHARSET, [2, 3])
    assert list(reduced) == ["hello world", "one two three"]


def test_reduce_is_idempotent():
    cs = ENGLISH_CHARSET
    lines = ["The cat sat.", "A dog ran!", "the cat sat", "Birds fly high", "x"]
    once = reduce_corpus(lines, cs, {2, 3})
    twice = reduce_corpus(list(once), cs, {2, 3})
    assert once == twice


def test_reduced_corpus_set_semantics():
    rc = ReducedCorpus(["b a", "a b", "b a"])
    assert len(rc) == 2
    assert rc[0] == "b a"
    assert rc.index_of("a b") == 1
    assert "a b" in rc
    assert rc.add("a b") is False
    assert rc.add("c d") is True
    assert rc.sentences == ("b a", "a b", "c d")


def test_reduced_corpus_write_and_load(tmp_path: Path):
    path = tmp_path / "rc" / "reduced.txt"
    rc = ReducedCorpus(["zeta one", "alpha two"])
    rc.write(path)
    assert path.read_text(encoding="utf-8") == "zeta one\nalpha two\n"
    assert ReducedCorpus.load(path) == rc


def test_reduced_corpus_load_collapses_duplicates(tmp_path: Path):
    path = tmp_path / "reduced.txt"
    path.write_text("a b\nc d\na b\n", encoding="utf-8")
    assert list(ReducedCorpus.load(path)) == ["a b", "c d"]


def test_reduced_corpus_load_missing(tmp_path: Path):
    with pytest.raises(DataFormatError):
        ReducedCorpus.load(tmp_path / "nope.txt")


def test_normalize_line_composes_decomposed_letters():
    decomposed = unicodedata.normalize("NFD", "Šuma čeka")
    assert normalize_line(decomposed) == "šuma čeka"


def test_reduce_keeps_decomposed_croatian_sentence():
    decomposed = unicodedata.normalize("NFD", "Šuma čeka!")
    assert list(reduce_corpus([decomposed], CROATIAN_CHARSET, {2})) == ["šuma čeka"]


def test_reduced_corpus_load_strips_byte_order_mark(tmp_path: Path):
    path = tmp_path / "reduced.txt"
    path.write_bytes(b"\xef\xbb\xbfred fox\nblue dog\n")
    rc = ReducedCorpus.load(path)
    assert list(rc) == ["red fox", "blue dog"]
    assert "red fox" in rc
