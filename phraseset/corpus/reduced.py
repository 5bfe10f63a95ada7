"""Reduced corpus (RC): the deduplicated candidate pool of normalized sentences."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Self

from phraseset.utils import iter_lines, write_lines


class ReducedCorpus:
    """Ordered, duplicate-free collection of normalized sentences.

    Membership uses set semantics while a stable indexable view (first-seen
    order) backs the integer encoding used by the search strategies.
    Sentences are stored exactly as given and never re-normalized.
    """

    def __init__(self, sentences: Iterable[str] = ()) -> None:
        self._index: dict[str, int] = {}
        self._sentences: list[str] = []
        for sentence in sentences:
            self.add(sentence)

    def add(self, sentence: str) -> bool:
        """Append ``sentence`` unless already present; return True if added."""

        if sentence in self._index:
            return False
        self._index[sentence] = len(self._sentences)
        self._sentences.append(sentence)
        return True

    @property
    def sentences(self) -> tuple[str, ...]:
        return tuple(self._sentences)

    def index_of(self, sentence: str) -> int:
        return self._index[sentence]

    def __len__(self) -> int:
        return len(self._sentences)

    def __getitem__(self, index: int) -> str:
        return self._sentences[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sentences)

    def __contains__(self, sentence: object) -> bool:
        return sentence in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReducedCorpus):
            return NotImplemented
        return self._sentences == other._sentences

    def __repr__(self) -> str:
        return f"ReducedCorpus(sentences={len(self)})"

    # Serialization ------------------------------------------------------------
    @classmethod
    def load(cls, path: Path) -> Self:
        """Load a reduced corpus file; repeated lines collapse to one entry.

        Raises
        ------
        DataFormatError
            If the file is missing or not valid UTF-8.
        """

        return cls(iter_lines(path))

    def write(self, path: Path) -> None:
        """Write one sentence per line in insertion order (no header)."""

        write_lines(path, self._sentences)
