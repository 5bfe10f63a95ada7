"""Target charset definitions for letter and digram statistics.

A charset is the ordered set of symbols whose occurrences are counted. Its
order defines the iteration order of every count mapping built from it and
therefore the row order of the distribution CSV files.

Examples
--------
>>> from phraseset.charset import ENGLISH_CHARSET
>>> ENGLISH_CHARSET.size
27
>>> len(ENGLISH_CHARSET.digram_keys())
729
>>> ENGLISH_CHARSET.contains_all("hello world")
True
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Self

from phraseset.errors import DataFormatError


@dataclass(frozen=True)
class Charset:
    """A finite, ordered symbol set used for counting letters and digrams.

    Parameters
    ----------
    symbols:
        Immutable ordered collection of single characters.
    name:
        Human-friendly name, e.g., "English-27".
    """

    symbols: tuple[str, ...]
    name: str

    def __post_init__(self) -> None:
        if any(len(s) != 1 for s in self.symbols):
            raise ValueError("Charset symbols must be single characters")
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("Charset symbols must be unique")
        # frozen dataclass: cache the membership set through object.__setattr__
        object.__setattr__(self, "_symbol_set", frozenset(self.symbols))

    @classmethod
    def from_string(cls, text: str, name: str | None = None) -> Self:
        """Build a charset from a string, dropping repeated symbols."""

        unique = tuple(dict.fromkeys(text))
        return cls(symbols=unique, name=name or f"Custom-{len(unique)}")

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Read the charset from the first line of a UTF-8 text file.

        Raises
        ------
        DataFormatError
            If the file cannot be read or its first line is empty.
        """

        try:
            with Path(path).open("r", encoding="utf-8-sig") as f:
                first = f.readline()
        except (OSError, UnicodeDecodeError) as exc:
            raise DataFormatError(f"Charset file not found or unreadable: {path}") from exc
        line = first.rstrip("\r\n")
        if not line:
            raise DataFormatError(f"Charset file is empty or wrongly formatted: {path}")
        return cls.from_string(line, name=Path(path).stem)

    @property
    def size(self) -> int:
        """Number of symbols in the charset."""

        return len(self.symbols)

    def is_valid_char(self, char: str) -> bool:
        """Return True if `char` is a member of the charset."""

        return char in self._symbol_set  # type: ignore[attr-defined]

    def contains_all(self, text: str) -> bool:
        """Return True if every character of `text` belongs to the charset."""

        symbol_set = self._symbol_set  # type: ignore[attr-defined]
        return all(ch in symbol_set for ch in text)

    def letter_keys(self) -> list[str]:
        return list(self.symbols)

    def digram_keys(self) -> list[str]:
        """Every ordered symbol pair, row-major in charset order."""

        return [a + b for a in self.symbols for b in self.symbols]

    def empty_counts(self) -> tuple[dict[str, int], dict[str, int]]:
        """Return fresh zero-seeded letter and digram count mappings."""

        letters = dict.fromkeys(self.letter_keys(), 0)
        digrams = dict.fromkeys(self.digram_keys(), 0)
        return letters, digrams

    def write(self, path: Path) -> None:
        """Write the charset as a single line (the format read by `from_file`)."""

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(self.symbols) + "\n", encoding="utf-8")


# Predefined charsets
ENGLISH_CHARSET = Charset(
    symbols=tuple("abcdefghijklmnopqrstuvwxyz "),
    name="English-27",
)

CROATIAN_CHARSET = Charset(
    symbols=tuple("abcčćdđefghijklmnoprsštuvzž "),
    name="Croatian-28",
)


def get_charset_by_name(name: str) -> Charset:
    """Return a predefined `Charset` by its `name`.

    Raises a `ValueError` with available options if the name is unknown.
    """

    registry: dict[str, Charset] = {
        ENGLISH_CHARSET.name: ENGLISH_CHARSET,
        CROATIAN_CHARSET.name: CROATIAN_CHARSET,
    }

    try:
        return registry[name]
    except KeyError as exc:
        options = ", ".join(sorted(registry.keys()))
        raise ValueError(f"Unknown charset name: {name!r}. Available: {options}") from exc
