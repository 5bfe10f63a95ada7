"""Shared utilities for line-oriented text files.

Corpus, reduced-corpus and phrase-set files are UTF-8, one sentence per
line. These helpers centralize reading and writing them so that missing
inputs surface as :class:`DataFormatError` everywhere.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from phraseset.errors import DataFormatError


def ensure_dir(path: Path) -> None:
    """Create directory ``path`` and parents if they don't exist."""

    path.mkdir(parents=True, exist_ok=True)


def iter_lines(path: Path) -> Iterator[str]:
    """Yield lines of the UTF-8 file at ``path`` without line terminators or BOM.

    The file is streamed so that large source corpora are never loaded
    into memory at once.

    Raises
    ------
    DataFormatError
        If the file does not exist or is not valid UTF-8.
    """

    path = Path(path)
    if not path.is_file():
        raise DataFormatError(f"File not found: {path}")
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as f:
            for line in f:
                yield line.rstrip("\r\n")
    except UnicodeDecodeError as exc:
        raise DataFormatError(f"File is not valid UTF-8: {path}") from exc


def write_lines(path: Path, lines: Iterable[str]) -> None:
    """Write ``lines`` to ``path``, one per line, creating parent directories."""

    path = Path(path)
    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        for line in lines:
            f.write(line)
            f.write("\n")
