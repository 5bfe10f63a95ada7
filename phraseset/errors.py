"""Exception taxonomy shared by the loaders and the search strategies."""

from __future__ import annotations


class PhraseSetError(Exception):
    """Base class for errors raised by phraseset."""


class DataFormatError(PhraseSetError, ValueError):
    """Input file (charset, corpus, reduced corpus, distribution CSV) is missing or malformed."""


class InsufficientPoolError(PhraseSetError, ValueError):
    """Fewer distinct candidates are available than a sampling step requested."""

    def __init__(self, requested: int, available: int, what: str = "sentences") -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot draw {requested} distinct {what}: only {available} available"
        )


__all__ = ["PhraseSetError", "DataFormatError", "InsufficientPoolError"]
