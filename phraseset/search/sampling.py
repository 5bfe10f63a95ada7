"""Random index sampling shared by the search strategies."""

from __future__ import annotations

import numpy as np

from phraseset.errors import InsufficientPoolError


def draw_distinct_indices(rng: np.random.Generator, pool_size: int, count: int) -> list[int]:
    """Draw ``count`` distinct indices from ``[0, pool_size)`` by rejection sampling.

    Indices are returned in draw order. Fails fast instead of looping forever
    when the pool is too small.

    Raises
    ------
    InsufficientPoolError
        If ``count > pool_size``.
    """

    if count < 0:
        raise ValueError("count must be >= 0")
    if count > pool_size:
        raise InsufficientPoolError(count, pool_size)

    chosen: dict[int, None] = {}
    while len(chosen) < count:
        candidate = int(rng.integers(pool_size))
        if candidate not in chosen:
            chosen[candidate] = None
    return list(chosen)
