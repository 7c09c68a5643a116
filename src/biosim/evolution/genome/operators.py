"""Variation operators on symbol sequences.

These work on plain lists of symbols so an external engine can apply them to
its own individual types; :class:`~biosim.evolution.genome.Genome` wraps them
with alphabet checks.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from biosim.evolution.errors import InvalidInputError

RandomSource = np.random.Generator | int | None


def as_generator(rng: RandomSource) -> np.random.Generator:
    """Return *rng* as a numpy Generator; ints and ``None`` seed a new one."""
    return np.random.default_rng(rng)


def init_uniform(length: int, alphabet: str, rng: RandomSource = None) -> list[str]:
    """Draw *length* symbols independently and uniformly from *alphabet*.

    Raises:
        InvalidInputError: If *length* < 1 or *alphabet* is empty.
    """
    if length < 1:
        raise InvalidInputError("length must be >= 1")
    if not alphabet:
        raise InvalidInputError("alphabet must not be empty")
    picks = as_generator(rng).integers(0, len(alphabet), size=length)
    return [alphabet[int(i)] for i in picks]


def mutate_uniform(
    symbols: list[str],
    alphabet: str,
    k: int,
    rng: RandomSource = None,
) -> list[int]:
    """Overwrite *k* distinct positions of *symbols* in place.

    Each chosen position receives a symbol drawn uniformly from *alphabet*,
    which may be the symbol already there.

    Returns:
        The mutated positions, sorted.

    Raises:
        InvalidInputError: If *k* is negative or exceeds ``len(symbols)``, or
            *alphabet* is empty.
    """
    if not alphabet:
        raise InvalidInputError("alphabet must not be empty")
    if k < 0 or k > len(symbols):
        raise InvalidInputError(
            f"cannot mutate {k} positions of a genome of length {len(symbols)}"
        )
    gen = as_generator(rng)
    positions = sorted(int(p) for p in gen.choice(len(symbols), size=k, replace=False))
    for position in positions:
        symbols[position] = alphabet[int(gen.integers(0, len(alphabet)))]
    return positions


def crossover_n_point(
    first: Sequence[str],
    second: Sequence[str],
    n: int,
    rng: RandomSource = None,
) -> tuple[list[str], list[str]]:
    """N-point crossover of two equal-length parents.

    Cut points are *n* distinct positions in ``[1, len)``; offspring take
    alternate segments from each parent, starting with their own.  *n* is
    clamped to ``len - 1``.  Parents are not modified.

    Raises:
        InvalidInputError: If the parents differ in length or *n* < 1.
    """
    if len(first) != len(second):
        raise InvalidInputError(
            f"crossover needs equal-length parents, got {len(first)} and {len(second)}"
        )
    if n < 1:
        raise InvalidInputError("crossover needs at least one cut point")

    child_a, child_b = list(first), list(second)
    length = len(first)
    if length < 2:
        return child_a, child_b

    n = min(n, length - 1)
    picks = as_generator(rng).choice(np.arange(1, length), size=n, replace=False)
    cuts = np.sort(picks)

    start = 0
    swap = False
    for end in [*(int(c) for c in cuts), length]:
        if swap:
            child_a[start:end] = second[start:end]
            child_b[start:end] = first[start:end]
        swap = not swap
        start = end
    return child_a, child_b
