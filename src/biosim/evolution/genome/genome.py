"""Fixed-length instruction genome."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from biosim.evolution.errors import InvalidInputError
from biosim.evolution.genome.operators import (
    RandomSource,
    crossover_n_point,
    init_uniform,
    mutate_uniform,
)
from biosim.evolution.interpreter.instructions import (
    CANONICAL_ALPHABET,
    validate_alphabet,
)


def _check_symbols(symbols: list[str], alphabet: str) -> None:
    allowed = set(alphabet)
    invalid = sorted({s for s in symbols if s not in allowed}, key=repr)
    if invalid:
        raise InvalidInputError(
            f"symbols outside alphabet {alphabet!r}: "
            f"{', '.join(repr(s) for s in invalid)}"
        )


class Genome:
    """Ordered, fixed-length sequence of instruction symbols.

    The length is fixed at construction and every position always holds a
    symbol of :attr:`alphabet`.  The symbols are only exposed as a tuple;
    positions change solely through :meth:`mutate` and
    :meth:`replace_symbols`, which keep both invariants.

    Args:
        symbols: The genome's symbols, one character each.
        alphabet: Symbols this genome may contain.

    Raises:
        InvalidInputError: If the genome is empty, the alphabet is invalid,
            or a symbol lies outside the alphabet.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self, symbols: Iterable[str], alphabet: str = CANONICAL_ALPHABET
    ) -> None:
        validate_alphabet(alphabet)
        values = list(symbols)
        if not values:
            raise InvalidInputError("genome must contain at least one symbol")
        _check_symbols(values, alphabet)
        self._alphabet = alphabet
        self._symbols = values

    @classmethod
    def from_string(cls, text: str, alphabet: str = CANONICAL_ALPHABET) -> Genome:
        """Build a genome from a string such as ``"CDCDB"``."""
        return cls(text, alphabet)

    @classmethod
    def random(
        cls,
        length: int,
        alphabet: str = CANONICAL_ALPHABET,
        rng: RandomSource = None,
    ) -> Genome:
        """Build a genome of *length* symbols drawn uniformly from *alphabet*."""
        validate_alphabet(alphabet)
        return cls(init_uniform(length, alphabet, rng), alphabet)

    @property
    def symbols(self) -> tuple[str, ...]:
        """Read-only view of the symbols."""
        return tuple(self._symbols)

    @property
    def alphabet(self) -> str:
        return self._alphabet

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __getitem__(self, index: int | slice) -> str | tuple[str, ...]:
        if isinstance(index, slice):
            return tuple(self._symbols[index])
        return self._symbols[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Genome):
            return NotImplemented
        return self._symbols == other._symbols and self._alphabet == other._alphabet

    def __str__(self) -> str:
        return "".join(self._symbols)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, alphabet={self._alphabet!r})"

    def clone(self) -> Genome:
        """Return an independent copy."""
        return Genome(self._symbols, self._alphabet)

    def replace_symbols(self, symbols: Iterable[str]) -> None:
        """Overwrite every position in place.

        Raises:
            InvalidInputError: If *symbols* has a different length or holds a
                symbol outside the alphabet.
        """
        values = list(symbols)
        if len(values) != len(self._symbols):
            raise InvalidInputError(
                f"cannot replace {len(self._symbols)} symbols with {len(values)}"
            )
        _check_symbols(values, self._alphabet)
        self._symbols[:] = values

    def mutate(
        self,
        alphabet: str | None = None,
        k: int = 1,
        rng: RandomSource = None,
    ) -> list[int]:
        """Rewrite *k* distinct random positions with random symbols, in place.

        Args:
            alphabet: Symbols to draw from; must be a subset of this genome's
                alphabet.  Defaults to the genome's own alphabet.
            k: Number of positions to rewrite.
            rng: numpy Generator or seed.

        Returns:
            The rewritten positions, sorted.

        Raises:
            InvalidInputError: If *alphabet* does not match the genome's
                alphabet, or *k* is out of range.
        """
        alphabet = self._alphabet if alphabet is None else alphabet
        self._check_alphabet(alphabet)
        return mutate_uniform(self._symbols, alphabet, k, rng)

    def crossover(
        self,
        other: Genome,
        n: int = 1,
        rng: RandomSource = None,
    ) -> tuple[Genome, Genome]:
        """Produce two offspring by n-point crossover with *other*.

        Both parents are left unmodified.

        Raises:
            InvalidInputError: If *other* differs in length or alphabet, or
                *n* < 1.
        """
        if other.alphabet != self._alphabet:
            raise InvalidInputError(
                f"crossover needs matching alphabets, got {self._alphabet!r} "
                f"and {other.alphabet!r}"
            )
        first, second = crossover_n_point(self._symbols, other.symbols, n, rng)
        return Genome(first, self._alphabet), Genome(second, self._alphabet)

    def _check_alphabet(self, alphabet: str) -> None:
        validate_alphabet(alphabet)
        extra = set(alphabet) - set(self._alphabet)
        if extra:
            raise InvalidInputError(
                f"alphabet {alphabet!r} does not match genome alphabet "
                f"{self._alphabet!r}: unexpected {', '.join(sorted(extra))}"
            )


def new_random(
    length: int,
    alphabet: str = CANONICAL_ALPHABET,
    rng: RandomSource = None,
) -> Genome:
    """Construct a random genome; see :meth:`Genome.random`."""
    return Genome.random(length, alphabet, rng)
