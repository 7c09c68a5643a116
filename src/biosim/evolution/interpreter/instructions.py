"""Instruction set for the organism genome interpreter.

Every genome symbol maps to exactly one :class:`Instruction`.  The canonical
alphabet is ``"ABCDEFGHI"``; smaller alphabets used by earlier experiments
are subsets of it and keep the same meaning for the symbols they retain.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from biosim.evolution.errors import InvalidInputError

CANONICAL_ALPHABET = "ABCDEFGHI"

UNKNOWN_LABEL = "Unknown"


class Instruction(Enum):
    """Closed set of instructions an organism genome can encode."""

    NOOP = "A"
    REPRODUCE = "B"
    LOCATE_FOOD = "C"
    EAT_FOOD = "D"
    GROW = "E"
    DEFEND = "F"
    EVADE = "G"
    SKIP_IF_LOW_THREAT = "H"
    SKIP_IF_LOW_ENERGY = "I"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Human-readable instruction name."""
        return _LABELS[self]

    @property
    def passive(self) -> bool:
        """Passive instructions skip food decay and metabolic decay."""
        return self in PASSIVE_INSTRUCTIONS

    @property
    def is_skip(self) -> bool:
        return self in SKIP_INSTRUCTIONS

    @property
    def keeps_food(self) -> bool:
        """Whether ``found_food`` survives the step that ran this instruction."""
        return self.passive or self is Instruction.LOCATE_FOOD


_LABELS: dict[Instruction, str] = {
    Instruction.NOOP: "No-op",
    Instruction.REPRODUCE: "Reproduce",
    Instruction.LOCATE_FOOD: "Locate Food",
    Instruction.EAT_FOOD: "Eat Food",
    Instruction.GROW: "Grow",
    Instruction.DEFEND: "Defend",
    Instruction.EVADE: "Evade",
    Instruction.SKIP_IF_LOW_THREAT: "Skip if Low Threat",
    Instruction.SKIP_IF_LOW_ENERGY: "Skip if Low Energy",
}

SKIP_INSTRUCTIONS = frozenset(
    {Instruction.SKIP_IF_LOW_THREAT, Instruction.SKIP_IF_LOW_ENERGY}
)

PASSIVE_INSTRUCTIONS = SKIP_INSTRUCTIONS | {Instruction.NOOP}


def validate_alphabet(alphabet: str) -> str:
    """Check that *alphabet* is a usable instruction alphabet.

    Args:
        alphabet: Candidate alphabet, one character per symbol.

    Returns:
        The alphabet, unchanged.

    Raises:
        InvalidInputError: If the alphabet is empty, repeats a symbol, or
            contains a symbol outside the canonical instruction table.
    """
    if not alphabet:
        raise InvalidInputError("alphabet must not be empty")
    if len(set(alphabet)) != len(alphabet):
        raise InvalidInputError(f"alphabet {alphabet!r} repeats a symbol")
    unknown = sorted(set(alphabet) - set(CANONICAL_ALPHABET))
    if unknown:
        raise InvalidInputError(
            f"alphabet {alphabet!r} contains symbols with no instruction: "
            f"{', '.join(unknown)}"
        )
    return alphabet


@dataclass(frozen=True)
class InstructionSet:
    """Maps the symbols of a configured alphabet to instructions.

    Attributes:
        alphabet: Symbols the set recognises.  Defaults to the canonical
            nine-symbol alphabet.
    """

    alphabet: str = CANONICAL_ALPHABET
    _table: dict[str, Instruction] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        validate_alphabet(self.alphabet)
        table = {symbol: Instruction(symbol) for symbol in self.alphabet}
        object.__setattr__(self, "_table", table)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._table

    def __len__(self) -> int:
        return len(self._table)

    def lookup(self, symbol: str) -> Instruction | None:
        """Return the instruction for *symbol*, or ``None`` if unrecognised."""
        return self._table.get(symbol)

    def decode(self, symbols: Iterable[str]) -> tuple[Instruction | None, ...]:
        """Decode a symbol sequence into instructions.

        Symbols outside the alphabet decode to ``None``; the interpreter
        treats those as unexpected input rather than failing.
        """
        return tuple(self._table.get(symbol) for symbol in symbols)


def describe(symbols: Iterable[str]) -> list[str]:
    """Return the instruction name for each symbol of a genome.

    Args:
        symbols: A :class:`~biosim.evolution.genome.Genome` or any iterable
            of single-character symbols (a plain string works).

    Returns:
        One label per symbol, ``"Unknown"`` for unrecognised symbols.
    """
    table = InstructionSet()
    labels: list[str] = []
    for symbol in symbols:
        instruction = table.lookup(symbol)
        labels.append(UNKNOWN_LABEL if instruction is None else instruction.label)
    return labels
