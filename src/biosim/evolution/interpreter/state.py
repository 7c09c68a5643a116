"""Organism state and the records the interpreter produces."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from biosim.evolution.interpreter.instructions import Instruction


@dataclass
class OrganismState:
    """Mutable state of one organism over a single evaluation.

    Attributes:
        children: Successful reproduction events.
        energy: Remaining energy; the organism dies at ``<= 0``.
        found_food: Whether food was located and not yet lost.
        size: Body size, grows irreversibly.
        threat: Accumulated predation pressure, may go negative.
    """

    children: int = 0
    energy: float = 10.0
    found_food: bool = False
    size: int = 1
    threat: float = 0.0

    @property
    def alive(self) -> bool:
        return self.energy > 0.0

    def snapshot(self) -> OrganismState:
        """Return an independent copy of the current state."""
        return dataclasses.replace(self)


@dataclass(frozen=True)
class StepRecord:
    """Trace of one executed interpreter step.

    Attributes:
        iteration: Zero-based step number.
        index: Genome position the step consumed.
        symbol: Raw genome symbol at *index*.
        instruction: Decoded instruction, ``None`` for an unexpected symbol.
        fired: Whether a conditional instruction's guard held: reproduction
            succeeded, food was eaten, or a skip was taken.  Always
            ``False`` for unconditional instructions.
        state: Organism state after the step's decay was applied.
    """

    iteration: int
    index: int
    symbol: str
    instruction: Instruction | None
    fired: bool
    state: OrganismState

    @property
    def skipped(self) -> bool:
        """Whether this step advances the pointer by two."""
        return self.fired and self.instruction is not None and self.instruction.is_skip

    @property
    def label(self) -> str:
        if self.instruction is None:
            return "Unexpected"
        return self.instruction.label


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of running a genome to completion or death.

    Attributes:
        fitness: ``1 - children / max_steps``; lower is better.
        children: Successful reproduction events.
        steps: Number of steps executed.
        died_at: Iteration on which the organism died, ``None`` if it
            survived the whole step budget.
        state: Final organism state.
    """

    fitness: float
    children: int
    steps: int
    died_at: int | None
    state: OrganismState

    @property
    def survived(self) -> bool:
        return self.died_at is None
