"""Step observers for the genome interpreter.

Observers are plain callables receiving a
:class:`~biosim.evolution.interpreter.state.StepRecord`; the interpreter only
builds records when one is attached.
"""

from __future__ import annotations

import logging

from biosim.evolution.interpreter.instructions import Instruction
from biosim.evolution.interpreter.state import StepRecord

logger = logging.getLogger(__name__)

_EVENTS: dict[Instruction, tuple[str, str]] = {
    Instruction.NOOP: ("No Op", "No Op"),
    Instruction.REPRODUCE: ("Spawn Child succeeded", "Spawn Child failed"),
    Instruction.LOCATE_FOOD: ("Located Food", "Located Food"),
    Instruction.EAT_FOOD: ("Ate Food", "Eat Food Failed"),
    Instruction.GROW: ("Growing", "Growing"),
    Instruction.DEFEND: ("Defending", "Defending"),
    Instruction.EVADE: ("Evading", "Evading"),
    Instruction.SKIP_IF_LOW_THREAT: (
        "Skipping due to low threat",
        "Not skipping, threat is high",
    ),
    Instruction.SKIP_IF_LOW_ENERGY: (
        "Skipping due to low energy",
        "Not skipping, energy is high",
    ),
}


def step_event(record: StepRecord) -> str:
    """Return a short description of what happened on *record*'s step."""
    if record.instruction is None:
        return f"Unexpected symbol {record.symbol!r}"
    fired_event, default_event = _EVENTS[record.instruction]
    return fired_event if record.fired else default_event


class LoggingTracer:
    """Observer that logs every interpreter step.

    Args:
        level: Logging level for step messages.
        log: Logger to write to; this module's logger by default.
    """

    def __init__(
        self, level: int = logging.DEBUG, log: logging.Logger | None = None
    ) -> None:
        self._level = level
        self._logger = log or logger

    def __call__(self, record: StepRecord) -> None:
        if not self._logger.isEnabledFor(self._level):
            return
        state = record.state
        self._logger.log(
            self._level,
            "%s [step=%d index=%d children=%d energy=%.4f found_food=%s "
            "size=%d threat=%.1f]",
            step_event(record),
            record.iteration,
            record.index,
            state.children,
            state.energy,
            state.found_food,
            state.size,
            state.threat,
        )
        if not state.alive:
            self._logger.log(self._level, "Died on iteration %d", record.iteration)


class RecordingTracer:
    """Observer that keeps every step record, mainly for inspection and tests."""

    def __init__(self) -> None:
        self.records: list[StepRecord] = []

    def __call__(self, record: StepRecord) -> None:
        self.records.append(record)

    def __len__(self) -> int:
        return len(self.records)

    def clear(self) -> None:
        self.records.clear()

    @property
    def indices(self) -> list[int]:
        """Genome positions consumed, in execution order."""
        return [record.index for record in self.records]
