"""Genome interpreter: runs a genome as a program against an organism.

The interpreter is a small state machine.  Each step fetches the instruction
under the pointer, applies its effect, applies food and metabolic decay,
checks for death, then advances the pointer (by two when a skip fired),
wrapping at the end of the genome.  An organism lives for at most
``max_steps`` steps and its fitness is ``1 - children / max_steps``.

Evaluation is deterministic and never raises: symbols the instruction set
does not recognise are logged and executed as inert, non-passive steps.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from biosim.evolution.interpreter.instructions import (
    CANONICAL_ALPHABET,
    Instruction,
    InstructionSet,
)
from biosim.evolution.interpreter.state import (
    EvaluationResult,
    OrganismState,
    StepRecord,
)

if TYPE_CHECKING:
    from biosim.evolution.config import InterpreterConfig

logger = logging.getLogger(__name__)

Observer = Callable[[StepRecord], object]

DEFAULT_MAX_STEPS = 1000

REPRODUCTION_THRESHOLD = 25.0
REPRODUCTION_COST = 25.0
FOOD_ENERGY = 10.0
FOOD_ENERGY_FLOOR = 15.0
GROWTH_EXPONENT = 1.05
DEFEND_COST = 5.0
THREAT_RELIEF = 5.0
LOW_THREAT = 5.0
LOW_ENERGY = 30.0
THREAT_TOLERANCE = 20.0
METABOLIC_SIZE_SCALE = 40.0


@functools.lru_cache(maxsize=16)
def _instruction_set(alphabet: str) -> InstructionSet:
    return InstructionSet(alphabet)


def _apply(instruction: Instruction, state: OrganismState) -> bool:
    """Apply *instruction* to *state*; return ``True`` if its guard held."""
    if instruction is Instruction.REPRODUCE:
        fired = state.energy > REPRODUCTION_THRESHOLD
        if fired:
            state.children += 1
        state.energy -= REPRODUCTION_COST
        return fired
    elif instruction is Instruction.LOCATE_FOOD:
        state.found_food = True
    elif instruction is Instruction.EAT_FOOD:
        if not state.found_food:
            return False
        state.energy += FOOD_ENERGY + state.size
        # A floor, not a cap.
        state.energy = max(state.energy, state.size + FOOD_ENERGY_FLOOR)
        return True
    elif instruction is Instruction.GROW:
        state.energy -= (state.size / 2.0) ** GROWTH_EXPONENT
        state.size += 1
    elif instruction is Instruction.DEFEND:
        state.energy -= DEFEND_COST / (state.size / 2.0)
        state.threat -= THREAT_RELIEF
        state.threat = max(state.threat, 0.0)
    elif instruction is Instruction.EVADE:
        state.energy -= 1.0 * (state.size / 2.0)
        state.threat -= THREAT_RELIEF
    elif instruction is Instruction.SKIP_IF_LOW_THREAT:
        return state.threat < LOW_THREAT
    elif instruction is Instruction.SKIP_IF_LOW_ENERGY:
        return state.energy < LOW_ENERGY
    return False


def _decay(state: OrganismState) -> None:
    """Charge the metabolic cost of a non-passive step."""
    state.energy -= (1.0 + state.size / METABOLIC_SIZE_SCALE) ** 2
    state.threat += 1.0
    if state.threat > THREAT_TOLERANCE + state.size:
        state.energy -= state.threat


def run(
    genome: Iterable[str],
    config: InterpreterConfig | None = None,
    observer: Observer | None = None,
) -> EvaluationResult:
    """Run *genome* against a fresh organism and report the outcome.

    Args:
        genome: A :class:`~biosim.evolution.genome.Genome`, a string, or any
            sequence of single-character symbols.
        config: Interpreter configuration; the canonical alphabet and a
            1000-step lifetime when omitted.
        observer: Optional callable invoked with a :class:`StepRecord` after
            every executed step.

    Returns:
        The evaluation outcome, including fitness and the final state.
    """
    if config is None:
        alphabet, max_steps = CANONICAL_ALPHABET, DEFAULT_MAX_STEPS
    else:
        alphabet, max_steps = config.alphabet, config.max_steps

    symbols = tuple(genome)
    program = _instruction_set(alphabet).decode(symbols)
    state = OrganismState()
    if not program:
        return EvaluationResult(
            fitness=1.0, children=0, steps=0, died_at=None, state=state
        )

    if None in program:
        unexpected = sorted({s for s, op in zip(symbols, program) if op is None})
        logger.warning(
            "Genome has symbols outside alphabet %r: %s; executing them as inert",
            alphabet,
            ", ".join(repr(s) for s in unexpected),
        )

    keeps_food = tuple(op is not None and op.keeps_food for op in program)
    passive = tuple(op is not None and op.passive for op in program)
    length = len(program)

    index = 0
    steps = 0
    died_at: int | None = None
    for iteration in range(max_steps):
        instruction = program[index]
        fired = instruction is not None and _apply(instruction, state)
        skipped = fired and instruction.is_skip

        if not keeps_food[index]:
            state.found_food = False
        if not passive[index]:
            _decay(state)
        steps += 1

        if observer is not None:
            observer(
                StepRecord(
                    iteration=iteration,
                    index=index,
                    symbol=symbols[index],
                    instruction=instruction,
                    fired=fired,
                    state=state.snapshot(),
                )
            )

        if state.energy <= 0.0:
            died_at = iteration
            break

        index = (index + (2 if skipped else 1)) % length

    return EvaluationResult(
        fitness=1.0 - state.children / float(max_steps),
        children=state.children,
        steps=steps,
        died_at=died_at,
        state=state,
    )


def evaluate(
    genome: Iterable[str],
    config: InterpreterConfig | None = None,
    observer: Observer | None = None,
) -> float:
    """Return the fitness of *genome*; lower is better.

    Shorthand for ``run(genome, config, observer).fitness``.
    """
    return run(genome, config, observer).fitness
