"""Genome interpreter: instruction set, organism state and the step machine."""

from biosim.evolution.interpreter.instructions import (
    CANONICAL_ALPHABET,
    Instruction,
    InstructionSet,
    describe,
    validate_alphabet,
)
from biosim.evolution.interpreter.machine import (
    DEFAULT_MAX_STEPS,
    Observer,
    evaluate,
    run,
)
from biosim.evolution.interpreter.state import (
    EvaluationResult,
    OrganismState,
    StepRecord,
)
from biosim.evolution.interpreter.trace import (
    LoggingTracer,
    RecordingTracer,
    step_event,
)

__all__ = [
    "CANONICAL_ALPHABET",
    "DEFAULT_MAX_STEPS",
    "EvaluationResult",
    "Instruction",
    "InstructionSet",
    "LoggingTracer",
    "Observer",
    "OrganismState",
    "RecordingTracer",
    "StepRecord",
    "describe",
    "evaluate",
    "run",
    "step_event",
    "validate_alphabet",
]
