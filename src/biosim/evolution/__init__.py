"""
biosim-evolution: evolving bio-energetic instruction genomes.

This package provides the genome representation and variation operators,
the deterministic interpreter that turns a genome into an organism's
reproductive fitness, and an optional bridge to an external evolution
engine (DEAP) for selection, islands and migration.
"""

from biosim.evolution.config import (
    EvolutionConfig,
    InterpreterConfig,
    IslandConfig,
    OperatorConfig,
)
from biosim.evolution.errors import (
    AdapterError,
    BiosimEvolutionError,
    ConfigurationError,
    EvolutionError,
    InvalidInputError,
    SerializationError,
)
from biosim.evolution.fitness.reproduction import ReproductionFitnessEvaluator
from biosim.evolution.genome import (
    Genome,
    deserialize_genome,
    new_random,
    serialize_genome,
)
from biosim.evolution.interpreter import (
    CANONICAL_ALPHABET,
    EvaluationResult,
    Instruction,
    InstructionSet,
    LoggingTracer,
    OrganismState,
    RecordingTracer,
    StepRecord,
    describe,
    evaluate,
    run,
)
from biosim.evolution.protocols import (
    EvolvableGenome,
    FitnessEvaluator,
    StepObserver,
)
from biosim.evolution.seeds import (
    build_genome_seed,
    build_genome_seeds,
    list_known_genome_seeds,
)

__all__ = [
    # Configuration
    "EvolutionConfig",
    "InterpreterConfig",
    "IslandConfig",
    "OperatorConfig",
    # Protocols
    "EvolvableGenome",
    "FitnessEvaluator",
    "StepObserver",
    # Genome
    "Genome",
    "new_random",
    "serialize_genome",
    "deserialize_genome",
    # Interpreter
    "CANONICAL_ALPHABET",
    "Instruction",
    "InstructionSet",
    "OrganismState",
    "StepRecord",
    "EvaluationResult",
    "LoggingTracer",
    "RecordingTracer",
    "describe",
    "evaluate",
    "run",
    # Fitness
    "ReproductionFitnessEvaluator",
    # Seeds
    "build_genome_seed",
    "build_genome_seeds",
    "list_known_genome_seeds",
    # Errors
    "BiosimEvolutionError",
    "EvolutionError",
    "InvalidInputError",
    "SerializationError",
    "ConfigurationError",
    "AdapterError",
]

__version__ = "0.1.0"
