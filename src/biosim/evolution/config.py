"""Configuration models for biosim-evolution (Pydantic v2).

Provides frozen Pydantic models that validate all parameters at construction
time (fail-fast).  Invalid values raise
:class:`~biosim.evolution.errors.ConfigurationError`.

Defaults reproduce the reference experiment: a nine-instruction alphabet,
a 1000-step lifetime, 100 islands of 40 organisms evolved for 400
generations with ring migration of 5 organisms every 5 generations.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, Field, model_validator

from biosim.evolution.errors import ConfigurationError, InvalidInputError
from biosim.evolution.interpreter.instructions import (
    CANONICAL_ALPHABET,
    validate_alphabet,
)
from biosim.evolution.interpreter.machine import DEFAULT_MAX_STEPS


class InterpreterConfig(BaseModel, frozen=True):
    """Configuration for the genome interpreter.

    Attributes:
        alphabet: Instruction symbols genomes are drawn from.  Must be a
            subset of ``"ABCDEFGHI"``.
        max_steps: Lifetime of an organism in interpreter steps.  Also the
            normaliser of the fitness score.
    """

    alphabet: str = CANONICAL_ALPHABET
    max_steps: int = DEFAULT_MAX_STEPS

    @model_validator(mode="after")
    def _validate_interpreter(self) -> Self:
        try:
            validate_alphabet(self.alphabet)
        except InvalidInputError as exc:
            raise ConfigurationError(str(exc)) from exc
        if self.max_steps < 1:
            raise ConfigurationError("max_steps must be >= 1")
        return self


class OperatorConfig(BaseModel, frozen=True):
    """Configuration for the variation operators handed to an engine.

    Attributes:
        mutation_points: Positions rewritten by each mutation.
        crossover_points: Cut points used by n-point crossover.
        tournament_size: Contestants per tournament selection round.
        crossover_rate: Probability that a selected pair is crossed over.
        mutation_rate: Probability that an offspring is mutated.
    """

    mutation_points: int = 2
    crossover_points: int = 3
    tournament_size: int = 3
    crossover_rate: float = 0.7
    mutation_rate: float = 0.5

    @model_validator(mode="after")
    def _validate_operators(self) -> Self:
        if self.mutation_points < 0:
            raise ConfigurationError("mutation_points must be >= 0")
        if self.crossover_points < 1:
            raise ConfigurationError("crossover_points must be >= 1")
        if self.tournament_size < 1:
            raise ConfigurationError("tournament_size must be >= 1")
        if not 0.0 <= self.crossover_rate <= 1.0:
            raise ConfigurationError("crossover_rate must be in [0.0, 1.0]")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ConfigurationError("mutation_rate must be in [0.0, 1.0]")
        return self


class IslandConfig(BaseModel, frozen=True):
    """Configuration for the island model of the external engine.

    Attributes:
        n_islands: Number of independent populations.
        population_size: Organisms per island.
        migration_frequency: Generations between migrations.
        n_migrants: Organisms sent to the next island on the ring.
    """

    n_islands: int = 100
    population_size: int = 40
    migration_frequency: int = 5
    n_migrants: int = 5

    @model_validator(mode="after")
    def _validate_islands(self) -> Self:
        if self.n_islands < 1:
            raise ConfigurationError("n_islands must be >= 1")
        if self.population_size < 2:
            raise ConfigurationError("population_size must be >= 2")
        if self.migration_frequency < 1:
            raise ConfigurationError("migration_frequency must be >= 1")
        if self.n_migrants < 0:
            raise ConfigurationError("n_migrants must be >= 0")
        if self.n_migrants >= self.population_size:
            raise ConfigurationError("n_migrants must be < population_size")
        return self


class EvolutionConfig(BaseModel, frozen=True):
    """Main configuration for an organism evolution run.

    All parameters have sensible defaults.  Invalid values raise
    :class:`~biosim.evolution.errors.ConfigurationError` at construction time.

    Attributes:
        genome_length: Fixed length of every genome in the run.
        generations: Number of generations to run.
        seed: Random seed for reproducibility.
        interpreter: Interpreter configuration.
        operators: Variation operator configuration.
        islands: Island model configuration.
        seed_genomes: Names of known seed genomes injected into each island
            at initialisation (see :mod:`biosim.evolution.seeds`).
    """

    genome_length: int = 32
    generations: int = 400
    seed: int = 42
    interpreter: InterpreterConfig = InterpreterConfig()
    operators: OperatorConfig = OperatorConfig()
    islands: IslandConfig = Field(default_factory=IslandConfig)
    seed_genomes: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _validate_evolution(self) -> Self:
        if self.genome_length < 1:
            raise ConfigurationError("genome_length must be >= 1")
        if self.generations < 1:
            raise ConfigurationError("generations must be >= 1")
        if self.operators.mutation_points > self.genome_length:
            raise ConfigurationError("mutation_points must be <= genome_length")
        if len(self.seed_genomes) > self.islands.population_size:
            raise ConfigurationError("seed_genomes must fit in one island population")
        if self.seed_genomes:
            from biosim.evolution.seeds import get_seed_template

            for name in self.seed_genomes:
                try:
                    template = get_seed_template(name)
                except KeyError as exc:
                    raise ConfigurationError(str(exc.args[0])) from exc
                missing = set(template.pattern) - set(self.interpreter.alphabet)
                if missing:
                    raise ConfigurationError(
                        f"seed genome {name!r} uses symbols outside the alphabet: "
                        f"{', '.join(sorted(missing))}"
                    )
        return self
