"""Exception hierarchy for biosim-evolution.

All exceptions inherit from :class:`BiosimEvolutionError`.  Consumers can
catch ``BiosimEvolutionError`` for a blanket handler or individual subclasses
for fine-grained control.

Genome evaluation itself never raises: only genome construction, the
variation operators, payload decoding, configuration and the engine bridge
have checked failure modes.
"""

from __future__ import annotations


class BiosimEvolutionError(Exception):
    """Base exception for all biosim-evolution errors.

    All biosim-evolution exceptions subclass this, so
    ``except BiosimEvolutionError`` acts as a catch-all.
    """


class EvolutionError(BiosimEvolutionError):
    """General domain error."""


class InvalidInputError(EvolutionError):
    """Raised when a genome or a genome operator receives malformed input.

    Trigger conditions:

    - A genome is constructed with a symbol outside its alphabet.
    - A genome is constructed empty, or with an empty/duplicated alphabet.
    - Mutation is given an alphabet that does not match the genome's.
    - Mutation is asked for more points than the genome has positions.
    - Crossover operands differ in length or alphabet.
    """


class SerializationError(EvolutionError):
    """Raised when genome serialization/deserialization fails.

    Trigger conditions:

    - Genome schema version mismatch or unsupported version.
    - Corrupt payload data (missing required fields, invalid structure).
    """


class ConfigurationError(EvolutionError):
    """Raised when biosim-evolution configuration is invalid.

    Trigger conditions:

    - ``max_steps < 1`` or an alphabet with symbols outside the
      instruction table.
    - ``population_size < 2``, ``n_islands < 1``, ``generations < 1``
    - ``n_migrants`` not smaller than ``population_size``
    - Unknown seed genome names.

    Raised at construction time (fail-fast) so invalid configs never
    reach the evolution loop.
    """


class AdapterError(EvolutionError):
    """Raised on external evolution engine adapter failures.

    Trigger conditions:

    - The optional ``deap`` dependency is not installed.
    - The configured evaluator is neither an evaluator object nor callable.
    """
