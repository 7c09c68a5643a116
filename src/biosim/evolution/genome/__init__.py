"""Genome representation and variation operators."""

from biosim.evolution.genome.genome import Genome, new_random
from biosim.evolution.genome.operators import (
    RandomSource,
    as_generator,
    crossover_n_point,
    init_uniform,
    mutate_uniform,
)
from biosim.evolution.genome.serialize import (
    GENOME_SCHEMA_VERSION,
    deserialize_genome,
    serialize_genome,
)

__all__ = [
    "GENOME_SCHEMA_VERSION",
    "Genome",
    "RandomSource",
    "as_generator",
    "crossover_n_point",
    "deserialize_genome",
    "init_uniform",
    "mutate_uniform",
    "new_random",
    "serialize_genome",
]
