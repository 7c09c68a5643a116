"""Fitness evaluation for organism genomes."""

from biosim.evolution.fitness.reproduction import (  # noqa: F401
    ReproductionFitnessEvaluator,
)
