"""Adapters bridging biosim-evolution to external evolution engines."""

from biosim.evolution.adapters.deap_engine import (  # noqa: F401
    EvolutionResult,
    build_toolbox,
    evolve_islands,
    organism_type,
)
