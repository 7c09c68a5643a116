#!/usr/bin/env python3
"""Evolve a reproducing organism with biosim-evolution.

This example demonstrates the full workflow:
  1. Configure the island model
  2. Evolve genomes on DEAP, printing each new champion
  3. Decode the winning genome into instruction names
  4. Replay its life with a step-by-step trace
  5. Serialize the winning genome and deserialize it back

Run:
    pip install 'biosim-evolution[deap]'
    python examples/evolve_organisms.py
"""

from __future__ import annotations

import json
import logging

from biosim.evolution import (
    EvolutionConfig,
    Genome,
    IslandConfig,
    LoggingTracer,
    ReproductionFitnessEvaluator,
    describe,
    deserialize_genome,
    serialize_genome,
)
from biosim.evolution.adapters import evolve_islands


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    # -- Config --
    # A scaled-down run; EvolutionConfig() alone gives 100 islands of 40
    # organisms over 400 generations.
    config = EvolutionConfig(
        genome_length=32,
        generations=60,
        seed=42,
        islands=IslandConfig(n_islands=10),
        seed_genomes=("forager",),
    )

    # -- Champion callback --
    def on_champion(generation: int, genome: Genome, fitness: float) -> None:
        print(f"  gen {generation:3d}  fitness={fitness:.4f}  genome={genome}")

    # -- Evolve --
    print(
        f"Evolving {config.islands.n_islands} islands of "
        f"{config.islands.population_size} organisms "
        f"for {config.generations} generations..."
    )
    result = evolve_islands(config, callback=on_champion)

    # -- Results --
    print(f"\nBest genome: {result.best_genome}")
    print(f"Children: {result.children}  (fitness {result.best_fitness:.4f})")
    print("Instructions:")
    for position, label in enumerate(describe(result.best_genome)):
        print(f"  {position:2d} {label}")

    # -- Trace --
    evaluator = ReproductionFitnessEvaluator(
        config.interpreter, observer=LoggingTracer(level=logging.INFO)
    )
    outcome = evaluator.run(result.best_genome)
    print(f"\nReplayed {outcome.steps} steps; survived={outcome.survived}")

    # -- Serialization round-trip --
    payload = serialize_genome(result.best_genome)
    print(f"\nSerialized genome ({len(json.dumps(payload))} bytes JSON)")

    restored = deserialize_genome(payload)
    assert restored == result.best_genome
    print("Deserialization round-trip: OK")


if __name__ == "__main__":
    main()
