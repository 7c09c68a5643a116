"""Tests for package imports and public API surface."""

from __future__ import annotations

import pytest


class TestSubpackageImports:
    """Verify all subpackages are importable."""

    def test_root_package(self) -> None:
        import biosim.evolution

        assert biosim.evolution.__version__ == "0.1.0"

    def test_config_module(self) -> None:
        from biosim.evolution import config

        assert hasattr(config, "EvolutionConfig")
        assert hasattr(config, "InterpreterConfig")

    def test_interpreter_package(self) -> None:
        from biosim.evolution.interpreter import evaluate, run

        assert callable(evaluate)
        assert callable(run)

    def test_genome_package(self) -> None:
        from biosim.evolution.genome import Genome, serialize_genome

        assert callable(serialize_genome)
        assert Genome.from_string("A")

    def test_fitness_package(self) -> None:
        from biosim.evolution.fitness import ReproductionFitnessEvaluator

        assert callable(ReproductionFitnessEvaluator)

    def test_cli_module(self) -> None:
        from biosim.evolution.cli import main

        assert callable(main)

    def test_adapters_import_without_deap(self) -> None:
        from biosim.evolution.adapters import build_toolbox, evolve_islands

        assert callable(build_toolbox)
        assert callable(evolve_islands)


class TestPublicApi:
    """Verify the root package re-exports."""

    def test_all_names_resolve(self) -> None:
        import biosim.evolution

        for name in biosim.evolution.__all__:
            assert hasattr(biosim.evolution, name), name

    @pytest.mark.parametrize(
        "name",
        [
            "Genome",
            "ReproductionFitnessEvaluator",
            "EvolutionConfig",
            "describe",
            "evaluate",
            "BiosimEvolutionError",
        ],
    )
    def test_key_names_exported(self, name: str) -> None:
        import biosim.evolution

        assert name in biosim.evolution.__all__
