"""Reproduction-count fitness evaluation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from biosim.evolution.config import InterpreterConfig
from biosim.evolution.interpreter.machine import Observer, run
from biosim.evolution.interpreter.state import EvaluationResult


class ReproductionFitnessEvaluator:
    """Scores genomes by how many children their organism produces.

    Fitness is ``1 - children / max_steps``, so lower is better and the
    values are directly usable by a minimising engine.  Each genome runs
    against its own fresh organism, so the evaluator holds no state between
    calls.
    """

    def __init__(
        self,
        config: InterpreterConfig | None = None,
        observer: Observer | None = None,
    ) -> None:
        """Initialize evaluator.

        Args:
            config: Interpreter configuration (alphabet, step budget).
            observer: Optional per-step observer attached to every run.
        """
        self._config = config or InterpreterConfig()
        self._observer = observer

    @property
    def config(self) -> InterpreterConfig:
        return self._config

    def evaluate(
        self,
        genomes: Sequence[Iterable[str]],
        context: Any = None,
    ) -> list[float]:
        """Evaluate a batch of genomes.

        Args:
            genomes: Genomes (or symbol strings) to evaluate.
            context: Unused; accepted for engine compatibility.

        Returns:
            Fitness for each genome, in input order.
        """
        return [self.evaluate_one(genome) for genome in genomes]

    def evaluate_one(self, genome: Iterable[str]) -> float:
        """Return the fitness of a single genome."""
        return self.run(genome).fitness

    def run(self, genome: Iterable[str]) -> EvaluationResult:
        """Run a single genome and return the full outcome."""
        return run(genome, self._config, self._observer)

    def children(self, fitness: float) -> int:
        """Recover the reproduction count encoded in a fitness value."""
        return round((1.0 - fitness) * self._config.max_steps)
