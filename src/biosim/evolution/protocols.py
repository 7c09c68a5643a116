"""Protocols (extension points) for biosim-evolution.

Protocols define structural interfaces that consumers implement.
They use ``typing.Protocol`` (not ABCs) so consumers never need to
inherit from biosim-evolution classes.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from biosim.evolution.interpreter.state import StepRecord


@runtime_checkable
class EvolvableGenome(Protocol):
    """What an external evolution engine needs from a genome.

    Example::

        class MyGenome:
            def __len__(self):
                return 8

            def __iter__(self):
                return iter("ABCDEFGH")

            def clone(self):
                return MyGenome()

            def mutate(self, alphabet=None, k=1, rng=None):
                return []

            def crossover(self, other, n=1, rng=None):
                return self.clone(), other.clone()
    """

    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[str]: ...

    def clone(self) -> EvolvableGenome: ...

    def mutate(
        self,
        alphabet: str | None = None,
        k: int = 1,
        rng: Any = None,
    ) -> list[int]: ...

    def crossover(
        self,
        other: Any,
        n: int = 1,
        rng: Any = None,
    ) -> tuple[EvolvableGenome, EvolvableGenome]: ...


@runtime_checkable
class FitnessEvaluator(Protocol):
    """Evaluator for fitness scoring.

    Returns one fitness per genome, lower is better.
    """

    def evaluate(
        self,
        genomes: Sequence[Any],
        context: Any = None,
    ) -> list[float]: ...


@runtime_checkable
class StepObserver(Protocol):
    """Per-step trace hook for the interpreter."""

    def __call__(self, record: StepRecord) -> Any: ...
