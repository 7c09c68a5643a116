"""Bridge from organism genomes to the DEAP evolution engine.

Selection, island management, migration and the hall of fame are DEAP's job;
this module only registers the genome operators and the interpreter fitness
into a :class:`deap.base.Toolbox` and drives a generational island model
with it.  DEAP is an optional dependency (``pip install
biosim-evolution[deap]``) and is imported lazily.
"""

from __future__ import annotations

import functools
import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from biosim.evolution.errors import AdapterError
from biosim.evolution.fitness.reproduction import ReproductionFitnessEvaluator
from biosim.evolution.genome.genome import Genome
from biosim.evolution.genome.operators import RandomSource, as_generator, init_uniform
from biosim.evolution.interpreter.instructions import CANONICAL_ALPHABET
from biosim.evolution.seeds import build_genome_seed

if TYPE_CHECKING:
    from deap import base

    from biosim.evolution.config import EvolutionConfig

logger = logging.getLogger(__name__)

Evaluator = Callable[[list[Any], Any], list[float]] | Any
ChampionCallback = Callable[[int, Genome, float], object]

PROGRESS_INTERVAL = 100


@dataclass(frozen=True)
class EvolutionResult:
    """Outcome of an island evolution run.

    Attributes:
        best_genome: Best genome seen during the run (hall of fame).
        best_fitness: Its fitness; lower is better.
        children: Reproduction count encoded by ``best_fitness``.
        history: Best fitness after every generation.
    """

    best_genome: Genome
    best_fitness: float
    children: int
    history: tuple[float, ...]


def _require_deap() -> Any:
    try:
        import deap.algorithms
        import deap.base
        import deap.tools
    except ImportError as exc:
        raise AdapterError(
            "The DEAP bridge requires the 'deap' extra: "
            "pip install 'biosim-evolution[deap]'"
        ) from exc
    return deap


@functools.lru_cache(maxsize=1)
def organism_type() -> type[Genome]:
    """Return the genome subclass DEAP individuals are built from.

    It carries a single-objective, minimising DEAP fitness.
    """
    deap = _require_deap()

    class OrganismFitness(deap.base.Fitness):
        weights = (-1.0,)

    class Organism(Genome):
        def __init__(
            self, symbols: Sequence[str], alphabet: str = CANONICAL_ALPHABET
        ) -> None:
            super().__init__(list(symbols), alphabet)
            self.fitness = OrganismFitness()

    return Organism


def _random_organism(
    organism: type[Genome],
    length: int,
    alphabet: str,
    rng: RandomSource,
) -> Genome:
    return organism(init_uniform(length, alphabet, rng), alphabet)


def _mate(
    first: Genome, second: Genome, n: int, rng: RandomSource
) -> tuple[Genome, Genome]:
    """In-place crossover, as DEAP's variation loop expects."""
    child_a, child_b = first.crossover(second, n, rng)
    first.replace_symbols(child_a)
    second.replace_symbols(child_b)
    return first, second


def _mutate(
    individual: Genome, alphabet: str, k: int, rng: RandomSource
) -> tuple[Genome]:
    individual.mutate(alphabet, k, rng)
    return (individual,)


def _call_evaluator(evaluator: Evaluator, genomes: list[Any]) -> list[float]:
    if hasattr(evaluator, "evaluate") and callable(evaluator.evaluate):
        return evaluator.evaluate(genomes, None)
    if callable(evaluator):
        return evaluator(genomes, None)
    raise AdapterError("Evaluator must implement evaluate() or be callable")


def _evaluate_batch(evaluator: Evaluator, individuals: list[Any]) -> list[tuple[float]]:
    return [(fitness,) for fitness in _call_evaluator(evaluator, individuals)]


def _evaluate_one(evaluator: Evaluator, individual: Any) -> tuple[float]:
    return _evaluate_batch(evaluator, [individual])[0]


def build_toolbox(
    config: EvolutionConfig,
    evaluator: Evaluator | None = None,
    rng: RandomSource = None,
) -> base.Toolbox:
    """Register genome operators and fitness into a DEAP toolbox.

    Registered aliases: ``individual``, ``population``, ``evaluate`` (one
    individual, returns a 1-tuple), ``evaluate_batch``, ``mate``,
    ``mutate``, ``select`` and ``migrate``.

    Args:
        config: Evolution configuration.
        evaluator: Object exposing ``evaluate(genomes, context)`` or a
            callable with the same signature.  Defaults to a
            :class:`ReproductionFitnessEvaluator` over ``config.interpreter``.
        rng: numpy Generator or seed for the genome operators; defaults to
            ``config.seed``.

    Returns:
        A populated toolbox.

    Raises:
        AdapterError: If DEAP is not installed.
    """
    deap = _require_deap()
    tools = deap.tools

    gen = as_generator(config.seed if rng is None else rng)
    alphabet = config.interpreter.alphabet
    operators = config.operators
    if evaluator is None:
        evaluator = ReproductionFitnessEvaluator(config.interpreter)

    toolbox = deap.base.Toolbox()
    toolbox.register(
        "individual",
        _random_organism,
        organism_type(),
        config.genome_length,
        alphabet,
        gen,
    )
    toolbox.register("population", tools.initRepeat, list, toolbox.individual)
    toolbox.register("evaluate", _evaluate_one, evaluator)
    toolbox.register("evaluate_batch", _evaluate_batch, evaluator)
    toolbox.register("mate", _mate, n=operators.crossover_points, rng=gen)
    toolbox.register(
        "mutate", _mutate, alphabet=alphabet, k=operators.mutation_points, rng=gen
    )
    toolbox.register("select", tools.selTournament, tournsize=operators.tournament_size)
    toolbox.register(
        "migrate",
        tools.migRing,
        k=config.islands.n_migrants,
        selection=tools.selRandom,
    )
    return toolbox


def _evaluate_invalid(toolbox: base.Toolbox, individuals: list[Any]) -> None:
    invalid = [ind for ind in individuals if not ind.fitness.valid]
    if not invalid:
        return
    for ind, fitness in zip(invalid, toolbox.evaluate_batch(invalid)):
        ind.fitness.values = fitness


def _inject_seeds(islands: list[list[Any]], config: EvolutionConfig) -> None:
    organism = organism_type()
    alphabet = config.interpreter.alphabet
    for name_index, name in enumerate(config.seed_genomes):
        seed = build_genome_seed(name, config.genome_length, alphabet)
        for island in islands:
            island[name_index] = organism(seed.symbols, alphabet)


def evolve_islands(
    config: EvolutionConfig,
    evaluator: Evaluator | None = None,
    callback: ChampionCallback | None = None,
) -> EvolutionResult:
    """Evolve genomes with a generational island model on DEAP.

    Each island runs tournament selection followed by crossover and mutation
    every generation; every ``migration_frequency`` generations
    ``n_migrants`` random organisms move to the next island on a ring.  A
    hall of fame of size one tracks the best genome seen.

    DEAP's selection and variation draw from the :mod:`random` module, which
    is seeded from ``config.seed``.

    Args:
        config: Evolution configuration.
        evaluator: Fitness evaluator, see :func:`build_toolbox`.
        callback: Invoked as ``callback(generation, genome, fitness)`` each
            time a new champion appears (generation 0 is the initial one).

    Returns:
        The best genome, its fitness and the best-fitness history.

    Raises:
        AdapterError: If DEAP is not installed.
    """
    deap = _require_deap()
    tools, algorithms = deap.tools, deap.algorithms

    random.seed(config.seed)
    toolbox = build_toolbox(config, evaluator)
    islands_cfg = config.islands
    operators = config.operators
    max_steps = config.interpreter.max_steps

    islands = [
        toolbox.population(n=islands_cfg.population_size)
        for _ in range(islands_cfg.n_islands)
    ]
    _inject_seeds(islands, config)

    hall_of_fame = tools.HallOfFame(1)
    for island in islands:
        _evaluate_invalid(toolbox, island)
        hall_of_fame.update(island)

    def _children(fitness: float) -> int:
        return round((1.0 - fitness) * max_steps)

    champion = ""

    def _check_champion(generation: int) -> float:
        nonlocal champion
        best = hall_of_fame[0]
        fitness = best.fitness.values[0]
        if str(best) != champion:
            champion = str(best)
            logger.info(
                "%d) Result -> %s (%d children)",
                generation,
                champion,
                _children(fitness),
            )
            if callback is not None:
                callback(generation, Genome(best.symbols, best.alphabet), fitness)
        return fitness

    _check_champion(0)
    history: list[float] = []
    for generation in range(1, config.generations + 1):
        for island in islands:
            offspring = toolbox.select(island, len(island))
            offspring = algorithms.varAnd(
                offspring, toolbox, operators.crossover_rate, operators.mutation_rate
            )
            _evaluate_invalid(toolbox, offspring)
            island[:] = offspring
            hall_of_fame.update(island)

        migrate = generation % islands_cfg.migration_frequency == 0
        if islands_cfg.n_islands > 1 and migrate:
            toolbox.migrate(islands)

        history.append(_check_champion(generation))
        if generation % PROGRESS_INTERVAL == 0:
            logger.info("Generation %d: best fitness %.4f", generation, history[-1])

    best = hall_of_fame[0]
    best_fitness = best.fitness.values[0]
    return EvolutionResult(
        best_genome=Genome(best.symbols, best.alphabet),
        best_fitness=best_fitness,
        children=_children(best_fitness),
        history=tuple(history),
    )
