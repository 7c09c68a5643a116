"""Command-line entry point.

Usage::

    biosim-evolution parse <genome>          # print instruction names
    biosim-evolution evaluate <genome>       # print the genome's fitness
    biosim-evolution evaluate --trace <genome>
    biosim-evolution evolve <genome_length>  # requires the 'deap' extra
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from biosim.evolution.config import EvolutionConfig, IslandConfig
from biosim.evolution.errors import BiosimEvolutionError
from biosim.evolution.interpreter import LoggingTracer, describe, evaluate

logger = logging.getLogger(__name__)


def _parse(args: argparse.Namespace) -> int:
    for label in describe(args.genome):
        print(label)
    return 0


def _evaluate(args: argparse.Namespace) -> int:
    observer = LoggingTracer() if args.trace else None
    print(evaluate(args.genome, observer=observer))
    return 0


def _evolve(args: argparse.Namespace) -> int:
    from biosim.evolution.adapters.deap_engine import evolve_islands

    config = EvolutionConfig(
        genome_length=args.genome_length,
        generations=args.generations,
        seed=args.seed,
        islands=IslandConfig(n_islands=args.islands),
    )

    result = evolve_islands(config)
    print(f"{result.best_genome} ({result.children} children)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="biosim-evolution",
        description="Evaluate and evolve bio-energetic organism genomes.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    parse = commands.add_parser("parse", help="Print the instruction names")
    parse.add_argument("genome", help="Genome string, e.g. CDCDB")
    parse.set_defaults(handler=_parse)

    evaluate_cmd = commands.add_parser("evaluate", help="Print the fitness")
    evaluate_cmd.add_argument("genome", help="Genome string, e.g. CDCDB")
    evaluate_cmd.add_argument(
        "--trace", action="store_true", help="Log every interpreter step"
    )
    evaluate_cmd.set_defaults(handler=_evaluate)

    evolve = commands.add_parser("evolve", help="Evolve genomes of a fixed length")
    evolve.add_argument("genome_length", type=int)
    evolve.add_argument("--generations", type=int, default=400)
    evolve.add_argument("--islands", type=int, default=100)
    evolve.add_argument("--seed", type=int, default=42)
    evolve.set_defaults(handler=_evolve)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    trace = getattr(args, "trace", False)
    level = logging.DEBUG if args.verbose or trace else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.handler(args)
    except BiosimEvolutionError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
