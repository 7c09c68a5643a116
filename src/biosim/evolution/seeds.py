"""Hand-written seed genomes for warm-start and manual injection.

The module exposes a small registry of known behaviour patterns as repeating
symbol motifs.  A seed genome of any length is built by tiling the motif, so
the same seed fits every ``genome_length`` an experiment uses.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from biosim.evolution.errors import ConfigurationError
from biosim.evolution.genome.genome import Genome
from biosim.evolution.interpreter.instructions import CANONICAL_ALPHABET


@dataclass(frozen=True)
class GenomeSeedTemplate:
    """Metadata for a known seed genome."""

    name: str
    description: str
    pattern: str

    def build(self, length: int, alphabet: str = CANONICAL_ALPHABET) -> Genome:
        """Tile the pattern to *length* symbols."""
        if length < 1:
            raise ValueError("length must be >= 1")
        missing = set(self.pattern) - set(alphabet)
        if missing:
            msg = (
                f"{self.name!r} seed uses symbols outside alphabet {alphabet!r}: "
                f"{', '.join(sorted(missing))}"
            )
            raise ConfigurationError(msg)
        repeats = -(-length // len(self.pattern))
        return Genome.from_string((self.pattern * repeats)[:length], alphabet)


def _normalize_seed_name(name: str) -> str:
    return name.strip().replace("-", "_").replace(" ", "_").lower()


_SEEDS: dict[str, GenomeSeedTemplate] = {
    template.name: template
    for template in [
        GenomeSeedTemplate(
            name="idle",
            description="Does nothing; never spends energy",
            pattern="A",
        ),
        GenomeSeedTemplate(
            name="forager",
            description="Finds and eats food twice, then tries to reproduce",
            pattern="CDCDB",
        ),
        GenomeSeedTemplate(
            name="breeder",
            description="Keeps eating until energy is high, then reproduces",
            pattern="CDICDB",
        ),
        GenomeSeedTemplate(
            name="grower",
            description="Eats and grows between reproduction attempts",
            pattern="CDCDECDB",
        ),
        GenomeSeedTemplate(
            name="cautious",
            description="Defends against predators unless threat is already low",
            pattern="CDHFCDB",
        ),
    ]
}


def list_known_genome_seeds() -> list[str]:
    """Return all known seed names in registry order."""
    return list(_SEEDS)


def get_seed_template(name: str) -> GenomeSeedTemplate:
    """Return the seed template metadata for a known seed name."""
    normalized = _normalize_seed_name(name)
    try:
        return _SEEDS[normalized]
    except KeyError as exc:
        available = ", ".join(list_known_genome_seeds())
        msg = f"Unknown seed {name!r}. Available seeds: {available}"
        raise KeyError(msg) from exc


def build_genome_seed(
    name: str,
    length: int,
    alphabet: str = CANONICAL_ALPHABET,
) -> Genome:
    """Build a single known seed genome of *length* symbols."""
    return get_seed_template(name).build(length, alphabet)


def build_genome_seeds(
    names: Iterable[str],
    length: int,
    alphabet: str = CANONICAL_ALPHABET,
) -> list[Genome]:
    """Build multiple known seed genomes."""
    return [build_genome_seed(name, length, alphabet) for name in names]


__all__ = [
    "GenomeSeedTemplate",
    "build_genome_seed",
    "build_genome_seeds",
    "get_seed_template",
    "list_known_genome_seeds",
]
