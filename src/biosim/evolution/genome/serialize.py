"""Genome serialization."""

from __future__ import annotations

from typing import Any

from biosim.evolution.errors import InvalidInputError, SerializationError
from biosim.evolution.genome.genome import Genome
from biosim.evolution.interpreter.instructions import CANONICAL_ALPHABET

GENOME_SCHEMA_VERSION = "1.0"


def serialize_genome(genome: Genome) -> dict[str, Any]:
    """Serialize a Genome to a dict."""
    return {
        "genome_schema_version": GENOME_SCHEMA_VERSION,
        "alphabet": genome.alphabet,
        "symbols": str(genome),
    }


def deserialize_genome(data: dict[str, Any] | str) -> Genome:
    """Deserialize a Genome from a dict.

    Handles legacy payloads (a bare symbol string, as printed in the
    champion log lines) by treating them as canonical-alphabet
    genomes.

    Raises:
        SerializationError: On unknown schema versions, missing fields, or
            symbols that do not form a valid genome.
    """
    if isinstance(data, str):
        return _build(data, CANONICAL_ALPHABET)

    version = data.get("genome_schema_version")
    if version != GENOME_SCHEMA_VERSION:
        raise SerializationError(f"Unknown genome schema version: {version}")
    try:
        symbols = data["symbols"]
    except KeyError as exc:
        raise SerializationError("Genome payload is missing 'symbols'") from exc
    return _build(symbols, data.get("alphabet", CANONICAL_ALPHABET))


def _build(symbols: Any, alphabet: Any) -> Genome:
    if not isinstance(symbols, str) or not isinstance(alphabet, str):
        raise SerializationError("Genome symbols and alphabet must be strings")
    try:
        return Genome.from_string(symbols, alphabet)
    except InvalidInputError as exc:
        raise SerializationError(f"Invalid genome payload: {exc}") from exc
