"""Shared test fixtures for biosim-evolution."""

from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    """Deterministic numpy generator."""
    return np.random.default_rng(42)


@pytest.fixture
def random_genome_strings() -> list[str]:
    """Deterministic 50 random canonical genomes of length 32."""
    gen = np.random.default_rng(7)
    alphabet = "ABCDEFGHI"
    return [
        "".join(alphabet[int(i)] for i in gen.integers(0, len(alphabet), size=32))
        for _ in range(50)
    ]
