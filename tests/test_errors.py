"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from biosim.evolution.errors import (
    AdapterError,
    BiosimEvolutionError,
    ConfigurationError,
    EvolutionError,
    InvalidInputError,
    SerializationError,
)

ALL_SUBCLASSES = [
    EvolutionError,
    InvalidInputError,
    SerializationError,
    ConfigurationError,
    AdapterError,
]


class TestExceptionHierarchy:
    """Verify the exception hierarchy structure."""

    def test_base_is_exception(self) -> None:
        assert issubclass(BiosimEvolutionError, Exception)

    def test_not_value_error(self) -> None:
        # pydantic would wrap a ValueError raised from a validator.
        assert not issubclass(ConfigurationError, ValueError)

    @pytest.mark.parametrize("exc_cls", ALL_SUBCLASSES)
    def test_subclass_of_base(self, exc_cls: type[BiosimEvolutionError]) -> None:
        assert issubclass(exc_cls, BiosimEvolutionError)

    @pytest.mark.parametrize("exc_cls", ALL_SUBCLASSES[1:])
    def test_domain_errors(self, exc_cls: type[BiosimEvolutionError]) -> None:
        assert issubclass(exc_cls, EvolutionError)

    @pytest.mark.parametrize("exc_cls", ALL_SUBCLASSES)
    def test_instantiable_with_message(
        self, exc_cls: type[BiosimEvolutionError]
    ) -> None:
        exc = exc_cls("test error message")
        assert str(exc) == "test error message"

    @pytest.mark.parametrize("exc_cls", ALL_SUBCLASSES)
    def test_catchable_as_base(self, exc_cls: type[BiosimEvolutionError]) -> None:
        with pytest.raises(BiosimEvolutionError):
            raise exc_cls("caught by base")


class TestRaisedErrors:
    """Verify library entry points raise the documented types."""

    def test_genome_raises_invalid_input(self) -> None:
        from biosim.evolution.genome import Genome

        with pytest.raises(InvalidInputError):
            Genome.from_string("Q")

    def test_deserialize_raises_serialization_error(self) -> None:
        from biosim.evolution.genome import deserialize_genome

        with pytest.raises(SerializationError):
            deserialize_genome({"genome_schema_version": "0"})

    def test_evaluation_never_raises(self) -> None:
        from biosim.evolution.interpreter import evaluate

        assert evaluate("?!*") == 1.0
