"""Tests for the genome interpreter state machine."""

from __future__ import annotations

import logging
import math

import pytest

from biosim.evolution.config import InterpreterConfig
from biosim.evolution.genome import Genome
from biosim.evolution.interpreter import (
    Instruction,
    RecordingTracer,
    evaluate,
    run,
)

# Metabolic cost of one non-passive step for a size-1 organism.
BASE_DECAY = (1.0 + 1.0 / 40.0) ** 2

MACHINE_LOGGER = "biosim.evolution.interpreter.machine"


def _trace(genome: str, config: InterpreterConfig | None = None) -> RecordingTracer:
    tracer = RecordingTracer()
    run(genome, config, observer=tracer)
    return tracer


# ---------------------------------------------------------------------------
# Lifetime and death
# ---------------------------------------------------------------------------


class TestLifetime:
    def test_all_noop_never_decays(self) -> None:
        result = run("AAAA")
        assert result.steps == 1000
        assert result.survived
        assert result.children == 0
        assert result.fitness == 1.0
        assert result.state.energy == 10.0
        assert result.state.threat == 0.0

    def test_all_locate_food_dies_in_closed_form(self) -> None:
        # Locate food has no energy effect, so only metabolic decay applies.
        expected_death = math.ceil(10.0 / BASE_DECAY) - 1
        result = run("CCCC")
        assert expected_death == 9
        assert result.died_at == expected_death
        assert result.steps == expected_death + 1
        assert result.state.energy == pytest.approx(10.0 - 10 * BASE_DECAY)
        assert result.fitness == 1.0

    def test_noop_reproduce_pair_dies_on_second_step(self) -> None:
        genome = Genome.from_string("AB", alphabet="AB")
        result = run(genome, InterpreterConfig(alphabet="AB"))
        assert result.died_at == 1
        assert result.steps == 2
        assert result.children == 0
        assert result.fitness == 1.0

    def test_dead_is_absorbing(self) -> None:
        tracer = _trace("CCCC")
        assert len(tracer) == 10
        assert tracer.records[-1].state.energy <= 0.0
        assert all(r.state.energy > 0.0 for r in tracer.records[:-1])

    def test_max_steps_bounds_run(self) -> None:
        result = run("AAAA", InterpreterConfig(max_steps=10))
        assert result.steps == 10
        assert result.survived

    def test_empty_genome_is_inert(self) -> None:
        result = run("")
        assert result.steps == 0
        assert result.fitness == 1.0


# ---------------------------------------------------------------------------
# Instruction effects
# ---------------------------------------------------------------------------


class TestReproduce:
    def test_all_reproduce_reproduces_at_most_once(self) -> None:
        result = run("BBBB")
        assert result.children <= 1
        assert result.died_at == 0

    def test_forager_reproduces_once(self) -> None:
        result = run("CDCDB")
        assert result.children == 1
        assert result.fitness == pytest.approx(0.999)
        assert result.died_at == 9

    def test_reproduce_charges_energy_on_success(self) -> None:
        tracer = _trace("CDCDB")
        before, spawn = tracer.records[3], tracer.records[4]
        assert spawn.instruction is Instruction.REPRODUCE
        assert spawn.fired
        assert spawn.state.children == 1
        expected = before.state.energy - 25.0 - BASE_DECAY
        assert spawn.state.energy == pytest.approx(expected)

    def test_failed_reproduce_still_costs_energy(self) -> None:
        tracer = _trace("CDCDB")
        before, failed = tracer.records[8], tracer.records[9]
        assert failed.instruction is Instruction.REPRODUCE
        assert not failed.fired
        assert failed.state.children == 1
        assert before.state.energy == pytest.approx(23.848125)
        expected = before.state.energy - 25.0 - BASE_DECAY
        assert failed.state.energy == pytest.approx(expected)


class TestFood:
    def test_locate_then_eat_gains_energy(self) -> None:
        tracer = _trace("CD")
        eat = tracer.records[1]
        assert eat.fired
        assert eat.state.energy == pytest.approx(10.0 - BASE_DECAY + 11.0 - BASE_DECAY)

    def test_food_is_consumed_by_eating(self) -> None:
        tracer = _trace("CDD")
        first, second = tracer.records[1], tracer.records[2]
        assert first.fired
        assert not second.fired
        assert second.state.energy == pytest.approx(first.state.energy - BASE_DECAY)

    def test_found_food_survives_passive_steps(self) -> None:
        tracer = _trace("CAD")
        assert tracer.records[1].state.found_food
        assert tracer.records[2].fired

    def test_found_food_lost_after_active_step(self) -> None:
        tracer = _trace("CGD")
        assert not tracer.records[1].state.found_food
        assert not tracer.records[2].fired

    def test_eating_applies_energy_floor(self) -> None:
        # Five searches leave 4.75 energy; eating lifts it to the size + 15 floor.
        tracer = _trace("CCCCCD")
        assert tracer.records[4].state.energy == pytest.approx(10.0 - 5 * BASE_DECAY)
        assert tracer.records[5].fired
        assert tracer.records[5].state.energy == pytest.approx(16.0 - BASE_DECAY)


class TestGrowDefendEvade:
    def test_grow_increases_size_and_decay(self) -> None:
        record = _trace("E").records[0]
        assert record.state.size == 2
        expected = 10.0 - 0.5**1.05 - (1.0 + 2.0 / 40.0) ** 2
        assert record.state.energy == pytest.approx(expected)

    def test_size_never_shrinks(self) -> None:
        sizes = [r.state.size for r in _trace("ECDCDE").records]
        assert sizes == sorted(sizes)

    def test_defend_floors_threat_at_zero(self) -> None:
        record = _trace("F").records[0]
        assert record.state.threat == 1.0
        assert record.state.energy == pytest.approx(10.0 - 10.0 - BASE_DECAY)

    def test_evade_lets_threat_go_negative(self) -> None:
        record = _trace("G").records[0]
        assert record.state.threat == -4.0
        assert record.state.energy == pytest.approx(10.0 - 0.5 - BASE_DECAY)

    def test_threat_penalty_above_tolerance(self) -> None:
        tracer = _trace("CD")
        assert tracer.records[20].state.threat == 21.0
        assert tracer.records[20].state.energy == pytest.approx(97.936875)
        assert tracer.records[21].state.threat == 22.0
        assert tracer.records[21].state.energy == pytest.approx(
            97.936875 + 11.0 - BASE_DECAY - 22.0
        )


# ---------------------------------------------------------------------------
# Skips and pointer
# ---------------------------------------------------------------------------


class TestSkips:
    def test_low_threat_skip_wraps_to_start(self) -> None:
        tracer = _trace("HB")
        assert tracer.records[0].skipped
        assert tracer.records[1].index == 0
        assert set(tracer.indices) == {0}
        assert len(tracer) == 1000

    def test_low_energy_skip_wraps_to_start(self) -> None:
        result = run("IB")
        assert result.survived
        assert result.children == 0

    def test_skip_advances_by_two(self) -> None:
        assert _trace("AHBA").indices[:6] == [0, 1, 3, 0, 1, 3]

    def test_skips_are_passive(self) -> None:
        record = _trace("HB").records[0]
        assert record.state.energy == 10.0
        assert record.state.threat == 0.0

    def test_high_threat_does_not_skip(self) -> None:
        tracer = _trace("CCCCCHB")
        check = tracer.records[5]
        assert check.instruction is Instruction.SKIP_IF_LOW_THREAT
        assert check.state.threat == 5.0
        assert not check.fired
        assert tracer.records[6].index == 6

    def test_high_energy_does_not_skip(self) -> None:
        tracer = _trace("CDCDCDCDIA")
        check = tracer.records[8]
        assert check.instruction is Instruction.SKIP_IF_LOW_ENERGY
        assert check.state.energy >= 30.0
        assert not check.fired
        assert tracer.records[9].index == 9


# ---------------------------------------------------------------------------
# Unexpected symbols
# ---------------------------------------------------------------------------


class TestUnexpectedSymbols:
    def test_unknown_symbol_is_logged_not_raised(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger=MACHINE_LOGGER):
            fitness = evaluate("AXA")
        assert fitness == 1.0
        assert "'X'" in caplog.text

    def test_unknown_symbol_decays_like_active_step(self) -> None:
        result = run("XXXX")
        assert result.died_at == 9

    def test_unknown_symbol_drops_food(self) -> None:
        tracer = _trace("CXD")
        assert tracer.records[1].instruction is None
        assert tracer.records[1].label == "Unexpected"
        assert not tracer.records[2].fired

    def test_symbols_outside_configured_alphabet(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        config = InterpreterConfig(alphabet="AB")
        with caplog.at_level(logging.WARNING):
            result = run("ABC", config)
        assert "'C'" in caplog.text
        assert result.fitness == 1.0


# ---------------------------------------------------------------------------
# Global properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_children_and_fitness_bounds(
        self, random_genome_strings: list[str]
    ) -> None:
        for text in random_genome_strings:
            result = run(text)
            assert 0 <= result.children <= 1000
            assert result.fitness <= 1.0
            assert result.fitness == pytest.approx(1.0 - result.children / 1000.0)
            assert result.children <= result.steps

    def test_deterministic(self, random_genome_strings: list[str]) -> None:
        for text in random_genome_strings:
            assert evaluate(text) == evaluate(text)

    def test_genome_string_and_list_agree(self) -> None:
        genome = Genome.from_string("CDCDB")
        assert evaluate(genome) == evaluate("CDCDB") == evaluate(list("CDCDB"))

    def test_observer_does_not_change_result(
        self, random_genome_strings: list[str]
    ) -> None:
        for text in random_genome_strings[:10]:
            assert run(text, observer=RecordingTracer()) == run(text)

    def test_fitness_normalised_by_step_budget(self) -> None:
        result = run("CDCDB", InterpreterConfig(max_steps=100))
        assert result.fitness == pytest.approx(1.0 - 1 / 100.0)
