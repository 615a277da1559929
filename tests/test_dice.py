"""
Unit tests for the randomness and time capabilities.

Tests DiceRoller, DiceResult and the clocks from event_pacing/data_models.py.
"""

import pytest

from event_pacing.data_models import DiceResult, DiceRoller, SimulatedClock, SystemClock
from event_pacing.observability.run_log import RunLog, get_run_log


class TestDiceRoller:
    """Tests for DiceRoller."""

    def test_seeded_reproducibility(self, run_log):
        """Test that two rollers with the same seed draw the same sequence."""
        first = DiceRoller(seed=123, run_log=run_log)
        second = DiceRoller(seed=123, run_log=run_log)
        assert [first.randint(1, 1000) for _ in range(20)] == [second.randint(1, 1000) for _ in range(20)]
        assert first.random() == second.random()

    def test_instances_do_not_share_state(self, run_log):
        """Test that drawing from one roller does not shift another."""
        a = DiceRoller(seed=5, run_log=run_log)
        b = DiceRoller(seed=5, run_log=run_log)
        a.random()
        a.random()
        reference = DiceRoller(seed=5, run_log=run_log)
        assert b.random() == reference.random()

    def test_set_seed_restarts_sequence(self, run_log):
        """Test that reseeding replays the same draws."""
        dice = DiceRoller(run_log=run_log)
        dice.set_seed(9)
        first = [dice.randint(1, 100) for _ in range(5)]
        dice.set_seed(9)
        assert [dice.randint(1, 100) for _ in range(5)] == first
        assert dice.seed == 9

    def test_random_range(self, seeded_dice):
        """Test random() stays in [0, 1)."""
        values = [seeded_dice.random() for _ in range(200)]
        assert all(0.0 <= v < 1.0 for v in values)

    def test_uniform_bounds(self, seeded_dice):
        """Test uniform() stays within its bounds."""
        values = [seeded_dice.uniform(90, 150) for _ in range(200)]
        assert all(90 <= v <= 150 for v in values)

    def test_randint_inclusive(self, seeded_dice):
        """Test randint reaches both bounds."""
        values = {seeded_dice.randint(1, 3) for _ in range(200)}
        assert values == {1, 2, 3}

    def test_choice(self, seeded_dice):
        """Test choice returns an element of the sequence."""
        options = ("a", "b", "c")
        assert seeded_dice.choice(options) in options

    def test_choice_empty_raises(self, seeded_dice):
        """Test choice from an empty sequence."""
        with pytest.raises(IndexError):
            seeded_dice.choice([])


class TestRollLogging:
    """Tests for the roll log and run log integration."""

    def test_draws_are_recorded(self, seeded_dice):
        """Test every draw lands in the roll log."""
        seeded_dice.uniform(1, 6)
        seeded_dice.random()
        seeded_dice.randint(1, 4)
        assert len(seeded_dice.get_roll_log()) == 3

    def test_clear_roll_log(self, seeded_dice):
        """Test clearing the roll log."""
        seeded_dice.uniform(1, 6)
        seeded_dice.clear_roll_log()
        assert seeded_dice.get_roll_log() == []

    def test_draws_go_to_injected_run_log(self, run_log):
        """Test draws are mirrored to the injected RunLog."""
        dice = DiceRoller(seed=1, run_log=run_log)
        dice.randint(1, 6, "injected")
        rolls = run_log.get_rolls()
        assert len(rolls) == 1
        assert rolls[0].reason == "injected"
        assert get_run_log().get_rolls() == []

    def test_default_run_log(self):
        """Test rollers without an injected log use the global one."""
        dice = DiceRoller(seed=1)
        dice.random("global")
        assert len(get_run_log().get_rolls()) == 1

    def test_result_str(self):
        """Test DiceResult string formatting."""
        result = DiceResult(notation="range(1-6)", rolls=[4], total=4, reason="")
        assert str(result) == "range(1-6): [4] = 4"


class TestClocks:
    """Tests for the clock implementations."""

    def test_simulated_clock_advance(self):
        """Test advancing simulated time."""
        clock = SimulatedClock(start=10.0)
        assert clock.now() == 10.0
        assert clock.advance(5) == 15.0
        assert clock.now() == 15.0

    def test_simulated_clock_cannot_go_backwards(self):
        """Test negative advance is rejected."""
        clock = SimulatedClock()
        with pytest.raises(ValueError):
            clock.advance(-1)

    def test_simulated_clock_set(self):
        """Test jumping to an absolute time."""
        clock = SimulatedClock()
        clock.set(500)
        assert clock.now() == 500.0

    def test_system_clock_moves_forward(self):
        """Test the system clock reports epoch seconds."""
        clock = SystemClock()
        first = clock.now()
        assert first > 1_600_000_000
        assert clock.now() >= first


def test_run_log_isolated_from_fixture(run_log):
    """Test the run_log fixture starts empty."""
    assert isinstance(run_log, RunLog)
    assert run_log.get_event_count() == 0
