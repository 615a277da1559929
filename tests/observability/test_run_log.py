"""
Test that the run log records and replays everything the engine decides.
"""

from unittest.mock import Mock

import pytest

from event_pacing.data_models import DiceRoller, SimulatedClock
from event_pacing.events.config import TEST_EVENT_CONFIG
from event_pacing.events.event_bank import EventBank
from event_pacing.events.event_generator import EventGenerator
from event_pacing.observability.run_log import (
    EventFiredEvent,
    EventType,
    RunLog,
    ScheduleEvent,
    SelectionEvent,
    TransitionEvent,
    get_run_log,
    reset_run_log,
)


@pytest.fixture
def populated_log(sample_templates):
    """A run log after a short seeded session."""
    log = RunLog()
    log.set_seed(99)
    dice = DiceRoller(seed=99, run_log=log)
    clock = SimulatedClock(start=0.0)
    generator = EventGenerator(
        EventBank(sample_templates, dice=dice, run_log=log),
        config=TEST_EVENT_CONFIG,
        dice=dice,
        clock=clock,
        run_log=log,
    )
    generator.start_session()
    for _ in range(3):
        generator.try_generate_event("raid")
        clock.advance(5)
    generator.end_session()
    return log


class TestLogging:
    """Tests for the log_* methods."""

    def test_sequence_numbers(self, run_log):
        """Test entries are numbered in order."""
        run_log.log_transition("idle", "active", "start_session")
        run_log.log_schedule(rolled_at=10.0, next_event_time=100.0, reason="session start")
        assert [e.sequence_number for e in run_log.get_events()] == [1, 2]

    def test_schedule_delay(self, run_log):
        """Test the delay is derived from the two times."""
        entry = run_log.log_schedule(rolled_at=10.0, next_event_time=100.0)
        assert entry.delay == 90.0
        assert "SCHEDULE +90.0s" in str(entry)

    def test_selection_without_template(self, run_log):
        """Test an empty draw formats as no selection."""
        entry = run_log.log_selection("raid", pool_size=0, total_weight=0, selected_template_id=None)
        assert "no selection" in str(entry)

    def test_custom(self, run_log):
        """Test custom entries keep their details."""
        entry = run_log.log_custom("host_note", {"tick": 4})
        assert entry.event_type == EventType.CUSTOM
        assert entry.context == {"event_name": "host_note", "tick": 4}

    def test_pause_stops_recording(self, run_log):
        """Test nothing is recorded while paused."""
        run_log.pause()
        run_log.log_custom("ignored", {})
        assert run_log.is_paused()
        run_log.resume()
        run_log.log_custom("kept", {})
        assert run_log.get_event_count() == 1


class TestQueries:
    """Tests for filtered queries and summaries."""

    def test_session_is_fully_recorded(self, populated_log):
        """Test a session leaves transitions, selections, schedules and fired events."""
        assert [t.trigger for t in populated_log.get_transitions()] == ["start_session", "end_session"]
        assert len(populated_log.get_selections()) == 3
        assert len(populated_log.get_fired_events()) == 3
        assert len(populated_log.get_schedules()) == 4
        assert populated_log.get_rolls()

    def test_filter_by_type_and_sequence(self, populated_log):
        """Test get_events filters."""
        fired = populated_log.get_events(EventType.EVENT_FIRED)
        assert all(isinstance(e, EventFiredEvent) for e in fired)
        later = populated_log.get_events(since_sequence=5)
        assert all(e.sequence_number > 5 for e in later)

    def test_summary(self, populated_log):
        """Test summary counts."""
        summary = populated_log.get_summary()
        assert summary["seed"] == 99
        assert summary["events_fired"] == 3
        assert summary["selections"] == 3
        assert summary["total_events"] == populated_log.get_event_count()

    def test_roll_stream(self, populated_log):
        """Test the roll stream lists draws as plain dicts."""
        stream = populated_log.get_roll_stream()
        assert stream
        assert set(stream[0]) == {"notation", "rolls", "total", "reason"}

    def test_format_log(self, populated_log):
        """Test text formatting with filters."""
        text = populated_log.format_log(event_types=[EventType.EVENT_FIRED], max_events=2)
        assert "=== Run Log ===" in text
        assert "Seed: 99" in text
        assert text.count("EVENT ") == 2


class TestSubscribers:
    """Tests for live subscribers."""

    def test_subscriber_receives_entries(self, run_log):
        """Test subscribers see each entry."""
        callback = Mock()
        run_log.subscribe(callback)
        entry = run_log.log_transition("idle", "active", "start_session")
        callback.assert_called_once_with(entry)

        run_log.unsubscribe(callback)
        run_log.log_custom("after", {})
        callback.assert_called_once()

    def test_failing_subscriber_does_not_break_logging(self, run_log):
        """Test a raising subscriber is contained."""
        run_log.subscribe(Mock(side_effect=RuntimeError("boom")))
        healthy = Mock()
        run_log.subscribe(healthy)

        run_log.log_custom("still logged", {})
        assert run_log.get_event_count() == 1
        healthy.assert_called_once()


class TestPersistence:
    """Tests for save/load."""

    def test_save_and_load(self, populated_log, tmp_path):
        """Test a saved log loads back with typed entries."""
        path = tmp_path / "run_log.json"
        populated_log.save(str(path))
        loaded = RunLog.load(str(path))

        assert loaded.get_seed() == 99
        assert loaded.get_event_count() == populated_log.get_event_count()
        assert isinstance(loaded.get_transitions()[0], TransitionEvent)
        assert isinstance(loaded.get_selections()[0], SelectionEvent)
        assert isinstance(loaded.get_schedules()[0], ScheduleEvent)
        assert [e.template_id for e in loaded.get_fired_events()] == [
            e.template_id for e in populated_log.get_fired_events()
        ]
        assert loaded.get_roll_stream() == populated_log.get_roll_stream()


class TestGlobalLog:
    """Tests for the process-default log."""

    def test_singleton(self):
        """Test get_run_log returns the same instance."""
        assert get_run_log() is get_run_log()

    def test_reset(self):
        """Test reset_run_log empties the global log."""
        get_run_log().log_custom("x", {})
        assert reset_run_log().get_event_count() == 0
