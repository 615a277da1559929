"""
Tests for the command line simulation.
"""

import pytest

from event_pacing.main import (
    SimulationConfig,
    create_config_from_args,
    main,
    parse_arguments,
    simulate_session,
)
from event_pacing.observability.run_log import RunLog


class TestArguments:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Test default arguments."""
        args = parse_arguments([])
        assert args.task == "expedition"
        assert args.minutes == 25.0
        assert args.seed is None
        assert not args.validate

    def test_config_from_args(self):
        """Test arguments map onto a SimulationConfig."""
        args = parse_arguments(
            ["--task", "raid", "--seed", "9", "--level", "5", "--hp", "40", "--weapon", "--injured"]
        )
        config = create_config_from_args(args)
        assert config.task_type == "raid"
        assert config.seed == 9
        assert config.character.level == 5
        assert config.character.current_hp == 40
        assert config.character.has_weapon
        assert config.character.is_injured
        assert not config.character.has_armor

    @pytest.mark.parametrize("tick", ["0", "-1", "nan", "inf", "soon"])
    def test_tick_must_be_positive(self, tick, capsys):
        """Test a zero, negative or non-numeric tick is a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            parse_arguments(["--tick", tick])
        assert excinfo.value.code == 2
        assert "--tick" in capsys.readouterr().err

    def test_fractional_tick(self):
        """Test a fractional tick is accepted."""
        assert parse_arguments(["--tick", "0.25"]).tick == 0.25


class TestSimulation:
    """Tests for simulate_session."""

    def test_same_seed_same_session(self):
        """Test seeded runs reproduce the same events."""
        config = SimulationConfig(task_type="raid", minutes=25, seed=1234, environment="production")
        first = simulate_session(config)
        second = simulate_session(config)

        assert [e.template_id for e in first.events] == [e.template_id for e in second.events]
        assert [e.message for e in first.events] == [e.message for e in second.events]
        assert [e.timestamp for e in first.events] == [e.timestamp for e in second.events]
        assert first.run_log.get_roll_stream() == second.run_log.get_roll_stream()

    def test_production_caps_events(self):
        """Test a long production session stops at the cap."""
        report = simulate_session(
            SimulationConfig(task_type="raid", minutes=60, seed=5, environment="production")
        )
        assert len(report.events) == 10

    def test_events_respect_min_delay(self):
        """Test consecutive events are at least the minimum delay apart."""
        report = simulate_session(
            SimulationConfig(task_type="expedition", minutes=25, seed=11, environment="production")
        )
        times = [e.timestamp for e in report.events]
        assert all(later - earlier >= 90 for earlier, later in zip(times, times[1:]))

    def test_disabled_environment(self):
        """Test the disabled preset fires nothing."""
        report = simulate_session(SimulationConfig(minutes=5, seed=2, environment="disabled"))
        assert report.events == []

    def test_non_positive_tick_rejected(self):
        """Test a session will not start with a tick that never advances time."""
        with pytest.raises(ValueError):
            simulate_session(SimulationConfig(minutes=1, seed=3, tick_seconds=0))

    def test_caller_character_untouched(self):
        """Test the simulation does not mutate the configured character."""
        config = SimulationConfig(minutes=1, seed=3, environment="test")
        simulate_session(config)
        assert config.character.task_progress == 0.0
        assert config.character.active_task_type is None


class TestMain:
    """Tests for the main entry point."""

    def test_main_prints_report(self, capsys):
        """Test a simulated run prints the banner and summary."""
        status = main(["--task", "raid", "--minutes", "5", "--seed", "3", "--env", "development"])
        output = capsys.readouterr().out
        assert status == 0
        assert "EVENT PACING SIMULATION" in output
        assert "Task: raid" in output
        assert "By severity:" in output

    def test_validate(self, capsys):
        """Test --validate checks the built-in catalog."""
        assert main(["--validate"]) == 0
        output = capsys.readouterr().out
        assert "Valid: True" in output
        assert "=== Event Collections Summary ===" in output

    def test_save_log(self, tmp_path, capsys):
        """Test the run log can be written and read back."""
        path = tmp_path / "run.json"
        main(["--minutes", "5", "--seed", "8", "--env", "development", "--save-log", str(path)])
        loaded = RunLog.load(str(path))
        assert loaded.get_seed() == 8
        assert loaded.get_fired_events()
