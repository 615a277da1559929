"""
Event Pacing - Command Line Simulation

Runs one task session on a simulated clock, polling the generator once per
tick the way a game loop would, and prints the events that fired together
with the session statistics.

    python -m event_pacing.main --task raid --minutes 25 --seed 42
"""

import argparse
import logging
import math
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from event_pacing.data_models import DiceRoller, GameEvent, SimulatedClock, TaskType
from event_pacing.events.config import ENVIRONMENT_CONFIGS, get_environment_config
from event_pacing.events.effect_analysis import summarize_effects
from event_pacing.events.event_bank import EventBank
from event_pacing.events.task_integration import CharacterSnapshot, EventTaskIntegration
from event_pacing.observability.run_log import RunLog
from event_pacing.tables.event_tables import EVENT_TEMPLATES
from event_pacing.tables.task_collections import (
    format_collections_summary,
    get_events_for_task,
    validate_event_collections,
)
from event_pacing.tables.template_loader import load_templates_from_json


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class SimulationConfig:
    """Configuration for one simulated task session."""
    task_type: str = TaskType.EXPEDITION.value
    minutes: float = 25.0
    tick_seconds: float = 1.0
    seed: Optional[int] = None
    environment: Optional[str] = None
    catalog_path: Optional[Path] = None
    character: CharacterSnapshot = field(default_factory=CharacterSnapshot)
    run_log_path: Optional[Path] = None
    show_run_log: bool = False
    verbose: bool = False


@dataclass
class SimulationReport:
    """Everything a simulated session produced."""
    task_type: str
    duration: float
    events: list[GameEvent]
    statistics: dict[str, Any]
    run_log: RunLog

    def format(self) -> str:
        lines = [
            f"Task: {self.task_type}  Duration: {self.duration / 60:g} min  Events: {len(self.events)}",
            "",
        ]
        for event in self.events:
            minute, second = divmod(int(event.timestamp), 60)
            lines.append(
                f"  [{minute:02d}:{second:02d}] {event.severity.value.upper():<8} {event.message}"
                f"  ({summarize_effects(event)})"
            )
        stats = self.statistics
        severity_counts = ", ".join(f"{k}: {v}" for k, v in stats["by_severity"].items())
        lines.extend(
            [
                "",
                f"By severity: {severity_counts}",
                f"Beneficial: {stats['beneficial_events']}  Harmful: {stats['harmful_events']}  "
                f"Total impact: {stats['total_impact']:g}",
            ]
        )
        return "\n".join(lines)


# =============================================================================
# SIMULATION
# =============================================================================

def simulate_session(config: SimulationConfig) -> SimulationReport:
    """
    Run a full task session on simulated time.

    Task progress rises linearly from 0 to 100 over the session so progress
    based conditions and severity bias behave as in a real run.
    """
    if not config.tick_seconds > 0:
        raise ValueError(f"tick_seconds must be positive, got {config.tick_seconds}")

    run_log = RunLog()
    if config.seed is not None:
        run_log.set_seed(config.seed)
    dice = DiceRoller(seed=config.seed, run_log=run_log)
    clock = SimulatedClock(start=0.0)

    templates = EVENT_TEMPLATES
    if config.catalog_path is not None:
        templates, problems = load_templates_from_json(config.catalog_path)
        if problems:
            logger.warning(f"{len(problems)} problems while loading {config.catalog_path}")

    bank = EventBank(templates, dice=dice, run_log=run_log)
    integration = EventTaskIntegration(
        event_bank=bank,
        config=get_environment_config(config.environment),
        dice=dice,
        clock=clock,
        run_log=run_log,
    )

    duration = config.minutes * 60
    integration.start_task_events(config.task_type)

    character = replace(config.character)
    while clock.now() < duration:
        character.active_task_type = config.task_type
        character.task_progress = clock.now() / duration * 100 if duration else 100.0
        integration.update(config.task_type, character)
        clock.advance(config.tick_seconds)

    statistics = integration.get_session_statistics()
    events = integration.end_task_events()

    return SimulationReport(
        task_type=config.task_type,
        duration=duration,
        events=events,
        statistics=statistics,
        run_log=run_log,
    )


# =============================================================================
# COMMAND LINE
# =============================================================================

def positive_float(value: str) -> float:
    """argparse type for a strictly positive number of seconds."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number: {value!r}")
    return number


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Event Pacing - simulate random events during a timed task",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m event_pacing.main                               # 25-minute expedition
  python -m event_pacing.main --task raid --seed 42         # Reproducible raid
  python -m event_pacing.main --env development --minutes 5 # Fast pacing
  python -m event_pacing.main --validate                    # Check the catalog
        """
    )

    parser.add_argument(
        "--task",
        type=str,
        default=TaskType.EXPEDITION.value,
        help="Task type to simulate (default: expedition)",
    )
    parser.add_argument(
        "--minutes",
        type=float,
        default=25.0,
        help="Session length in minutes (default: 25)",
    )
    parser.add_argument(
        "--tick",
        type=positive_float,
        default=1.0,
        help="Seconds between polls (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible runs",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        choices=sorted(ENVIRONMENT_CONFIGS),
        help="Pacing preset (default: $EVENT_PACING_ENV or production)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    character_group = parser.add_argument_group("Character Options")
    character_group.add_argument("--level", type=int, default=1, help="Character level (default: 1)")
    character_group.add_argument("--hp", type=float, default=100, help="Current HP (default: 100)")
    character_group.add_argument("--max-hp", type=float, default=100, help="Max HP (default: 100)")
    character_group.add_argument("--gold", type=int, default=0, help="Gold carried (default: 0)")
    character_group.add_argument("--weapon", action="store_true", help="Character has a weapon equipped")
    character_group.add_argument("--armor", action="store_true", help="Character has armor equipped")
    character_group.add_argument("--injured", action="store_true", help="Character is injured")

    catalog_group = parser.add_argument_group("Catalog Options")
    catalog_group.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="JSON file of event templates to use instead of the built-in catalog",
    )
    catalog_group.add_argument(
        "--validate",
        action="store_true",
        help="Validate the catalog and print per-task collections, then exit",
    )

    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--show-log",
        action="store_true",
        help="Print the run log after the session",
    )
    output_group.add_argument(
        "--save-log",
        type=Path,
        default=None,
        help="Write the run log as JSON to this file",
    )

    return parser.parse_args(argv)


def create_config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Create SimulationConfig from parsed arguments."""
    return SimulationConfig(
        task_type=args.task,
        minutes=args.minutes,
        tick_seconds=args.tick,
        seed=args.seed,
        environment=args.env,
        catalog_path=args.catalog,
        character=CharacterSnapshot(
            level=args.level,
            current_hp=args.hp,
            max_hp=args.max_hp,
            is_injured=args.injured,
            gold=args.gold,
            has_weapon=args.weapon,
            has_armor=args.armor,
        ),
        run_log_path=args.save_log,
        show_run_log=args.show_log,
        verbose=args.verbose,
    )


def run_validation(catalog_path: Optional[Path] = None) -> bool:
    """Print catalog validation results. Returns True when there are no errors."""
    templates = EVENT_TEMPLATES
    if catalog_path is not None:
        templates, _ = load_templates_from_json(catalog_path)

    report = validate_event_collections(templates)
    collections = {task.value: get_events_for_task(task, templates) for task in TaskType}
    print(format_collections_summary(collections))
    print(f"\nValid: {report.valid}")
    for error in report.errors:
        print(f"  ERROR: {error}")
    for warning in report.warnings:
        print(f"  WARNING: {warning}")
    return report.valid


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI usage. Returns the process exit status."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    if args.validate:
        return 0 if run_validation(args.catalog) else 1

    config = create_config_from_args(args)

    print("=" * 60)
    print("EVENT PACING SIMULATION")
    print("=" * 60)

    report = simulate_session(config)
    print(report.format())

    if config.show_run_log:
        print()
        print(report.run_log.format_log())
    if config.run_log_path is not None:
        report.run_log.save(str(config.run_log_path))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
