"""
Pytest fixtures for the event pacing test suite.

Provides seeded dice, a simulated clock, isolated run logs, a small template
catalog and generators wired to all of them.
"""

import random

import pytest

from event_pacing.data_models import (
    ConditionContext,
    DiceRoller,
    EffectKind,
    EffectRange,
    EventCategory,
    EventConditions,
    EventSeverity,
    EventTemplate,
    SimulatedClock,
    TaskType,
    VisualCue,
    VisualCueType,
)
from event_pacing.events.config import EventGenerationConfig
from event_pacing.events.event_bank import EventBank
from event_pacing.events.event_generator import EventGenerator
from event_pacing.observability.run_log import RunLog, reset_run_log


class FixedRandom(random.Random):
    """random.Random whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


# =============================================================================
# GLOBAL STATE
# =============================================================================


@pytest.fixture(autouse=True)
def clean_global_run_log():
    """Keep the process-default run log empty between tests."""
    reset_run_log()
    yield
    reset_run_log()


# =============================================================================
# DICE AND CLOCK FIXTURES
# =============================================================================


@pytest.fixture
def run_log():
    """An isolated RunLog."""
    return RunLog()


@pytest.fixture
def seeded_dice(run_log):
    """Provide a seeded DiceRoller for reproducible tests."""
    return DiceRoller(seed=42, run_log=run_log)


@pytest.fixture
def clock():
    """Simulated clock starting at t=1000s."""
    return SimulatedClock(start=1000.0)


def fixed_dice(value: float, run_log: RunLog) -> DiceRoller:
    """Dice whose uniform [0, 1) draw is always `value`."""
    return DiceRoller(rng=FixedRandom(value), run_log=run_log)


# =============================================================================
# TEMPLATE FIXTURES
# =============================================================================


@pytest.fixture
def sample_templates():
    """A small catalog covering universal, task-specific, non-repeatable and conditional templates."""
    return [
        EventTemplate(
            template_id="ambient_wind",
            severity=EventSeverity.FLAVOR,
            category=EventCategory.FORTUNE,
            messages=("The wind howls.",),
            weight=5,
        ),
        EventTemplate(
            template_id="raid_gold",
            severity=EventSeverity.INFO,
            category=EventCategory.LOOT,
            messages=("You find {gold} gold.", "A purse holds {gold} gold."),
            effects={EffectKind.GOLD_MODIFIER: EffectRange(10, 20)},
            weight=10,
            applicable_tasks=frozenset({TaskType.RAID}),
            visual_cue=VisualCue(VisualCueType.SPARKLE, color="#FFD700"),
        ),
        EventTemplate(
            template_id="raid_boss",
            severity=EventSeverity.CRITICAL,
            category=EventCategory.COMBAT,
            messages=("A boss appears! -{damage} HP",),
            effects={EffectKind.HEALTH_MODIFIER: EffectRange(-30, -20)},
            weight=3,
            applicable_tasks=frozenset({TaskType.RAID}),
            repeatable=False,
        ),
        EventTemplate(
            template_id="expedition_spring",
            severity=EventSeverity.INFO,
            category=EventCategory.HEALTH,
            messages=("A spring restores {heal} HP.",),
            effects={EffectKind.HEALTH_MODIFIER: EffectRange(5, 10)},
            weight=8,
            applicable_tasks=frozenset({TaskType.EXPEDITION}),
        ),
        EventTemplate(
            template_id="injured_limp",
            severity=EventSeverity.WARNING,
            category=EventCategory.HEALTH,
            messages=("Your wound slows you. Success -{success}%",),
            effects={EffectKind.SUCCESS_CHANCE_MODIFIER: EffectRange(-5, -2)},
            weight=4,
            conditions=EventConditions(requires_injury=True),
        ),
    ]


@pytest.fixture
def bank(sample_templates, seeded_dice, run_log):
    """EventBank over the sample templates."""
    return EventBank(sample_templates, dice=seeded_dice, run_log=run_log)


@pytest.fixture
def instant_config():
    """No delay between events and a generous cap."""
    return EventGenerationConfig(
        min_time_between_events=0.0,
        max_time_between_events=0.0,
        max_events_per_session=100,
    )


@pytest.fixture
def generator(bank, instant_config, seeded_dice, clock, run_log):
    """Generator with zero pacing delay on the simulated clock."""
    return EventGenerator(bank, config=instant_config, dice=seeded_dice, clock=clock, run_log=run_log)


@pytest.fixture
def raid_context():
    """Healthy, uninjured character on a raid."""
    return ConditionContext(
        character_level=3,
        current_health=80,
        max_health=100,
        gold=40,
        has_weapon=True,
        has_armor=True,
        task_type=TaskType.RAID.value,
        task_progress=50.0,
    )
