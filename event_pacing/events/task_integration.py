"""
Host-side facade tying the event engine to a running task.

Wraps an EventBank and EventGenerator, applies per-task pacing when a task
starts, turns the host's character snapshot into a ConditionContext on every
tick and keeps session statistics. Effects are reported, never applied: the
host owns character and inventory state.
"""

from dataclasses import dataclass
from typing import Any, Optional
import logging

from event_pacing.data_models import (
    Clock,
    ConditionContext,
    DiceRoller,
    EventCategory,
    EventSeverity,
    GameEvent,
    TaskType,
    task_key,
)
from event_pacing.events.config import EventGenerationConfig, get_task_event_config
from event_pacing.events.effect_analysis import get_impact_score, is_beneficial, is_harmful
from event_pacing.events.event_bank import EventBank
from event_pacing.events.event_generator import EventGenerator, GenerationResult
from event_pacing.observability.run_log import RunLog
from event_pacing.tables.event_tables import EVENT_TEMPLATES


logger = logging.getLogger(__name__)


@dataclass
class CharacterSnapshot:
    """What the host knows about the character and its active task this tick."""
    level: int = 1
    current_hp: float = 100
    max_hp: float = 100
    is_injured: bool = False
    gold: int = 0
    has_weapon: bool = False
    has_armor: bool = False
    active_task_type: Optional[str] = None
    task_progress: float = 0.0


class EventTaskIntegration:
    """
    Event generation for the task currently being worked on.

    Usage:
        integration = create_event_task_integration(seed=42)
        integration.start_task_events("raid")
        event = integration.update("raid", snapshot)  # every tick
        events = integration.end_task_events()
    """

    def __init__(
        self,
        event_bank: Optional[EventBank] = None,
        config: Optional[EventGenerationConfig] = None,
        dice: Optional[DiceRoller] = None,
        clock: Optional[Clock] = None,
        run_log: Optional[RunLog] = None,
    ):
        self._bank = event_bank if event_bank is not None else EventBank(EVENT_TEMPLATES, dice=dice, run_log=run_log)
        self._base_config = config
        self._generator = EventGenerator(self._bank, config=config, dice=dice, clock=clock, run_log=run_log)
        self._generated_events: list[GameEvent] = []
        self._last_result: Optional[GenerationResult] = None

    @property
    def generator(self) -> EventGenerator:
        return self._generator

    @property
    def event_bank(self) -> EventBank:
        return self._bank

    @property
    def last_result(self) -> Optional[GenerationResult]:
        """Result of the most recent update() poll."""
        return self._last_result

    def start_task_events(self, task_type: Any, base_config: Optional[EventGenerationConfig] = None) -> None:
        """Apply the task's pacing profile and start a fresh session."""
        task_config = get_task_event_config(task_type, base_config or self._base_config)
        self._generator.update_config(task_config.to_dict())
        self._generator.start_session()
        self._generated_events = []
        logger.info(
            f"Task events started for {task_key(task_type)}: "
            f"{task_config.min_time_between_events:g}-{task_config.max_time_between_events:g}s between events"
        )

    def update(self, task_type: Any, character: CharacterSnapshot) -> Optional[GameEvent]:
        """Poll once. Returns the event fired this tick, if any."""
        context = self.build_condition_context(character)
        result = self._generator.try_generate_event(task_type, context)
        self._last_result = result
        if result.success:
            self._generated_events.append(result.event)
            return result.event
        return None

    def end_task_events(self) -> list[GameEvent]:
        """End the session and return its events in firing order."""
        events = self._generator.end_session()
        self._generated_events = []
        return events

    def get_current_events(self) -> list[GameEvent]:
        return list(self._generated_events)

    def pause(self) -> None:
        self._generator.pause()

    def resume(self) -> None:
        self._generator.resume()

    def reset(self) -> None:
        self._generator.reset()
        self._generated_events = []

    def build_condition_context(self, character: CharacterSnapshot) -> ConditionContext:
        return ConditionContext(
            character_level=character.level,
            current_health=character.current_hp,
            max_health=character.max_hp,
            is_injured=character.is_injured,
            gold=character.gold,
            has_weapon=character.has_weapon,
            has_armor=character.has_armor,
            task_type=task_key(character.active_task_type or TaskType.EXPEDITION),
            task_progress=character.task_progress,
            event_count=len(self._generated_events),
        )

    def get_session_statistics(self) -> dict[str, Any]:
        """Counts, total impact and beneficial/harmful split for this session."""
        events = self._generated_events
        return {
            "total": len(events),
            "by_severity": {
                severity.value: sum(1 for e in events if e.severity == severity)
                for severity in EventSeverity
            },
            "by_category": {
                category.value: sum(1 for e in events if e.category == category)
                for category in EventCategory
            },
            "total_impact": sum(get_impact_score(e) for e in events),
            "beneficial_events": sum(1 for e in events if is_beneficial(e)),
            "harmful_events": sum(1 for e in events if is_harmful(e)),
        }


def create_event_task_integration(
    config: Optional[EventGenerationConfig] = None,
    seed: Optional[int] = None,
    clock: Optional[Clock] = None,
    run_log: Optional[RunLog] = None,
) -> EventTaskIntegration:
    """Integration over the built-in catalog, optionally seeded."""
    dice = DiceRoller(seed=seed, run_log=run_log)
    return EventTaskIntegration(config=config, dice=dice, clock=clock, run_log=run_log)
