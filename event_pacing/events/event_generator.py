"""
Event Generator: per-session pacing state machine.

The host loop polls try_generate_event() once per tick. The generator decides
whether an event is due, asks the EventBank for a weighted eligible template,
instantiates it with rolled effects and records it in the session.

Session lifecycle:
    IDLE --start_session--> ACTIVE --pause--> PAUSED --resume--> ACTIVE
    ACTIVE/PAUSED --end_session--> IDLE
    any --reset--> IDLE

Calls that do not apply to the current status are logged no-ops. Ordinary
"cannot generate right now" outcomes are returned as tagged failures, never
raised.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional
import logging
import uuid

from event_pacing.data_models import (
    SEVERITY_ORDER,
    Clock,
    ConditionContext,
    DiceRoller,
    EventSeverity,
    EventTemplate,
    GameEvent,
    SystemClock,
    get_dice_roller,
    task_key,
)
from event_pacing.events.config import EventGenerationConfig
from event_pacing.events.effect_rolls import replace_placeholders, roll_effects
from event_pacing.events.event_bank import EventBank, SelectionCriteria
from event_pacing.observability.run_log import RunLog, get_run_log


logger = logging.getLogger(__name__)


# Retry hints handed back to the host, in seconds
PAUSED_RETRY_DELAY = 10.0
BLOCKED_RETRY_DELAY = 60.0

# Visual cue duration applied when a template leaves it unset
DEFAULT_VISUAL_CUE_DURATION = 2.0


# =============================================================================
# SESSION LIFECYCLE
# =============================================================================


class SessionStatus(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    PAUSED = "paused"


@dataclass(frozen=True)
class SessionTransition:
    """A permitted lifecycle transition."""
    from_status: SessionStatus
    to_status: SessionStatus
    trigger: str
    description: str = ""


VALID_TRANSITIONS: list[SessionTransition] = [
    SessionTransition(SessionStatus.IDLE, SessionStatus.ACTIVE, "start_session", "Task session begins"),
    SessionTransition(SessionStatus.ACTIVE, SessionStatus.ACTIVE, "start_session", "Running session restarted"),
    SessionTransition(SessionStatus.PAUSED, SessionStatus.ACTIVE, "start_session", "Paused session restarted"),
    SessionTransition(SessionStatus.ACTIVE, SessionStatus.PAUSED, "pause", "Generation suspended"),
    SessionTransition(SessionStatus.PAUSED, SessionStatus.ACTIVE, "resume", "Generation resumed"),
    SessionTransition(SessionStatus.ACTIVE, SessionStatus.IDLE, "end_session", "Session ended"),
    SessionTransition(SessionStatus.PAUSED, SessionStatus.IDLE, "end_session", "Session ended while paused"),
]

_TRANSITION_INDEX: dict[tuple[SessionStatus, str], SessionTransition] = {
    (t.from_status, t.trigger): t for t in VALID_TRANSITIONS
}


# =============================================================================
# RESULTS
# =============================================================================


class GenerationFailure(str, Enum):
    """Why a poll produced no event."""
    DISABLED = "disabled"
    NO_ACTIVE_SESSION = "no_active_session"
    PAUSED = "paused"
    MAX_EVENTS_REACHED = "max_events_reached"
    NOT_YET_TIME = "not_yet_time"
    NO_ELIGIBLE_TEMPLATES = "no_eligible_templates"

    @property
    def message(self) -> str:
        return _FAILURE_MESSAGES[self]


_FAILURE_MESSAGES: dict[GenerationFailure, str] = {
    GenerationFailure.DISABLED: "event generation is disabled",
    GenerationFailure.NO_ACTIVE_SESSION: "no active session",
    GenerationFailure.PAUSED: "generation is paused",
    GenerationFailure.MAX_EVENTS_REACHED: "maximum events per session reached",
    GenerationFailure.NOT_YET_TIME: "not yet time for next event",
    GenerationFailure.NO_ELIGIBLE_TEMPLATES: "no eligible templates",
}


@dataclass
class GenerationResult:
    """
    Outcome of one poll.

    Exactly one of event/failure is set. next_attempt_time is a hint for when
    polling again could produce something different.
    """
    event: Optional[GameEvent] = None
    failure: Optional[GenerationFailure] = None
    next_attempt_time: Optional[float] = None

    @property
    def success(self) -> bool:
        return self.event is not None

    @property
    def reason(self) -> Optional[str]:
        return self.failure.message if self.failure else None

    def __bool__(self) -> bool:
        return self.success


@dataclass
class GeneratorState:
    """Mutable per-session state. Exposed to callers only as a copy."""
    status: SessionStatus = SessionStatus.IDLE
    current_session_events: list[GameEvent] = field(default_factory=list)
    fired_template_ids: set[str] = field(default_factory=set)
    last_event_timestamp: float = 0.0
    next_event_time: Optional[float] = None
    paused_at: Optional[float] = None

    @property
    def is_paused(self) -> bool:
        return self.status == SessionStatus.PAUSED

    @property
    def is_active(self) -> bool:
        return self.status != SessionStatus.IDLE

    def copy(self) -> "GeneratorState":
        return replace(
            self,
            current_session_events=list(self.current_session_events),
            fired_template_ids=set(self.fired_template_ids),
        )


# =============================================================================
# GENERATOR
# =============================================================================


class EventGenerator:
    """
    Rate-limited event generation for one task session at a time.

    Usage:
        generator = EventGenerator(bank, config=TEST_EVENT_CONFIG.copy(), dice=DiceRoller(seed=7))
        generator.start_session()
        result = generator.try_generate_event("raid", context)
        if result.success:
            host.apply(result.event)
    """

    def __init__(
        self,
        event_bank: EventBank,
        config: Optional[EventGenerationConfig] = None,
        dice: Optional[DiceRoller] = None,
        clock: Optional[Clock] = None,
        run_log: Optional[RunLog] = None,
    ):
        """
        Initialize the generator.

        Args:
            event_bank: Template catalog to draw from
            config: Pacing configuration (defaults to EventGenerationConfig())
            dice: Source of randomness. Defaults to the catalog's roller so
                one seed controls every draw.
            clock: Time source in seconds (defaults to SystemClock)
            run_log: RunLog for transitions, schedules and fired events
        """
        self._bank = event_bank
        self._config = config.copy() if config is not None else EventGenerationConfig()
        self._dice = dice
        self._clock = clock if clock is not None else SystemClock()
        self._run_log = run_log
        self._state = GeneratorState()

    @property
    def dice(self) -> DiceRoller:
        if self._dice is not None:
            return self._dice
        return self._bank.dice if self._bank is not None else get_dice_roller()

    @property
    def run_log(self) -> RunLog:
        return self._run_log if self._run_log is not None else get_run_log()

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def config(self) -> EventGenerationConfig:
        """A copy of the active configuration."""
        return self._config.copy()

    @property
    def event_bank(self) -> EventBank:
        return self._bank

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start_session(self) -> None:
        """Begin a new session, discarding any session already running."""
        now = self._clock.now()
        if self._state.is_active:
            logger.info(
                f"Restarting session; discarding {len(self._state.current_session_events)} events"
            )
        self._transition("start_session")

        self._state.current_session_events = []
        self._state.fired_template_ids = set()
        self._state.paused_at = None
        self._state.last_event_timestamp = now
        self._state.next_event_time = self._schedule_next(now, "session start")
        logger.info(f"Event session started, first event due at {self._state.next_event_time:.1f}")

    def end_session(self) -> list[GameEvent]:
        """
        End the session.

        Returns:
            The events fired since start_session(), in firing order. Empty
            when no session was active.
        """
        if not self._transition("end_session"):
            return []

        events = self._state.current_session_events
        self._state.current_session_events = []
        self._state.fired_template_ids = set()
        self._state.next_event_time = None
        self._state.paused_at = None
        logger.info(f"Event session ended with {len(events)} events")
        return events

    def pause(self) -> None:
        """Suppress generation, keeping all session state."""
        if self._transition("pause"):
            self._state.paused_at = self._clock.now()

    def resume(self) -> None:
        """Resume generation after pause()."""
        paused_at = self._state.paused_at
        if not self._transition("resume"):
            return

        now = self._clock.now()
        self._state.paused_at = None
        if (
            self._config.extend_timer_on_resume
            and paused_at is not None
            and self._state.next_event_time is not None
        ):
            self._state.next_event_time += now - paused_at
            logger.debug(f"Next event pushed back to {self._state.next_event_time:.1f} after pause")

    def reset(self) -> None:
        """Hard reset to a fresh idle state, from any status."""
        previous = self._state.status
        self._state = GeneratorState()
        self.run_log.log_transition(previous.value, SessionStatus.IDLE.value, "reset")
        logger.info("Event generator reset")

    def _transition(self, trigger: str) -> bool:
        current = self._state.status
        transition = _TRANSITION_INDEX.get((current, trigger))
        if transition is None:
            logger.debug(f"Ignoring {trigger}() while {current.value}")
            return False

        self._state.status = transition.to_status
        self.run_log.log_transition(current.value, transition.to_status.value, trigger)
        return True

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def try_generate_event(
        self,
        task_type: Any,
        context: Optional[ConditionContext] = None,
    ) -> GenerationResult:
        """
        Poll for an event. Never blocks and never raises for ordinary outcomes.

        Args:
            task_type: Task the session is running
            context: Character/task snapshot for condition checks

        Returns:
            GenerationResult carrying either the event or the failure reason
        """
        now = self._clock.now()
        task = task_key(task_type)
        if context is None:
            context = ConditionContext(task_type=task, event_count=len(self._state.current_session_events))

        if not self._config.enabled:
            return self._fail(GenerationFailure.DISABLED, now + BLOCKED_RETRY_DELAY)

        if not self._state.is_active:
            return self._fail(GenerationFailure.NO_ACTIVE_SESSION, now + BLOCKED_RETRY_DELAY)

        if self._state.is_paused:
            return self._fail(GenerationFailure.PAUSED, now + PAUSED_RETRY_DELAY)

        if len(self._state.current_session_events) >= self._config.max_events_per_session:
            return self._fail(GenerationFailure.MAX_EVENTS_REACHED, now + BLOCKED_RETRY_DELAY)

        if self._state.next_event_time is not None and now < self._state.next_event_time:
            return self._fail(GenerationFailure.NOT_YET_TIME, self._state.next_event_time)

        criteria = SelectionCriteria(
            task_type=task,
            condition_context=context,
            exclude_template_ids=frozenset(self._state.fired_template_ids),
            preferred_severity=self._select_severity(context),
        )
        template = self._bank.select_random_template(criteria)

        if template is None:
            # Back off for a full interval rather than retrying every tick
            self._state.next_event_time = self._schedule_next(now, "no eligible templates")
            return self._fail(GenerationFailure.NO_ELIGIBLE_TEMPLATES, self._state.next_event_time)

        event = self._create_event(template, now)

        self._state.current_session_events.append(event)
        if not template.repeatable:
            self._state.fired_template_ids.add(template.template_id)
        self._state.last_event_timestamp = now
        self._state.next_event_time = self._schedule_next(now, f"after {template.template_id}")

        self.run_log.log_event_fired(
            event_id=event.event_id,
            template_id=event.template_id,
            severity=event.severity.value,
            category=event.category.value,
            message=event.message,
        )
        logger.info(f"Event fired [{event.severity.value}] {event.template_id}: {event.message}")

        return GenerationResult(event=event, next_attempt_time=self._state.next_event_time)

    def _fail(self, failure: GenerationFailure, next_attempt_time: Optional[float]) -> GenerationResult:
        logger.debug(f"No event: {failure.message}")
        return GenerationResult(failure=failure, next_attempt_time=next_attempt_time)

    def _select_severity(self, context: ConditionContext) -> Optional[EventSeverity]:
        """
        Draw the preferred severity hint from the configured weights.

        With a progress bias, warning and critical weights grow linearly with
        task progress. Returns None when preference is off or all weights are 0.
        """
        if not self._config.use_severity_preference:
            return None

        weights = dict(self._config.severity_weights)
        bias = self._config.progress_severity_bias
        if bias > 0:
            progress = min(max(float(context.task_progress), 0.0), 100.0) / 100
            for severity in (EventSeverity.WARNING, EventSeverity.CRITICAL):
                weights[severity] *= 1 + bias * progress

        total = sum(weights.get(severity, 0.0) for severity in SEVERITY_ORDER)
        if total <= 0:
            return None

        cursor = self.dice.random("severity preference") * total
        for severity in SEVERITY_ORDER:
            weight = weights.get(severity, 0.0)
            if cursor < weight:
                return severity
            cursor -= weight
        return SEVERITY_ORDER[-1]

    def _schedule_next(self, now: float, reason: str) -> float:
        low = self._config.min_time_between_events
        high = self._config.max_time_between_events
        delay = low if low == high else self.dice.uniform(low, high, "next event delay")
        next_time = now + delay
        self.run_log.log_schedule(rolled_at=now, next_event_time=next_time, reason=reason)
        return next_time

    def _create_event(self, template: EventTemplate, now: float) -> GameEvent:
        message = self.dice.choice(template.messages, f"{template.template_id}: message")
        effects = roll_effects(template.effects, self.dice, template.template_id)

        visual_cue = template.visual_cue
        if visual_cue is not None and not visual_cue.duration:
            visual_cue = replace(visual_cue, duration=DEFAULT_VISUAL_CUE_DURATION)

        return GameEvent(
            event_id=f"event_{uuid.uuid4().hex[:12]}",
            template_id=template.template_id,
            severity=template.severity,
            category=template.category,
            timestamp=now,
            message=replace_placeholders(message, effects),
            effects=effects,
            visual_cue=visual_cue,
        )

    # -------------------------------------------------------------------------
    # Configuration and inspection
    # -------------------------------------------------------------------------

    def update_config(self, partial: Optional[dict[str, Any]] = None, **overrides: Any) -> None:
        """Merge overrides into the active config. Session state is untouched."""
        self._config = self._config.merged(partial, **overrides)
        logger.debug(f"Event config updated: {sorted({**(partial or {}), **overrides})}")

    def get_state(self) -> GeneratorState:
        """A copy of the generator state; mutating it has no effect."""
        return self._state.copy()

    def get_current_session_events(self) -> list[GameEvent]:
        """Events fired so far this session, in firing order (a new list)."""
        return list(self._state.current_session_events)
