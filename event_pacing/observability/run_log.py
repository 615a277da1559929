"""
Run Log system for pacing-engine observability.

Captures every deterministic decision the engine makes (draws, session
lifecycle transitions, template selections, pacing schedules and fired events)
so a seeded session can be inspected or compared against another run.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Callable
import json
import logging

logger = logging.getLogger(__name__)


class EventType(str, Enum):
    """Types of entries that can be logged."""

    ROLL = "roll"  # Random draw
    TRANSITION = "transition"  # Session lifecycle transition
    SELECTION = "selection"  # Template selection from the eligible pool
    SCHEDULE = "schedule"  # Next event time rolled
    EVENT_FIRED = "event_fired"  # Event instantiated and recorded
    CUSTOM = "custom"  # Custom entry


@dataclass
class LogEvent:
    """Base class for all logged entries."""

    # event_type has a default so subclass fields may have defaults;
    # subclasses set the correct value in __post_init__
    event_type: EventType = EventType.CUSTOM
    timestamp: datetime = field(default_factory=datetime.now)
    sequence_number: int = 0
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "sequence_number": self.sequence_number,
            "context": self.context,
        }

    @classmethod
    def _base_kwargs(cls, data: dict[str, Any]) -> dict[str, Any]:
        return {
            "timestamp": datetime.fromisoformat(data["timestamp"]),
            "sequence_number": data.get("sequence_number", 0),
            "context": data.get("context", {}),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogEvent":
        """Create from dictionary."""
        return cls(event_type=EventType(data["event_type"]), **cls._base_kwargs(data))


@dataclass
class RollEvent(LogEvent):
    """A random draw."""

    notation: str = ""  # e.g. "range(0-4)", "uniform(2.0-5.0)", "random"
    rolls: list[int] = field(default_factory=list)
    total: float = 0
    reason: str = ""

    def __post_init__(self):
        self.event_type = EventType.ROLL

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "notation": self.notation,
                "rolls": self.rolls,
                "total": self.total,
                "reason": self.reason,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RollEvent":
        return cls(
            notation=data.get("notation", ""),
            rolls=data.get("rolls", []),
            total=data.get("total", 0),
            reason=data.get("reason", ""),
            **cls._base_kwargs(data),
        )

    def __str__(self) -> str:
        return f"[{self.sequence_number}] ROLL {self.notation}: {self.total} ({self.reason})"


@dataclass
class TransitionEvent(LogEvent):
    """A session lifecycle transition."""

    from_state: str = ""
    to_state: str = ""
    trigger: str = ""

    def __post_init__(self):
        self.event_type = EventType.TRANSITION

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "from_state": self.from_state,
                "to_state": self.to_state,
                "trigger": self.trigger,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransitionEvent":
        return cls(
            from_state=data.get("from_state", ""),
            to_state=data.get("to_state", ""),
            trigger=data.get("trigger", ""),
            **cls._base_kwargs(data),
        )

    def __str__(self) -> str:
        return f"[{self.sequence_number}] TRANSITION {self.from_state} -> {self.to_state} (trigger: {self.trigger})"


@dataclass
class SelectionEvent(LogEvent):
    """A weighted template draw over an eligible pool."""

    task_type: str = ""
    preferred_severity: Optional[str] = None
    pool_size: int = 0
    total_weight: float = 0
    selected_template_id: Optional[str] = None

    def __post_init__(self):
        self.event_type = EventType.SELECTION

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "task_type": self.task_type,
                "preferred_severity": self.preferred_severity,
                "pool_size": self.pool_size,
                "total_weight": self.total_weight,
                "selected_template_id": self.selected_template_id,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SelectionEvent":
        return cls(
            task_type=data.get("task_type", ""),
            preferred_severity=data.get("preferred_severity"),
            pool_size=data.get("pool_size", 0),
            total_weight=data.get("total_weight", 0),
            selected_template_id=data.get("selected_template_id"),
            **cls._base_kwargs(data),
        )

    def __str__(self) -> str:
        picked = self.selected_template_id or "no selection"
        return (
            f"[{self.sequence_number}] SELECT {self.task_type} "
            f"pool={self.pool_size} weight={self.total_weight:g}: {picked}"
        )


@dataclass
class ScheduleEvent(LogEvent):
    """The next event time was rolled."""

    rolled_at: float = 0.0
    next_event_time: float = 0.0
    delay: float = 0.0
    reason: str = ""

    def __post_init__(self):
        self.event_type = EventType.SCHEDULE

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "rolled_at": self.rolled_at,
                "next_event_time": self.next_event_time,
                "delay": self.delay,
                "reason": self.reason,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleEvent":
        return cls(
            rolled_at=data.get("rolled_at", 0.0),
            next_event_time=data.get("next_event_time", 0.0),
            delay=data.get("delay", 0.0),
            reason=data.get("reason", ""),
            **cls._base_kwargs(data),
        )

    def __str__(self) -> str:
        return f"[{self.sequence_number}] SCHEDULE +{self.delay:.1f}s -> {self.next_event_time:.1f} ({self.reason})"


@dataclass
class EventFiredEvent(LogEvent):
    """An event was instantiated and recorded in the session."""

    event_id: str = ""
    template_id: str = ""
    severity: str = ""
    category: str = ""
    message: str = ""

    def __post_init__(self):
        self.event_type = EventType.EVENT_FIRED

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            {
                "event_id": self.event_id,
                "template_id": self.template_id,
                "severity": self.severity,
                "category": self.category,
                "message": self.message,
            }
        )
        return base

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EventFiredEvent":
        return cls(
            event_id=data.get("event_id", ""),
            template_id=data.get("template_id", ""),
            severity=data.get("severity", ""),
            category=data.get("category", ""),
            message=data.get("message", ""),
            **cls._base_kwargs(data),
        )

    def __str__(self) -> str:
        return f"[{self.sequence_number}] EVENT {self.severity.upper()} {self.template_id}: {self.message}"


_EVENT_CLASSES: dict[EventType, type[LogEvent]] = {
    EventType.ROLL: RollEvent,
    EventType.TRANSITION: TransitionEvent,
    EventType.SELECTION: SelectionEvent,
    EventType.SCHEDULE: ScheduleEvent,
    EventType.EVENT_FIRED: EventFiredEvent,
}


class RunLog:
    """
    Run log for everything the pacing engine decides.

    Use get_run_log() for the process default, or construct one and inject it
    into a DiceRoller / EventGenerator for an isolated record.
    """

    def __init__(self):
        self._events: list[LogEvent] = []
        self._sequence: int = 0
        self._seed: Optional[int] = None
        self._session_start: datetime = datetime.now()
        self._subscribers: list[Callable[[LogEvent], None]] = []
        self._paused: bool = False

    def reset(self) -> None:
        """Reset the log for a new run."""
        self._events = []
        self._sequence = 0
        self._session_start = datetime.now()
        logger.info("RunLog reset")

    def set_seed(self, seed: int) -> None:
        """Record the RNG seed used for this run."""
        self._seed = seed
        logger.info(f"RunLog seed set: {seed}")

    def get_seed(self) -> Optional[int]:
        return self._seed

    def pause(self) -> None:
        """Stop recording until resume() is called."""
        self._paused = True

    def resume(self) -> None:
        self._paused = False

    def is_paused(self) -> bool:
        return self._paused

    def subscribe(self, callback: Callable[[LogEvent], None]) -> None:
        """Subscribe to receive entries as they are logged."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[LogEvent], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _log_event(self, event: LogEvent) -> None:
        if self._paused:
            return

        self._sequence += 1
        event.sequence_number = self._sequence
        self._events.append(event)

        for subscriber in self._subscribers:
            try:
                subscriber(event)
            except Exception as e:
                logger.warning(f"Subscriber error: {e}")

    def log_roll(
        self,
        notation: str,
        rolls: list[int],
        total: float,
        reason: str = "",
        context: Optional[dict[str, Any]] = None,
    ) -> RollEvent:
        """Log a random draw."""
        event = RollEvent(
            notation=notation,
            rolls=rolls,
            total=total,
            reason=reason,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_transition(
        self,
        from_state: str,
        to_state: str,
        trigger: str,
        context: Optional[dict[str, Any]] = None,
    ) -> TransitionEvent:
        """Log a session lifecycle transition."""
        event = TransitionEvent(
            from_state=from_state,
            to_state=to_state,
            trigger=trigger,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_selection(
        self,
        task_type: str,
        pool_size: int,
        total_weight: float,
        selected_template_id: Optional[str],
        preferred_severity: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> SelectionEvent:
        """Log a template draw (selected_template_id is None for no selection)."""
        event = SelectionEvent(
            task_type=task_type,
            preferred_severity=preferred_severity,
            pool_size=pool_size,
            total_weight=total_weight,
            selected_template_id=selected_template_id,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_schedule(
        self,
        rolled_at: float,
        next_event_time: float,
        reason: str = "",
        context: Optional[dict[str, Any]] = None,
    ) -> ScheduleEvent:
        """Log a newly rolled next event time."""
        event = ScheduleEvent(
            rolled_at=rolled_at,
            next_event_time=next_event_time,
            delay=next_event_time - rolled_at,
            reason=reason,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_event_fired(
        self,
        event_id: str,
        template_id: str,
        severity: str,
        category: str,
        message: str,
        context: Optional[dict[str, Any]] = None,
    ) -> EventFiredEvent:
        """Log an instantiated event."""
        event = EventFiredEvent(
            event_id=event_id,
            template_id=template_id,
            severity=severity,
            category=category,
            message=message,
            context=context or {},
        )
        self._log_event(event)
        return event

    def log_custom(self, event_name: str, details: dict[str, Any]) -> LogEvent:
        """Log a custom entry."""
        event = LogEvent(
            event_type=EventType.CUSTOM,
            context={"event_name": event_name, **details},
        )
        self._log_event(event)
        return event

    def get_events(
        self,
        event_type: Optional[EventType] = None,
        since_sequence: int = 0,
    ) -> list[LogEvent]:
        """
        Get logged entries.

        Args:
            event_type: Filter by entry type (None = all)
            since_sequence: Only entries after this sequence number

        Returns:
            List of entries
        """
        events = [e for e in self._events if e.sequence_number > since_sequence]
        if event_type:
            events = [e for e in events if e.event_type == event_type]
        return events

    def get_rolls(self) -> list[RollEvent]:
        return [e for e in self._events if isinstance(e, RollEvent)]

    def get_transitions(self) -> list[TransitionEvent]:
        return [e for e in self._events if isinstance(e, TransitionEvent)]

    def get_selections(self) -> list[SelectionEvent]:
        return [e for e in self._events if isinstance(e, SelectionEvent)]

    def get_schedules(self) -> list[ScheduleEvent]:
        return [e for e in self._events if isinstance(e, ScheduleEvent)]

    def get_fired_events(self) -> list[EventFiredEvent]:
        return [e for e in self._events if isinstance(e, EventFiredEvent)]

    def get_roll_stream(self) -> list[dict[str, Any]]:
        """
        Get the sequence of draws, e.g. to compare two seeded runs.

        Returns a list of {notation, rolls, total, reason} per draw.
        """
        return [
            {
                "notation": e.notation,
                "rolls": e.rolls,
                "total": e.total,
                "reason": e.reason,
            }
            for e in self.get_rolls()
        ]

    def get_event_count(self) -> int:
        return len(self._events)

    def get_summary(self) -> dict[str, Any]:
        """Get a summary of the run log."""
        return {
            "session_start": self._session_start.isoformat(),
            "seed": self._seed,
            "total_events": len(self._events),
            "rolls": len(self.get_rolls()),
            "transitions": len(self.get_transitions()),
            "selections": len(self.get_selections()),
            "schedules": len(self.get_schedules()),
            "events_fired": len(self.get_fired_events()),
            "last_sequence": self._sequence,
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entire log to a dictionary."""
        return {
            "session_start": self._session_start.isoformat(),
            "seed": self._seed,
            "sequence": self._sequence,
            "events": [e.to_dict() for e in self._events],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    def save(self, filepath: str) -> None:
        """Save the log to a file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.to_json())
        logger.info(f"RunLog saved to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "RunLog":
        """Load a log previously written by save() into a new RunLog."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        log = cls()
        log._session_start = datetime.fromisoformat(data["session_start"])
        log._seed = data.get("seed")
        log._sequence = data.get("sequence", 0)

        for event_data in data.get("events", []):
            event_cls = _EVENT_CLASSES.get(EventType(event_data["event_type"]), LogEvent)
            log._events.append(event_cls.from_dict(event_data))

        logger.info(f"RunLog loaded from {filepath}: {len(log._events)} events")
        return log

    def format_log(
        self,
        event_types: Optional[list[EventType]] = None,
        max_events: Optional[int] = None,
    ) -> str:
        """
        Format the log as a human-readable string.

        Args:
            event_types: Filter by entry types (None = all)
            max_events: Maximum number of (most recent) entries to include
        """
        lines = [
            "=== Run Log ===",
            f"Session: {self._session_start.isoformat()}",
            f"Seed: {self._seed if self._seed is not None else 'not set'}",
            f"Total Events: {len(self._events)}",
            "",
        ]

        events = self._events
        if event_types:
            events = [e for e in events if e.event_type in event_types]
        if max_events:
            events = events[-max_events:]

        for event in events:
            lines.append(str(event))

        return "\n".join(lines)


_run_log: Optional[RunLog] = None


def get_run_log() -> RunLog:
    """Get the global RunLog instance."""
    global _run_log
    if _run_log is None:
        _run_log = RunLog()
    return _run_log


def reset_run_log() -> RunLog:
    """Reset and return the global RunLog instance."""
    log = get_run_log()
    log.reset()
    return log
