"""
Observability for the event pacing engine.

Records draws, session transitions, template selections, pacing schedules and
fired events so seeded sessions can be inspected and compared.
"""

from event_pacing.observability.run_log import (
    RunLog,
    LogEvent,
    EventType,
    RollEvent,
    TransitionEvent,
    SelectionEvent,
    ScheduleEvent,
    EventFiredEvent,
    get_run_log,
    reset_run_log,
)

__all__ = [
    "RunLog",
    "LogEvent",
    "EventType",
    "RollEvent",
    "TransitionEvent",
    "SelectionEvent",
    "ScheduleEvent",
    "EventFiredEvent",
    "get_run_log",
    "reset_run_log",
]
