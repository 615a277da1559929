"""
Event generation configuration.

EventGenerationConfig is an explicit value passed into the EventGenerator;
nothing reads process-wide configuration implicitly. Presets cover the usual
environments, and per-task adjustments scale pacing and severity odds for the
risk profile of each task type.

All durations are in seconds.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional
import logging
import math
import os

from event_pacing.data_models import EventSeverity, TaskType, snake_case, task_key


logger = logging.getLogger(__name__)


ENVIRONMENT_VARIABLE = "EVENT_PACING_ENV"


def _severity_weights(flavor: float, info: float, warning: float, critical: float) -> dict[EventSeverity, float]:
    return {
        EventSeverity.FLAVOR: flavor,
        EventSeverity.INFO: info,
        EventSeverity.WARNING: warning,
        EventSeverity.CRITICAL: critical,
    }


def _default_severity_weights() -> dict[EventSeverity, float]:
    # Heavily favors non-disruptive events
    return _severity_weights(50, 30, 15, 5)


@dataclass
class EventGenerationConfig:
    """
    Pacing and weighting knobs for one generator.

    Attributes:
        min_time_between_events: Lower bound of the delay rolled after each event
        max_time_between_events: Upper bound of that delay
        max_events_per_session: Cap on events fired in one session
        severity_weights: Relative odds of each severity being the preferred hint
        enabled: When False every poll fails with DISABLED
        use_severity_preference: Draw a preferred severity each poll
        progress_severity_bias: Extra multiplier on warning/critical weights,
            scaled by task progress (0 disables the bias)
        extend_timer_on_resume: Push the next event time back by the time
            spent paused
    """
    min_time_between_events: float = 90.0
    max_time_between_events: float = 150.0
    max_events_per_session: int = 10
    severity_weights: dict[EventSeverity, float] = field(default_factory=_default_severity_weights)
    enabled: bool = True
    use_severity_preference: bool = True
    progress_severity_bias: float = 0.0
    extend_timer_on_resume: bool = False

    def __post_init__(self):
        weights = {severity: 0.0 for severity in EventSeverity}
        for severity, weight in self.severity_weights.items():
            weights[EventSeverity(severity)] = max(0.0, float(weight))
        self.severity_weights = weights

        if self.min_time_between_events < 0 or self.max_time_between_events < 0:
            logger.warning("Negative event delay bounds clamped to 0")
            self.min_time_between_events = max(0.0, self.min_time_between_events)
            self.max_time_between_events = max(0.0, self.max_time_between_events)
        if self.min_time_between_events > self.max_time_between_events:
            logger.warning(
                f"min_time_between_events ({self.min_time_between_events}) exceeds "
                f"max_time_between_events ({self.max_time_between_events}); swapping"
            )
            self.min_time_between_events, self.max_time_between_events = (
                self.max_time_between_events,
                self.min_time_between_events,
            )

    def copy(self) -> "EventGenerationConfig":
        """Independent copy; the severity weights dict is not shared."""
        return replace(self, severity_weights=dict(self.severity_weights))

    def merged(self, overrides: Optional[dict[str, Any]] = None, **kwargs: Any) -> "EventGenerationConfig":
        """
        Return a copy with the given fields overridden.

        Keys may be snake_case or camelCase. A partial severity_weights mapping
        only replaces the severities it names. Unknown keys are ignored with a
        warning.
        """
        changes = {**(overrides or {}), **kwargs}
        known = {f.name for f in fields(self)}
        updates: dict[str, Any] = {}

        for raw_key, value in changes.items():
            key = snake_case(raw_key)
            if key not in known:
                logger.warning(f"Ignoring unknown event config key: {raw_key}")
                continue
            if key == "severity_weights":
                weights = dict(self.severity_weights)
                weights.update({EventSeverity(s): w for s, w in value.items()})
                value = weights
            updates[key] = value

        return replace(self.copy(), **updates)

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_time_between_events": self.min_time_between_events,
            "max_time_between_events": self.max_time_between_events,
            "max_events_per_session": self.max_events_per_session,
            "severity_weights": {s.value: w for s, w in self.severity_weights.items()},
            "enabled": self.enabled,
            "use_severity_preference": self.use_severity_preference,
            "progress_severity_bias": self.progress_severity_bias,
            "extend_timer_on_resume": self.extend_timer_on_resume,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EventGenerationConfig":
        """Build a config from defaults plus the keys present in data."""
        return cls().merged(data)


# =============================================================================
# PRESETS
# =============================================================================


# ~1 event per 2 minutes, at most 10 in a 25-minute work session
PRODUCTION_EVENT_CONFIG = EventGenerationConfig()

# Faster events for manual testing
DEVELOPMENT_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events=10.0,
    max_time_between_events=20.0,
    max_events_per_session=50,
    severity_weights=_severity_weights(25, 35, 25, 15),
)

# Immediate events for automated tests
TEST_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events=0.0,
    max_time_between_events=0.0,
    max_events_per_session=100,
    severity_weights=_severity_weights(25, 25, 25, 25),
)

DISABLED_EVENT_CONFIG = EventGenerationConfig(
    min_time_between_events=0.0,
    max_time_between_events=0.0,
    max_events_per_session=0,
    severity_weights=_severity_weights(0, 0, 0, 0),
    enabled=False,
)

ENVIRONMENT_CONFIGS: dict[str, EventGenerationConfig] = {
    "production": PRODUCTION_EVENT_CONFIG,
    "development": DEVELOPMENT_EVENT_CONFIG,
    "test": TEST_EVENT_CONFIG,
    "disabled": DISABLED_EVENT_CONFIG,
}


# =============================================================================
# PER-TASK ADJUSTMENTS
# =============================================================================


# Event rate per task type; delay bounds are divided by it
TASK_EVENT_RATE_MODIFIERS: dict[str, float] = {
    TaskType.RAID.value: 1.2,
    TaskType.EXPEDITION.value: 1.0,
    TaskType.CRAFT.value: 0.7,
    TaskType.HUNT.value: 1.1,
    TaskType.REST.value: 0.5,
}

# Severity odds per task type, replacing the base weights
TASK_SEVERITY_ADJUSTMENTS: dict[str, dict[EventSeverity, float]] = {
    TaskType.RAID.value: _severity_weights(30, 25, 25, 20),
    TaskType.EXPEDITION.value: _severity_weights(50, 30, 15, 5),
    TaskType.CRAFT.value: _severity_weights(60, 30, 8, 2),
    TaskType.HUNT.value: _severity_weights(40, 30, 20, 10),
    TaskType.REST.value: _severity_weights(80, 15, 4, 1),
}


def _scaled_delay(seconds: float, rate_modifier: float) -> float:
    # Floored at millisecond resolution
    return math.floor(seconds * 1000 / rate_modifier) / 1000


def get_task_event_config(
    task_type: Any,
    base_config: Optional[EventGenerationConfig] = None,
) -> EventGenerationConfig:
    """
    Derive the config for a task type from a base config.

    Unknown task types get an unchanged copy of the base.
    """
    base = (base_config or PRODUCTION_EVENT_CONFIG).copy()
    key = task_key(task_type)

    rate_modifier = TASK_EVENT_RATE_MODIFIERS.get(key)
    severity_weights = TASK_SEVERITY_ADJUSTMENTS.get(key)
    if rate_modifier is None or severity_weights is None:
        logger.debug(f"No pacing adjustments for task type '{key}', using base config")
        return base

    return replace(
        base,
        min_time_between_events=_scaled_delay(base.min_time_between_events, rate_modifier),
        max_time_between_events=_scaled_delay(base.max_time_between_events, rate_modifier),
        severity_weights=dict(severity_weights),
    )


def get_environment_config(environment: Optional[str] = None) -> EventGenerationConfig:
    """
    Preset for an environment name, read from EVENT_PACING_ENV when not given.

    Unrecognized names fall back to production.
    """
    name = (environment or os.getenv(ENVIRONMENT_VARIABLE, "production")).strip().lower()
    preset = ENVIRONMENT_CONFIGS.get(name)
    if preset is None:
        logger.warning(f"Unknown event pacing environment '{name}', using production")
        preset = PRODUCTION_EVENT_CONFIG
    return preset.copy()


# =============================================================================
# BALANCING
# =============================================================================


# Per-event magnitude bounds the built-in catalog is authored against
EVENT_BALANCING: dict[str, float] = {
    "max_gold_gain": 150,
    "max_gold_loss": -80,
    "max_health_damage": -60,
    "max_health_heal": 100,
    "max_success_bonus": 25,
    "max_success_penalty": -15,
    "max_materials_gain": 50,
    "max_durability_damage": 60,
    "max_extra_chests": 1,
    "max_xp_gain": 150,
}
