"""
Shared data structures for the event pacing engine.

Templates, eligibility conditions, per-poll contexts and instantiated events live
here, along with the two capabilities every pacing decision depends on:

- DiceRoller: every random draw (severity hint, weighted pick, message choice,
  effect magnitude, next event delay) goes through an instance of it.
- Clocks: every wall-clock read goes through SystemClock or SimulatedClock.

Both are injected into the catalog and generator so tests can seed draws and
fast-forward time.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence
import logging
import math
import random
import re
import time

from event_pacing.observability.run_log import RunLog, get_run_log


logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class EventSeverity(str, Enum):
    """Narrative weight class of an event, lightest first."""
    FLAVOR = "flavor"
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


# Lightest to heaviest; used for statistics ordering and progress bias
SEVERITY_ORDER: tuple[EventSeverity, ...] = (
    EventSeverity.FLAVOR,
    EventSeverity.INFO,
    EventSeverity.WARNING,
    EventSeverity.CRITICAL,
)


class EventCategory(str, Enum):
    """Domain tag used for filtering and analytics, never for gating."""
    COMBAT = "combat"
    LOOT = "loot"
    HAZARD = "hazard"
    NPC = "npc"
    FORTUNE = "fortune"
    EQUIPMENT = "equipment"
    HEALTH = "health"
    ECONOMY = "economy"
    MYSTERY = "mystery"


class TaskType(str, Enum):
    """Timed tasks known to the built-in catalog."""
    EXPEDITION = "expedition"
    RAID = "raid"
    CRAFT = "craft"
    HUNT = "hunt"
    REST = "rest"


class VisualCueType(str, Enum):
    """Cue hints forwarded untouched to the presentation layer."""
    SPARKLE = "sparkle"
    DAMAGE = "damage"
    WARNING = "warning"
    TREASURE = "treasure"
    SHIELD = "shield"
    SKULL = "skull"
    STAR = "star"
    QUESTION = "question"


class EffectKind(str, Enum):
    """Numeric effects a template may declare. Each is independently optional."""
    SUCCESS_CHANCE_MODIFIER = "success_chance_modifier"
    GOLD_MODIFIER = "gold_modifier"
    HEALTH_MODIFIER = "health_modifier"
    MATERIALS_MODIFIER = "materials_modifier"
    DURABILITY_DAMAGE = "durability_damage"
    EXTRA_CHESTS = "extra_chests"
    LOOT_QUALITY_MODIFIER = "loot_quality_modifier"
    XP_MODIFIER = "xp_modifier"


def task_key(task_type: Any) -> str:
    """Normalize a task type (enum member or plain string) to its string key."""
    if isinstance(task_type, Enum):
        return str(task_type.value)
    return str(task_type)


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def snake_case(key: str) -> str:
    """Convert a camelCase data key (e.g. "goldModifier") to snake_case."""
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


# =============================================================================
# DICE AND RANDOMIZATION
# =============================================================================


class DiceRoller:
    """
    Centralized randomization interface.

    All draws made by the engine go through an instance so a session can be
    seeded for reproducibility and every draw lands in the roll log. Each
    instance owns its own random.Random, so two seeded rollers never disturb
    each other or the global random module.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        run_log: Optional[RunLog] = None,
    ):
        """
        Initialize the roller.

        Args:
            seed: Optional seed for reproducible draws
            rng: Optional pre-built random.Random (takes precedence over seed)
            run_log: RunLog receiving every draw. Defaults to the global log.
        """
        self._seed = seed
        self._rng = rng if rng is not None else random.Random(seed)
        self._run_log = run_log
        self._roll_log: list[DiceResult] = []

    @property
    def seed(self) -> Optional[int]:
        """The seed last applied to this roller, if any."""
        return self._seed

    def set_seed(self, seed: int) -> None:
        """Reseed the roller for reproducibility."""
        self._seed = seed
        self._rng.seed(seed)

    def randint(self, a: int, b: int, reason: str = "") -> int:
        """Return a random integer in [a, b], both bounds inclusive."""
        value = self._rng.randint(a, b)
        self._record(
            DiceResult(notation=f"range({a}-{b})", rolls=[value], total=value, reason=reason)
        )
        return value

    def random(self, reason: str = "") -> float:
        """Return a random float in [0.0, 1.0)."""
        value = self._rng.random()
        self._record(DiceResult(notation="random", rolls=[], total=value, reason=reason))
        return value

    def uniform(self, a: float, b: float, reason: str = "") -> float:
        """Return a random float between a and b."""
        value = self._rng.uniform(a, b)
        self._record(
            DiceResult(notation=f"uniform({a}-{b})", rolls=[], total=value, reason=reason)
        )
        return value

    def choice(self, seq: Sequence[Any], reason: str = "") -> Any:
        """
        Choose a random element from a non-empty sequence.

        Raises:
            IndexError: If the sequence is empty
        """
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        index = self.randint(0, len(seq) - 1, reason or f"choice from {len(seq)} options")
        return seq[index]

    def get_roll_log(self) -> list["DiceResult"]:
        """Get every draw made through this roller."""
        return self._roll_log.copy()

    def clear_roll_log(self) -> None:
        """Clear the roll log."""
        self._roll_log = []

    def _record(self, result: "DiceResult") -> "DiceResult":
        self._roll_log.append(result)
        run_log = self._run_log if self._run_log is not None else get_run_log()
        run_log.log_roll(
            notation=result.notation,
            rolls=list(result.rolls),
            total=result.total,
            reason=result.reason,
        )
        return result


@dataclass
class DiceResult:
    """Result of a single draw with full information."""
    notation: str
    rolls: list[int]
    total: float  # int for randint draws, float otherwise
    reason: str
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.notation}: {self.rolls} = {self.total}"


_dice_roller: Optional[DiceRoller] = None


def get_dice_roller() -> DiceRoller:
    """Get the process-default DiceRoller (unseeded)."""
    global _dice_roller
    if _dice_roller is None:
        _dice_roller = DiceRoller()
    return _dice_roller


# =============================================================================
# CLOCKS
# =============================================================================


class Clock(Protocol):
    """Anything that can report the current time in seconds."""

    def now(self) -> float:
        ...


class SystemClock:
    """Wall-clock time in seconds since the epoch."""

    def now(self) -> float:
        return time.time()


class SimulatedClock:
    """
    Manually advanced clock for tests and offline simulation.

    Usage:
        clock = SimulatedClock(start=1000.0)
        generator = EventGenerator(bank, clock=clock)
        generator.start_session()
        clock.advance(200)
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        """Move time forward and return the new time."""
        if seconds < 0:
            raise ValueError("SimulatedClock cannot move backwards")
        self._now += seconds
        return self._now

    def set(self, timestamp: float) -> None:
        """Jump to an absolute time."""
        self._now = float(timestamp)


# =============================================================================
# TEMPLATE BUILDING BLOCKS
# =============================================================================


@dataclass(frozen=True)
class EffectRange:
    """Inclusive numeric range an effect is rolled from."""
    min: float
    max: float

    def __post_init__(self):
        if not (math.isfinite(self.min) and math.isfinite(self.max)):
            raise ValueError(f"Effect range bounds must be finite: {self.min!r}, {self.max!r}")
        # Reversed bounds are normalized rather than rejected
        if self.min > self.max:
            low, high = self.max, self.min
            object.__setattr__(self, "min", low)
            object.__setattr__(self, "max", high)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    @classmethod
    def from_value(cls, data: Any) -> "EffectRange":
        """
        Build a range from {"min": a, "max": b}, an (a, b) pair, or a single number.

        Raises:
            ValueError: If the data cannot be read as a numeric range
        """
        if isinstance(data, EffectRange):
            return data
        if isinstance(data, dict):
            if "min" not in data or "max" not in data:
                raise ValueError(f"Effect range needs 'min' and 'max': {data!r}")
            low, high = data["min"], data["max"]
        elif isinstance(data, (list, tuple)) and len(data) == 2:
            low, high = data
        elif isinstance(data, (int, float)) and not isinstance(data, bool):
            low = high = data
        else:
            raise ValueError(f"Cannot read effect range from {data!r}")

        try:
            low, high = float(low), float(high)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Effect range bounds must be numeric: {data!r}") from e
        return cls(min=low, max=high)


@dataclass(frozen=True)
class EventConditions:
    """
    Eligibility predicate over a ConditionContext.

    Every field is optional; an unset field is vacuously satisfied. Evaluation
    lives in the EventBank so a malformed value only excludes its template.
    """
    min_level: Optional[int] = None
    max_level: Optional[int] = None
    min_health_percent: Optional[float] = None
    max_health_percent: Optional[float] = None
    requires_injury: bool = False
    requires_not_injured: bool = False
    min_gold: Optional[int] = None
    requires_weapon: bool = False
    requires_armor: bool = False
    min_task_progress: Optional[float] = None
    max_event_count: Optional[int] = None
    custom_condition: Optional[Callable[["ConditionContext"], bool]] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EventConditions":
        """Build conditions from a plain mapping. Unknown keys are ignored."""
        known = {name for name in cls.__dataclass_fields__}
        unknown = set(data) - known
        if unknown:
            logger.debug(f"Ignoring unknown condition keys: {sorted(unknown)}")
        return cls(**{key: value for key, value in data.items() if key in known})


@dataclass(frozen=True)
class VisualCue:
    """Presentation hint carried from template to event."""
    type: VisualCueType
    color: Optional[str] = None
    duration: Optional[float] = None  # seconds
    position: Optional[tuple[float, float]] = None  # normalized 0-1 canvas coords

    def __post_init__(self):
        object.__setattr__(self, "type", VisualCueType(self.type))


@dataclass
class ConditionContext:
    """Snapshot of character and task state supplied by the host for one poll."""
    character_level: int = 1
    current_health: float = 100
    max_health: float = 100
    is_injured: bool = False
    gold: int = 0
    has_weapon: bool = False
    has_armor: bool = False
    task_type: str = TaskType.EXPEDITION.value
    task_progress: float = 0.0  # percent, 0-100
    event_count: int = 0

    @property
    def health_percent(self) -> Optional[float]:
        """Current health as a percentage, or None when max health is not positive."""
        if self.max_health <= 0:
            return None
        return self.current_health / self.max_health * 100


# =============================================================================
# TEMPLATES AND EVENTS
# =============================================================================


@dataclass(frozen=True)
class EventTemplate:
    """
    Author-defined blueprint for a possible event.

    An empty applicable_tasks set means the template applies to every task type.
    """
    template_id: str
    severity: EventSeverity
    category: EventCategory
    messages: tuple[str, ...]
    effects: Mapping[EffectKind, EffectRange] = field(default_factory=dict)
    weight: float = 1.0
    applicable_tasks: frozenset[str] = field(default_factory=frozenset)
    repeatable: bool = True
    conditions: Optional[EventConditions] = None
    visual_cue: Optional[VisualCue] = None

    def __post_init__(self):
        object.__setattr__(self, "severity", EventSeverity(self.severity))
        object.__setattr__(self, "category", EventCategory(self.category))
        object.__setattr__(self, "messages", tuple(self.messages))
        object.__setattr__(
            self, "applicable_tasks", frozenset(task_key(t) for t in self.applicable_tasks)
        )
        object.__setattr__(
            self,
            "effects",
            MappingProxyType(
                {EffectKind(kind): EffectRange.from_value(rng) for kind, rng in self.effects.items()}
            ),
        )
        if isinstance(self.conditions, dict):
            object.__setattr__(self, "conditions", EventConditions.from_dict(self.conditions))
        if isinstance(self.visual_cue, dict):
            object.__setattr__(self, "visual_cue", VisualCue(**self.visual_cue))

    def __hash__(self) -> int:
        return hash(self.template_id)

    @property
    def applies_to_all_tasks(self) -> bool:
        return not self.applicable_tasks

    def is_applicable(self, task_type: Any) -> bool:
        """True if this template may fire during the given task type."""
        return self.applies_to_all_tasks or task_key(task_type) in self.applicable_tasks

    @property
    def is_selectable(self) -> bool:
        """Templates without messages or with a non-positive or non-finite weight can never be drawn."""
        return bool(self.messages) and math.isfinite(self.weight) and self.weight > 0


@dataclass
class GameEvent:
    """
    A concrete occurrence of a template with rolled values and a final message.

    Only `acknowledged` changes after creation, and only from the host/UI side.
    """
    event_id: str
    template_id: str
    severity: EventSeverity
    category: EventCategory
    timestamp: float
    message: str
    effects: dict[EffectKind, int] = field(default_factory=dict)
    visual_cue: Optional[VisualCue] = None
    acknowledged: bool = False

    def get_effect(self, kind: EffectKind, default: int = 0) -> int:
        return self.effects.get(kind, default)

    def acknowledge(self) -> None:
        self.acknowledged = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging and hand-off to the host."""
        cue = None
        if self.visual_cue:
            cue = {
                "type": self.visual_cue.type.value,
                "color": self.visual_cue.color,
                "duration": self.visual_cue.duration,
                "position": self.visual_cue.position,
            }
        return {
            "event_id": self.event_id,
            "template_id": self.template_id,
            "severity": self.severity.value,
            "category": self.category.value,
            "timestamp": self.timestamp,
            "message": self.message,
            "effects": {kind.value: value for kind, value in self.effects.items()},
            "visual_cue": cue,
            "acknowledged": self.acknowledged,
        }
