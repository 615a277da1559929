"""
Per-task views of the template catalog.

Pre-filtered collections for each task type, with the queries used by
tooling and tests, and a validation pass that checks a catalog gives every
task enough variety and that no template breaks the balancing caps.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional
import logging

from event_pacing.data_models import (
    EffectKind,
    EffectRange,
    EventCategory,
    EventSeverity,
    EventTemplate,
    TaskType,
    task_key,
)
from event_pacing.events.config import EVENT_BALANCING
from event_pacing.tables.event_tables import EVENT_TEMPLATES


logger = logging.getLogger(__name__)


MIN_EVENTS_PER_TASK = 10


@dataclass
class TaskEventCollection:
    """Templates applicable to one task type, with severity counts."""
    task_type: str
    templates: list[EventTemplate] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.templates)

    @property
    def by_severity(self) -> dict[str, int]:
        return {
            severity.value: sum(1 for t in self.templates if t.severity == severity)
            for severity in EventSeverity
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "task_type": self.task_type,
            "template_ids": [t.template_id for t in self.templates],
            "total": self.total,
            "by_severity": self.by_severity,
        }


def get_events_for_task(
    task_type: Any,
    templates: Optional[Iterable[EventTemplate]] = None,
) -> TaskEventCollection:
    """Collect the templates applicable to a task type, in catalog order."""
    source = EVENT_TEMPLATES if templates is None else templates
    key = task_key(task_type)
    return TaskEventCollection(
        task_type=key,
        templates=[t for t in source if t.is_applicable(key)],
    )


# Built-in collections, computed once at import
TASK_EVENT_COLLECTIONS: dict[str, TaskEventCollection] = {
    task.value: get_events_for_task(task) for task in TaskType
}


def _collection(task_type: Any, templates: Optional[Iterable[EventTemplate]]) -> TaskEventCollection:
    if templates is None:
        existing = TASK_EVENT_COLLECTIONS.get(task_key(task_type))
        if existing is not None:
            return existing
    return get_events_for_task(task_type, templates)


def get_task_event_collection(task_type: Any) -> TaskEventCollection:
    return _collection(task_type, None)


def get_high_impact_events(
    task_type: Any,
    templates: Optional[Iterable[EventTemplate]] = None,
) -> list[EventTemplate]:
    """Warning and critical templates for a task."""
    return [
        t for t in _collection(task_type, templates).templates
        if t.severity in (EventSeverity.WARNING, EventSeverity.CRITICAL)
    ]


def get_flavor_events(
    task_type: Any,
    templates: Optional[Iterable[EventTemplate]] = None,
) -> list[EventTemplate]:
    return [t for t in _collection(task_type, templates).templates if t.severity == EventSeverity.FLAVOR]


def get_events_by_category(
    task_type: Any,
    category: Any,
    templates: Optional[Iterable[EventTemplate]] = None,
) -> list[EventTemplate]:
    try:
        wanted = EventCategory(category)
    except ValueError:
        return []
    return [t for t in _collection(task_type, templates).templates if t.category == wanted]


def get_repeatable_events(
    task_type: Any,
    templates: Optional[Iterable[EventTemplate]] = None,
) -> dict[str, list[EventTemplate]]:
    """Split a task's templates into repeatable and non_repeatable lists."""
    collection = _collection(task_type, templates)
    return {
        "repeatable": [t for t in collection.templates if t.repeatable],
        "non_repeatable": [t for t in collection.templates if not t.repeatable],
    }


def get_event_collections_summary(
    collections: Optional[dict[str, TaskEventCollection]] = None,
) -> dict[str, dict[str, int]]:
    """Per-task totals, severity counts and repeatable counts."""
    collections = TASK_EVENT_COLLECTIONS if collections is None else collections
    summary = {}
    for task_type, collection in collections.items():
        repeatable = sum(1 for t in collection.templates if t.repeatable)
        summary[task_type] = {
            "total": collection.total,
            **collection.by_severity,
            "repeatable": repeatable,
            "non_repeatable": collection.total - repeatable,
        }
    return summary


# =============================================================================
# VALIDATION
# =============================================================================


@dataclass
class ValidationReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


# Effect kind -> (lowest allowed min, highest allowed max); None means unbounded
_BALANCING_LIMITS: dict[EffectKind, tuple[Optional[float], Optional[float]]] = {
    EffectKind.GOLD_MODIFIER: (EVENT_BALANCING["max_gold_loss"], EVENT_BALANCING["max_gold_gain"]),
    EffectKind.HEALTH_MODIFIER: (EVENT_BALANCING["max_health_damage"], EVENT_BALANCING["max_health_heal"]),
    EffectKind.SUCCESS_CHANCE_MODIFIER: (
        EVENT_BALANCING["max_success_penalty"],
        EVENT_BALANCING["max_success_bonus"],
    ),
    EffectKind.MATERIALS_MODIFIER: (None, EVENT_BALANCING["max_materials_gain"]),
    EffectKind.DURABILITY_DAMAGE: (None, EVENT_BALANCING["max_durability_damage"]),
    EffectKind.EXTRA_CHESTS: (None, EVENT_BALANCING["max_extra_chests"]),
    EffectKind.XP_MODIFIER: (None, EVENT_BALANCING["max_xp_gain"]),
}


def _balancing_warnings(template: EventTemplate) -> list[str]:
    warnings = []
    for kind, effect_range in template.effects.items():
        low, high = _BALANCING_LIMITS.get(kind, (None, None))
        if _out_of_bounds(effect_range, low, high):
            warnings.append(
                f'Template "{template.template_id}" {kind.value} range '
                f"{effect_range.min:g}..{effect_range.max:g} exceeds balancing limits"
            )
    return warnings


def _out_of_bounds(effect_range: EffectRange, low: Optional[float], high: Optional[float]) -> bool:
    if low is not None and effect_range.min < low:
        return True
    return high is not None and effect_range.max > high


def validate_event_collections(
    templates: Optional[Iterable[EventTemplate]] = None,
    task_types: Optional[Iterable[Any]] = None,
) -> ValidationReport:
    """
    Check a catalog for authoring mistakes.

    Errors: duplicate template IDs, templates without messages, non-positive
    weights. Warnings: tasks with fewer than MIN_EVENTS_PER_TASK templates or
    missing a severity, non-flavor templates without effects, effect ranges
    beyond EVENT_BALANCING.
    """
    source = list(EVENT_TEMPLATES if templates is None else templates)
    tasks = [task_key(t) for t in (task_types or TaskType)]
    report = ValidationReport()

    seen: set[str] = set()
    for template in source:
        if template.template_id in seen:
            report.errors.append(f'Duplicate template ID "{template.template_id}"')
        seen.add(template.template_id)

        if not template.messages:
            report.errors.append(f'Template "{template.template_id}" has no messages')
        if template.weight <= 0:
            report.errors.append(f'Template "{template.template_id}" has invalid weight: {template.weight}')
        if template.severity != EventSeverity.FLAVOR and not template.effects:
            report.warnings.append(f'Non-flavor template "{template.template_id}" has no effects')
        report.warnings.extend(_balancing_warnings(template))

    for task in tasks:
        collection = get_events_for_task(task, source)
        if collection.total < MIN_EVENTS_PER_TASK:
            report.warnings.append(
                f'Task "{task}" has only {collection.total} events (recommended: {MIN_EVENTS_PER_TASK}+)'
            )
        for severity, count in collection.by_severity.items():
            if count == 0:
                report.warnings.append(f'Task "{task}" has no {severity} events')

    for message in report.errors:
        logger.warning(f"Catalog error: {message}")
    return report


def format_collections_summary(
    collections: Optional[dict[str, TaskEventCollection]] = None,
) -> str:
    """Human-readable per-task summary, as printed by the CLI."""
    lines = ["=== Event Collections Summary ==="]
    for task_type, stats in get_event_collections_summary(collections).items():
        lines.append(f"{task_type.upper()}: {stats['total']} templates")
        lines.append(
            f"  Flavor: {stats['flavor']} | Info: {stats['info']} | "
            f"Warning: {stats['warning']} | Critical: {stats['critical']}"
        )
        lines.append(f"  Repeatable: {stats['repeatable']} | Non-repeatable: {stats['non_repeatable']}")
    return "\n".join(lines)
