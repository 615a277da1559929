"""
Event Bank: the indexed, read-only catalog of event templates.

Provides lookup by identity, severity, category and task type, computes the
eligible pool for a poll (task applicability, non-repeat exclusion, condition
predicates, severity preference) and performs the weighted random draw.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional
import logging

from event_pacing.data_models import (
    ConditionContext,
    DiceRoller,
    EventCategory,
    EventConditions,
    EventSeverity,
    EventTemplate,
    TaskType,
    get_dice_roller,
    task_key,
)
from event_pacing.observability.run_log import RunLog, get_run_log


logger = logging.getLogger(__name__)


@dataclass
class SelectionCriteria:
    """
    Everything the catalog needs to build the eligible pool for one poll.

    exclude_template_ids only removes non-repeatable templates; a repeatable
    template listed there stays eligible.
    """
    task_type: str
    condition_context: ConditionContext = field(default_factory=ConditionContext)
    exclude_template_ids: frozenset[str] = field(default_factory=frozenset)
    preferred_severity: Optional[EventSeverity] = None

    def __post_init__(self):
        self.task_type = task_key(self.task_type)
        self.exclude_template_ids = frozenset(self.exclude_template_ids)
        if self.preferred_severity is not None:
            self.preferred_severity = EventSeverity(self.preferred_severity)


def evaluate_conditions(
    conditions: Optional[EventConditions],
    context: ConditionContext,
) -> bool:
    """
    Check a template's conditions against a poll context.

    Absent conditions always hold. Any error raised while evaluating (bad value
    types, a failing custom predicate) counts as "not satisfied".
    """
    if conditions is None:
        return True
    try:
        return _conditions_hold(conditions, context)
    except Exception as e:
        logger.warning(f"Condition evaluation failed, treating as unsatisfied: {e}")
        return False


def _conditions_hold(c: EventConditions, context: ConditionContext) -> bool:
    # Level
    if c.min_level is not None and context.character_level < c.min_level:
        return False
    if c.max_level is not None and context.character_level > c.max_level:
        return False

    # Health percentage; a context without positive max health cannot satisfy it
    if c.min_health_percent is not None or c.max_health_percent is not None:
        health_percent = context.health_percent
        if health_percent is None:
            return False
        if c.min_health_percent is not None and health_percent < c.min_health_percent:
            return False
        if c.max_health_percent is not None and health_percent > c.max_health_percent:
            return False

    # Injury
    if c.requires_injury and not context.is_injured:
        return False
    if c.requires_not_injured and context.is_injured:
        return False

    # Gold
    if c.min_gold is not None and context.gold < c.min_gold:
        return False

    # Equipment
    if c.requires_weapon and not context.has_weapon:
        return False
    if c.requires_armor and not context.has_armor:
        return False

    # Task pacing
    if c.min_task_progress is not None and context.task_progress < c.min_task_progress:
        return False
    if c.max_event_count is not None and context.event_count > c.max_event_count:
        return False

    if c.custom_condition is not None and not c.custom_condition(context):
        return False

    return True


class EventBank:
    """
    Immutable catalog of event templates with prebuilt indices.

    All indexing happens at construction. A template with an empty
    applicable_tasks set is placed in every task-type bucket, and is also
    returned for task types the catalog has never heard of.

    Usage:
        bank = EventBank(EVENT_TEMPLATES, dice=DiceRoller(seed=42))
        criteria = SelectionCriteria(task_type="raid", condition_context=context)
        template = bank.select_random_template(criteria)
    """

    def __init__(
        self,
        templates: Iterable[EventTemplate],
        dice: Optional[DiceRoller] = None,
        run_log: Optional[RunLog] = None,
        task_types: Optional[Iterable[str]] = None,
    ):
        """
        Build the catalog.

        Args:
            templates: Templates in catalog order (ties in selection follow it)
            dice: Source of randomness for selection. Defaults to the shared roller.
            run_log: RunLog receiving selection records. Defaults to the global log.
            task_types: Task types to pre-build buckets for, in addition to
                the built-in TaskType values and any type a template names
        """
        self._dice = dice
        self._run_log = run_log

        # Templates indexed by ID, first definition wins
        self._by_id: dict[str, EventTemplate] = {}
        ordered: list[EventTemplate] = []
        for template in templates:
            if template.template_id in self._by_id:
                logger.warning(f"Duplicate template id '{template.template_id}' ignored")
                continue
            self._by_id[template.template_id] = template
            ordered.append(template)
        self._templates: tuple[EventTemplate, ...] = tuple(ordered)

        self._by_severity: dict[EventSeverity, list[EventTemplate]] = {sev: [] for sev in EventSeverity}
        self._by_category: dict[EventCategory, list[EventTemplate]] = {cat: [] for cat in EventCategory}

        # Task-type buckets: built-in types, caller-supplied types, then every type a template names
        known_tasks: list[str] = [t.value for t in TaskType]
        for extra in task_types or ():
            if task_key(extra) not in known_tasks:
                known_tasks.append(task_key(extra))
        for template in self._templates:
            for task in sorted(template.applicable_tasks):
                if task not in known_tasks:
                    known_tasks.append(task)

        self._universal: list[EventTemplate] = []
        self._by_task_type: dict[str, list[EventTemplate]] = {task: [] for task in known_tasks}

        for template in self._templates:
            self._by_severity[template.severity].append(template)
            self._by_category[template.category].append(template)
            if template.applies_to_all_tasks:
                self._universal.append(template)
                for bucket in self._by_task_type.values():
                    bucket.append(template)
            else:
                for task in template.applicable_tasks:
                    self._by_task_type[task].append(template)

        logger.debug(
            f"EventBank built: {len(self._templates)} templates, "
            f"{len(self._by_task_type)} task types"
        )

    @property
    def dice(self) -> DiceRoller:
        return self._dice if self._dice is not None else get_dice_roller()

    @property
    def run_log(self) -> RunLog:
        return self._run_log if self._run_log is not None else get_run_log()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_all_templates(self) -> list[EventTemplate]:
        """All templates in catalog order."""
        return list(self._templates)

    def get_by_severity(self, severity: Any) -> list[EventTemplate]:
        try:
            return list(self._by_severity[EventSeverity(severity)])
        except ValueError:
            return []

    def get_by_category(self, category: Any) -> list[EventTemplate]:
        try:
            return list(self._by_category[EventCategory(category)])
        except ValueError:
            return []

    def get_by_task_type(self, task_type: Any) -> list[EventTemplate]:
        """Templates applicable to a task type, including the apply-to-all ones."""
        bucket = self._by_task_type.get(task_key(task_type))
        if bucket is None:
            return list(self._universal)
        return list(bucket)

    def get_task_types(self) -> list[str]:
        """Task types with a prebuilt bucket."""
        return list(self._by_task_type)

    def get_template_by_id(self, template_id: str) -> Optional[EventTemplate]:
        """Look up a template by ID; None if absent."""
        return self._by_id.get(template_id)

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._by_id

    # -------------------------------------------------------------------------
    # Eligibility and selection
    # -------------------------------------------------------------------------

    def get_eligible_templates(self, criteria: SelectionCriteria) -> list[EventTemplate]:
        """
        Compute the eligible pool for a poll.

        A template is eligible when it applies to the task type, is selectable
        (has messages and a positive weight), is not a non-repeatable template
        listed in exclude_template_ids, and its conditions hold. If a preferred
        severity is set and the pool contains templates of that severity, only
        those are returned; otherwise the whole pool is.

        Returns:
            Eligible templates in catalog order
        """
        eligible = [
            template
            for template in self.get_by_task_type(criteria.task_type)
            if template.is_selectable
            and not self._is_excluded(template, criteria.exclude_template_ids)
            and evaluate_conditions(template.conditions, criteria.condition_context)
        ]

        if criteria.preferred_severity is not None:
            preferred = [t for t in eligible if t.severity == criteria.preferred_severity]
            if preferred:
                eligible = preferred

        return eligible

    @staticmethod
    def _is_excluded(template: EventTemplate, exclude_ids: frozenset[str]) -> bool:
        return not template.repeatable and template.template_id in exclude_ids

    def select_random_template(self, criteria: SelectionCriteria) -> Optional[EventTemplate]:
        """
        Weighted random draw from the eligible pool.

        Draws a cursor uniformly in [0, total_weight) and walks the pool in
        catalog order, subtracting each weight until the cursor falls inside a
        template's band.

        Returns:
            The selected template, or None when the pool is empty
        """
        eligible = self.get_eligible_templates(criteria)
        total_weight = sum(t.weight for t in eligible)
        preferred = criteria.preferred_severity.value if criteria.preferred_severity else None

        if not eligible or total_weight <= 0:
            self.run_log.log_selection(
                task_type=criteria.task_type,
                pool_size=len(eligible),
                total_weight=total_weight,
                selected_template_id=None,
                preferred_severity=preferred,
            )
            return None

        cursor = self.dice.random(f"template selection: {criteria.task_type}") * total_weight
        selected = eligible[-1]  # float rounding can leave the cursor past the last band
        for template in eligible:
            if cursor < template.weight:
                selected = template
                break
            cursor -= template.weight

        self.run_log.log_selection(
            task_type=criteria.task_type,
            pool_size=len(eligible),
            total_weight=total_weight,
            selected_template_id=selected.template_id,
            preferred_severity=preferred,
        )
        return selected

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_statistics(self) -> dict[str, Any]:
        """Aggregate counts over the catalog."""
        return {
            "total_templates": len(self._templates),
            "by_severity": {sev.value: len(items) for sev, items in self._by_severity.items()},
            "by_category": {cat.value: len(items) for cat, items in self._by_category.items()},
            "by_task_type": {task: len(items) for task, items in self._by_task_type.items()},
            "repeatable": sum(1 for t in self._templates if t.repeatable),
            "non_repeatable": sum(1 for t in self._templates if not t.repeatable),
        }
