"""
Unit tests for the template and event data structures.

Tests EffectRange, EventConditions, ConditionContext, EventTemplate and
GameEvent from event_pacing/data_models.py.
"""

import pytest

from event_pacing.data_models import (
    ConditionContext,
    EffectKind,
    EffectRange,
    EventCategory,
    EventConditions,
    EventSeverity,
    EventTemplate,
    GameEvent,
    TaskType,
    VisualCue,
    VisualCueType,
    snake_case,
    task_key,
)


def make_template(**overrides) -> EventTemplate:
    fields = {
        "template_id": "t1",
        "severity": EventSeverity.INFO,
        "category": EventCategory.LOOT,
        "messages": ("hello",),
    }
    fields.update(overrides)
    return EventTemplate(**fields)


class TestEffectRange:
    """Tests for EffectRange."""

    def test_reversed_bounds_are_swapped(self):
        """Test min/max are normalized."""
        effect_range = EffectRange(10, 2)
        assert effect_range.min == 2
        assert effect_range.max == 10

    def test_contains(self):
        """Test inclusive containment."""
        effect_range = EffectRange(-5, 5)
        assert effect_range.contains(-5)
        assert effect_range.contains(5)
        assert not effect_range.contains(6)

    def test_from_dict(self):
        """Test building from a {min, max} mapping."""
        assert EffectRange.from_value({"min": 1, "max": 3}) == EffectRange(1.0, 3.0)

    def test_from_pair_and_number(self):
        """Test building from a pair and a single number."""
        assert EffectRange.from_value((4, 8)) == EffectRange(4, 8)
        assert EffectRange.from_value(7) == EffectRange(7, 7)

    def test_from_invalid(self):
        """Test unreadable data raises ValueError."""
        with pytest.raises(ValueError):
            EffectRange.from_value({"min": 1})
        with pytest.raises(ValueError):
            EffectRange.from_value("lots")
        with pytest.raises(ValueError):
            EffectRange.from_value({"min": "a", "max": "b"})

    @pytest.mark.parametrize("bound", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_bounds_rejected(self, bound):
        """Test NaN and infinite bounds cannot make a range."""
        with pytest.raises(ValueError):
            EffectRange(1, bound)
        with pytest.raises(ValueError):
            EffectRange.from_value({"min": bound, "max": 5})

    def test_non_finite_strings_rejected(self):
        """Test "nan" and "inf" strings from data files are rejected."""
        with pytest.raises(ValueError):
            EffectRange.from_value({"min": 1, "max": "nan"})
        with pytest.raises(ValueError):
            EffectRange.from_value(["-inf", 3])


class TestEventTemplate:
    """Tests for EventTemplate."""

    def test_empty_applicable_tasks_means_all(self):
        """Test the apply-to-all convention."""
        template = make_template()
        assert template.applies_to_all_tasks
        for task in TaskType:
            assert template.is_applicable(task)
        assert template.is_applicable("some_future_task")

    def test_specific_tasks(self):
        """Test a task-restricted template."""
        template = make_template(applicable_tasks=frozenset({TaskType.RAID}))
        assert template.is_applicable("raid")
        assert template.is_applicable(TaskType.RAID)
        assert not template.is_applicable(TaskType.CRAFT)

    def test_task_types_normalized_to_strings(self):
        """Test enum members and strings are stored as plain strings."""
        template = make_template(applicable_tasks=[TaskType.HUNT, "rest"])
        assert template.applicable_tasks == frozenset({"hunt", "rest"})

    def test_string_enums_accepted(self):
        """Test severity/category given as strings."""
        template = make_template(severity="critical", category="hazard")
        assert template.severity is EventSeverity.CRITICAL
        assert template.category is EventCategory.HAZARD

    def test_effects_normalized(self):
        """Test effect keys and ranges from plain data."""
        template = make_template(effects={"gold_modifier": {"min": 1, "max": 2}})
        assert template.effects == {EffectKind.GOLD_MODIFIER: EffectRange(1, 2)}

    def test_conditions_and_cue_from_dicts(self):
        """Test nested records given as dicts."""
        template = make_template(
            conditions={"min_level": 3},
            visual_cue={"type": "star", "color": "#FFF"},
        )
        assert template.conditions == EventConditions(min_level=3)
        assert template.visual_cue == VisualCue(VisualCueType.STAR, color="#FFF")

    def test_selectable(self):
        """Test selectability requires messages and positive weight."""
        assert make_template().is_selectable
        assert not make_template(weight=0).is_selectable
        assert not make_template(messages=()).is_selectable
        assert not make_template(weight=float("nan")).is_selectable
        assert not make_template(weight=float("inf")).is_selectable

    def test_hashable(self):
        """Test templates can be placed in sets despite the effects dict."""
        a = make_template(effects={EffectKind.GOLD_MODIFIER: EffectRange(1, 2)})
        assert a in {a}

    def test_effects_read_only(self):
        """Test the effects of a frozen template cannot be changed in place."""
        template = make_template(effects={"gold_modifier": {"min": 1, "max": 2}})
        with pytest.raises(TypeError):
            template.effects[EffectKind.GOLD_MODIFIER] = EffectRange(100, 200)
        with pytest.raises(TypeError):
            template.effects[EffectKind.XP_MODIFIER] = EffectRange(1, 1)
        assert dict(template.effects) == {EffectKind.GOLD_MODIFIER: EffectRange(1, 2)}

    def test_unknown_severity_rejected(self):
        """Test construction validates the severity."""
        with pytest.raises(ValueError):
            make_template(severity="catastrophic")


class TestConditionContext:
    """Tests for ConditionContext."""

    def test_health_percent(self):
        """Test health percentage."""
        assert ConditionContext(current_health=25, max_health=50).health_percent == 50.0

    def test_health_percent_without_max(self):
        """Test health percentage is undefined for non-positive max health."""
        assert ConditionContext(current_health=10, max_health=0).health_percent is None


class TestEventConditions:
    """Tests for EventConditions."""

    def test_from_dict_ignores_unknown_keys(self):
        """Test unknown condition keys are dropped."""
        conditions = EventConditions.from_dict({"min_gold": 5, "moon_phase": "full"})
        assert conditions == EventConditions(min_gold=5)


class TestGameEvent:
    """Tests for GameEvent."""

    def test_acknowledge_and_serialize(self):
        """Test acknowledgement and to_dict."""
        event = GameEvent(
            event_id="event_1",
            template_id="t1",
            severity=EventSeverity.INFO,
            category=EventCategory.LOOT,
            timestamp=12.5,
            message="You find 5 gold.",
            effects={EffectKind.GOLD_MODIFIER: 5},
        )
        assert not event.acknowledged
        event.acknowledge()

        data = event.to_dict()
        assert data["acknowledged"] is True
        assert data["effects"] == {"gold_modifier": 5}
        assert data["severity"] == "info"
        assert data["visual_cue"] is None
        assert event.get_effect(EffectKind.GOLD_MODIFIER) == 5
        assert event.get_effect(EffectKind.XP_MODIFIER) == 0


class TestKeyHelpers:
    """Tests for key normalization helpers."""

    def test_task_key(self):
        """Test enum and string task types normalize alike."""
        assert task_key(TaskType.RAID) == "raid"
        assert task_key("raid") == "raid"

    def test_snake_case(self):
        """Test camelCase conversion."""
        assert snake_case("goldModifier") == "gold_modifier"
        assert snake_case("minHealthPercent") == "min_health_percent"
        assert snake_case("template_id") == "template_id"
