"""
Tests for the built-in event template catalog.
"""

import pytest

from event_pacing.data_models import EventSeverity, TaskType
from event_pacing.events.effect_rolls import replace_placeholders, unresolved_placeholders
from event_pacing.tables.event_tables import (
    EVENT_TEMPLATES,
    get_event_statistics,
    get_event_template,
)


class TestCatalog:
    """Tests for EVENT_TEMPLATES."""

    def test_size_and_unique_ids(self):
        """Test the catalog has 53 uniquely named templates."""
        ids = [t.template_id for t in EVENT_TEMPLATES]
        assert len(ids) == 53
        assert len(set(ids)) == 53

    def test_severity_counts(self):
        """Test the severity mix."""
        stats = get_event_statistics()
        assert stats["total"] == 53
        assert stats["by_severity"] == {"flavor": 8, "info": 19, "warning": 16, "critical": 10}
        assert stats["non_repeatable"] == 9
        assert stats["repeatable"] == 44

    def test_all_selectable(self):
        """Test every built-in template can be drawn."""
        assert all(t.is_selectable for t in EVENT_TEMPLATES)

    def test_only_known_task_types(self):
        """Test task-specific templates name built-in task types."""
        known = {t.value for t in TaskType}
        for template in EVENT_TEMPLATES:
            assert template.applicable_tasks <= known

    @pytest.mark.parametrize("template", EVENT_TEMPLATES, ids=lambda t: t.template_id)
    def test_messages_resolve(self, template):
        """Test every placeholder in every message has a matching effect."""
        rolled = {kind: 1 for kind in template.effects}
        for message in template.messages:
            assert unresolved_placeholders(replace_placeholders(message, rolled)) == []

    def test_critical_templates_carry_effects(self):
        """Test critical events always do something."""
        for template in EVENT_TEMPLATES:
            if template.severity == EventSeverity.CRITICAL:
                assert template.effects, template.template_id


class TestLookup:
    """Tests for get_event_template."""

    def test_found(self):
        """Test lookup of a known template."""
        template = get_event_template("crit_boss_encounter")
        assert template is not None
        assert template.severity == EventSeverity.CRITICAL
        assert not template.repeatable

    def test_missing(self):
        """Test lookup of an unknown template."""
        assert get_event_template("does_not_exist") is None

    def test_statistics_for_custom_list(self, sample_templates):
        """Test statistics over a caller-supplied list."""
        stats = get_event_statistics(sample_templates)
        assert stats["total"] == 5
        assert stats["by_category"]["health"] == 2
