"""
Event template data for the pacing engine.

This module provides:
- The built-in template catalog
- Per-task collections and catalog validation
- Loading templates from dict/JSON data
"""

from event_pacing.tables.event_tables import (
    EVENT_TEMPLATES,
    get_event_template,
    get_event_statistics,
)
from event_pacing.tables.template_loader import (
    template_from_dict,
    load_templates,
    load_templates_from_json,
)

__all__ = [
    "EVENT_TEMPLATES",
    "get_event_template",
    "get_event_statistics",
    "template_from_dict",
    "load_templates",
    "load_templates_from_json",
]
