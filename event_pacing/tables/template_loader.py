"""
Build event templates from plain data (dicts or JSON files).

Keys may be snake_case or camelCase ("templateId", "goldModifier",
"minHealthPercent"), so catalogs authored for other front ends load as-is.
Records that cannot be built are skipped with a warning; one bad record
never prevents the rest of a catalog from loading.
"""

from pathlib import Path
from typing import Any, Iterable, Optional, Union
import json
import logging

from event_pacing.data_models import (
    EffectKind,
    EffectRange,
    EventConditions,
    EventTemplate,
    VisualCue,
    snake_case,
)


logger = logging.getLogger(__name__)


_KNOWN_EFFECTS = {kind.value for kind in EffectKind}


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {snake_case(str(key)): value for key, value in data.items()}


def _parse_effects(template_id: str, data: dict[str, Any], problems: list[str]) -> dict[EffectKind, EffectRange]:
    effects = {}
    for key, value in _normalize_keys(data).items():
        if key not in _KNOWN_EFFECTS:
            problems.append(f'Template "{template_id}": unknown effect "{key}" dropped')
            continue
        effects[EffectKind(key)] = EffectRange.from_value(value)
    return effects


def _parse_visual_cue(data: Optional[dict[str, Any]]) -> Optional[VisualCue]:
    if not data:
        return None
    position = data.get("position")
    if isinstance(position, dict):
        position = (position["x"], position["y"])
    elif position is not None:
        position = tuple(position)
    return VisualCue(
        type=data["type"],
        color=data.get("color"),
        duration=data.get("duration"),
        position=position,
    )


def template_from_dict(data: dict[str, Any], problems: Optional[list[str]] = None) -> EventTemplate:
    """
    Build one template from a mapping.

    Args:
        data: Template record
        problems: Optional list collecting non-fatal issues (dropped keys)

    Raises:
        ValueError: If a required field is missing or a value is invalid
    """
    problems = problems if problems is not None else []
    record = _normalize_keys(data)

    template_id = record.get("template_id", record.get("id"))
    if not template_id:
        raise ValueError("Template record has no template_id")
    for required in ("severity", "category"):
        if required not in record:
            raise ValueError(f'Template "{template_id}" has no {required}')

    messages = record.get("messages", [])
    if isinstance(messages, str):
        messages = [messages]

    conditions = record.get("conditions")
    if isinstance(conditions, dict):
        conditions = EventConditions.from_dict(_normalize_keys(conditions))

    try:
        return EventTemplate(
            template_id=str(template_id),
            severity=record["severity"],
            category=record["category"],
            messages=tuple(messages),
            effects=_parse_effects(str(template_id), record.get("effects") or {}, problems),
            weight=float(record.get("weight", 1.0)),
            applicable_tasks=frozenset(record.get("applicable_tasks") or ()),
            repeatable=bool(record.get("repeatable", True)),
            conditions=conditions,
            visual_cue=_parse_visual_cue(record.get("visual_cue")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f'Template "{template_id}" is invalid: {e}') from e


def load_templates(records: Iterable[dict[str, Any]]) -> tuple[list[EventTemplate], list[str]]:
    """
    Build templates from many records, skipping the ones that fail.

    Returns:
        (templates in record order, problems found while loading)
    """
    templates: list[EventTemplate] = []
    problems: list[str] = []

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            problems.append(f"Record {index} is not an object, skipped")
            continue
        try:
            templates.append(template_from_dict(record, problems))
        except ValueError as e:
            problems.append(f"Record {index} skipped: {e}")

    for problem in problems:
        logger.warning(problem)
    return templates, problems


def load_templates_from_json(file_path: Union[str, Path]) -> tuple[list[EventTemplate], list[str]]:
    """
    Load templates from a JSON file.

    The file holds either a list of template records or an object with a
    "templates" list.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    records = data.get("templates", [data]) if isinstance(data, dict) else data
    templates, problems = load_templates(records)
    logger.info(f"Loaded {len(templates)} event templates from {file_path}")
    return templates, problems
