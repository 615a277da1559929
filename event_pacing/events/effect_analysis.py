"""
Pure analysis of rolled event effects.

The engine never applies effects itself; these helpers let the host (and the
session statistics) classify and score what an event would do.
"""

from typing import Union

from event_pacing.data_models import EffectKind, GameEvent


EffectValues = dict[EffectKind, int]

# Points per unit of each effect; durability damage counts against the player
IMPACT_WEIGHTS: dict[EffectKind, float] = {
    EffectKind.GOLD_MODIFIER: 0.5,
    EffectKind.HEALTH_MODIFIER: 2.0,
    EffectKind.MATERIALS_MODIFIER: 1.0,
    EffectKind.SUCCESS_CHANCE_MODIFIER: 3.0,
    EffectKind.DURABILITY_DAMAGE: -1.0,
    EffectKind.EXTRA_CHESTS: 50.0,
    EffectKind.XP_MODIFIER: 0.5,
    EffectKind.LOOT_QUALITY_MODIFIER: 10.0,
}

MAX_IMPACT_SCORE = 100.0

_HARMFUL_WHEN_NEGATIVE = (
    EffectKind.GOLD_MODIFIER,
    EffectKind.HEALTH_MODIFIER,
    EffectKind.MATERIALS_MODIFIER,
    EffectKind.SUCCESS_CHANCE_MODIFIER,
)

_BENEFICIAL_WHEN_POSITIVE = (
    EffectKind.GOLD_MODIFIER,
    EffectKind.HEALTH_MODIFIER,
    EffectKind.MATERIALS_MODIFIER,
    EffectKind.SUCCESS_CHANCE_MODIFIER,
    EffectKind.EXTRA_CHESTS,
    EffectKind.XP_MODIFIER,
    EffectKind.LOOT_QUALITY_MODIFIER,
)

_SUMMARY_LABELS: dict[EffectKind, str] = {
    EffectKind.GOLD_MODIFIER: "Gold",
    EffectKind.HEALTH_MODIFIER: "HP",
    EffectKind.MATERIALS_MODIFIER: "Materials",
    EffectKind.SUCCESS_CHANCE_MODIFIER: "Success chance",
    EffectKind.XP_MODIFIER: "XP",
    EffectKind.LOOT_QUALITY_MODIFIER: "Loot quality",
}


def _values(effects: Union[GameEvent, EffectValues]) -> EffectValues:
    if isinstance(effects, GameEvent):
        return effects.effects
    return effects


def is_harmful(effects: Union[GameEvent, EffectValues]) -> bool:
    """True if any effect costs the player something."""
    values = _values(effects)
    if any(values.get(kind, 0) < 0 for kind in _HARMFUL_WHEN_NEGATIVE):
        return True
    return values.get(EffectKind.DURABILITY_DAMAGE, 0) > 0


def is_beneficial(effects: Union[GameEvent, EffectValues]) -> bool:
    """True if any effect gives the player something."""
    values = _values(effects)
    return any(values.get(kind, 0) > 0 for kind in _BENEFICIAL_WHEN_POSITIVE)


def get_impact_score(effects: Union[GameEvent, EffectValues]) -> float:
    """Net impact of the effects, clamped to [-100, 100]."""
    values = _values(effects)
    score = sum(values.get(kind, 0) * weight for kind, weight in IMPACT_WEIGHTS.items())
    return max(-MAX_IMPACT_SCORE, min(MAX_IMPACT_SCORE, score))


def summarize_effects(effects: Union[GameEvent, EffectValues]) -> str:
    """
    One-line description of the effects, e.g. "Gold +25, HP -10".

    Returns "No effects" when nothing was rolled.
    """
    values = _values(effects)
    parts = []
    for kind, value in values.items():
        if kind == EffectKind.DURABILITY_DAMAGE:
            parts.append(f"Durability -{abs(value)}")
        elif kind == EffectKind.EXTRA_CHESTS:
            parts.append(f"+{value} chest{'s' if value != 1 else ''}")
        elif kind == EffectKind.SUCCESS_CHANCE_MODIFIER:
            parts.append(f"{_SUMMARY_LABELS[kind]} {value:+d}%")
        else:
            parts.append(f"{_SUMMARY_LABELS[kind]} {value:+d}")
    return ", ".join(parts) if parts else "No effects"
