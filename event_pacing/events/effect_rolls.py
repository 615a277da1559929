"""
Effect magnitude rolls and message placeholder substitution.

A template declares effect ranges; instantiating it rolls each declared range
independently (uniform, inclusive, integer) and writes the absolute value of
each roll into the matching placeholder tokens of the chosen message.
"""

import math
from typing import Mapping, Optional

from event_pacing.data_models import DiceRoller, EffectKind, EffectRange


# Placeholder tokens filled from each effect kind. Messages carry the sign in
# their own wording ("-{damage} HP", "+{heal} HP"), so the magnitude is absolute.
PLACEHOLDER_TOKENS: dict[EffectKind, tuple[str, ...]] = {
    EffectKind.SUCCESS_CHANCE_MODIFIER: ("{success}",),
    EffectKind.GOLD_MODIFIER: ("{gold}",),
    EffectKind.HEALTH_MODIFIER: ("{damage}", "{heal}"),
    EffectKind.MATERIALS_MODIFIER: ("{materials}",),
    EffectKind.DURABILITY_DAMAGE: ("{durability}",),
    EffectKind.EXTRA_CHESTS: ("{chests}",),
    EffectKind.LOOT_QUALITY_MODIFIER: ("{loot}",),
    EffectKind.XP_MODIFIER: ("{xp}",),
}


def integer_bounds(effect_range: EffectRange) -> tuple[int, int]:
    """
    Integer bounds a range is rolled between.

    Fractional bounds are pulled inward; a range with no integer inside it
    (e.g. 0.2-0.8) collapses to its rounded midpoint.
    """
    low = math.ceil(effect_range.min)
    high = math.floor(effect_range.max)
    if low > high:
        midpoint = round((effect_range.min + effect_range.max) / 2)
        return midpoint, midpoint
    return low, high


def roll_effect(effect_range: EffectRange, dice: DiceRoller, reason: str = "") -> int:
    """Roll a single effect magnitude, uniform over the inclusive integer range."""
    low, high = integer_bounds(effect_range)
    if low == high:
        return low
    return dice.randint(low, high, reason)


def roll_effects(
    effects: Mapping[EffectKind, EffectRange],
    dice: DiceRoller,
    template_id: Optional[str] = None,
) -> dict[EffectKind, int]:
    """
    Roll every declared effect range of a template.

    Args:
        effects: Sparse mapping of effect kind to range
        dice: Source of randomness
        template_id: Used only to label draws in the roll log

    Returns:
        Mapping of the same kinds to rolled integer values
    """
    label = template_id or "template"
    return {
        kind: roll_effect(effect_range, dice, f"{label}: {kind.value}")
        for kind, effect_range in effects.items()
    }


def replace_placeholders(message: str, effects: dict[EffectKind, int]) -> str:
    """
    Substitute rolled effect values into a message.

    Every occurrence of a token is replaced. Tokens whose effect kind was not
    rolled are left untouched.
    """
    result = message
    for kind, value in effects.items():
        for token in PLACEHOLDER_TOKENS.get(kind, ()):
            result = result.replace(token, str(abs(value)))
    return result


def unresolved_placeholders(message: str) -> list[str]:
    """Known tokens still present in a message after substitution."""
    return [
        token
        for tokens in PLACEHOLDER_TOKENS.values()
        for token in tokens
        if token in message
    ]
