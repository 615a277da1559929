"""
Tests for effect magnitude rolls and message placeholder substitution.
"""

import pytest

from event_pacing.data_models import EffectKind, EffectRange
from event_pacing.events.effect_rolls import (
    integer_bounds,
    replace_placeholders,
    roll_effect,
    roll_effects,
    unresolved_placeholders,
)


class TestIntegerBounds:
    """Tests for integer_bounds."""

    @pytest.mark.parametrize(
        "low, high, expected",
        [
            (10, 20, (10, 20)),
            (-30, -20, (-30, -20)),
            (1.5, 4.2, (2, 4)),
            (-2.5, -0.5, (-2, -1)),
            (5, 5, (5, 5)),
        ],
    )
    def test_bounds(self, low, high, expected):
        """Test fractional bounds are pulled inward."""
        assert integer_bounds(EffectRange(low, high)) == expected

    def test_no_integer_inside(self):
        """Test a range without an integer collapses to its midpoint."""
        assert integer_bounds(EffectRange(0.2, 0.4)) == (0, 0)
        assert integer_bounds(EffectRange(0.6, 0.9)) == (1, 1)


class TestRollEffect:
    """Tests for roll_effect and roll_effects."""

    def test_stays_in_bounds(self, seeded_dice):
        """Test rolls never leave the inclusive range."""
        values = {roll_effect(EffectRange(-5, 5), seeded_dice) for _ in range(300)}
        assert min(values) == -5
        assert max(values) == 5

    def test_single_value_range_draws_nothing(self, seeded_dice):
        """Test a degenerate range returns its value without a draw."""
        assert roll_effect(EffectRange(1, 1), seeded_dice) == 1
        assert seeded_dice.get_roll_log() == []

    def test_roll_effects_per_kind(self, seeded_dice):
        """Test every declared kind is rolled independently."""
        effects = {
            EffectKind.GOLD_MODIFIER: EffectRange(10, 20),
            EffectKind.HEALTH_MODIFIER: EffectRange(-10, -5),
        }
        rolled = roll_effects(effects, seeded_dice, "test")
        assert set(rolled) == set(effects)
        assert 10 <= rolled[EffectKind.GOLD_MODIFIER] <= 20
        assert -10 <= rolled[EffectKind.HEALTH_MODIFIER] <= -5
        assert all(isinstance(v, int) for v in rolled.values())

    def test_rolls_labelled(self, seeded_dice):
        """Test draws carry the template id in the roll log."""
        roll_effects({EffectKind.XP_MODIFIER: EffectRange(1, 9)}, seeded_dice, "lucky_find")
        assert seeded_dice.get_roll_log()[0].reason == "lucky_find: xp_modifier"


class TestPlaceholders:
    """Tests for replace_placeholders."""

    def test_absolute_values(self):
        """Test signs come from the message, not the value."""
        message = replace_placeholders("Ouch! -{damage} HP", {EffectKind.HEALTH_MODIFIER: -12})
        assert message == "Ouch! -12 HP"

    def test_every_occurrence_replaced(self):
        """Test repeated tokens are all filled."""
        message = replace_placeholders("{gold} gold, yes {gold}!", {EffectKind.GOLD_MODIFIER: 7})
        assert message == "7 gold, yes 7!"

    def test_heal_token(self):
        """Test health effects fill the heal token too."""
        assert replace_placeholders("+{heal} HP", {EffectKind.HEALTH_MODIFIER: 8}) == "+8 HP"

    def test_unrolled_tokens_untouched(self):
        """Test tokens without a rolled effect stay in place."""
        message = replace_placeholders("{gold} and {xp}", {EffectKind.GOLD_MODIFIER: 3})
        assert message == "3 and {xp}"
        assert unresolved_placeholders(message) == ["{xp}"]

    def test_unknown_braces_ignored(self):
        """Test braces that are not known tokens are left alone."""
        assert unresolved_placeholders("A {mystery} remains") == []
