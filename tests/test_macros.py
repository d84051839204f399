"""Tests for macro recalculation."""

from __future__ import annotations

from calbudget.budget.macros import macro_calories, recalculate_macros, round_half_up


class TestRoundHalfUp:
    """Tests for round_half_up."""

    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(286.5) == 287

    def test_negative_halves_round_toward_positive(self):
        assert round_half_up(-2.5) == -2
        assert round_half_up(-2.6) == -3

    def test_ordinary_values(self):
        assert round_half_up(66.67) == 67
        assert round_half_up(0.0) == 0


class TestRecalculateMacros:
    """Tests for recalculate_macros."""

    def test_keeps_protein_above_floor(self, make_day):
        day = make_day(protein=130)
        assert recalculate_macros(2200, day, 120).protein == 130

    def test_raises_protein_to_floor(self, make_day):
        day = make_day(protein=100)
        assert recalculate_macros(2200, day, 120).protein == 120

    def test_default_fat_share_when_no_calories(self, make_day):
        """fat_cal = max(round(2000 * 0.3), round(2000 * 0.15)) = 600."""
        day = make_day(calories=0, fat=0)
        result = recalculate_macros(2000, day, 120)
        assert result.fat == round_half_up(600 / 9)

    def test_enforces_minimum_fat(self, make_day):
        day = make_day(calories=2000, fat=5)  # ~2% of calories from fat
        result = recalculate_macros(2000, day, 120)
        assert result.fat >= round_half_up(round_half_up(2000 * 0.15) / 9)

    def test_keeps_original_fat_share(self, make_day):
        day = make_day(calories=2000, fat=67)
        result = recalculate_macros(2500, day, 120)
        # 67 * 9 / 2000 = 30.15% -> 754 kcal -> 84 g
        assert result.fat == 84

    def test_carbs_are_remainder(self, make_day):
        day = make_day(calories=2000, protein=150, fat=67)
        result = recalculate_macros(2000, day, 120)

        fat_cal = max(round_half_up(2000 * (67 * 9 / 2000)), round_half_up(300))
        expected = round_half_up(max(0, 2000 - result.protein * 4 - fat_cal) / 4)
        assert result.carbs == expected

    def test_worked_example(self, make_day):
        day = make_day()
        result = recalculate_macros(2500, day, 120)
        assert (result.protein, result.carbs, result.fat) == (150, 287, 84)

    def test_no_negative_carbs(self, make_day):
        day = make_day(calories=2000, protein=200, fat=100)
        result = recalculate_macros(800, day, 200)
        assert result.carbs == 0
        assert result.protein == 200

    def test_macros_match_calories(self, make_day):
        day = make_day()
        for calories in (1200, 1750, 2333, 3100):
            result = recalculate_macros(calories, day, 120)
            total = macro_calories(result.protein, result.carbs, result.fat)
            assert abs(total - calories) <= 10


class TestMacroCalories:
    """Tests for macro_calories."""

    def test_atwater_factors(self):
        assert macro_calories(150, 200, 67) == 600 + 800 + 603

    def test_zero(self):
        assert macro_calories(0, 0, 0) == 0
