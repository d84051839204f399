"""Macro split recalculation for redistributed days.

When a day's calorie target moves, its macros are re-derived from the
day's original split:

    protein = max(original protein, protein floor)
    fat     = original fat share of calories, never below 15%
    carbs   = whatever calories remain (never negative)

Protein is held fixed in grams rather than scaled, so raising or lowering
a day only moves fat and carbohydrate.
"""

from __future__ import annotations

import math

from calbudget.budget.models import (
    CARBS_KCAL_PER_G,
    DEFAULT_FAT_PCT,
    FAT_KCAL_PER_G,
    MIN_FAT_PCT,
    PROTEIN_KCAL_PER_G,
    DayBudget,
    MacroSplit,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity.

    Python's built-in round() uses banker's rounding (round(2.5) == 2),
    which would shift macro grams and deviation percentages by one at
    exact halves.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return int(math.floor(value + 0.5))


def macro_calories(protein: float, carbs: float, fat: float) -> int:
    """Return calories implied by macro grams using Atwater factors."""
    return round_half_up(
        protein * PROTEIN_KCAL_PER_G + carbs * CARBS_KCAL_PER_G + fat * FAT_KCAL_PER_G
    )


def recalculate_macros(
    new_calories: int,
    original_day: DayBudget,
    protein_floor: int,
) -> MacroSplit:
    """
    Derive a macro split for a new calorie target.

    Args:
        new_calories: Calorie target the macros must add up to
        original_day: Day before redistribution; its protein and fat share
                      are the basis for the new split
        protein_floor: Minimum protein grams

    Returns:
        MacroSplit with protein, carbs and fat in grams

    Example:
        >>> day = DayBudget(date(2025, 6, 15), 0, "Sun", 2000, 150, 200, 67)
        >>> recalculate_macros(2500, day, 120)
        MacroSplit(protein=150, carbs=287, fat=84)
    """
    protein = max(original_day.protein, protein_floor)

    if original_day.calories == 0:
        fat_pct = DEFAULT_FAT_PCT
    else:
        fat_pct = original_day.fat * FAT_KCAL_PER_G / original_day.calories

    fat_calories = max(
        round_half_up(new_calories * fat_pct),
        round_half_up(new_calories * MIN_FAT_PCT),
    )
    fat = round_half_up(fat_calories / FAT_KCAL_PER_G)

    # Carbs absorb the remainder; a high protein floor can push this to zero
    carb_calories = max(0, new_calories - protein * PROTEIN_KCAL_PER_G - fat_calories)
    carbs = round_half_up(carb_calories / CARBS_KCAL_PER_G)

    return MacroSplit(protein=protein, carbs=carbs, fat=fat)
