"""Weekly calorie redistribution.

Moving calories onto one day takes them from the other adjustable days of
the week (and vice versa) so that the weekly total stays constant.

The opposing change is spread proportionally to each adjustable day's
current calories. When taking calories away, a day may not drop below
MIN_DAILY_CALORIES, so the allocation is done by water-filling:

    1. Split the remaining amount proportionally across active days
    2. Any day that would cross the floor is pinned at the floor and
       leaves the active set; its headroom is subtracted from the amount
    3. Repeat until no active day crosses the floor

Fractional allocations are converted to whole calories with the
largest-remainder method, so the weekly sum is conserved exactly.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

import numpy as np

from calbudget.budget.macros import recalculate_macros, round_half_up
from calbudget.budget.models import (
    DAYS_IN_WEEK,
    MIN_DAILY_CALORIES,
    DayBudget,
    InvalidBudgetError,
)

logger = logging.getLogger(__name__)

# Slack for float comparisons against the floor
_EPSILON = 1e-9


def _check_week(days: list[DayBudget], index: Optional[int] = None) -> None:
    if len(days) != DAYS_IN_WEEK:
        raise InvalidBudgetError(f"Expected {DAYS_IN_WEEK} days, got {len(days)}")
    if index is not None and not 0 <= index < DAYS_IN_WEEK:
        raise InvalidBudgetError(f"Day index must be 0-6, got {index}")


def _proportional_targets(
    current: np.ndarray, amount: float, floor: float
) -> Optional[np.ndarray]:
    """
    Spread a signed amount across days proportionally to their calories.

    Args:
        current: Current calories of the adjustable days
        amount: Calories to add (positive) or remove (negative) in total
        floor: Lowest value a day may be reduced to

    Returns:
        Fractional targets summing to current.sum() + amount, or None if
        the days lack the headroom to give up that much
    """
    current = current.astype(float)

    if amount >= 0:
        weights = current if current.sum() > 0 else np.ones_like(current)
        return current + amount * weights / weights.sum()

    headroom = np.maximum(current - floor, 0.0)
    remaining = -amount
    if remaining > headroom.sum() + _EPSILON:
        return None

    targets = current.copy()
    active = headroom > 0
    while active.any() and remaining > _EPSILON:
        weights = current[active]
        proposed = current[active] - remaining * weights / weights.sum()
        crossing = proposed < floor - _EPSILON
        if not crossing.any():
            targets[active] = np.maximum(proposed, floor)
            remaining = 0.0
            break

        # Pin crossing days at the floor and re-spread the rest
        pinned = np.flatnonzero(active)[crossing]
        targets[pinned] = floor
        remaining -= headroom[pinned].sum()
        active[pinned] = False

    return targets


def _to_whole_calories(targets: np.ndarray, total: int) -> np.ndarray:
    """Round fractional targets down, then hand out the leftover calories
    one at a time to the largest fractional parts."""
    base = np.floor(targets)
    leftover = int(round(total - base.sum()))
    if leftover > 0:
        order = np.argsort(-(targets - base), kind="stable")
        base[order[:leftover]] += 1
    return base.astype(int)


def _with_calories(
    day: DayBudget, calories: int, protein_floor: int
) -> DayBudget:
    macros = recalculate_macros(calories, day, protein_floor)
    return replace(
        day,
        calories=calories,
        protein=macros.protein,
        carbs=macros.carbs,
        fat=macros.fat,
    )


def redistribute_calories(
    days: list[DayBudget],
    changed_index: int,
    new_calories: int,
    protein_floor: int,
) -> Optional[list[DayBudget]]:
    """
    Set one day's calories and rebalance the rest of the week around it.

    The weekly total is preserved. Locked and past days are left alone,
    no adjusted day drops below MIN_DAILY_CALORIES, and macros are
    recalculated for every day whose calories moved.

    Args:
        days: The current seven-day plan (not modified)
        changed_index: Index (0-6) of the day being edited
        new_calories: New calorie target for that day
        protein_floor: Minimum protein grams for recalculated days

    Returns:
        A new seven-day plan, or None if the change cannot be absorbed
        (no adjustable days, insufficient headroom above the floor, or a
        target below the floor)

    Raises:
        InvalidBudgetError: If the week is not seven days, the index is
            out of range, or new_calories / protein_floor is negative
    """
    _check_week(days, changed_index)
    if new_calories < 0:
        raise InvalidBudgetError(f"new_calories must be non-negative, got {new_calories}")
    if protein_floor < 0:
        raise InvalidBudgetError(f"protein_floor must be non-negative, got {protein_floor}")

    delta = new_calories - days[changed_index].calories
    if delta == 0:
        return [replace(day) for day in days]

    if new_calories < MIN_DAILY_CALORIES:
        logger.debug(
            "Rejected %d kcal for day %d: below %d kcal floor",
            new_calories,
            changed_index,
            MIN_DAILY_CALORIES,
        )
        return None

    adjustable = [
        i for i, day in enumerate(days) if i != changed_index and day.adjustable
    ]
    if not adjustable:
        logger.debug("No adjustable days to absorb %+d kcal", delta)
        return None

    current = np.array([days[i].calories for i in adjustable])
    targets = _proportional_targets(current, -delta, MIN_DAILY_CALORIES)
    if targets is None:
        logger.debug(
            "Insufficient headroom to absorb %+d kcal across %d days",
            delta,
            len(adjustable),
        )
        return None

    new_values = _to_whole_calories(targets, int(current.sum()) - delta)

    result = [replace(day) for day in days]
    result[changed_index] = _with_calories(
        days[changed_index], new_calories, protein_floor
    )
    for i, calories in zip(adjustable, new_values):
        if calories != days[i].calories:
            result[i] = _with_calories(days[i], int(calories), protein_floor)

    return result


def toggle_day_lock(days: list[DayBudget], index: int) -> list[DayBudget]:
    """Return a copy of the week with one day's lock flipped."""
    _check_week(days, index)
    return [
        replace(day, locked=not day.locked) if i == index else replace(day)
        for i, day in enumerate(days)
    ]


def reset_to_equal(
    days: list[DayBudget], protein_floor: Optional[int] = None
) -> list[DayBudget]:
    """
    Spread the weekly total evenly and unlock every day.

    Each day gets round(weekly_total / 7). When protein_floor is given,
    macros are recalculated for days whose calories changed; otherwise
    the existing macros are kept.

    Args:
        days: The current seven-day plan (not modified)
        protein_floor: Minimum protein grams, or None to keep macros as-is

    Returns:
        A new, fully unlocked seven-day plan
    """
    _check_week(days)
    average = round_half_up(sum(day.calories for day in days) / DAYS_IN_WEEK)

    result = []
    for day in days:
        if protein_floor is not None and day.calories != average:
            day = _with_calories(day, average, protein_floor)
        result.append(replace(day, calories=average, locked=False))
    return result
