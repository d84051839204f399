"""Per-day annotations for weekly budget charts: warnings and deviation."""

from __future__ import annotations

from typing import Optional

from calbudget.budget.macros import round_half_up
from calbudget.budget.models import (
    DAYS_IN_WEEK,
    HIGH_CALORIE_RATIO,
    LOW_CALORIE_THRESHOLD,
    MIN_DAILY_CALORIES,
    DayBudget,
)

MINIMUM_WARNING = f"At the {MIN_DAILY_CALORIES} cal daily minimum"
LOW_CALORIE_WARNING = (
    "Very low-calorie day. Consider spreading the reduction across more days"
)
ABOVE_AVERAGE_WARNING = "Well above average. Large swings can be hard to sustain"


def get_day_warning(calories: float, average_calories: float) -> Optional[str]:
    """
    Classify a day's calories for a user-facing caution.

    Tiers are checked in order:
        calories <= 800                  -> minimum warning
        calories < 1200                  -> very low-calorie warning
        calories > average * 1.5         -> above average warning

    Args:
        calories: The day's calorie target
        average_calories: Daily average for the week

    Returns:
        Warning message, or None if the day is unremarkable
    """
    if calories <= MIN_DAILY_CALORIES:
        return MINIMUM_WARNING
    if calories < LOW_CALORIE_THRESHOLD:
        return LOW_CALORIE_WARNING
    if calories > average_calories * HIGH_CALORIE_RATIO:
        return ABOVE_AVERAGE_WARNING
    return None


def get_deviation_percent(calories: float, weekly_total: float) -> int:
    """
    Percentage difference between a day and the week's per-day average.

    Returns 0 when the weekly total is 0.

    Example:
        >>> get_deviation_percent(2000, 10500)  # average 1500
        33
    """
    if weekly_total == 0:
        return 0
    average = weekly_total / DAYS_IN_WEEK
    return round_half_up((calories - average) / average * 100)


def weekly_total(days: list[DayBudget]) -> int:
    """Sum of calories across the week."""
    return sum(day.calories for day in days)


def daily_average(days: list[DayBudget], fallback: int) -> int:
    """Rounded per-day average, or fallback for an empty/zero week."""
    total = weekly_total(days)
    if total <= 0:
        return fallback
    return round_half_up(total / DAYS_IN_WEEK)
