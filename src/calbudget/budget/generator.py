"""Initial weekly budget generation."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Union

from calbudget.budget.models import (
    DAY_LABELS,
    DAYS_IN_WEEK,
    DayBudget,
    InvalidBudgetError,
)


def _as_date(value: Union[date, str]) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def sunday_based_weekday(day: date) -> int:
    """Return the weekday of a date with Sunday = 0 (Python uses Monday = 0)."""
    return (day.weekday() + 1) % DAYS_IN_WEEK


def week_start_for(today: date, start_day: int) -> date:
    """
    Find the most recent occurrence of a start weekday.

    Args:
        today: Reference date
        start_day: Weekday the budget week starts on (Sunday = 0)

    Returns:
        The latest date on or before today falling on start_day

    Example:
        >>> week_start_for(date(2025, 6, 18), 0)  # Wednesday, week starts Sunday
        datetime.date(2025, 6, 15)
    """
    if not 0 <= start_day < DAYS_IN_WEEK:
        raise InvalidBudgetError(f"start_day must be 0-6, got {start_day}")
    diff = (sunday_based_weekday(today) - start_day) % DAYS_IN_WEEK
    return today - timedelta(days=diff)


def dates_for_week(week_start: date) -> list[date]:
    """Return the seven consecutive dates beginning at week_start."""
    return [week_start + timedelta(days=i) for i in range(DAYS_IN_WEEK)]


def generate_initial_budget(
    calories: int,
    protein: int,
    carbs: int,
    fat: int,
    start_date: Union[date, str],
    start_day_of_week: int,
    today: Optional[date] = None,
) -> list[DayBudget]:
    """
    Build a seven-day plan with the same baseline on every day.

    Args:
        calories: Daily calorie baseline
        protein: Daily protein baseline (g)
        carbs: Daily carbohydrate baseline (g)
        fat: Daily fat baseline (g)
        start_date: First day of the week (date or YYYY-MM-DD)
        start_day_of_week: Weekday of start_date, Sunday = 0
        today: Date used for is_today / is_past (default: wall clock)

    Returns:
        Seven unlocked DayBudget entries in date order
    """
    if not 0 <= start_day_of_week < DAYS_IN_WEEK:
        raise InvalidBudgetError(
            f"start_day_of_week must be 0-6, got {start_day_of_week}"
        )
    if min(calories, protein, carbs, fat) < 0:
        raise InvalidBudgetError("Baseline calories and macros must be non-negative")

    start = _as_date(start_date)
    if today is None:
        today = date.today()

    days = []
    for offset, day in enumerate(dates_for_week(start)):
        dow = (start_day_of_week + offset) % DAYS_IN_WEEK
        days.append(
            DayBudget(
                date=day,
                day_of_week=dow,
                day_label=DAY_LABELS[dow],
                calories=calories,
                protein=protein,
                carbs=carbs,
                fat=fat,
                locked=False,
                is_today=day == today,
                is_past=day < today,
            )
        )
    return days
