"""Serialization utilities for weekly budgets.

Weeks are converted to plain dicts that can be written as JSON. Dates use
YYYY-MM-DD. Per-date calorie and macro targets round-trip through
serialize_targets() / deserialize_targets().
"""

from __future__ import annotations

from typing import Any

from calbudget.budget.models import BaseTargets, DayBudget


def serialize_day(day: DayBudget) -> dict[str, Any]:
    """Convert a DayBudget to a JSON-serializable dict."""
    return {
        "date": day.date.isoformat(),
        "day_of_week": day.day_of_week,
        "day_label": day.day_label,
        "calories": day.calories,
        "protein": day.protein,
        "carbs": day.carbs,
        "fat": day.fat,
        "locked": day.locked,
        "is_today": day.is_today,
        "is_past": day.is_past,
    }


def serialize_week(days: list[DayBudget]) -> list[dict[str, Any]]:
    """Serialize a whole week in date order."""
    return [serialize_day(day) for day in days]


def serialize_targets(values: DayBudget | BaseTargets) -> dict[str, int]:
    """Extract the calorie and macro fields (the per-date override format)."""
    return {
        "calories": values.calories,
        "protein": values.protein,
        "carbs": values.carbs,
        "fat": values.fat,
    }


def deserialize_targets(data: dict[str, Any]) -> BaseTargets:
    """Parse a dict produced by serialize_targets()."""
    return BaseTargets(
        calories=int(data["calories"]),
        protein=int(data["protein"]),
        carbs=int(data["carbs"]),
        fat=int(data["fat"]),
    )
