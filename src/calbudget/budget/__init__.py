"""Weekly calorie budget engine.

Pure functions for building a seven-day calorie plan and moving calories
between its days while keeping the weekly total constant.

Key components:
- Initial budget generation from a daily baseline
- Proportional redistribution with a hard daily floor
- Macro recalculation (protein floor, minimum fat share, carbs as remainder)
- Chart annotations (warnings, deviation from average)
"""

from __future__ import annotations

from calbudget.budget.annotations import (
    daily_average,
    get_day_warning,
    get_deviation_percent,
    weekly_total,
)
from calbudget.budget.generator import (
    dates_for_week,
    generate_initial_budget,
    week_start_for,
)
from calbudget.budget.macros import macro_calories, recalculate_macros
from calbudget.budget.models import (
    MIN_DAILY_CALORIES,
    BaseTargets,
    BudgetError,
    BudgetNotFoundError,
    DayBudget,
    InvalidBudgetError,
    MacroSplit,
)
from calbudget.budget.redistribution import (
    redistribute_calories,
    reset_to_equal,
    toggle_day_lock,
)

__all__ = [
    "MIN_DAILY_CALORIES",
    "BaseTargets",
    "BudgetError",
    "BudgetNotFoundError",
    "DayBudget",
    "InvalidBudgetError",
    "MacroSplit",
    "daily_average",
    "dates_for_week",
    "generate_initial_budget",
    "get_day_warning",
    "get_deviation_percent",
    "macro_calories",
    "recalculate_macros",
    "redistribute_calories",
    "reset_to_equal",
    "toggle_day_lock",
    "week_start_for",
    "weekly_total",
]
