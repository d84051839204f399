"""Data models for weekly calorie budgets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

# Hard floor no redistribution may push a day below
MIN_DAILY_CALORIES = 800

# Below this a day is flagged as very low-calorie (exclusive)
LOW_CALORIE_THRESHOLD = 1200

# A day above average * ratio is flagged as well above average (exclusive)
HIGH_CALORIE_RATIO = 1.5

# Fat share assumed when the original day has no calories to derive one from
DEFAULT_FAT_PCT = 0.30

# Fat never drops below this share of calories
MIN_FAT_PCT = 0.15

DAYS_IN_WEEK = 7

# Atwater factors (kcal per gram)
PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9

# Indexed by day_of_week, Sunday = 0
DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass
class DayBudget:
    """One calendar day's nutrition plan within a 7-day window.

    Locked and past days are immutable to redistribution.
    """

    date: date
    day_of_week: int  # 0-6, Sunday = 0
    day_label: str
    calories: int
    protein: int  # grams
    carbs: int  # grams
    fat: int  # grams
    locked: bool = False
    is_today: bool = False
    is_past: bool = False

    @property
    def adjustable(self) -> bool:
        """Whether redistribution may change this day."""
        return not self.locked and not self.is_past


@dataclass
class MacroSplit:
    """Protein/carbs/fat grams for a single day."""

    protein: int
    carbs: int
    fat: int


@dataclass
class BaseTargets:
    """Daily calorie and macro goal a week is generated from."""

    calories: int
    protein: int
    carbs: int
    fat: int


# Custom exceptions


class BudgetError(Exception):
    """Base exception for calorie budget errors."""

    pass


class InvalidBudgetError(BudgetError, ValueError):
    """Raised when a caller violates a precondition (bad index, negative input)."""

    pass


class BudgetNotFoundError(BudgetError):
    """Raised when no saved weekly budget is available."""

    pass
