"""Stateful weekly budget planner.

Holds the current week, routes every edit through the pure budget engine,
and persists the result with a WeekStore. Deciding whether the user's
daily goal has changed enough to regenerate the week also lives here.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from calbudget.budget.annotations import daily_average, weekly_total
from calbudget.budget.generator import (
    dates_for_week,
    generate_initial_budget,
    sunday_based_weekday,
    week_start_for,
)
from calbudget.budget.models import (
    DAY_LABELS,
    DAYS_IN_WEEK,
    BaseTargets,
    BudgetNotFoundError,
    DayBudget,
)
from calbudget.budget.redistribution import (
    redistribute_calories,
    reset_to_equal,
    toggle_day_lock,
)
from calbudget.store.files import WeekStore

logger = logging.getLogger(__name__)

DEFAULT_GOAL_CHANGE_TOLERANCE = 50


class WeeklyBudgetPlanner:
    """
    Current weekly budget plus the operations a user can perform on it.

    Attributes:
        store: Persistence backend
        days: Current seven-day plan (empty until initialized or loaded)
        base: Daily goal the plan was generated from
        start_day: Weekday the budget week starts on (Sunday = 0)
        goal_change_tolerance: Allowed drift (kcal/week) before the goal
                               counts as changed
    """

    def __init__(
        self,
        store: WeekStore,
        goal_change_tolerance: int = DEFAULT_GOAL_CHANGE_TOLERANCE,
    ):
        self.store = store
        self.goal_change_tolerance = goal_change_tolerance
        self.days: list[DayBudget] = []
        self.base: Optional[BaseTargets] = None
        self.start_day = 0

    @property
    def is_active(self) -> bool:
        return len(self.days) == DAYS_IN_WEEK

    @property
    def weekly_total(self) -> int:
        return weekly_total(self.days)

    @property
    def daily_average(self) -> int:
        fallback = self.base.calories if self.base else 0
        return daily_average(self.days, fallback)

    def require_days(self) -> list[DayBudget]:
        """Return the current week, raising if there is none."""
        if not self.is_active:
            raise BudgetNotFoundError(
                "No weekly budget found. Run 'calbudget init' first."
            )
        return self.days

    def initialize(
        self, base: BaseTargets, start_day: int, today: Optional[date] = None
    ) -> list[DayBudget]:
        """Generate a fresh equal week for the week containing today."""
        if today is None:
            today = date.today()
        week_start = week_start_for(today, start_day)
        self.days = generate_initial_budget(
            base.calories,
            base.protein,
            base.carbs,
            base.fat,
            week_start,
            start_day,
            today=today,
        )
        self.base = base
        self.start_day = start_day
        return self.days

    def load(self, today: Optional[date] = None) -> bool:
        """
        Rebuild the current week from stored overrides.

        Only succeeds when redistribution is enabled and every date of the
        current week has an override; otherwise state is left untouched.

        Returns:
            True if a week was loaded
        """
        config = self.store.get_config()
        if not config.enabled:
            return False

        if today is None:
            today = date.today()
        dates = dates_for_week(week_start_for(today, config.start_day))
        overrides = self.store.get_overrides()

        if not all(d in overrides for d in dates):
            logger.info("No full redistribution week stored for %s", dates[0])
            return False

        days = []
        for day in dates:
            targets = overrides[day]
            dow = sunday_based_weekday(day)
            days.append(
                DayBudget(
                    date=day,
                    day_of_week=dow,
                    day_label=DAY_LABELS[dow],
                    calories=targets.calories,
                    protein=targets.protein,
                    carbs=targets.carbs,
                    fat=targets.fat,
                    locked=dow in config.locked_days,
                    is_today=day == today,
                    is_past=day < today,
                )
            )

        self.days = days
        self.base = self.store.get_base()
        self.start_day = config.start_day
        return True

    def _protein_floor(self, protein_floor: Optional[int]) -> int:
        if protein_floor is not None:
            return protein_floor
        return self.base.protein if self.base else 0

    def adjust_day(
        self, index: int, new_calories: int, protein_floor: Optional[int] = None
    ) -> Optional[list[DayBudget]]:
        """
        Change one day and rebalance the week.

        protein_floor defaults to the base protein goal. The current week
        is replaced only when the redistribution succeeds.

        Returns:
            The new week, or None if it could not be redistributed
        """
        result = redistribute_calories(
            self.require_days(), index, new_calories, self._protein_floor(protein_floor)
        )
        if result is not None:
            self.days = result
        return result

    def toggle_day_lock(self, index: int) -> list[DayBudget]:
        self.days = toggle_day_lock(self.require_days(), index)
        return self.days

    def reset(self) -> list[DayBudget]:
        """Spread the weekly total evenly and unlock every day."""
        self.days = reset_to_equal(self.require_days(), self._protein_floor(None))
        return self.days

    def goal_changed(self, daily_calories: int) -> bool:
        """Whether the week no longer matches a daily goal.

        True when the stored weekly total differs from daily_calories * 7
        by more than goal_change_tolerance.
        """
        if not self.is_active:
            return False
        expected = daily_calories * DAYS_IN_WEEK
        return abs(self.weekly_total - expected) > self.goal_change_tolerance

    def save(self) -> None:
        """Persist the current week."""
        days = self.require_days()
        base = self.base
        if base is None:
            # Weeks loaded without a stored goal fall back to the average day
            first = days[0]
            base = BaseTargets(self.daily_average, first.protein, first.carbs, first.fat)
        self.store.save_week(days, base, self.start_day)
