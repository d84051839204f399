"""Persistence and state management for the weekly budget."""

from __future__ import annotations

from calbudget.store.files import RedistributionConfig, WeekStore
from calbudget.store.planner import WeeklyBudgetPlanner

__all__ = ["RedistributionConfig", "WeekStore", "WeeklyBudgetPlanner"]
