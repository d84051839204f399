"""Pytest fixtures for calbudget tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta

import pytest

from calbudget.budget.models import DAY_LABELS, DayBudget
from calbudget.store import WeekStore, WeeklyBudgetPlanner

# 2025-06-15 is a Sunday
WEEK_START = date(2025, 6, 15)


def _make_day(**overrides) -> DayBudget:
    day = DayBudget(
        date=WEEK_START,
        day_of_week=0,
        day_label="Sun",
        calories=2000,
        protein=150,
        carbs=200,
        fat=67,
    )
    return replace(day, **overrides)


def _make_week(overrides: dict[int, dict] | None = None) -> list[DayBudget]:
    overrides = overrides or {}
    return [
        _make_day(
            date=WEEK_START + timedelta(days=i),
            day_of_week=i,
            day_label=DAY_LABELS[i],
            **overrides.get(i, {}),
        )
        for i in range(7)
    ]


@pytest.fixture
def make_day():
    """Factory for a 2000 kcal Sunday with 150/200/67 macros, overridable per field."""
    return _make_day


@pytest.fixture
def make_week():
    """Factory for seven identical days starting Sunday 2025-06-15.

    Takes an optional {index: {field: value}} mapping of per-day overrides.
    """
    return _make_week


@pytest.fixture
def week() -> list[DayBudget]:
    return _make_week()


@pytest.fixture
def store(tmp_path) -> WeekStore:
    return WeekStore(tmp_path / "week.json")


@pytest.fixture
def planner(store) -> WeeklyBudgetPlanner:
    return WeeklyBudgetPlanner(store)
