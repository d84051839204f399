"""Tests for weekly budget serialization."""

from __future__ import annotations

import json

from calbudget.budget.models import BaseTargets
from calbudget.budget.serialization import (
    deserialize_targets,
    serialize_day,
    serialize_targets,
    serialize_week,
)


class TestDaySerialization:
    """Tests for DayBudget serialization."""

    def test_serialize_day(self, make_day):
        data = serialize_day(make_day(locked=True))

        assert data["date"] == "2025-06-15"
        assert data["day_label"] == "Sun"
        assert data["calories"] == 2000
        assert data["locked"] is True
        assert data["is_past"] is False

    def test_week_is_json_ready_in_date_order(self, make_week):
        days = make_week({2: {"locked": True, "calories": 2400}, 0: {"is_past": True}})
        data = json.loads(json.dumps(serialize_week(days)))

        assert [d["date"] for d in data] == [d.date.isoformat() for d in days]
        assert [d["day_label"] for d in data] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        assert data[0]["is_past"] is True
        assert data[2]["locked"] is True
        assert data[2]["calories"] == 2400


class TestTargetSerialization:
    """Tests for per-date target serialization."""

    def test_day_targets_drop_flags(self, make_day):
        data = serialize_targets(make_day(locked=True))
        assert data == {"calories": 2000, "protein": 150, "carbs": 200, "fat": 67}

    def test_base_targets(self):
        base = BaseTargets(1800, 130, 180, 60)
        assert deserialize_targets(serialize_targets(base)) == base

    def test_targets_accept_numeric_strings(self):
        data = {"calories": "1800", "protein": "130", "carbs": "180", "fat": "60"}
        assert deserialize_targets(data) == BaseTargets(1800, 130, 180, 60)
