"""Tests for CLI commands."""

from __future__ import annotations

import json
from datetime import date

import pytest
from typer.testing import CliRunner

from calbudget.budget.generator import sunday_based_weekday
from calbudget.cli import app
from calbudget.config.settings import Settings

runner = CliRunner()

# Start the week today so no day is in the past
START_DAY = str(sunday_based_weekday(date.today()))


@pytest.fixture
def state(tmp_path):
    return str(tmp_path / "week.json")


def invoke(state: str, *args: str):
    return runner.invoke(app, ["--state", state, *args])


def init_week(state: str):
    return invoke(
        state,
        "init", "--calories", "2000", "--protein", "150", "--carbs", "200",
        "--fat", "67", "--start-day", START_DAY,
    )


class TestMainCommands:
    """Tests for top-level CLI behaviour."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "calorie" in result.output.lower()

    def test_adjust_requires_args(self, state):
        result = invoke(state, "adjust")
        assert result.exit_code != 0

    def test_show_without_week(self, state):
        result = invoke(state, "show")
        assert result.exit_code == 1
        assert "No weekly budget" in result.output


class TestBudgetFlow:
    """Tests for init / adjust / lock / reset against a temp state file."""

    def test_init_then_show_json(self, state):
        assert init_week(state).exit_code == 0

        result = invoke(state, "show", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["success"] is True
        assert data["data"]["weekly_total"] == 14000
        assert len(data["data"]["days"]) == 7
        assert data["data"]["days"][0]["is_today"] is True

    def test_init_refuses_to_overwrite(self, state):
        init_week(state)
        result = init_week(state)
        assert result.exit_code == 1
        assert "--force" in result.output

    def test_adjust_by_label(self, state):
        init_week(state)
        label = json.loads(invoke(state, "show", "--json").output)["data"]["days"][2]["day_label"]

        result = invoke(state, "adjust", label, "2600", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["days"][2]["calories"] == 2600
        assert data["weekly_total"] == 14000

    def test_adjust_persists(self, state):
        init_week(state)
        invoke(state, "adjust", "0", "1500")

        data = json.loads(invoke(state, "show", "--json").output)["data"]
        assert data["days"][0]["calories"] == 1500
        assert data["weekly_total"] == 14000

    def test_adjust_infeasible(self, state):
        init_week(state)
        for i in range(1, 7):
            invoke(state, "lock", str(i))

        result = invoke(state, "adjust", "0", "2500")
        assert result.exit_code == 1
        assert "Can't redistribute this much" in result.output

    def test_adjust_unknown_day(self, state):
        init_week(state)
        result = invoke(state, "adjust", "9", "2500")
        assert result.exit_code == 1
        assert "Unknown day" in result.output

    def test_lock_toggles(self, state):
        init_week(state)
        first = json.loads(invoke(state, "lock", "3", "--json").output)
        second = json.loads(invoke(state, "lock", "3", "--json").output)

        assert first["data"]["locked"] is True
        assert second["data"]["locked"] is False

    def test_reset(self, state):
        init_week(state)
        invoke(state, "adjust", "0", "2700")
        invoke(state, "lock", "1")

        data = json.loads(invoke(state, "reset", "--json").output)["data"]
        assert [d["calories"] for d in data["days"]] == [2000] * 7
        assert not any(d["locked"] for d in data["days"])

    def test_check_goal(self, state):
        init_week(state)

        same = json.loads(invoke(state, "check-goal", "--calories", "2000", "--json").output)
        changed = json.loads(invoke(state, "check-goal", "--calories", "2200", "--json").output)

        assert same["data"]["goal_changed"] is False
        assert changed["data"]["goal_changed"] is True

    def test_adjust_below_daily_minimum(self, state):
        init_week(state)
        result = invoke(state, "adjust", "1", "700")

        assert result.exit_code == 1
        assert "800 kcal daily minimum" in result.output

        data = json.loads(invoke(state, "show", "--json").output)["data"]
        assert data["days"][1]["calories"] == 2000

    def test_adjust_below_daily_minimum_json(self, state):
        init_week(state)
        result = invoke(state, "adjust", "1", "700", "--json")

        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["success"] is False
        assert "800" in data["errors"][0]

    def test_show_includes_annotations(self, state):
        init_week(state)
        invoke(state, "adjust", "0", "3500")

        days = json.loads(invoke(state, "show", "--json").output)["data"]["days"]
        assert days[0]["warning"] is not None
        assert days[0]["deviation_percent"] > 0
        assert days[1]["date"] > days[0]["date"]


class TestOutputFormatSetting:
    """Tests for defaults.output_format in config."""

    @pytest.fixture
    def json_settings(self, monkeypatch):
        settings = Settings()
        settings.defaults.output_format = "json"
        monkeypatch.setattr("calbudget.cli.get_settings", lambda: settings)
        return settings

    def test_json_without_flag(self, state, json_settings):
        init_result = init_week(state)
        assert init_result.exit_code == 0
        assert json.loads(init_result.output)["command"] == "init"

        data = json.loads(invoke(state, "show").output)
        assert data["success"] is True
        assert data["data"]["weekly_total"] == 14000

    def test_errors_use_json(self, state, json_settings):
        result = invoke(state, "show")

        assert result.exit_code == 1
        assert json.loads(result.output)["success"] is False

    def test_table_is_default(self, state):
        init_week(state)
        result = invoke(state, "show")

        assert result.exit_code == 0
        assert "Weekly total" in result.output
