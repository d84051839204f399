"""Tests for settings loading and saving."""

from __future__ import annotations

from pathlib import Path

from calbudget.config.settings import Settings


class TestSettings:
    """Tests for Settings YAML round-trip."""

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = Settings.load(tmp_path / "missing.yaml")

        assert settings.budget.start_day == 0
        assert settings.budget.goal_change_tolerance == 50
        assert settings.storage.path.name == "week.json"
        assert settings.defaults.log_level == "WARNING"
        assert settings.defaults.output_format == "table"

    def test_partial_file_overrides_only_given_keys(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("budget:\n  start_day: 1\n")

        settings = Settings.load(config)
        assert settings.budget.start_day == 1
        assert settings.budget.goal_change_tolerance == 50

    def test_save_and_load(self, tmp_path):
        config = tmp_path / "nested" / "config.yaml"
        settings = Settings()
        settings.storage.path = tmp_path / "state.json"
        settings.budget.goal_change_tolerance = 100
        settings.defaults.log_level = "DEBUG"
        settings.defaults.output_format = "json"
        settings.save(config)

        loaded = Settings.load(config)
        assert loaded.storage.path == Path(tmp_path / "state.json")
        assert loaded.budget.goal_change_tolerance == 100
        assert loaded.defaults.log_level == "DEBUG"
        assert loaded.defaults.output_format == "json"

    def test_empty_file(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("")
        assert Settings.load(config).budget.start_day == 0
