"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".calbudget"


def _default_state_path() -> Path:
    """Return the default weekly budget state file."""
    return _default_config_dir() / "week.json"


@dataclass
class StorageConfig:
    """Where the weekly budget is persisted."""

    path: Path = field(default_factory=_default_state_path)


@dataclass
class BudgetConfig:
    """Weekly budget behaviour."""

    start_day: int = 0  # Sunday = 0
    # Weekly total may drift this far from daily goal * 7 before the
    # goal counts as changed
    goal_change_tolerance: int = 50


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table" or "json"
    log_level: str = "WARNING"


@dataclass
class Settings:
    """Main application settings."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    budget: BudgetConfig = field(default_factory=BudgetConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.calbudget/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        if "storage" in data:
            storage_data = data["storage"]
            if "path" in storage_data:
                settings.storage.path = Path(storage_data["path"]).expanduser()

        if "budget" in data:
            budget_data = data["budget"]
            if "start_day" in budget_data:
                settings.budget.start_day = int(budget_data["start_day"])
            if "goal_change_tolerance" in budget_data:
                settings.budget.goal_change_tolerance = int(
                    budget_data["goal_change_tolerance"]
                )

        if "defaults" in data:
            def_data = data["defaults"]
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]
            if "log_level" in def_data:
                settings.defaults.log_level = str(def_data["log_level"])

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.calbudget/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "storage": {
                "path": str(self.storage.path),
            },
            "budget": {
                "start_day": self.budget.start_day,
                "goal_change_tolerance": self.budget.goal_change_tolerance,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
                "log_level": self.defaults.log_level,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
