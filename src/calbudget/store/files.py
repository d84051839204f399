"""JSON file persistence for weekly budgets.

The file holds three sections:

    config     redistribution settings (enabled, start_day, locked weekdays)
    base       the daily goal the week was generated from
    overrides  per-date calorie/macro targets, keyed by YYYY-MM-DD

Overrides accumulate across weeks; saving a week only replaces its own
dates.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Optional

from calbudget.budget.models import BaseTargets, BudgetError, DayBudget
from calbudget.budget.serialization import deserialize_targets, serialize_targets

logger = logging.getLogger(__name__)

PATTERN_TYPE = "redistribution"


@dataclass
class RedistributionConfig:
    """Persisted redistribution settings."""

    enabled: bool = False
    start_day: int = 0  # Sunday = 0
    locked_days: list[int] = field(default_factory=list)  # day_of_week values


class WeekStore:
    """Reads and writes the weekly budget state file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                return json.load(f) or {}
        except json.JSONDecodeError as e:
            raise BudgetError(f"Corrupt budget file {self.path}: {e}") from e

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Temp file + rename: readers never see a partial write
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=self.path.name, suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Wrote budget state to %s", self.path)

    def get_config(self) -> RedistributionConfig:
        """Return stored redistribution settings, or defaults."""
        data = self._read().get("config", {})
        return RedistributionConfig(
            enabled=bool(data.get("enabled", False))
            and data.get("pattern_type", PATTERN_TYPE) == PATTERN_TYPE,
            start_day=int(data.get("start_day", 0)),
            locked_days=[int(d) for d in data.get("locked_days", [])],
        )

    def get_base(self) -> Optional[BaseTargets]:
        """Return the stored daily goal, if any."""
        data = self._read().get("base")
        return deserialize_targets(data) if data else None

    def get_overrides(self) -> dict[date, BaseTargets]:
        """Return all stored per-date targets."""
        overrides = self._read().get("overrides", {})
        return {
            date.fromisoformat(date_str): deserialize_targets(values)
            for date_str, values in overrides.items()
        }

    def save_week(
        self, days: list[DayBudget], base: BaseTargets, start_day: int
    ) -> None:
        """
        Persist a week as overrides and enable redistribution.

        Args:
            days: The seven-day plan to store
            base: Daily goal the plan was generated from
            start_day: Weekday the budget week starts on (Sunday = 0)
        """
        data = self._read()
        data["config"] = {
            "pattern_type": PATTERN_TYPE,
            "enabled": True,
            "start_day": start_day,
            "locked_days": sorted(day.day_of_week for day in days if day.locked),
        }
        data["base"] = serialize_targets(base)
        overrides = data.setdefault("overrides", {})
        for day in days:
            overrides[day.date.isoformat()] = serialize_targets(day)
        self._write(data)

    def clear(self) -> None:
        """Remove all stored state."""
        self.path.unlink(missing_ok=True)
