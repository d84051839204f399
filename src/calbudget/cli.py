"""CLI interface using Typer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from calbudget.app_logging import configure_logging
from calbudget.budget.annotations import get_day_warning, get_deviation_percent
from calbudget.budget.models import (
    MIN_DAILY_CALORIES,
    BaseTargets,
    BudgetError,
    DayBudget,
)
from calbudget.budget.serialization import serialize_day, serialize_week
from calbudget.config import get_settings
from calbudget.store import WeekStore, WeeklyBudgetPlanner

app = typer.Typer(
    help="Weekly calorie budget: move calories between days, keep the weekly total",
    no_args_is_help=True,
)
console = Console()

INFEASIBLE_MESSAGE = (
    "Can't redistribute this much. "
    "Try unlocking more days or making a smaller adjustment."
)

# Set by the root callback
_state_path: Optional[Path] = None


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict) -> None:
    """Output JSON response to stdout."""
    print(json.dumps(response, indent=2))


def wants_json(json_output: bool) -> bool:
    """True when --json was passed or the configured output format is json."""
    return json_output or get_settings().defaults.output_format == "json"


def get_planner(load: bool = True) -> WeeklyBudgetPlanner:
    """Build a planner on the configured state file, loading the current week."""
    settings = get_settings()
    store = WeekStore(_state_path or settings.storage.path)
    planner = WeeklyBudgetPlanner(
        store, goal_change_tolerance=settings.budget.goal_change_tolerance
    )
    if load:
        planner.load()
    return planner


def resolve_day(planner: WeeklyBudgetPlanner, day: str) -> int:
    """Turn a position (0-6) or a label like 'Mon' into a week index."""
    days = planner.require_days()
    if day.isdigit():
        index = int(day)
        if index < len(days):
            return index
    else:
        for i, d in enumerate(days):
            if d.day_label.lower() == day.lower()[:3]:
                return i
    raise BudgetError(f"Unknown day '{day}'. Use 0-6 or a label like Mon.")


def fail(command: str, message: str, json_output: bool) -> None:
    """Report an error and exit with status 1."""
    if json_output:
        output_json({"success": False, "command": command, "errors": [message]})
    else:
        console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def week_payload(planner: WeeklyBudgetPlanner) -> dict:
    total = planner.weekly_total
    average = planner.daily_average
    return {
        "weekly_total": total,
        "daily_average": average,
        "days": [
            {
                **data,
                "deviation_percent": get_deviation_percent(d.calories, total),
                "warning": get_day_warning(d.calories, average),
            }
            for d, data in zip(planner.days, serialize_week(planner.days))
        ],
    }


def _status(day: DayBudget) -> str:
    markers = []
    if day.is_today:
        markers.append("[bold]today[/bold]")
    if day.is_past:
        markers.append("[dim]past[/dim]")
    if day.locked:
        markers.append("[yellow]locked[/yellow]")
    return " ".join(markers)


def print_week(planner: WeeklyBudgetPlanner, title: str = "Weekly Calorie Budget") -> None:
    total = planner.weekly_total
    average = planner.daily_average

    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Day", style="cyan")
    table.add_column("Date")
    table.add_column("Calories", justify="right")
    table.add_column("P/C/F (g)", justify="right")
    table.add_column("vs avg", justify="right")
    table.add_column("Status")
    table.add_column("Warning", style="yellow")

    for i, day in enumerate(planner.days):
        deviation = get_deviation_percent(day.calories, total)
        table.add_row(
            str(i),
            day.day_label,
            day.date.isoformat(),
            f"{day.calories:,}",
            f"{day.protein}/{day.carbs}/{day.fat}",
            f"{deviation:+d}%",
            _status(day),
            get_day_warning(day.calories, average) or "",
        )

    console.print(table)
    console.print(f"Weekly total: [bold]{total:,}[/bold] kcal, daily average {average:,} kcal")


# ============================================================================
# Commands
# ============================================================================


@app.callback()
def main(
    state: Optional[Path] = typer.Option(
        None,
        "--state",
        envvar="CALBUDGET_STATE",
        help="Budget state file (default: from config)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Weekly calorie budget planner."""
    global _state_path
    _state_path = state
    configure_logging("DEBUG" if verbose else get_settings().defaults.log_level)


@app.command()
def init(
    calories: int = typer.Option(..., "--calories", "-c", help="Daily calorie goal"),
    protein: int = typer.Option(..., "--protein", "-p", help="Daily protein goal (g)"),
    carbs: int = typer.Option(..., "--carbs", help="Daily carbohydrate goal (g)"),
    fat: int = typer.Option(..., "--fat", help="Daily fat goal (g)"),
    start_day: Optional[int] = typer.Option(
        None, "--start-day", "-s", help="Weekday the week starts on (0=Sun ... 6=Sat)"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Replace an existing week"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Create an equal weekly budget from a daily goal."""
    json_output = wants_json(json_output)
    planner = get_planner()
    if planner.is_active and not force:
        fail("init", "A weekly budget already exists. Use --force to replace it.", json_output)

    if start_day is None:
        start_day = get_settings().budget.start_day

    try:
        planner.initialize(BaseTargets(calories, protein, carbs, fat), start_day)
        planner.save()
    except BudgetError as e:
        fail("init", str(e), json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "init",
            "data": week_payload(planner),
            "human_summary": f"Created weekly budget of {planner.weekly_total:,} kcal",
        })
    else:
        print_week(planner)


@app.command()
def show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the current week with warnings and deviation from average."""
    json_output = wants_json(json_output)
    planner = get_planner()
    if not planner.is_active:
        fail("show", "No weekly budget found. Run 'calbudget init' first.", json_output)

    if json_output:
        output_json({
            "success": True,
            "command": "show",
            "data": week_payload(planner),
            "human_summary": f"Weekly total {planner.weekly_total:,} kcal",
        })
    else:
        print_week(planner)


@app.command()
def adjust(
    day: str = typer.Argument(..., help="Day position (0-6) or label (e.g. Mon)"),
    calories: int = typer.Argument(..., help="New calorie target for that day"),
    protein_floor: Optional[int] = typer.Option(
        None, "--protein-floor", help="Minimum protein (g), default: protein goal"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Set one day's calories and rebalance the other unlocked days."""
    json_output = wants_json(json_output)
    planner = get_planner()
    try:
        index = resolve_day(planner, day)
    except BudgetError as e:
        fail("adjust", str(e), json_output)

    if calories < MIN_DAILY_CALORIES and calories != planner.days[index].calories:
        fail(
            "adjust",
            f"Days can't go below the {MIN_DAILY_CALORIES} kcal daily minimum.",
            json_output,
        )

    try:
        result = planner.adjust_day(index, calories, protein_floor)
    except BudgetError as e:
        fail("adjust", str(e), json_output)

    if result is None:
        fail("adjust", INFEASIBLE_MESSAGE, json_output)

    planner.save()
    if json_output:
        output_json({
            "success": True,
            "command": "adjust",
            "data": week_payload(planner),
            "human_summary": f"Set {planner.days[index].day_label} to {calories:,} kcal",
        })
    else:
        print_week(planner)


@app.command()
def lock(
    day: str = typer.Argument(..., help="Day position (0-6) or label (e.g. Mon)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Toggle a day's lock. Locked days are never rebalanced."""
    json_output = wants_json(json_output)
    planner = get_planner()
    try:
        index = resolve_day(planner, day)
        planner.toggle_day_lock(index)
    except BudgetError as e:
        fail("lock", str(e), json_output)

    planner.save()
    toggled = planner.days[index]
    state = "locked" if toggled.locked else "unlocked"
    if json_output:
        output_json({
            "success": True,
            "command": "lock",
            "data": serialize_day(toggled),
            "human_summary": f"{toggled.day_label} {state}",
        })
    else:
        console.print(f"[green]{toggled.day_label} {toggled.date} {state}[/green]")


@app.command()
def reset(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Return to an equal distribution and unlock every day."""
    json_output = wants_json(json_output)
    planner = get_planner()
    try:
        planner.reset()
    except BudgetError as e:
        fail("reset", str(e), json_output)

    planner.save()
    if json_output:
        output_json({
            "success": True,
            "command": "reset",
            "data": week_payload(planner),
            "human_summary": f"Reset to {planner.daily_average:,} kcal per day",
        })
    else:
        print_week(planner)


@app.command("check-goal")
def check_goal(
    calories: int = typer.Option(..., "--calories", "-c", help="Current daily calorie goal"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Report whether the week still matches a daily calorie goal."""
    json_output = wants_json(json_output)
    planner = get_planner()
    if not planner.is_active:
        fail("check-goal", "No weekly budget found. Run 'calbudget init' first.", json_output)

    changed = planner.goal_changed(calories)
    if json_output:
        output_json({
            "success": True,
            "command": "check-goal",
            "data": {
                "goal_changed": changed,
                "weekly_total": planner.weekly_total,
                "expected_weekly_total": calories * 7,
            },
            "human_summary": "Goal changed" if changed else "Week matches goal",
        })
    elif changed:
        console.print(
            "[yellow]Your calorie goal has changed. "
            "Run 'calbudget init --force' to update your weekly budget.[/yellow]"
        )
    else:
        console.print("[green]Weekly budget matches your calorie goal.[/green]")


if __name__ == "__main__":
    app()
