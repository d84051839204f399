"""Weekly calorie budget planning."""

__version__ = "0.1.0"
