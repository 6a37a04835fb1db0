"""Derived dashboard values. Recomputed from a workout collection, never stored."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChartPoint:
    """One label/value pair of a chart series."""
    label: str
    value: int


ChartSeries = list[ChartPoint]


@dataclass(frozen=True)
class DailyStats:
    """Totals for one calendar day plus the all-time type breakdown.

    ``workouts_by_type`` deliberately spans the whole collection while the
    totals only cover the reference day.
    """
    total_workouts: int = 0
    total_duration: int = 0
    total_calories: int = 0
    average_calories: int = 0
    workouts_by_type: dict[str, int] = field(default_factory=dict)
