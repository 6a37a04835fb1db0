"""Dashboard analytics: daily totals and chart series.

Pure functions of a workout collection. Dates are compared as calendar days
in *tz* (the system's local zone when omitted). Any unparseable workout date
raises ValidationError rather than being skipped.
"""

from collections import Counter
from datetime import datetime, tzinfo

from domain.model.stats import ChartPoint, ChartSeries, DailyStats
from domain.model.workout import Workout

DAY_LABEL_FORMAT = "%d"


def _local(moment: datetime, tz: tzinfo | None) -> datetime:
    # naive values are taken as local wall time by astimezone()
    return moment.astimezone(tz)


def sort_newest_first(workouts: list[Workout]) -> list[Workout]:
    """Order by date descending; equal timestamps keep their input order."""
    return sorted(workouts, key=lambda w: w.started_at.timestamp(), reverse=True)


def compute_daily_stats(
    workouts: list[Workout],
    reference: datetime,
    tz: tzinfo | None = None,
) -> DailyStats:
    """Totals for workouts on *reference*'s calendar day.

    ``workouts_by_type`` counts the full collection, not just that day.
    """
    day = _local(reference, tz).date()
    todays = [w for w in workouts if _local(w.started_at, tz).date() == day]

    total_calories = sum(w.calories for w in todays)
    # half-up rounding of total / count
    average = (2 * total_calories + len(todays)) // (2 * len(todays)) if todays else 0

    return DailyStats(
        total_workouts=len(todays),
        total_duration=sum(w.duration for w in todays),
        total_calories=total_calories,
        average_calories=average,
        workouts_by_type=dict(Counter(w.type for w in workouts)),
    )


def compute_recent_series(
    workouts: list[Workout],
    limit: int = 7,
    tz: tzinfo | None = None,
) -> ChartSeries:
    """Calories of the *limit* most recent workouts, oldest first."""
    if limit <= 0:
        return []
    recent = sort_newest_first(workouts)[:limit]
    recent.reverse()
    return [
        ChartPoint(label=_local(w.started_at, tz).strftime(DAY_LABEL_FORMAT), value=w.calories)
        for w in recent
    ]


def compute_type_distribution(workouts: list[Workout]) -> ChartSeries:
    """One point per workout type, in first-seen order, valued by count."""
    counts = Counter(w.type for w in workouts)
    return [ChartPoint(label=name, value=count) for name, count in counts.items()]
