"""List-view filtering: type filter, text search, newest-first ordering."""

from domain.model.workout import Workout
from services.analytics_service import sort_newest_first

ALL_TYPES = "all"


def _matches(workout: Workout, term: str) -> bool:
    if term in workout.type.lower():
        return True
    return bool(workout.notes) and term in workout.notes.lower()


def filter_workouts(
    workouts: list[Workout],
    type_filter: str = ALL_TYPES,
    search_term: str = "",
) -> list[Workout]:
    """Return a new list of the matching workouts, newest first.

    Output depends only on the arguments; ties keep their input order.
    """
    result = list(workouts)

    if type_filter != ALL_TYPES:
        result = [w for w in result if w.type == type_filter]

    term = search_term.strip().lower()
    if term:
        result = [w for w in result if _matches(w, term)]

    return sort_newest_first(result)


def distinct_types(workouts: list[Workout]) -> list[str]:
    """Workout types present in the collection, in first-seen order."""
    return list(dict.fromkeys(w.type for w in workouts))
