"""Workout service: validated CRUD and quick-add over a WorkoutRepository.

Drafts are checked before any repository call so malformed input never
reaches the backend.
"""

import logging
from datetime import datetime, timezone

from domain.model.errors import ValidationError
from domain.model.workout import Workout, WorkoutDraft, parse_timestamp
from port.workout_repository import WorkoutRepository
from services.notes_parser import FALLBACK_TYPE, KNOWN_TYPES, parse_notes

logger = logging.getLogger(__name__)

WORKOUT_TYPES = (*KNOWN_TYPES, FALLBACK_TYPE)


def _check_count(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be a whole number")
    if value < 0:
        raise ValidationError(f"{name} must not be negative")


def validate_draft(draft: WorkoutDraft) -> None:
    """Raise ValidationError if *draft* cannot be stored."""
    if not draft.type or not draft.type.strip():
        raise ValidationError("Workout type is required")
    _check_count("Duration", draft.duration)
    _check_count("Calories", draft.calories)
    parse_timestamp(draft.date)


async def list_workouts(repo: WorkoutRepository) -> list[Workout]:
    return await repo.list()


async def get_workout(repo: WorkoutRepository, workout_id: str) -> Workout:
    return await repo.get(workout_id)


async def create_workout(repo: WorkoutRepository, draft: WorkoutDraft) -> Workout:
    validate_draft(draft)
    workout = await repo.create(draft)
    logger.info("Workout logged", extra={"workoutId": workout.id, "type": workout.type})
    return workout


async def update_workout(repo: WorkoutRepository, workout_id: str, draft: WorkoutDraft) -> Workout:
    validate_draft(draft)
    workout = await repo.update(workout_id, draft)
    logger.info("Workout updated", extra={"workoutId": workout_id})
    return workout


async def delete_workout(repo: WorkoutRepository, workout_id: str) -> None:
    await repo.delete(workout_id)
    logger.info("Workout deleted", extra={"workoutId": workout_id})


def draft_from_notes(text: str, now: datetime | None = None) -> WorkoutDraft:
    """Build a create-payload from quick-add text, dated *now* (UTC by default)."""
    parsed = parse_notes(text)
    moment = now or datetime.now(timezone.utc)
    return WorkoutDraft(
        type=parsed.type,
        duration=parsed.duration,
        calories=parsed.calories,
        date=moment.isoformat(),
        notes=text,
    )


async def quick_add(repo: WorkoutRepository, text: str, now: datetime | None = None) -> Workout:
    """Parse free text and log it as a new workout."""
    if not text.strip():
        raise ValidationError("Workout notes are empty")
    return await create_workout(repo, draft_from_notes(text, now))
