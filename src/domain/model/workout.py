"""Workout domain models."""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime

from domain.model.errors import ValidationError


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 workout timestamp.

    Raises ValidationError instead of guessing when the value is malformed.
    """
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid workout date: {value!r}") from e


@dataclass(frozen=True)
class WorkoutDraft:
    """Caller-editable workout fields (a Workout without id and user_id)."""
    type: str
    duration: int
    calories: int
    date: str
    notes: str | None = None


@dataclass(frozen=True)
class Workout:
    """A single logged exercise session."""
    id: str
    user_id: str
    type: str
    duration: int
    calories: int
    date: str
    notes: str | None = None

    @staticmethod
    def create(draft: WorkoutDraft, user_id: str) -> 'Workout':
        """Factory method: assigns a fresh id to the draft."""
        return Workout(
            id=str(uuid.uuid4()),
            user_id=user_id,
            type=draft.type,
            duration=draft.duration,
            calories=draft.calories,
            date=draft.date,
            notes=draft.notes,
        )

    @property
    def started_at(self) -> datetime:
        return parse_timestamp(self.date)

    def with_draft(self, draft: WorkoutDraft) -> 'Workout':
        """Full-record update: every editable field comes from *draft*."""
        return replace(
            self,
            type=draft.type,
            duration=draft.duration,
            calories=draft.calories,
            date=draft.date,
            notes=draft.notes,
        )

    def to_draft(self) -> WorkoutDraft:
        return WorkoutDraft(
            type=self.type,
            duration=self.duration,
            calories=self.calories,
            date=self.date,
            notes=self.notes,
        )
