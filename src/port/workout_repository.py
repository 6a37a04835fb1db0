"""Port for workout data access."""

from typing import Protocol

from domain.model.workout import Workout, WorkoutDraft


class WorkoutRepository(Protocol):
    """CRUD over the current user's workouts.

    Missing ids raise ``domain.model.errors.NotFoundError``.
    """

    async def list(self) -> list[Workout]:
        """Return a snapshot of every workout."""
        ...

    async def get(self, workout_id: str) -> Workout:
        ...

    async def create(self, draft: WorkoutDraft) -> Workout:
        """Persist a new workout and return it with its assigned id."""
        ...

    async def update(self, workout_id: str, draft: WorkoutDraft) -> Workout:
        """Replace every editable field of an existing workout."""
        ...

    async def delete(self, workout_id: str) -> None:
        ...
