"""In-memory implementation of WorkoutRepository for testing."""

from domain.model.errors import NotFoundError
from domain.model.workout import Workout, WorkoutDraft


class FakeWorkoutRepository:
    def __init__(self, user_id: str = 'user-123', workouts: list[Workout] | None = None):
        self.user_id = user_id
        self.store: dict[str, Workout] = {w.id: w for w in workouts or []}

    # ── write operations ─────────────────────────────────────

    async def create(self, draft: WorkoutDraft) -> Workout:
        workout = Workout.create(draft, self.user_id)
        self.store[workout.id] = workout
        return workout

    async def update(self, workout_id: str, draft: WorkoutDraft) -> Workout:
        workout = self._require(workout_id)
        updated = workout.with_draft(draft)
        self.store[workout_id] = updated
        return updated

    async def delete(self, workout_id: str) -> None:
        self._require(workout_id)
        del self.store[workout_id]

    # ── read operations ──────────────────────────────────────

    async def list(self) -> list[Workout]:
        return list(self.store.values())

    async def get(self, workout_id: str) -> Workout:
        return self._require(workout_id)

    def _require(self, workout_id: str) -> Workout:
        workout = self.store.get(workout_id)
        if workout is None:
            raise NotFoundError(f"Workout {workout_id} not found")
        return workout
