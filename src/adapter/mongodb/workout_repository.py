"""MongoDB implementation of WorkoutRepository.

Documents are scoped to one user; pymongo calls are blocking and run in a
worker thread so the event loop stays responsive.
"""

from __future__ import annotations

import asyncio
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import WORKOUTS_COLLECTION_NAME
from domain.model.errors import DomainError, NotFoundError
from domain.model.workout import Workout, WorkoutDraft

logger = getLogger(__name__)


class MongoWorkoutRepository:
    def __init__(self, db: Database, user_id: str):
        self.collection = db[WORKOUTS_COLLECTION_NAME]
        self.user_id = user_id

    # ── indexes ────────────────────────────────────────────────

    @staticmethod
    def ensure_indexes(db: Database) -> bool:
        """Create indexes for workouts collection."""
        from adapter.mongodb.indexes import create_index_safe

        collection = db[WORKOUTS_COLLECTION_NAME]
        try:
            create_index_safe(collection, [('user_id', 1), ('date', -1)], 'idx_workouts_user_date')
            create_index_safe(collection, [('user_id', 1), ('type', 1)], 'idx_workouts_user_type')
            return True
        except Exception as e:
            logger.error("Failed to create workouts indexes", extra={"error": str(e)})
            return False

    # ── mapping ───────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Workout:
        return Workout(
            id=doc['_id'],
            user_id=doc['user_id'],
            type=doc['type'],
            duration=doc['duration'],
            calories=doc['calories'],
            date=doc['date'],
            notes=doc.get('notes'),
        )

    def _to_document(self, workout: Workout) -> dict:
        return {
            '_id': workout.id,
            'user_id': workout.user_id,
            'type': workout.type,
            'duration': workout.duration,
            'calories': workout.calories,
            'date': workout.date,
            'notes': workout.notes,
        }

    def _scope(self, workout_id: str) -> dict:
        return {'_id': workout_id, 'user_id': self.user_id}

    # ── CRUD ──────────────────────────────────────────────────

    async def list(self) -> list[Workout]:
        return await asyncio.to_thread(self._list)

    async def get(self, workout_id: str) -> Workout:
        return await asyncio.to_thread(self._get, workout_id)

    async def create(self, draft: WorkoutDraft) -> Workout:
        return await asyncio.to_thread(self._create, draft)

    async def update(self, workout_id: str, draft: WorkoutDraft) -> Workout:
        return await asyncio.to_thread(self._update, workout_id, draft)

    async def delete(self, workout_id: str) -> None:
        await asyncio.to_thread(self._delete, workout_id)

    # ── blocking implementations ──────────────────────────────

    def _list(self) -> list[Workout]:
        try:
            docs = self.collection.find({'user_id': self.user_id})
            return [self._to_domain(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to list workouts", extra={"userId": self.user_id, "error": str(e)})
            raise DomainError("Failed to load workouts") from e

    def _get(self, workout_id: str) -> Workout:
        try:
            doc = self.collection.find_one(self._scope(workout_id))
        except PyMongoError as e:
            logger.error("Failed to get workout", extra={"workoutId": workout_id, "error": str(e)})
            raise DomainError("Failed to load workout") from e
        if doc is None:
            raise NotFoundError(f"Workout {workout_id} not found")
        return self._to_domain(doc)

    def _create(self, draft: WorkoutDraft) -> Workout:
        workout = Workout.create(draft, self.user_id)
        try:
            self.collection.insert_one(self._to_document(workout))
        except PyMongoError as e:
            logger.error("Failed to create workout", extra={"userId": self.user_id, "error": str(e)})
            raise DomainError("Failed to save workout") from e
        logger.info("Workout created", extra={"workoutId": workout.id, "userId": self.user_id})
        return workout

    def _update(self, workout_id: str, draft: WorkoutDraft) -> Workout:
        fields = {
            'type': draft.type,
            'duration': draft.duration,
            'calories': draft.calories,
            'date': draft.date,
            'notes': draft.notes,
        }
        try:
            result = self.collection.update_one(self._scope(workout_id), {'$set': fields})
        except PyMongoError as e:
            logger.error("Failed to update workout", extra={"workoutId": workout_id, "error": str(e)})
            raise DomainError("Failed to save workout") from e
        if result.matched_count == 0:
            raise NotFoundError(f"Workout {workout_id} not found")
        return Workout(id=workout_id, user_id=self.user_id, **fields)

    def _delete(self, workout_id: str) -> None:
        try:
            result = self.collection.delete_one(self._scope(workout_id))
        except PyMongoError as e:
            logger.error("Failed to delete workout", extra={"workoutId": workout_id, "error": str(e)})
            raise DomainError("Failed to delete workout") from e
        if result.deleted_count == 0:
            raise NotFoundError(f"Workout {workout_id} not found")
        logger.info("Workout deleted", extra={"workoutId": workout_id})
