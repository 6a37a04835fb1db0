"""Unit tests for FakeWorkoutRepository: verifies Port contract compliance."""

import asyncio
import unittest

from adapter.fake.workout_repository import FakeWorkoutRepository
from domain.model.errors import NotFoundError
from domain.model.workout import Workout, WorkoutDraft


DRAFT = WorkoutDraft(type='Running', duration=30, calories=300, date='2025-01-01T08:00:00Z', notes='tempo')


class TestFakeWorkoutRepository(unittest.TestCase):
    """Tests that FakeWorkoutRepository correctly implements WorkoutRepository Protocol."""

    def setUp(self):
        self.repo = FakeWorkoutRepository(user_id='user-1')

    # ── create + get (round-trip) ─────────────────────────────

    def test_create_then_get_returns_equal_workout(self):
        created = asyncio.run(self.repo.create(DRAFT))
        fetched = asyncio.run(self.repo.get(created.id))

        self.assertIsInstance(fetched, Workout)
        self.assertEqual(fetched, created)
        self.assertEqual(fetched.user_id, 'user-1')
        self.assertEqual(fetched.to_draft(), DRAFT)

    def test_get_missing_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            asyncio.run(self.repo.get('nonexistent'))

    # ── list ──────────────────────────────────────────────────

    def test_list_returns_insertion_order(self):
        first = asyncio.run(self.repo.create(DRAFT))
        second = asyncio.run(self.repo.create(DRAFT))
        self.assertEqual([w.id for w in asyncio.run(self.repo.list())], [first.id, second.id])

    def test_list_returns_snapshot(self):
        asyncio.run(self.repo.create(DRAFT))
        snapshot = asyncio.run(self.repo.list())
        snapshot.clear()
        self.assertEqual(len(asyncio.run(self.repo.list())), 1)

    def test_seeded_workouts_are_listed(self):
        seeded = Workout.create(DRAFT, 'user-1')
        repo = FakeWorkoutRepository(user_id='user-1', workouts=[seeded])
        self.assertEqual(asyncio.run(repo.list()), [seeded])

    # ── update ────────────────────────────────────────────────

    def test_update_replaces_fields(self):
        created = asyncio.run(self.repo.create(DRAFT))
        new_draft = WorkoutDraft(type='Yoga', duration=45, calories=120, date='2025-01-02T07:00:00Z')

        updated = asyncio.run(self.repo.update(created.id, new_draft))

        self.assertEqual(updated.id, created.id)
        self.assertEqual(asyncio.run(self.repo.get(created.id)).to_draft(), new_draft)

    def test_update_missing_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            asyncio.run(self.repo.update('nonexistent', DRAFT))

    # ── delete ────────────────────────────────────────────────

    def test_delete_removes_workout(self):
        created = asyncio.run(self.repo.create(DRAFT))
        asyncio.run(self.repo.delete(created.id))
        with self.assertRaises(NotFoundError):
            asyncio.run(self.repo.get(created.id))

    def test_delete_missing_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            asyncio.run(self.repo.delete('nonexistent'))


if __name__ == '__main__':
    unittest.main()
