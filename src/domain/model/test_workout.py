"""Unit tests for Workout, User and Session domain models.

Tests focus on behavior other components rely on:
- parse_timestamp failing loudly on malformed dates (analytics, filtering)
- Workout.with_draft full-record replacement (repositories)
- User.merged field-level merge (session store profile updates)
- Session invariant: authenticated implies a user
"""

import unittest
from datetime import datetime, timezone

from domain.model.errors import ValidationError
from domain.model.session import Session, SessionPhase
from domain.model.user import User
from domain.model.workout import Workout, WorkoutDraft, parse_timestamp


DRAFT = WorkoutDraft(type='Running', duration=30, calories=300, date='2025-01-01T08:00:00Z', notes='easy')


class TestParseTimestamp(unittest.TestCase):

    def test_parses_utc_suffix(self):
        self.assertEqual(
            parse_timestamp('2025-01-01T08:00:00Z'),
            datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc),
        )

    def test_parses_offset(self):
        parsed = parse_timestamp('2025-01-01T10:00:00+02:00')
        self.assertEqual(parsed.astimezone(timezone.utc).hour, 8)

    def test_malformed_date_raises_validation_error(self):
        with self.assertRaises(ValidationError):
            parse_timestamp('yesterday')

    def test_none_raises_validation_error(self):
        with self.assertRaises(ValidationError):
            parse_timestamp(None)


class TestWorkout(unittest.TestCase):

    def test_create_assigns_unique_ids(self):
        first = Workout.create(DRAFT, 'user-1')
        second = Workout.create(DRAFT, 'user-1')
        self.assertNotEqual(first.id, second.id)
        self.assertEqual(first.user_id, 'user-1')
        self.assertEqual(first.to_draft(), DRAFT)

    def test_with_draft_replaces_every_editable_field(self):
        workout = Workout.create(DRAFT, 'user-1')
        new_draft = WorkoutDraft(type='Yoga', duration=60, calories=150, date='2025-02-01T07:00:00Z')

        updated = workout.with_draft(new_draft)

        self.assertEqual(updated.id, workout.id)
        self.assertEqual(updated.user_id, 'user-1')
        self.assertEqual(updated.to_draft(), new_draft)
        self.assertIsNone(updated.notes)
        # original untouched
        self.assertEqual(workout.type, 'Running')

    def test_started_at_propagates_validation_error(self):
        workout = Workout(id='w1', user_id='u', type='Running', duration=1, calories=1, date='not a date')
        with self.assertRaises(ValidationError):
            workout.started_at


class TestUserMerged(unittest.TestCase):

    def test_merge_overwrites_only_given_fields(self):
        user = User(id='u1', name='John', email='john@example.com', profile_picture='a.png')
        merged = user.merged({'name': 'Johnny'})
        self.assertEqual(merged, User(id='u1', name='Johnny', email='john@example.com', profile_picture='a.png'))

    def test_merge_ignores_id_and_unknown_keys(self):
        user = User(id='u1', name='John', email='john@example.com')
        merged = user.merged({'id': 'other', 'password': 'x'})
        self.assertEqual(merged, user)


class TestSession(unittest.TestCase):

    def test_initial_session_is_bootstrapping(self):
        session = Session()
        self.assertTrue(session.loading)
        self.assertFalse(session.is_authenticated)
        self.assertEqual(session.phase, SessionPhase.BOOTSTRAPPING)

    def test_authenticated_without_user_is_rejected(self):
        with self.assertRaises(ValueError):
            Session(user=None, is_authenticated=True)

    def test_phase_reflects_authentication(self):
        user = User(id='u1', name='John', email='john@example.com')
        self.assertEqual(
            Session(user=user, is_authenticated=True, loading=False, bootstrapped=True).phase,
            SessionPhase.AUTHENTICATED,
        )
        self.assertEqual(
            Session(loading=True, error='x', bootstrapped=True).phase,
            SessionPhase.UNAUTHENTICATED,
        )


if __name__ == '__main__':
    unittest.main()
