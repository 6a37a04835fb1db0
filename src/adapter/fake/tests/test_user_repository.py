"""Unit tests for FakeUserRepository and FakeTokenStore."""

import asyncio
import unittest

from adapter.fake.token_store import FakeTokenStore
from adapter.fake.user_repository import FakeUserRepository


class TestFakeUserRepository(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_create_and_lookup(self):
        account = self.repo.create('jane@example.com', 'hash', 'Jane')

        self.assertIsNotNone(account)
        self.assertEqual(self.repo.get_by_email('jane@example.com'), account)
        self.assertEqual(self.repo.store[account.id], account)
        self.assertIsNone(account.user.profile_picture)

    def test_create_duplicate_email_returns_none(self):
        self.repo.create('jane@example.com', 'hash', 'Jane')
        self.assertIsNone(self.repo.create('jane@example.com', 'hash2', 'Other Jane'))

    def test_update_profile_merges_fields(self):
        account = self.repo.create('jane@example.com', 'hash', 'Jane')

        updated = self.repo.update_profile(account.id, {'profile_picture': 'me.png'})

        self.assertEqual(updated.user.name, 'Jane')
        self.assertEqual(updated.user.profile_picture, 'me.png')
        self.assertEqual(updated.password_hash, 'hash')

    def test_update_profile_missing_returns_none(self):
        self.assertIsNone(self.repo.update_profile('nope', {'name': 'x'}))

    def test_update_last_login(self):
        account = self.repo.create('jane@example.com', 'hash', 'Jane')
        self.assertTrue(self.repo.update_last_login(account.id))
        self.assertIsNotNone(self.repo.store[account.id].last_login)
        self.assertFalse(self.repo.update_last_login('nope'))


class TestFakeTokenStore(unittest.TestCase):

    def test_set_get_remove(self):
        store = FakeTokenStore()
        self.assertIsNone(asyncio.run(store.get_token()))

        asyncio.run(store.set_token('abc'))
        self.assertEqual(asyncio.run(store.get_token()), 'abc')

        asyncio.run(store.remove_token())
        self.assertIsNone(asyncio.run(store.get_token()))
        # removing again is a no-op
        asyncio.run(store.remove_token())


if __name__ == '__main__':
    unittest.main()
