"""Tests for FileTokenStore: uses a temporary directory, never the real token path."""

import asyncio
import os
import stat
import tempfile
import unittest
from pathlib import Path

from adapter.file.token_store import FileTokenStore


class TestFileTokenStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / 'nested' / 'token'
        self.store = FileTokenStore(self.path)

    def test_missing_file_reads_as_none(self):
        self.assertIsNone(asyncio.run(self.store.get_token()))

    def test_set_creates_parent_and_persists(self):
        asyncio.run(self.store.set_token('tok-1'))

        self.assertTrue(self.path.exists())
        # a fresh instance sees the same slot (survives restarts)
        self.assertEqual(asyncio.run(FileTokenStore(self.path).get_token()), 'tok-1')

    def test_set_overwrites_previous_token(self):
        asyncio.run(self.store.set_token('a-much-longer-token'))
        asyncio.run(self.store.set_token('short'))
        self.assertEqual(asyncio.run(self.store.get_token()), 'short')

    def test_remove_deletes_file(self):
        asyncio.run(self.store.set_token('tok-1'))
        asyncio.run(self.store.remove_token())

        self.assertFalse(self.path.exists())
        self.assertIsNone(asyncio.run(self.store.get_token()))

    def test_remove_missing_is_noop(self):
        asyncio.run(self.store.remove_token())
        self.assertFalse(self.path.exists())

    def test_blank_file_reads_as_none(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text('  \n')
        self.assertIsNone(asyncio.run(self.store.get_token()))

    @unittest.skipIf(os.name == 'nt', "POSIX permissions only")
    def test_token_file_is_private(self):
        asyncio.run(self.store.set_token('tok-1'))
        mode = stat.S_IMODE(os.stat(self.path).st_mode)
        self.assertEqual(mode & 0o077, 0)


if __name__ == '__main__':
    unittest.main()
