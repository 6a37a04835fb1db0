"""File-backed implementation of TokenStore.

The token lives in a single file so it survives process restarts.
"""

import asyncio
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_PATH = Path(os.getenv('FITLOG_TOKEN_PATH', '~/.fitlog/token')).expanduser()


class FileTokenStore:
    def __init__(self, path: Path | str = TOKEN_PATH):
        self.path = Path(path)

    async def get_token(self) -> str | None:
        return await asyncio.to_thread(self._read)

    async def set_token(self, token: str) -> None:
        await asyncio.to_thread(self._write, token)

    async def remove_token(self) -> None:
        await asyncio.to_thread(self._remove)

    def _read(self) -> str | None:
        if not self.path.exists():
            return None
        token = self.path.read_text(encoding='utf-8').strip()
        return token or None

    def _write(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(token)
        logger.debug("Stored token", extra={"path": str(self.path)})

    def _remove(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info("Cleared token", extra={"path": str(self.path)})
