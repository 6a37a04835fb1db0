"""Port for the single persisted authentication token slot."""

from typing import Protocol


class TokenStore(Protocol):
    """One durable string slot that survives process restarts."""

    async def get_token(self) -> str | None:
        """Return the stored token, or None when the slot is empty."""
        ...

    async def set_token(self, token: str) -> None:
        """Overwrite the slot with *token*."""
        ...

    async def remove_token(self) -> None:
        """Empty the slot. Removing an empty slot is a no-op."""
        ...
