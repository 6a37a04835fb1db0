"""In-memory implementation of TokenStore for testing."""


class FakeTokenStore:
    def __init__(self, token: str | None = None):
        self.token = token

    async def get_token(self) -> str | None:
        return self.token

    async def set_token(self, token: str) -> None:
        self.token = token

    async def remove_token(self) -> None:
        self.token = None
