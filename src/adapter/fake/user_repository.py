"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.user import User, UserAccount


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, UserAccount] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, name: str) -> UserAccount | None:
        if any(a.email == email for a in self.store.values()):
            return None

        user_id = f"user-{uuid.uuid4().hex}"
        now = datetime.now(timezone.utc)

        account = UserAccount(
            user=User(id=user_id, name=name, email=email),
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.store[user_id] = account
        return account

    def update_profile(self, user_id: str, changes: dict) -> UserAccount | None:
        account = self.store.get(user_id)
        if not account:
            return None

        account = replace(
            account,
            user=account.user.merged(changes),
            updated_at=datetime.now(timezone.utc),
        )
        self.store[user_id] = account
        return account

    def update_last_login(self, user_id: str) -> bool:
        account = self.store.get(user_id)
        if not account:
            return False

        now = datetime.now(timezone.utc)
        account.last_login = now
        account.updated_at = now
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> UserAccount | None:
        for account in self.store.values():
            if account.email == email:
                return account
        return None
