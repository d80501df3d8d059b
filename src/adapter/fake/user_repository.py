"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone
from domain.model.identity import provider_field
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(self, username: str, password: str, name: str | None = None) -> User | None:
        if self.get_by_username(username):
            return None

        now = datetime.now(timezone.utc)
        user = User(
            id=uuid.uuid4().hex,
            created_at=now,
            updated_at=now,
            username=username,
            name=name or username,
            password=password,
        )
        self.store[user.id] = user
        return user

    def find_or_create_by_provider(
        self,
        provider: str,
        provider_id: str,
        name: str | None = None,
        email: str | None = None,
    ) -> User | None:
        field = provider_field(provider)
        for user in self.store.values():
            if getattr(user, field) == provider_id:
                return user

        now = datetime.now(timezone.utc)
        user = User(id=uuid.uuid4().hex, created_at=now, updated_at=now, name=name, email=email)
        setattr(user, field, provider_id)
        self.store[user.id] = user
        return user

    def save(self, user: User) -> bool:
        if user.id not in self.store:
            return False
        user.updated_at = datetime.now(timezone.utc)
        self.store[user.id] = user
        return True

    def update_last_login(self, user_id: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        user.last_login = datetime.now(timezone.utc)
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_username(self, username: str) -> User | None:
        for user in self.store.values():
            if user.username == username:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

    def list_with_secrets(self) -> list[User]:
        users = [u for u in self.store.values() if u.secret]
        return sorted(users, key=lambda u: u.updated_at, reverse=True)
