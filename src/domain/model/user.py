from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a user.

    A user may hold a local password, one identity per federated provider,
    or any combination of them. ``secret`` holds at most one value.
    """
    id: str
    created_at: datetime
    updated_at: datetime
    username: str | None = None
    name: str | None = None
    email: str | None = None
    password: str | None = None
    google_id: str | None = None
    facebook_id: str | None = None
    secret: str | None = None
    last_login: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.username or self.email or self.id

    @property
    def has_secret(self) -> bool:
        return bool(self.secret)
