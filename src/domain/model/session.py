from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass
class Session:
    """Server-side session referencing an authenticated user."""
    token: str
    user_id: str
    created_at: datetime
    expires_at: datetime

    @classmethod
    def create(cls, token: str, user_id: str, max_age_seconds: int) -> 'Session':
        now = datetime.now(timezone.utc)
        return cls(
            token=token,
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(seconds=max_age_seconds),
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at
