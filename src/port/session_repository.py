from typing import Protocol
from domain.model.session import Session


class SessionRepository(Protocol):
    """Protocol for the server-side session store."""
    def create(self, session: Session) -> bool:
        """Persist a new session. Return True if stored."""
        ...

    def get(self, token: str) -> Session | None:
        """Find a session by token. Expired sessions may still be returned."""
        ...

    def delete(self, token: str) -> bool:
        """Remove a session. Return True if one was removed."""
        ...
