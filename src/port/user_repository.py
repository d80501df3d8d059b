from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, username: str, password: str, name: str | None = None) -> User | None:
        """Create a new local user. Return User or None if creation failed."""
        ...

    def get_by_username(self, username: str) -> User | None:
        """Find a user by login name. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def find_or_create_by_provider(
        self,
        provider: str,
        provider_id: str,
        name: str | None = None,
        email: str | None = None,
    ) -> User | None:
        """Return the user holding this provider identity, creating it if absent."""
        ...

    def save(self, user: User) -> bool:
        """Persist mutable fields of an existing user. Return True if it was found."""
        ...

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        ...

    def list_with_secrets(self) -> list[User]:
        """Return every user whose secret is non-empty."""
        ...
