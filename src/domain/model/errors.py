"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them, log them and redirect back to the relevant form.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class AuthenticationError(DomainError):
    """Credentials could not be verified."""


class StoreError(DomainError):
    """The user or session store failed to complete an operation."""


class ProviderError(DomainError):
    """An external identity provider rejected or failed the OAuth handshake."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")
