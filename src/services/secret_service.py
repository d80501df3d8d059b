"""Secret service: submit and list user secrets."""

import logging

from domain.model.errors import StoreError, ValidationError
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

MAX_SECRET_LENGTH = 5000


def submit_secret(repo: UserRepository, user: User, text: str) -> User:
    """Overwrite ``user``'s secret with ``text``.

    Raises:
        ValidationError: empty or oversized secret
        StoreError: the user record could not be saved
    """
    text = (text or '').strip()
    if not text:
        raise ValidationError("Secret must not be empty")
    if len(text) > MAX_SECRET_LENGTH:
        raise ValidationError(f"Secret must be at most {MAX_SECRET_LENGTH} characters")

    user.secret = text
    if not repo.save(user):
        raise StoreError("Failed to save secret")

    logger.info("Secret submitted", extra={"userId": user.id})
    return user


def list_secrets(repo: UserRepository) -> list[str]:
    """Return every stored secret, most recently submitted first."""
    return [user.secret for user in repo.list_with_secrets() if user.has_secret]
