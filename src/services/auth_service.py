"""Auth service: registration, local login and federated login.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to redirects.
"""

import logging

from domain.model.errors import AuthenticationError, DuplicateError, StoreError, ValidationError
from domain.model.identity import PROVIDER_FIELDS, FederatedProfile
from domain.model.user import User
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 254
# bcrypt only accepts up to 72 bytes of input
MAX_PASSWORD_BYTES = 72


def _validate_credentials(username: str, password: str) -> None:
    if not username:
        raise ValidationError("Username is required")
    if len(username) > MAX_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at most {MAX_USERNAME_LENGTH} characters")
    if not password:
        raise ValidationError("Password is required")
    if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


def register(repo: UserRepository, hasher: PasswordHasher, username: str, password: str) -> User:
    """Register a new local user.

    The password goes through ``hasher`` before it reaches the store; in the
    hashed strategies the plaintext is never persisted.

    Raises:
        ValidationError: empty or oversized username, empty or oversized password
        DuplicateError: username already registered
        StoreError: the store failed to create the record
    """
    username = (username or '').strip()
    _validate_credentials(username, password)

    if repo.get_by_username(username):
        raise DuplicateError("Username already registered")

    user = repo.create(username=username, password=hasher.hash(password))
    if not user:
        # A concurrent registration may have claimed the name first
        if repo.get_by_username(username):
            raise DuplicateError("Username already registered")
        raise StoreError("Failed to create user")

    logger.info("User registered", extra={"userId": user.id, "username": username})
    return user


def authenticate(repo: UserRepository, hasher: PasswordHasher, username: str, password: str) -> User:
    """Verify a login name and password.

    Raises:
        AuthenticationError: unknown user or wrong password (deliberately vague)
    """
    username = (username or '').strip()
    user = repo.get_by_username(username) if username else None
    if not user or not password or not hasher.verify(password, user.password):
        raise AuthenticationError("Invalid username or password")

    # Login succeeds even if the timestamp update fails
    repo.update_last_login(user.id)
    return user


def login_with_provider(repo: UserRepository, profile: FederatedProfile) -> User:
    """Resolve a federated profile to a local user, creating one on first login.

    Raises:
        ValidationError: unknown provider or empty provider id
        StoreError: the store failed to find or create the record
    """
    if profile.provider not in PROVIDER_FIELDS:
        raise ValidationError(f"Unsupported identity provider: {profile.provider}")
    if not profile.provider_id:
        raise ValidationError("Provider did not supply a user id")

    user = repo.find_or_create_by_provider(
        profile.provider,
        profile.provider_id,
        name=profile.name,
        email=profile.email,
    )
    if not user:
        raise StoreError("Failed to resolve federated user")

    repo.update_last_login(user.id)
    logger.info("Federated login", extra={"userId": user.id, "provider": profile.provider})
    return user
