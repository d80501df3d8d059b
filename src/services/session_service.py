"""Session service: server-side sessions referenced by a signed cookie.

The cookie carries only an opaque random token, signed with itsdangerous so
tampered values are rejected before the store is consulted. The session
record itself (user id, expiry) lives in the SessionRepository.
"""

import logging
import secrets

from itsdangerous import BadSignature, URLSafeTimedSerializer

from domain.model.errors import StoreError
from domain.model.session import Session
from port.session_repository import SessionRepository

logger = logging.getLogger(__name__)

SESSION_COOKIE_SALT = "secrets-app.session"


def _serializer(secret_key: str) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key=secret_key, salt=SESSION_COOKIE_SALT)


def sign_token(secret_key: str, token: str) -> str:
    return _serializer(secret_key).dumps(token)


def unsign_token(secret_key: str, value: str | None, max_age: int) -> str | None:
    """Return the session token inside a cookie value, or None if invalid or stale."""
    if not value:
        return None
    try:
        token = _serializer(secret_key).loads(value, max_age=max_age)
    except BadSignature:
        # SignatureExpired is a BadSignature subclass
        return None
    return token if isinstance(token, str) and token else None


def start_session(repo: SessionRepository, user_id: str, max_age: int) -> Session:
    """Create a session for ``user_id``.

    Raises:
        StoreError: the session could not be persisted
    """
    session = Session.create(secrets.token_urlsafe(32), user_id, max_age)
    if not repo.create(session):
        raise StoreError("Failed to create session")
    logger.debug("Session started", extra={"userId": user_id})
    return session


def resolve_user_id(repo: SessionRepository, token: str | None) -> str | None:
    """Return the user id for a live session, dropping it if expired."""
    if not token:
        return None
    session = repo.get(token)
    if session is None:
        return None
    if session.is_expired():
        repo.delete(token)
        return None
    return session.user_id


def end_session(repo: SessionRepository, token: str | None) -> None:
    if token and repo.delete(token):
        logger.debug("Session ended")
