"""OAuth state / CSRF protection.

The state parameter is a signed, expiring payload naming the provider the
handshake was started for, so a callback can't be forged or replayed
against another provider.
"""

import secrets

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from domain.model.errors import ValidationError

OAUTH_STATE_SALT = "secrets-app.oauth-state"
STATE_MAX_AGE_SECONDS = 10 * 60


def _serializer(secret_key: str) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key=secret_key, salt=OAUTH_STATE_SALT)


def create_state(secret_key: str, provider: str) -> str:
    return _serializer(secret_key).dumps({
        "provider": provider,
        "nonce": secrets.token_urlsafe(16),
    })


def validate_state(
    secret_key: str,
    state: str | None,
    provider: str,
    max_age_seconds: int = STATE_MAX_AGE_SECONDS,
) -> None:
    """Raise ValidationError unless ``state`` was issued for ``provider`` and is fresh."""
    if not state:
        raise ValidationError("Missing OAuth state")
    try:
        data = _serializer(secret_key).loads(state, max_age=max_age_seconds)
    except SignatureExpired:
        raise ValidationError("OAuth state expired")
    except BadSignature:
        raise ValidationError("Invalid OAuth state")
    if not isinstance(data, dict) or data.get("provider") != provider:
        raise ValidationError("OAuth state was issued for another provider")
