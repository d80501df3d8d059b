"""Application settings loaded from the process environment.

``main.py`` calls ``load_dotenv()`` first, so a local ``.env`` file works too.

Environment variables:
- MONGO_URL (default mongodb://localhost:27017)
- MONGODB_DATABASE (default userDB)
- SESSION_SECRET (required): signs session cookies and OAuth state
- SESSION_COOKIE_NAME, SESSION_MAX_AGE, COOKIE_SECURE
- AUTH_STRATEGY: plaintext | hashed | federated (default federated)
- BCRYPT_ROUNDS (default 10)
- GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET
- FACEBOOK_APP_ID / FACEBOOK_APP_SECRET
- OAUTH_REDIRECT_BASE_URL (optional; else derived from the request URL)
"""

import os
from dataclasses import dataclass
from enum import Enum

from adapter.password.bcrypt_hasher import BCRYPT_ROUNDS


class AuthStrategy(str, Enum):
    PLAINTEXT = 'plaintext'
    HASHED = 'hashed'
    FEDERATED = 'federated'


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {'1', 'true', 'yes', 'y'}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    session_secret: str
    mongo_url: str = 'mongodb://localhost:27017'
    database_name: str = 'userDB'
    session_cookie_name: str = 'secrets_session'
    session_max_age: int = 24 * 60 * 60
    cookie_secure: bool = False
    auth_strategy: AuthStrategy = AuthStrategy.FEDERATED
    bcrypt_rounds: int = BCRYPT_ROUNDS
    google_client_id: str = ''
    google_client_secret: str = ''
    facebook_app_id: str = ''
    facebook_app_secret: str = ''
    oauth_redirect_base_url: str = ''

    @property
    def google_enabled(self) -> bool:
        return bool(self.google_client_id and self.google_client_secret)

    @property
    def facebook_enabled(self) -> bool:
        return bool(self.facebook_app_id and self.facebook_app_secret)

    @classmethod
    def from_env(cls) -> 'Settings':
        session_secret = os.getenv('SESSION_SECRET')
        if not session_secret:
            raise ValueError(
                "SESSION_SECRET environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        strategy = (os.getenv('AUTH_STRATEGY') or AuthStrategy.FEDERATED.value).strip().lower()
        try:
            auth_strategy = AuthStrategy(strategy)
        except ValueError:
            allowed = ", ".join(s.value for s in AuthStrategy)
            raise ValueError(f"AUTH_STRATEGY must be one of: {allowed}")

        return cls(
            session_secret=session_secret,
            mongo_url=os.getenv('MONGO_URL', cls.mongo_url),
            database_name=os.getenv('MONGODB_DATABASE', cls.database_name),
            session_cookie_name=os.getenv('SESSION_COOKIE_NAME', cls.session_cookie_name),
            session_max_age=_env_int('SESSION_MAX_AGE', cls.session_max_age),
            cookie_secure=_env_bool('COOKIE_SECURE'),
            auth_strategy=auth_strategy,
            bcrypt_rounds=_env_int('BCRYPT_ROUNDS', BCRYPT_ROUNDS),
            google_client_id=os.getenv('GOOGLE_CLIENT_ID', ''),
            google_client_secret=os.getenv('GOOGLE_CLIENT_SECRET', ''),
            facebook_app_id=os.getenv('FACEBOOK_APP_ID', ''),
            facebook_app_secret=os.getenv('FACEBOOK_APP_SECRET', ''),
            oauth_redirect_base_url=os.getenv('OAUTH_REDIRECT_BASE_URL', ''),
        )
