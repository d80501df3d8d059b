"""Application context: everything the handlers need, built once at startup.

The context is attached to ``app.state.context`` and reached through the
dependencies in ``api.dependencies``; nothing here is a module global.
"""

import logging
from dataclasses import dataclass, field

from pymongo import MongoClient

from adapter.mongodb.connection import connect
from adapter.mongodb.indexes import ensure_all_indexes
from adapter.mongodb.session_repository import MongoSessionRepository
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.oauth.facebook import FacebookIdentityProvider
from adapter.oauth.google import GoogleIdentityProvider
from adapter.password.bcrypt_hasher import BcryptPasswordHasher
from adapter.password.plaintext import PlaintextPasswordHasher
from api.config import AuthStrategy, Settings
from port.identity_provider import IdentityProvider
from port.password_hasher import PasswordHasher
from port.session_repository import SessionRepository
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    users: UserRepository
    sessions: SessionRepository
    hasher: PasswordHasher
    providers: dict[str, IdentityProvider] = field(default_factory=dict)
    mongo_client: MongoClient | None = None

    def close(self) -> None:
        if self.mongo_client is not None:
            self.mongo_client.close()
            self.mongo_client = None


def build_hasher(settings: Settings) -> PasswordHasher:
    if settings.auth_strategy is AuthStrategy.PLAINTEXT:
        logger.warning("AUTH_STRATEGY=plaintext stores passwords unhashed")
        return PlaintextPasswordHasher()
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)


def build_providers(settings: Settings) -> dict[str, IdentityProvider]:
    """Identity providers enabled for this run, keyed by provider name."""
    if settings.auth_strategy is not AuthStrategy.FEDERATED:
        return {}

    providers: dict[str, IdentityProvider] = {}
    if settings.google_enabled:
        providers['google'] = GoogleIdentityProvider(
            settings.google_client_id, settings.google_client_secret,
        )
    if settings.facebook_enabled:
        providers['facebook'] = FacebookIdentityProvider(
            settings.facebook_app_id, settings.facebook_app_secret,
        )

    if not providers:
        logger.warning("Federated strategy selected but no provider credentials are configured")
    else:
        logger.info("Federated login enabled", extra={"providers": sorted(providers)})
    return providers


def build_context(settings: Settings) -> AppContext | None:
    """Connect to MongoDB and wire the production adapters.

    Returns None when the database is unreachable.
    """
    client = connect(settings.mongo_url, settings.database_name)
    if client is None:
        return None

    db = client[settings.database_name]
    if ensure_all_indexes(db):
        logger.info("MongoDB indexes verified/created successfully")
    else:
        logger.warning("Failed to create some MongoDB indexes")

    return AppContext(
        settings=settings,
        users=MongoUserRepository(db),
        sessions=MongoSessionRepository(db),
        hasher=build_hasher(settings),
        providers=build_providers(settings),
        mongo_client=client,
    )
