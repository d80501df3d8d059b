"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.identity import PROVIDER_FIELDS, provider_field
from domain.model.user import User

logger = getLogger(__name__)


def _present(field: str) -> dict:
    # Unique indexes only cover documents where the field holds a string,
    # so local users without provider ids (and vice versa) never collide.
    return {'partialFilterExpression': {field: {'$type': 'string'}}}


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(
                self.collection, [('username', 1)], 'idx_users_username',
                unique=True, **_present('username'),
            )
            for field in PROVIDER_FIELDS.values():
                create_index_safe(
                    self.collection, [(field, 1)], f'idx_users_{field}',
                    unique=True, **_present(field),
                )
            create_index_safe(self.collection, [('secret', 1)], 'idx_users_secret', sparse=True)
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            username=doc.get('username'),
            name=doc.get('name'),
            email=doc.get('email'),
            password=doc.get('password'),
            google_id=doc.get('google_id'),
            facebook_id=doc.get('facebook_id'),
            secret=doc.get('secret'),
            last_login=doc.get('last_login'),
        )

    # ── write operations ─────────────────────────────────────

    def create(self, username: str, password: str, name: str | None = None) -> User | None:
        """Create a new local user and return the User object."""
        try:
            user_id = uuid.uuid4().hex
            now = datetime.now(timezone.utc)
            user_doc = {
                '_id': user_id,
                'username': username,
                'password': password,
                'name': name or username,
                'created_at': now,
                'updated_at': now,
            }
            self.collection.insert_one(user_doc)

            logger.info("User created", extra={"userId": user_id, "username": username})
            return self._to_domain(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: username already exists", extra={"username": username})
            return None
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"username": username, "error": str(e)})
            return None

    def find_or_create_by_provider(
        self,
        provider: str,
        provider_id: str,
        name: str | None = None,
        email: str | None = None,
    ) -> User | None:
        """Atomically return or insert the user holding this provider identity.

        Runs as a single upsert so concurrent callbacks for the same identity
        converge on one document. A losing racer hits the unique index and
        re-reads the winner's document.
        """
        field = provider_field(provider)
        now = datetime.now(timezone.utc)
        on_insert = {
            '_id': uuid.uuid4().hex,
            'name': name,
            'created_at': now,
            'updated_at': now,
        }
        if email:
            on_insert['email'] = email

        try:
            doc = self.collection.find_one_and_update(
                {field: provider_id},
                {'$setOnInsert': on_insert},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
            return self._to_domain(doc)
        except DuplicateKeyError:
            doc = self.collection.find_one({field: provider_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to find or create federated user", extra={
                "provider": provider, "error": str(e),
            })
            return None

    def save(self, user: User) -> bool:
        """Persist the mutable fields of an existing user."""
        try:
            user.updated_at = datetime.now(timezone.utc)
            result = self.collection.update_one(
                {'_id': user.id},
                {'$set': {
                    'name': user.name,
                    'email': user.email,
                    'password': user.password,
                    'secret': user.secret,
                    'updated_at': user.updated_at,
                }},
            )
            return result.matched_count > 0
        except PyMongoError as e:
            logger.error("Failed to save user", extra={"userId": user.id, "error": str(e)})
            return False

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        try:
            now = datetime.now(timezone.utc)
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': now}}
            )
            return result.modified_count > 0
        except PyMongoError as e:
            logger.error("Failed to update last_login", extra={"userId": user_id, "error": str(e)})
            return False

    # ── read operations ──────────────────────────────────────

    def get_by_username(self, username: str) -> User | None:
        try:
            doc = self.collection.find_one({'username': username})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by username", extra={"username": username, "error": str(e)})
            return None

    def get_by_id(self, user_id: str) -> User | None:
        try:
            doc = self.collection.find_one({'_id': user_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            return None

    def list_with_secrets(self) -> list[User]:
        try:
            cursor = self.collection.find({'secret': {'$nin': [None, '']}}).sort('updated_at', -1)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list secrets", extra={"error": str(e)})
            return []
