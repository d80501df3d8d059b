"""MongoDB implementation of SessionRepository."""

from logging import getLogger
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb.connection import SESSIONS_COLLECTION_NAME
from domain.model.session import Session

logger = getLogger(__name__)


class MongoSessionRepository:
    def __init__(self, db: Database):
        self.collection = db[SESSIONS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for sessions collection.

        The TTL index lets MongoDB purge sessions once ``expires_at`` passes.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('expires_at', 1)], 'idx_sessions_ttl', expireAfterSeconds=0)
            create_index_safe(self.collection, [('user_id', 1)], 'idx_sessions_user_id')
            return True
        except Exception as e:
            logger.error("Failed to create sessions indexes", extra={"error": str(e)})
            return False

    def create(self, session: Session) -> bool:
        try:
            self.collection.insert_one({
                '_id': session.token,
                'user_id': session.user_id,
                'created_at': session.created_at,
                'expires_at': session.expires_at,
            })
            return True
        except PyMongoError as e:
            logger.error("Failed to create session", extra={"userId": session.user_id, "error": str(e)})
            return False

    def get(self, token: str) -> Session | None:
        try:
            doc = self.collection.find_one({'_id': token})
        except PyMongoError as e:
            logger.error("Failed to load session", extra={"error": str(e)})
            return None
        if not doc:
            return None
        return Session(
            token=doc['_id'],
            user_id=doc['user_id'],
            created_at=doc['created_at'],
            expires_at=doc['expires_at'],
        )

    def delete(self, token: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': token})
            return result.deleted_count > 0
        except PyMongoError as e:
            logger.error("Failed to delete session", extra={"error": str(e)})
            return False
