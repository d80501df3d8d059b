import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo logs
logging.getLogger('pymongo').setLevel(logging.WARNING)

USERS_COLLECTION_NAME = 'users'
SESSIONS_COLLECTION_NAME = 'sessions'


def connect(mongo_url: str, database_name: str) -> MongoClient | None:
    """Open a MongoDB client and verify it with a ping.

    The client is owned by the caller (the application context) and
    closed on shutdown.

    Returns:
        MongoDB client or None if connection fails
    """
    if not mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        return None

    try:
        client = MongoClient(
            mongo_url,
            serverSelectionTimeoutMS=5000,  # 5s timeout for server selection
            connectTimeoutMS=5000,  # 5s timeout for initial connection
            socketTimeoutMS=30000,  # 30s timeout for operations
            maxPoolSize=10,
            minPoolSize=0,
            retryWrites=True,
            retryReads=True,
            tz_aware=True,  # session expiry is compared against aware UTC datetimes
        )
        client.admin.command('ping')
        logger.info(f"[MONGODB] Connected successfully to {database_name}")
        return client
    except (ConnectionFailure, PyMongoError) as e:
        logger.error(f"[MONGODB] Connection failed: {str(e)[:200]}")
        return None


def ping(client: MongoClient | None) -> bool:
    """Return True if the client can reach the server."""
    if client is None:
        return False
    try:
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False
