"""MongoDB index management utilities.

Shared index creation with conflict resolution, used by each MongoXxxRepository.
"""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create index, replacing an existing one that conflicts with it.

    A conflict is either the same name with a different key spec, or the
    same key spec under a different name.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise
        return _replace_conflicting(collection, keys, name, **kwargs)


def _replace_conflicting(collection, keys: list, name: str, **kwargs) -> bool:
    wanted = dict(keys)

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue

        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == wanted
        if same_name or same_keys:
            logger.warning(f"Dropping conflicting index: {idx_name}")
            collection.drop_index(idx_name)
            collection.create_index(keys, name=name, **kwargs)
            logger.info(f"Recreated index: {name}")
            return True

    logger.error(f"Failed to resolve index conflict for {name}")
    return False


def ensure_all_indexes(db: Database) -> bool:
    """Ensure indexes for the users and sessions collections. Called at startup."""
    from adapter.mongodb.session_repository import MongoSessionRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoSessionRepository(db).ensure_indexes(),
    ]
    return all(results)
