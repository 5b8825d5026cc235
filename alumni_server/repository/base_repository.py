import functools
import logging

from pymongo.errors import PyMongoError

from alumni_server.exception.StorageError import StorageError

logger = logging.getLogger(__name__)


def storage_guard(func):
    """Re-raise driver failures as StorageError so routes answer 500."""
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except PyMongoError as e:
            logger.error("%s.%s failed on '%s': %s",
                         type(self).__name__, func.__name__, self.collection_name, e)
            raise StorageError(f"Database operation failed on '{self.collection_name}'", cause=e) from e
    return wrapper


class BaseRepository:
    """Thin wrapper over one MongoDB collection.

    Subclasses add the query helpers their service needs; every method
    that touches the driver is wrapped with storage_guard.
    """

    def __init__(self, db, collection_name):
        from alumni_server.repository.mongo_helper import MongoRepositorySingleton
        self.collection_name = collection_name
        self.collection = MongoRepositorySingleton.get_collection(collection_name, db)
        logger.debug("Initialized repository for collection '%s'", collection_name)

    @storage_guard
    def create(self, data):
        """Insert a new document into the collection and return its _id."""
        return self.collection.insert_one(data).inserted_id

    @storage_guard
    def find(self, query=None, sort=None, limit=0):
        """Find multiple documents matching the query."""
        cursor = self.collection.find(query or {})
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    @storage_guard
    def find_one(self, query):
        """Find a single document matching the query."""
        return self.collection.find_one(query)

    @storage_guard
    def find_by_ids(self, ids):
        """Fetch many documents with one $in query, keyed by _id."""
        ids = list(ids)
        if not ids:
            return {}
        return {doc['_id']: doc for doc in self.collection.find({'_id': {'$in': ids}})}

    @storage_guard
    def update(self, query, update_fields, multi=False):
        """Update documents matching the query with the given fields."""
        if multi:
            return self.collection.update_many(query, {'$set': update_fields}).modified_count
        return self.collection.update_one(query, {'$set': update_fields}).modified_count

    @storage_guard
    def delete(self, query, multi=False):
        """Delete documents matching the query."""
        if multi:
            return self.collection.delete_many(query).deleted_count
        return self.collection.delete_one(query).deleted_count
