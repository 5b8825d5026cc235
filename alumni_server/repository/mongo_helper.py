import logging

from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from config import config

logger = logging.getLogger(__name__)


class MongoRepositorySingleton:
    _instance = None
    _db_instance = None

    @classmethod
    def get_db(cls):
        """Singleton utility to get the MongoDB database object.

        Uses MONGO_URI and MONGO_DB_NAME from config. For local development
        these default to mongodb://localhost:27017 and 'alumni_db'. In
        production MONGO_URI must be set via environment.
        """
        if cls._db_instance is not None:
            return cls._db_instance
        mongo_uri = config.MONGO_URI
        db_name = config.MONGO_DB_NAME
        logger.info("Connecting to MongoDB database '%s'", db_name)
        client = MongoClient(mongo_uri)
        cls._db_instance = client[db_name]
        return cls._db_instance

    @classmethod
    def get_collection(cls, collection_name, db=None):
        """
        Get a collection from the database, creating it if it does not exist.
        Logs creation and errors. Returns the collection object.
        """
        if db is None:
            db = cls.get_db()
        try:
            if collection_name not in db.list_collection_names():
                db.create_collection(collection_name)
                logger.info(f"Created '{collection_name}' collection in DB.")
        except PyMongoError as e:
            logger.warning(f"Error ensuring '{collection_name}' collection exists: {e}")
        return db[collection_name]

    @classmethod
    def get_instance(cls):
        """Repositories bound to the configured database, built once per process."""
        if cls._instance is None:
            cls._instance = Repositories(cls.get_db())
        return cls._instance


class Repositories:
    """All repositories for one database handle.

    create_app() builds one of these per application so tests can pass an
    in-memory database instead of the configured one.
    """

    def __init__(self, db):
        from alumni_server.repository.user_repository import UserRepository
        from alumni_server.repository.message_repository import MessageRepository
        from alumni_server.repository.post_repository import PostRepository
        from alumni_server.repository.feedback_repository import FeedbackRepository
        from alumni_server.repository.gallery_repository import GalleryRepository

        self.db = db
        self.user = UserRepository(db)
        self.message = MessageRepository(db)
        self.post = PostRepository(db)
        self.feedback = FeedbackRepository(db)
        self.gallery = GalleryRepository(db)
        # Ensure recommended indexes for performance
        try:
            self._ensure_indexes(db)
        except PyMongoError as e:
            logger.exception(f'Failed to ensure DB indexes: {e}')

    def _ensure_indexes(self, db):
        """Create indexes used by query paths (idempotent)."""
        db['users'].create_index([('email', ASCENDING)], unique=True, name='users_email')
        db['users'].create_index([('username', ASCENDING)], unique=True, name='users_username')
        # messages: pair history and per-user inbox scans
        db['messages'].create_index([('sender_id', ASCENDING), ('receiver_id', ASCENDING), ('created_at', ASCENDING)],
                                    name='messages_pair_created_at')
        db['messages'].create_index([('receiver_id', ASCENDING), ('read_at', ASCENDING)], name='messages_unread')
        db['posts'].create_index([('created_at', DESCENDING)], name='posts_created_at')
        db['reactions'].create_index([('user_id', ASCENDING), ('post_id', ASCENDING)], unique=True,
                                     name='reactions_user_post')
        db['comments'].create_index([('post_id', ASCENDING), ('created_at', DESCENDING)], name='comments_post_created_at')
        db['gallery_reactions'].create_index([('user_id', ASCENDING), ('gallery_id', ASCENDING)], unique=True,
                                             name='gallery_reactions_user_item')
        logger.debug('Ensured recommended DB indexes')
