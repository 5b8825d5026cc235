from pymongo import DESCENDING

from alumni_server.repository.base_repository import BaseRepository


class FeedbackRepository(BaseRepository):
    def __init__(self, db, collection_name="feedback"):
        super().__init__(db, collection_name)

    def list_visible(self):
        """Public and anonymous feedback, newest first. Private entries stay hidden."""
        return self.find({'type': {'$in': ['public', 'anonymous']}},
                         sort=[('created_at', DESCENDING), ('_id', DESCENDING)])
