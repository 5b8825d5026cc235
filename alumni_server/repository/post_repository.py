"""Community feed repository: posts with their reactions and comments.

Reactions and comments live in their own collections keyed by post_id so
that listing the feed needs one $in query per child collection.
"""
from collections import defaultdict

from pymongo import ASCENDING, DESCENDING

from alumni_server.repository.base_repository import BaseRepository, storage_guard
from alumni_server.utils.time_utils import utc_now


class PostRepository(BaseRepository):
    def __init__(self, db, collection_name="posts"):
        super().__init__(db, collection_name)
        from alumni_server.repository.mongo_helper import MongoRepositorySingleton
        self.reactions = MongoRepositorySingleton.get_collection('reactions', db)
        self.comments = MongoRepositorySingleton.get_collection('comments', db)

    def list_posts(self):
        return self.find({}, sort=[('created_at', DESCENDING), ('_id', DESCENDING)])

    def get(self, post_id):
        return self.find_one({'_id': post_id})

    @storage_guard
    def reactions_for(self, post_ids):
        grouped = defaultdict(list)
        for doc in self.reactions.find({'post_id': {'$in': list(post_ids)}}).sort('created_at', ASCENDING):
            grouped[doc['post_id']].append(doc)
        return grouped

    @storage_guard
    def comments_for(self, post_ids):
        """Comments grouped per post, newest first."""
        grouped = defaultdict(list)
        cursor = self.comments.find({'post_id': {'$in': list(post_ids)}}).sort(
            [('created_at', DESCENDING), ('_id', DESCENDING)])
        for doc in cursor:
            grouped[doc['post_id']].append(doc)
        return grouped

    @storage_guard
    def set_reaction(self, user_id, post_id, reaction_type):
        """One reaction per user and post; a new one replaces the old."""
        self.reactions.delete_many({'user_id': user_id, 'post_id': post_id})
        doc = {'user_id': user_id, 'post_id': post_id, 'type': reaction_type, 'created_at': utc_now()}
        doc['_id'] = self.reactions.insert_one(doc).inserted_id
        return doc

    @storage_guard
    def remove_reaction(self, user_id, post_id):
        return self.reactions.delete_many({'user_id': user_id, 'post_id': post_id}).deleted_count

    @storage_guard
    def add_comment(self, user_id, post_id, content):
        doc = {'user_id': user_id, 'post_id': post_id, 'content': content, 'created_at': utc_now()}
        doc['_id'] = self.comments.insert_one(doc).inserted_id
        return doc
