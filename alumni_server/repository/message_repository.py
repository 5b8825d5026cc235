"""Direct message repository.

Messages are stored with string sender_id/receiver_id and a nullable
read_at. Besides plain inserts and pair history this exposes the two
grouped queries the inbox view is built from.
"""
import logging
from typing import Dict, Any, List

from pymongo import ASCENDING, DESCENDING

from alumni_server.repository.base_repository import BaseRepository, storage_guard
from alumni_server.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


class MessageRepository(BaseRepository):
    """Repository for direct messages."""

    def __init__(self, db, collection_name="messages"):
        super().__init__(db, collection_name)

    @staticmethod
    def _pair_query(user_a: str, user_b: str) -> Dict[str, Any]:
        return {'$or': [
            {'sender_id': user_a, 'receiver_id': user_b},
            {'sender_id': user_b, 'receiver_id': user_a},
        ]}

    def list_between(self, user_a: str, user_b: str) -> List[Dict]:
        """All messages exchanged by the pair, oldest first."""
        return self.find(self._pair_query(user_a, user_b),
                         sort=[('created_at', ASCENDING), ('_id', ASCENDING)])

    @storage_guard
    def mark_read(self, user_id: str, counterpart_id: str) -> int:
        """Stamp read_at on unread messages the counterpart sent to user_id.

        Only documents whose read_at is still null are touched, so a
        message is counted by exactly one caller.
        """
        result = self.collection.update_many(
            {'sender_id': counterpart_id, 'receiver_id': user_id, 'read_at': None},
            {'$set': {'read_at': utc_now()}},
        )
        return result.modified_count

    @storage_guard
    def latest_message_ids_by_counterpart(self, user_id: str) -> Dict[str, Any]:
        """Map counterpart id -> _id of the newest message exchanged with them."""
        pipeline = [
            {'$match': {'$or': [{'sender_id': user_id}, {'receiver_id': user_id}]}},
            {'$sort': {'created_at': DESCENDING, '_id': DESCENDING}},
            {'$group': {
                '_id': {'$cond': [{'$eq': ['$sender_id', user_id]}, '$receiver_id', '$sender_id']},
                'last_message_id': {'$first': '$_id'},
            }},
        ]
        return {row['_id']: row['last_message_id'] for row in self.collection.aggregate(pipeline)}

    @storage_guard
    def unread_counts_by_sender(self, user_id: str) -> Dict[str, int]:
        """Map sender id -> number of unread messages addressed to user_id."""
        pipeline = [
            {'$match': {'receiver_id': user_id, 'read_at': None}},
            {'$group': {'_id': '$sender_id', 'count': {'$sum': 1}}},
        ]
        return {row['_id']: row['count'] for row in self.collection.aggregate(pipeline)}
