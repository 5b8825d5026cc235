"""Messaging service layer.

Coordinates the message store, the inbox aggregator and the realtime
notifier. Persistence always happens first; realtime delivery is
best-effort and never fails a request.
"""
import logging
from typing import Optional, Dict, Any, List

from alumni_server.exception import NotFoundError
from alumni_server.messaging.conversations import ConversationAggregator
from alumni_server.messaging.models import Message
from alumni_server.messaging.store import MessageStore
from alumni_server.utils.generator import parse_object_id
from alumni_server.utils.uploads import MediaAttachment

logger = logging.getLogger(__name__)


class MessagingService:
    """High-level messaging service."""

    def __init__(self, repositories, notifier=None):
        self.store = MessageStore(repositories.message, repositories.user)
        self.aggregator = ConversationAggregator(repositories.message, repositories.user)
        self.users = repositories.user
        self.notifier = notifier

    def send_message(self, sender_id: str, receiver_id: str, content: Optional[str] = None,
                     media: Optional[MediaAttachment] = None) -> Message:
        message = self.store.create(sender_id, receiver_id, content=content, media=media)
        if self.notifier is not None:
            self.notifier.notify_new_message(message)
        return message

    def _require_counterpart(self, counterpart_id: str):
        oid = parse_object_id(counterpart_id)
        if oid is None or self.users.get_by_id(oid) is None:
            raise NotFoundError('User not found')

    def messages_between(self, user_id: str, other_user_id: str) -> List[Dict[str, Any]]:
        self._require_counterpart(other_user_id)
        return [m.to_dict() for m in self.store.list_between(user_id, other_user_id)]

    def conversations(self, user_id: str) -> List[Dict[str, Any]]:
        return self.aggregator.conversations(user_id)

    def mark_read(self, user_id: str, counterpart_id: str) -> int:
        self._require_counterpart(counterpart_id)
        count = self.store.mark_read(user_id, counterpart_id)
        if count and self.notifier is not None:
            self.notifier.notify_read(user_id, counterpart_id, count)
        return count
