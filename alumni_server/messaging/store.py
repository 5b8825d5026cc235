"""Durable record of direct messages and their read state."""
import logging
from typing import Optional, List

from alumni_server.dto.user_dto import UserDTO
from alumni_server.exception import ValidationError, NotFoundError
from alumni_server.messaging.models import Message
from alumni_server.utils.generator import parse_object_id
from alumni_server.utils.uploads import MediaAttachment

logger = logging.getLogger(__name__)


class MessageStore:

    def __init__(self, message_repo, user_repo):
        self.messages = message_repo
        self.users = user_repo

    def _require_user(self, user_id, label):
        oid = parse_object_id(user_id)
        user = self.users.get_by_id(oid) if oid else None
        if not user:
            raise NotFoundError(f'{label} not found')
        return user

    def create(self, sender_id: str, receiver_id: str, content: Optional[str] = None,
               media: Optional[MediaAttachment] = None) -> Message:
        """Persist a message and return it with the sender's display fields.

        Either content or media must be present. Both parties must exist.
        """
        if not receiver_id:
            raise ValidationError('receiverId is required', errors={'receiverId': 'receiverId is required'})
        if content is not None and not isinstance(content, str):
            raise ValidationError('Invalid message content', errors={'content': 'content must be a string'})
        if content is not None:
            content = content.strip() or None
        if content is None and media is None:
            raise ValidationError('Message content or media is required')

        sender = self._require_user(sender_id, 'Sender')
        self._require_user(receiver_id, 'Receiver')

        message = Message(sender_id=str(sender['_id']), receiver_id=str(receiver_id), content=content, media=media)
        message.message_id = self.messages.create(message.to_db_doc())
        message.sender_info = UserDTO.from_doc(sender).to_sender_info()
        logger.info("Stored message %s from %s to %s", message.message_id, message.sender_id, message.receiver_id)
        return message

    def list_between(self, user_a: str, user_b: str) -> List[Message]:
        """Messages in both directions between the pair, oldest first."""
        docs = self.messages.list_between(str(user_a), str(user_b))
        user_ids = {parse_object_id(uid) for uid in (user_a, user_b)}
        users = self.users.find_by_ids(uid for uid in user_ids if uid is not None)
        senders = {str(uid): UserDTO.from_doc(doc).to_sender_info() for uid, doc in users.items()}
        return [Message.from_doc(doc, sender_info=senders.get(doc['sender_id'])) for doc in docs]

    def mark_read(self, user_id: str, counterpart_id: str) -> int:
        """Transition the counterpart's unread messages to read; returns how many changed."""
        count = self.messages.mark_read(str(user_id), str(counterpart_id))
        logger.debug("Marked %d message(s) from %s to %s as read", count, counterpart_id, user_id)
        return count
