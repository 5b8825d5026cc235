"""Messaging data models for direct (1-1) chat between alumni.

Collections:
- messages: Individual direct messages, read state tracked via read_at

Conversations are not stored; they are derived from the messages
collection per user (see conversations.py).
"""
from typing import Optional, Dict, Any
from datetime import datetime

from bson import ObjectId

from alumni_server.utils.time_utils import utc_now, to_iso
from alumni_server.utils.uploads import MediaAttachment


class Message:
    """Message document structure."""

    def __init__(
        self,
        sender_id: str,
        receiver_id: str,
        content: Optional[str] = None,
        media: Optional[MediaAttachment] = None,
        message_id: Optional[ObjectId] = None,
        created_at: Optional[datetime] = None,
        read_at: Optional[datetime] = None,
        sender_info: Optional[Dict[str, Any]] = None  # {name, username}, filled on reads
    ):
        self.message_id = message_id
        self.sender_id = str(sender_id)
        self.receiver_id = str(receiver_id)
        self.content = content
        self.media = media
        self.created_at = created_at or utc_now()
        self.read_at = read_at
        self.sender_info = sender_info

    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    def counterpart_of(self, user_id: str) -> str:
        return self.receiver_id if self.sender_id == str(user_id) else self.sender_id

    def to_dict(self) -> Dict[str, Any]:
        media = self.media.to_dict() if self.media else {'mediaUrl': None, 'mediaType': None, 'fileName': None}
        sender_info = self.sender_info or {}
        body = {
            'id': str(self.message_id) if self.message_id is not None else None,
            'senderId': self.sender_id,
            'receiverId': self.receiver_id,
            'content': self.content,
            'createdAt': to_iso(self.created_at),
            'readAt': to_iso(self.read_at),
            'senderName': sender_info.get('name'),
            'senderUsername': sender_info.get('username'),
        }
        body.update(media)
        return body

    def to_db_doc(self) -> Dict[str, Any]:
        doc = {
            'sender_id': self.sender_id,
            'receiver_id': self.receiver_id,
            'content': self.content,
            'media': self.media.to_db_doc() if self.media else None,
            'created_at': self.created_at,
            'read_at': self.read_at,
        }
        if self.message_id is not None:
            doc['_id'] = self.message_id
        return doc

    @classmethod
    def from_doc(cls, doc: Dict[str, Any], sender_info: Optional[Dict[str, Any]] = None) -> 'Message':
        return cls(
            message_id=doc.get('_id'),
            sender_id=doc.get('sender_id'),
            receiver_id=doc.get('receiver_id'),
            content=doc.get('content'),
            media=MediaAttachment.from_doc(doc.get('media')),
            created_at=doc.get('created_at'),
            read_at=doc.get('read_at'),
            sender_info=sender_info
        )
