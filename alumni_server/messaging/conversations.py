"""Inbox view derived from the messages collection.

There is no conversations collection. For a user the inbox holds one
entry per counterpart ever messaged, built from a fixed number of
queries regardless of how many counterparts there are:

1. newest message id per counterpart (grouped aggregation)
2. unread count per sender addressed to the user (grouped aggregation)
3. one $in fetch for those messages and one for the counterpart profiles

Entries are ordered by last message time descending. Ties break on
message id descending, then counterpart id, so repeated reads return
the same order.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List

from alumni_server.dto.user_dto import UserDTO
from alumni_server.messaging.models import Message
from alumni_server.utils.generator import parse_object_id

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1)


class ConversationAggregator:

    def __init__(self, message_repo, user_repo):
        self.messages = message_repo
        self.users = user_repo

    def conversations(self, user_id: str) -> List[Dict[str, Any]]:
        user_id = str(user_id)
        last_ids = self.messages.latest_message_ids_by_counterpart(user_id)
        if not last_ids:
            return []
        unread = self.messages.unread_counts_by_sender(user_id)
        last_messages = self.messages.find_by_ids(last_ids.values())

        counterpart_oids = {cid: parse_object_id(cid) for cid in last_ids}
        wanted = {oid for oid in counterpart_oids.values() if oid is not None}
        own_oid = parse_object_id(user_id)
        if own_oid is not None:
            wanted.add(own_oid)
        # the user's own record supplies sender fields for messages they sent
        profiles = self.users.find_by_ids(wanted)

        entries = []
        for counterpart_id, message_id in last_ids.items():
            profile = profiles.get(counterpart_oids[counterpart_id])
            if profile is None:
                logger.debug("Skipping conversation with missing user %s", counterpart_id)
                continue
            counterpart = UserDTO.from_doc(profile)
            last_doc = last_messages.get(message_id)
            last_message = None
            if last_doc is not None:
                sender = UserDTO.from_doc(profiles.get(parse_object_id(last_doc['sender_id'])))
                last_message = Message.from_doc(last_doc, sender_info=sender.to_sender_info() if sender else None)
            entries.append((counterpart_id, last_message, {
                'userId': counterpart_id,
                'user': counterpart.to_summary(),
                'lastMessage': last_message.to_dict() if last_message else None,
                'unreadCount': unread.get(counterpart_id, 0),
            }))

        entries.sort(key=lambda e: e[0])
        entries.sort(key=_recency, reverse=True)
        return [entry for _, _, entry in entries]


def _recency(entry):
    _, last_message, _ = entry
    if last_message is None:
        return EPOCH, ''
    return last_message.created_at or EPOCH, str(last_message.message_id)
