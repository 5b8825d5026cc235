"""Direct messaging between alumni.

This module provides:
- Message model and the message store
- Inbox aggregation (one entry per counterpart)
- MessagingService tying persistence to realtime delivery
"""

from alumni_server.messaging.models import Message
from alumni_server.messaging.store import MessageStore
from alumni_server.messaging.conversations import ConversationAggregator
from alumni_server.messaging.service import MessagingService

__all__ = ['Message', 'MessageStore', 'ConversationAggregator', 'MessagingService']
