"""Event emitter for realtime messaging events.

Usage:
    emitter = EventEmitter(socketio)

    # Emit to every session of a user
    emitter.emit_to_user(user_id, EventEmitter.NEW_MESSAGE, data)

    # Emit to a pair's conversation room
    emitter.emit_to_room(room, EventEmitter.USER_TYPING, data, skip_sid=sid)

Delivery is at-most-once: offline users simply miss the event and a
failure to emit is logged, never raised.
"""
import logging
from typing import Any, Dict, Optional

from alumni_server.websocket.registry import identity_room

logger = logging.getLogger(__name__)


class EventEmitter:
    """Emits messaging events through one Socket.IO server."""

    # Server -> client events
    NEW_MESSAGE = 'new_message'
    USER_TYPING = 'user_typing'
    MESSAGES_READ = 'messages_read'

    def __init__(self, socketio=None):
        self.socketio = socketio

    def emit_to_room(self, room: str, event: str, data: Dict[str, Any], skip_sid: Optional[str] = None) -> bool:
        """Emit event to a room.

        Returns:
            True if the emit was handed to Socket.IO
        """
        if self.socketio is None:
            logger.warning("EVENT_EMITTER: Socket.IO not initialized, dropping %s for room %s", event, room)
            return False
        try:
            self.socketio.emit(event, data, to=room, skip_sid=skip_sid)
            logger.debug("EVENT_EMITTER: emitted %s to room %s", event, room)
            return True
        except Exception as e:
            logger.warning("EVENT_EMITTER: failed to emit %s to room %s: %s", event, room, e)
            return False

    def emit_to_user(self, user_id: str, event: str, data: Dict[str, Any]) -> bool:
        """Emit event to all connected sessions of a user via their identity room."""
        return self.emit_to_room(identity_room(user_id), event, data)
