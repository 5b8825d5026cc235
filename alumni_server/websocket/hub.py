"""Realtime notifier for direct messaging.

Authenticated Socket.IO sessions join their identity room on connect.
New messages fan out to the sender's and receiver's identity rooms.
Typing pings go to the pair's conversation room only, so just the
sessions that joined that conversation see them.
"""
import logging
from typing import Optional

from flask import Flask, request
from flask_socketio import SocketIO, ConnectionRefusedError, join_room, leave_room

from alumni_server.exception.UnauthorizedError import UnauthorizedError
from alumni_server.messaging.models import Message
from alumni_server.security.authentication import AuthSecurity, extract_bearer_token
from alumni_server.websocket.event_emitter import EventEmitter
from alumni_server.websocket.registry import ConnectionRegistry, identity_room, conversation_room

logger = logging.getLogger(__name__)


def _other_user_id(data) -> Optional[str]:
    """Clients send either the bare id or {'otherUserId': id}."""
    if isinstance(data, dict):
        data = data.get('otherUserId') or data.get('userId')
    if data is None:
        return None
    data = str(data).strip()
    return data or None


class RealtimeNotifier:
    """Per-application realtime channel."""

    def __init__(self, socketio: SocketIO = None):
        self.socketio = socketio
        self.registry = ConnectionRegistry()
        self.emitter = EventEmitter(socketio)
        self._initialized = False

    def init_app(self, app: Flask, socketio: SocketIO):
        """Bind to the app's Socket.IO server and register event handlers."""
        logger.debug(f"WS_HUB: init app={app.name}, mode={getattr(socketio, 'async_mode', '?')}")
        self.socketio = socketio
        self.emitter.socketio = socketio
        self._register_handlers()
        self._initialized = True
        return self

    def _register_handlers(self):
        """Register WebSocket event handlers."""

        @self.socketio.on_error_default
        def default_error_handler(e):
            logger.error(f"WS error: {e}")

        # =====================================================================
        # Connection Events
        # =====================================================================

        @self.socketio.on('connect')
        def handle_connect(auth=None):
            """Authenticate the handshake and join the identity room."""
            sid = request.sid
            token = self._token_from_handshake(auth)
            try:
                payload = AuthSecurity.decode_token(token)
            except UnauthorizedError as e:
                logger.warning(f"WS auth failed: sid={sid}: {e}")
                raise ConnectionRefusedError('unauthorized')

            user_id = str(payload['user_id'])
            self.registry.register(sid, user_id)
            join_room(identity_room(user_id))
            sessions = len(self.registry.sessions_for(user_id))
            logger.info(f"WS connected: user={user_id}, sid={sid}, sessions={sessions}")

        @self.socketio.on('disconnect')
        def handle_disconnect(*args):
            user_id = self.registry.unregister(request.sid)
            if user_id:
                logger.info(f"WS disconnected: user={user_id}, sid={request.sid}")

        # =====================================================================
        # Conversation Rooms
        # =====================================================================

        @self.socketio.on('join_conversation')
        def handle_join_conversation(data=None):
            user_id = self.registry.user_for(request.sid)
            other_id = _other_user_id(data)
            if not user_id or not other_id:
                logger.debug(f"WS join_conversation ignored: sid={request.sid}")
                return
            room = conversation_room(user_id, other_id)
            join_room(room)
            logger.debug(f"WS join: user={user_id}, room={room}")

        @self.socketio.on('leave_conversation')
        def handle_leave_conversation(data=None):
            user_id = self.registry.user_for(request.sid)
            other_id = _other_user_id(data)
            if not user_id or not other_id:
                return
            leave_room(conversation_room(user_id, other_id))

        @self.socketio.on('typing')
        def handle_typing(data=None):
            user_id = self.registry.user_for(request.sid)
            if not user_id or not isinstance(data, dict) or not data.get('receiverId'):
                return
            room = conversation_room(user_id, str(data['receiverId']))
            self.emitter.emit_to_room(
                room,
                EventEmitter.USER_TYPING,
                {'userId': user_id, 'isTyping': bool(data.get('isTyping'))},
                skip_sid=request.sid,
            )

    @staticmethod
    def _token_from_handshake(auth) -> Optional[str]:
        """Token from auth payload, then Authorization header, then ?token=."""
        if isinstance(auth, dict) and auth.get('token'):
            return auth['token']
        token = extract_bearer_token(request.headers.get('Authorization'))
        if token:
            return token
        return request.args.get('token')

    # =========================================================================
    # Public API
    # =========================================================================

    def is_online(self, user_id: str) -> bool:
        return self.registry.is_online(str(user_id))

    def notify_new_message(self, message: Message):
        """Push a stored message to every session of both parties."""
        payload = message.to_dict()
        rooms = []
        for user_id in (message.sender_id, message.receiver_id):
            room = identity_room(user_id)
            if room not in rooms:
                rooms.append(room)
        for room in rooms:
            self.emitter.emit_to_room(room, EventEmitter.NEW_MESSAGE, payload)

    def notify_read(self, reader_id: str, counterpart_id: str, count: int):
        """Tell the counterpart that reader_id has read their messages."""
        return self.emitter.emit_to_user(
            str(counterpart_id),
            EventEmitter.MESSAGES_READ,
            {'userId': str(reader_id), 'count': count},
        )
