"""WebSocket module for realtime messaging.

This module provides:
- RealtimeNotifier (Socket.IO handlers and message fan-out)
- ConnectionRegistry and room naming helpers
- EventEmitter for fire-and-forget emits
"""

from alumni_server.websocket.event_emitter import EventEmitter
from alumni_server.websocket.hub import RealtimeNotifier
from alumni_server.websocket.registry import ConnectionRegistry, identity_room, conversation_room

__all__ = ['EventEmitter', 'RealtimeNotifier', 'ConnectionRegistry', 'identity_room', 'conversation_room']
