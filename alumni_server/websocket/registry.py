"""Process-local map of realtime sessions to the users they belong to."""
import logging
import threading
from typing import Dict, Optional, Set

logger = logging.getLogger(__name__)


def identity_room(user_id: str) -> str:
    """Room every session of a user joins on connect."""
    return f'user_{user_id}'


def conversation_room(user_a: str, user_b: str) -> str:
    """Room shared by a pair of users; the same key whichever side computes it."""
    return '_'.join(sorted([str(user_a), str(user_b)]))


class ConnectionRegistry:
    """sid -> user_id and user_id -> {sid}, created on connect and removed on disconnect.

    Owned by one RealtimeNotifier, so each application has its own.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._users_by_sid: Dict[str, str] = {}
        self._sids_by_user: Dict[str, Set[str]] = {}

    def register(self, sid: str, user_id: str) -> None:
        with self._lock:
            self._users_by_sid[sid] = user_id
            self._sids_by_user.setdefault(user_id, set()).add(sid)

    def unregister(self, sid: str) -> Optional[str]:
        """Forget a session and return the user it belonged to, if any."""
        with self._lock:
            user_id = self._users_by_sid.pop(sid, None)
            if user_id is None:
                return None
            sids = self._sids_by_user.get(user_id)
            if sids is not None:
                sids.discard(sid)
                if not sids:
                    del self._sids_by_user[user_id]
            return user_id

    def user_for(self, sid: str) -> Optional[str]:
        with self._lock:
            return self._users_by_sid.get(sid)

    def sessions_for(self, user_id: str) -> Set[str]:
        with self._lock:
            return set(self._sids_by_user.get(user_id, ()))

    def is_online(self, user_id: str) -> bool:
        with self._lock:
            return bool(self._sids_by_user.get(user_id))

    def __len__(self):
        with self._lock:
            return len(self._users_by_sid)
