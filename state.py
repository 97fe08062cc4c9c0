# state.py
import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional
import config
from extensions import socketio
from models import PairingOutcome
from registry import ConnectionRegistry
from queue_store import QueueStore
from room_manager import RoomManager
from matchmaker import Matchmaker
from relay import SignalingRelay
from utils import is_valid_mode

logger = logging.getLogger("signaling.state")


class SessionState:
    """The one owner of queues, rooms and connections.

    Every public method takes the same lock, so socket handlers running on
    different threads never interleave inside a state transition. Outbound
    events are buffered during the transition and delivered after the lock
    is released.
    """

    def __init__(self, emit: Callable, max_room_id_length: Optional[int] = None, max_message_length: Optional[int] = None):
        if max_room_id_length is None:
            max_room_id_length = config.MAX_ROOM_ID_LENGTH
        if max_message_length is None:
            max_message_length = config.MAX_MESSAGE_LENGTH
        self._lock = threading.RLock()
        self.emit = emit
        self._outbox: List[tuple] = []
        self.registry = ConnectionRegistry()
        self.queues = QueueStore()
        self.rooms = RoomManager(self.registry, self.queues, max_room_id_length)
        self.matchmaker = Matchmaker(self.queues, self.registry, self.rooms, self._post)
        self.relay = SignalingRelay(self.registry, self._post, max_room_id_length, max_message_length)

    def _post(self, event, payload, to=None):
        self._outbox.append((event, payload, to))

    @contextmanager
    def _transaction(self):
        with self._lock:
            try:
                yield
            finally:
                pending, self._outbox = self._outbox, []
        for event, payload, to in pending:
            self.emit(event, payload, to=to)

    def connect(self, sid: str):
        with self._transaction():
            return self.registry.connect(sid)

    def find(self, sid: str, mode: Any) -> List[PairingOutcome]:
        if not is_valid_mode(mode):
            logger.debug("Ignored find from %s: unknown mode %r", sid, mode)
            return []
        with self._transaction():
            handle = self.registry.get(sid)
            if handle is None:
                return []
            # searching again ends the current match
            left = self.rooms.release_matched_room(handle)
            if left is not None:
                self.relay.announce_departure(sid, left)
            self.queues.enqueue(handle, mode)
            return self.matchmaker.try_match(mode)

    def leave_queue(self, sid: str) -> Optional[str]:
        with self._transaction():
            handle = self.registry.get(sid)
            if handle is None:
                return None
            left = self.queues.remove(handle)
            if left is not None:
                logger.info("<- %s left the %s queue", sid, left)
            self._post("queue-status", {"status": "idle"}, to=sid)
            return left

    def join_room(self, sid: str, room: Any) -> bool:
        with self._transaction():
            handle = self.registry.get(sid)
            if handle is None:
                return False
            return self.rooms.join_room(handle, room)

    def leave_room(self, sid: str, room: Any) -> Optional[str]:
        with self._transaction():
            handle = self.registry.get(sid)
            if handle is None:
                return None
            left = self.rooms.leave_room(handle, room)
            if left is not None:
                self.relay.announce_departure(sid, left)
            return left

    def signal(self, event: str, sid: str, data: Any) -> bool:
        with self._transaction():
            if not self.registry.is_connected(sid):
                return False
            return self.relay.relay_signal(event, sid, data)

    def message(self, sid: str, data: Any) -> List[str]:
        with self._transaction():
            if not self.registry.is_connected(sid):
                return []
            return self.relay.relay_message(sid, data)

    def disconnect(self, sid: str, reason: Any = None) -> List[str]:
        with self._transaction():
            handle = self.registry.drop(sid)
            if handle is None:
                return []
            affected = self.rooms.disconnect(handle)
            for room in affected:
                self.relay.announce_departure(sid, room)
            logger.info("🔴 %s torn down (%s), left %d room(s)", sid, reason or "no reason", len(affected))
            return affected

    def stats(self) -> Dict[str, Any]:
        with self._transaction():
            return {
                "clients": len(self.registry),
                "queues": self.queues.sizes(),
                "rooms": {room: len(members) for room, members in self.registry.rooms.items()},
            }

    def reset(self):
        with self._transaction():
            self.queues.clear()
            self.registry.clear()


# process wide state, rebuilt from zero on restart
session = SessionState(socketio.emit)
