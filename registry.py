# registry.py
import logging
from typing import Dict, List, Optional
from models import ClientHandle

logger = logging.getLogger("signaling.registry")


class ConnectionRegistry:
    """Live client handles plus the room membership table (room id -> member sids)."""

    def __init__(self):
        self.clients: Dict[str, ClientHandle] = {}
        # room id -> insertion ordered member sids
        self.rooms: Dict[str, Dict[str, None]] = {}

    # --- clients ---

    def connect(self, sid: str) -> ClientHandle:
        handle = self.clients.get(sid)
        if handle is None:
            handle = ClientHandle(sid=sid)
            self.clients[sid] = handle
        return handle

    def get(self, sid: str) -> Optional[ClientHandle]:
        return self.clients.get(sid)

    def is_connected(self, handle_or_sid) -> bool:
        sid = getattr(handle_or_sid, "sid", handle_or_sid)
        handle = self.clients.get(sid)
        return handle is not None and handle.connected

    def drop(self, sid: str) -> Optional[ClientHandle]:
        handle = self.clients.pop(sid, None)
        if handle is not None:
            handle.connected = False
        return handle

    # --- memberships ---

    def add_membership(self, handle: ClientHandle, room: str) -> bool:
        members = self.rooms.setdefault(room, {})
        if handle.sid in members:
            return False
        members[handle.sid] = None
        handle.rooms[room] = None
        return True

    def drop_membership(self, handle: ClientHandle, room: str) -> bool:
        handle.rooms.pop(room, None)
        members = self.rooms.get(room)
        if members is None or handle.sid not in members:
            return False
        del members[handle.sid]
        if not members:
            # last member gone, the room stops existing
            del self.rooms[room]
            logger.debug("Room %s is empty, removed", room)
        return True

    def members(self, room: str) -> List[str]:
        return list(self.rooms.get(room, ()))

    def clear(self):
        for handle in self.clients.values():
            handle.connected = False
        self.clients.clear()
        self.rooms.clear()

    def __len__(self):
        return len(self.clients)

    def __contains__(self, sid):
        return sid in self.clients
