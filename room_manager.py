# room_manager.py
import logging
from typing import List, Optional
from models import ClientHandle
from queue_store import QueueStore
from registry import ConnectionRegistry
from utils import is_valid_room_id, matched_room_id

logger = logging.getLogger("signaling.rooms")


class RoomManager:
    """Room membership lifecycle. Rooms only exist as membership entries in the registry."""

    def __init__(self, registry: ConnectionRegistry, queues: QueueStore, max_room_id_length: int):
        self.registry = registry
        self.queues = queues
        self.max_room_id_length = max_room_id_length

    def create_matched_room(self, first: ClientHandle, second: ClientHandle, mode: str) -> str:
        room = matched_room_id(first.sid, second.sid)
        for handle in (first, second):
            self.registry.add_membership(handle, room)
            handle.matched_room = room
        logger.info("🚪 Matched room %s created (%s)", room, mode)
        return room

    def join_room(self, handle: ClientHandle, room) -> bool:
        if not is_valid_room_id(room, self.max_room_id_length):
            logger.debug("Rejected join-room from %s: invalid room id", handle.sid)
            return False
        if self.registry.add_membership(handle, room):
            logger.info("👤 %s joined room %s (%d members)", handle.sid, room, len(self.registry.members(room)))
        return True

    def leave_room(self, handle: ClientHandle, room) -> Optional[str]:
        """Returns the room id when the handle was a member, so the caller can announce the departure."""
        if not isinstance(room, str) or not self.registry.drop_membership(handle, room):
            return None
        if handle.matched_room == room:
            handle.matched_room = None
        logger.info("👋 %s left room %s", handle.sid, room)
        return room

    def release_matched_room(self, handle: ClientHandle) -> Optional[str]:
        if handle.matched_room is None:
            return None
        room = handle.matched_room
        left = self.leave_room(handle, room)
        handle.matched_room = None
        return left

    def disconnect(self, handle: ClientHandle) -> List[str]:
        """Remove the handle from every queue and every room. Returns the affected rooms."""
        self.queues.remove(handle)
        affected = []
        # iterate over a snapshot, leave_room mutates handle.rooms
        for room in list(handle.rooms):
            if self.leave_room(handle, room) is not None:
                affected.append(room)
        handle.matched_room = None
        return affected
