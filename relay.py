# relay.py
import logging
from typing import Callable, List
from registry import ConnectionRegistry
from utils import is_valid_room_id
from models import SIGNAL_EVENTS

logger = logging.getLogger("signaling.relay")


class SignalingRelay:
    """Best-effort forwarding between connected clients. Invalid input is dropped without a reply."""

    def __init__(self, registry: ConnectionRegistry, emit: Callable, max_room_id_length: int, max_message_length: int):
        self.registry = registry
        self.emit = emit
        self.max_room_id_length = max_room_id_length
        self.max_message_length = max_message_length

    def relay_signal(self, event: str, sender: str, data) -> bool:
        """offer / answer / ice-candidate: forward to data["to"] with the sender's id attached."""
        if event not in SIGNAL_EVENTS or not isinstance(data, dict):
            return False
        target = data.get("to")
        if not isinstance(target, str) or target == sender:
            logger.debug("Dropped %s from %s: bad or self target", event, sender)
            return False
        if not self.registry.is_connected(target):
            logger.debug("Dropped %s from %s: %s is not connected", event, sender, target)
            return False

        payload = {k: v for k, v in data.items() if k != "to"}
        payload["from"] = sender
        self.emit(event, payload, to=target)
        return True

    def relay_message(self, sender: str, data) -> List[str]:
        """Room chat: every other member of the room receives {from, text}."""
        if not isinstance(data, dict):
            return []
        room = data.get("room")
        text = data.get("text")
        if not is_valid_room_id(room, self.max_room_id_length):
            return []
        if not isinstance(text, str) or not text or len(text) > self.max_message_length:
            logger.debug("Dropped message from %s: empty or oversized text", sender)
            return []

        recipients = [sid for sid in self.registry.members(room) if sid != sender]
        for sid in recipients:
            self.emit("message", {"from": sender, "text": text}, to=sid)
        return recipients

    def announce_departure(self, sender: str, room: str) -> List[str]:
        recipients = [sid for sid in self.registry.members(room) if sid != sender]
        for sid in recipients:
            self.emit("peer-left", {"peerId": sender}, to=sid)
        return recipients
