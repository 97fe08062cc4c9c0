# matchmaker.py
import logging
from typing import Callable, Dict, List
from models import PairingOutcome
from queue_store import QueueStore
from registry import ConnectionRegistry
from room_manager import RoomManager

logger = logging.getLogger("signaling.matchmaker")


class Matchmaker:
    """Pairs queued clients of one mode, two at a time, in FIFO order.

    A drain for a mode is never nested or run twice at once: a second call
    while one is running is a no-op, because the running drain keeps going
    until fewer than two clients wait.
    """

    def __init__(self, queues: QueueStore, registry: ConnectionRegistry, rooms: RoomManager, emit: Callable):
        self.queues = queues
        self.registry = registry
        self.rooms = rooms
        self.emit = emit
        self._matching: Dict[str, bool] = {mode: False for mode in queues.queues}

    def try_match(self, mode: str) -> List[PairingOutcome]:
        if self._matching.get(mode):
            logger.debug("Matcher for %s already running, skipping", mode)
            return []
        self._matching[mode] = True
        outcomes = []
        try:
            while self.queues.size(mode) >= 2:
                first, second = self.queues.pop_pair(mode)

                if first.sid == second.sid:
                    # same handle twice, keep a single entry at the head
                    self.queues.requeue_front(mode, first)
                    continue

                first_alive = self.registry.is_connected(first)
                second_alive = self.registry.is_connected(second)
                if not (first_alive and second_alive):
                    stale = [h.sid for h, alive in ((first, first_alive), (second, second_alive)) if not alive]
                    logger.info("⚠️ Discarding stale queue entries in %s: %s", mode, ", ".join(stale))
                    if first_alive:
                        self.queues.requeue_front(mode, first)
                    elif second_alive:
                        self.queues.requeue_front(mode, second)
                    continue

                # both may have been re-enqueued elsewhere in the meantime
                self.queues.remove(first)
                self.queues.remove(second)

                room = self.rooms.create_matched_room(first, second, mode)
                outcome = PairingOutcome(first=first.sid, second=second.sid, mode=mode, room=room)
                self._announce(outcome)
                outcomes.append(outcome)
        finally:
            self._matching[mode] = False
        return outcomes

    def _announce(self, outcome: PairingOutcome):
        logger.info("🎉 Match %s: %s <-> %s (room %s)", outcome.mode, outcome.first, outcome.second, outcome.room)
        for sid in outcome.participants:
            self.emit("matched", outcome.payload_for(sid), to=sid)
        for sid in outcome.participants:
            self.emit("peers-in-room", outcome.participants, to=sid)
