# queue_store.py
import logging
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Tuple
from models import ClientHandle, MODES

logger = logging.getLogger("signaling.queue")


class QueueStore:
    """One FIFO waiting list per mode. A handle is never in two lists at once."""

    def __init__(self, modes: Iterable[str] = MODES):
        self.queues: Dict[str, Deque[ClientHandle]] = {mode: deque() for mode in modes}

    def enqueue(self, handle: ClientHandle, mode: str):
        self.remove(handle)
        self.queues[mode].append(handle)
        handle.mode = mode
        logger.debug("-> %s queue: %s (%d waiting)", mode, handle.sid, len(self.queues[mode]))

    def remove(self, handle: ClientHandle) -> Optional[str]:
        """Remove the handle from every queue. Returns the mode it was waiting in, if any."""
        left = None
        for mode, queue in self.queues.items():
            kept = [h for h in queue if h.sid != handle.sid]
            if len(kept) != len(queue):
                self.queues[mode] = deque(kept)
                left = mode
        handle.mode = None
        return left

    def pop_pair(self, mode: str) -> Tuple[ClientHandle, ClientHandle]:
        queue = self.queues[mode]
        return queue.popleft(), queue.popleft()

    def requeue_front(self, mode: str, handle: ClientHandle):
        # keeps the priority of an entry whose partner turned out to be unusable
        self.queues[mode].appendleft(handle)
        handle.mode = mode

    def size(self, mode: str) -> int:
        return len(self.queues[mode])

    def sizes(self) -> Dict[str, int]:
        return {mode: len(queue) for mode, queue in self.queues.items()}

    def waiting(self, mode: str) -> List[str]:
        return [h.sid for h in self.queues[mode]]

    def clear(self):
        for queue in self.queues.values():
            queue.clear()
