# models.py
from __future__ import annotations
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

MODES: Tuple[str, ...] = ("video", "voice", "text")

SIGNAL_EVENTS: Tuple[str, ...] = ("offer", "answer", "ice-candidate")


@dataclass
class ClientHandle:
    sid: str
    mode: Optional[str] = None  # queue currently occupied
    # insertion ordered set of room ids
    rooms: Dict[str, None] = field(default_factory=dict)
    matched_room: Optional[str] = None
    connected: bool = True
    connected_at: float = field(default_factory=time.time)


@dataclass(frozen=True)
class PairingOutcome:
    """A successful two-party match. Only lives as long as the notification."""
    first: str
    second: str
    mode: str
    room: str

    @property
    def participants(self) -> List[str]:
        return [self.first, self.second]

    def peer_of(self, sid: str) -> str:
        return self.second if sid == self.first else self.first

    def payload_for(self, sid: str) -> Dict[str, str]:
        return {"peerId": self.peer_of(sid), "mode": self.mode, "room": self.room}
