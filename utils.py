# utils.py
from typing import Any, Optional
from models import MODES
import config


def is_valid_mode(mode: Any) -> bool:
    return isinstance(mode, str) and mode in MODES


def is_valid_room_id(room: Any, max_length: Optional[int] = None) -> bool:
    """Caller supplied room ids must be non-empty strings within the length bound."""
    if max_length is None:
        max_length = config.MAX_ROOM_ID_LENGTH
    return isinstance(room, str) and 0 < len(room) <= max_length


def matched_room_id(first_sid: str, second_sid: str) -> str:
    """Deterministic room id for a matchmaker pairing (earlier-enqueued client first)."""
    return f"{first_sid}#{second_sid}"


def extract_room(data: Any) -> Any:
    # room events carry either a bare room id string or a {"room": ...} object
    if isinstance(data, dict):
        return data.get("room")
    return data


def extract_mode(data: Any) -> Any:
    if isinstance(data, dict):
        return data.get("mode")
    return None
