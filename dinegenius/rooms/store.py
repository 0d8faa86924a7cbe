from __future__ import annotations

import copy
import logging
import threading
import time
from typing import Any

from ..exceptions import RecommendationsNotFound, RoomNotFound

logger = logging.getLogger(__name__)

_rooms: dict[str, dict[str, Any]] = {}
_lock = threading.Lock()


def _drop_none(value: Any) -> Any:
    """Recursively remove ``None`` values from dicts (lists keep their length)."""
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(v) for v in value]
    return value


def get_room(room_id: str | None) -> dict[str, Any] | None:
    """Return a copy of the stored room, or ``None``."""
    if not room_id:
        logger.error("get_room called without a room id")
        return None
    with _lock:
        room = _rooms.get(room_id)
        return copy.deepcopy(room) if room is not None else None


def update_room(room_id: str, data: dict[str, Any]) -> bool:
    """Merge *data* into the room document, creating it on first write."""
    if not room_id:
        raise ValueError("room id must not be empty")

    cleaned = _drop_none(data)
    with _lock:
        room = _rooms.setdefault(room_id, {})
        room.update(cleaned)
        room["updated_at"] = time.time()
    logger.info("Room %s updated (%s)", room_id, ", ".join(sorted(cleaned)))
    return True


def save_recommendations(room_id: str | None, result: dict[str, Any]) -> bool:
    """Store *result* under the room's ``recommendations`` field.

    Saving the same result twice leaves the room unchanged apart from
    ``updated_at``. Without a room id nothing is stored.
    """
    if not room_id:
        logger.info("No room id given, skipping recommendation persistence")
        return False
    return update_room(room_id, {"recommendations": result})


def get_recommendations_for_room(room_id: str) -> dict[str, Any]:
    room = get_room(room_id)
    if room is None:
        raise RoomNotFound(f"room {room_id!r} not found")
    recommendations = room.get("recommendations")
    if not recommendations:
        raise RecommendationsNotFound(f"room {room_id!r} has no recommendations")
    return recommendations


def clear_rooms() -> None:
    with _lock:
        _rooms.clear()
