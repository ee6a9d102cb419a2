"""Game events and the typed parameters they carry."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class EventType(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    DEATH = 4
    RESPAWN = 5
    SPAWN = 6
    COLLISION = 7
    PAUSE = 8
    TIC_CHANGE = 9
    CLIENT_DISCONNECT = 10
    TRIPLE_UP = 11


class VariantType(IntEnum):
    GRAPHICS_OBJ = 0
    CHAR_REF = 1
    TIME_STAMP = 2
    TIMELINE = 3
    TIC_SCALE = 4
    CHAR_ID = 5
    COLLISION_DIR = 6


class Event:
    """An event of a given type, due at a timestamp, with typed parameters."""

    def __init__(self, event_type: EventType | int, timestamp: float) -> None:
        self.event_type = EventType(event_type)
        self.parameters: dict[VariantType, Any] = {}
        self.metadata = ""
        self.add_time(timestamp)

    def __repr__(self) -> str:
        return f"Event({self.event_type.name}, {self.timestamp!r})"

    @property
    def timestamp(self) -> float:
        return self.parameters[VariantType.TIME_STAMP]

    def add_time(self, timestamp: float) -> None:
        self.parameters[VariantType.TIME_STAMP] = float(timestamp)

    def add_character(self, character: Any) -> None:
        self.parameters[VariantType.CHAR_REF] = character

    def add_character_id(self, character_id: int) -> None:
        self.parameters[VariantType.CHAR_ID] = int(character_id)

    def add_graphics_object(self, obj: Any) -> None:
        self.parameters[VariantType.GRAPHICS_OBJ] = obj

    def add_collision_direction(self, direction: int | None) -> None:
        """Store the collision axis: 0 for x, 1 for y, None for neither."""
        self.parameters[VariantType.COLLISION_DIR] = direction

    def add_timeline(self, timeline: Any) -> None:
        self.parameters[VariantType.TIMELINE] = timeline

    def add_tic_scale(self, scale: float) -> None:
        self.parameters[VariantType.TIC_SCALE] = float(scale)

    def add_metadata(self, data: str) -> None:
        self.metadata = data

    def get(self, variant_type: VariantType | int) -> Any:
        """Return the parameter of the given type; KeyError if it was never set."""
        kind = VariantType(variant_type)
        try:
            return self.parameters[kind]
        except KeyError:
            raise KeyError(f"event has no {kind.name} parameter") from None