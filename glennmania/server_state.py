"""The authoritative game state kept by the server."""

from __future__ import annotations

import re
from enum import IntEnum
from typing import Any, Optional

from .event import Event, EventType
from .event_handler import EventHandler
from .game_state import GameState
from .mover import ClockwiseMovement, LeftRightMovement, UpDownMovement
from .timeline import Timeline


class InputType(IntEnum):
    """Codes that clients send to the server."""

    HALF = 0
    REAL = 1
    DOUBLE = 2
    PAUSE = 3
    CLOSE = 4
    MODIFY = 5


_TIC_SCALES = {
    InputType.HALF: Timeline.SCALE_HALF,
    InputType.REAL: Timeline.SCALE_REAL,
    InputType.DOUBLE: Timeline.SCALE_DOUBLE,
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(text: Any) -> int:
    """Read the integer at the start of a text, ignoring anything after it."""
    match = _LEADING_INT.match(str(text))
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group(1))


def _number(value: float) -> str:
    return f"{value:g}"


class ServerGameState(GameState):
    """Moves the level's objects, applies client input and serializes the world.

    The item, the second platform and the fifth platform follow movement
    patterns; characters touching moving objects raise collision events.
    """

    def __init__(self, timeline: Optional[Timeline] = None) -> None:
        super().__init__(timeline)
        self.event_handler = EventHandler(self.timeline, self)
        for obj in self.graphics_objects:
            obj.world = self
        self.find_object(2).movement_function = ClockwiseMovement()
        self.find_object(1).movement_function = LeftRightMovement()
        self.find_object(4).movement_function = UpDownMovement()

    def update_game_state(self) -> None:
        """Handle due events, update delta time and run every movement pattern."""
        self.event_handler.handle_events()
        self.timeline.update_delta_time()
        for obj in self.graphics_objects:
            if obj.movement_function is not None:
                obj.movement_function(obj)

    def input(self, object_id: Any, code: Any) -> None:
        """Turn a client's input code into an event; unknown codes are ignored."""
        value = _parse_int(code)
        metadata = f"ServerGameState, from client input {code}"
        now = self.timeline.timestamp

        if value in _TIC_SCALES:
            event = Event(EventType.TIC_CHANGE, now)
            event.add_timeline(self.timeline)
            event.add_tic_scale(_TIC_SCALES[InputType(value)])
        elif value == InputType.PAUSE:
            event = Event(EventType.PAUSE, now)
            event.add_timeline(self.timeline)
        elif value == InputType.CLOSE:
            event = Event(EventType.CLIENT_DISCONNECT, now)
            event.add_character_id(_parse_int(object_id))
        else:
            return

        event.add_metadata(metadata)
        self.event_handler.on_event(event)

    def update_character_position(self, character_id: Any, x: float, y: float) -> None:
        """Move a character to where its client reports it."""
        identifier = _parse_int(character_id)
        with self._lock:
            character = self.find_object(identifier)
            if character is None:
                raise KeyError(f"no object with id {identifier}")
            character.set_position(x, y)

    def add_character(self, character: Any) -> None:
        with self._lock:
            self._objects.append(character)

    def new_character(self) -> int:
        """Reserve an identifier for a new client and queue the spawn of its character."""
        with self._lock:
            identifier = self.next_id()
            event = Event(EventType.SPAWN, self.timeline.timestamp)
            event.add_character_id(identifier)
            event.add_metadata(f"ServerGameState, new client connected {identifier}")
            self.event_handler.on_event(event)
            return identifier

    def serialize(self) -> str:
        """Encode the world as ``[ dt tic ]`` then ``[ id x y vx vy type ]`` per object."""
        with self._lock:
            parts = [
                f"[ {_number(self.timeline.dt)} {_number(self.timeline.tic_size)} ]"
            ]
            for obj in self._objects:
                position = obj.position
                velocity = obj.effective_velocity()
                parts.append(
                    f"[ {obj.identifier} {_number(position.x)} {_number(position.y)}"
                    f" {_number(velocity.x)} {_number(velocity.y)}"
                    f" {int(obj.object_type)} ]"
                )
            return "".join(parts)