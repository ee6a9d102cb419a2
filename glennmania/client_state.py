"""The game state a client keeps for its own character and the world it sees."""

from __future__ import annotations

import logging
from typing import Optional

from .character import Character
from .event_handler import EventHandler
from .game_state import GameState, split
from .geometry import Vector2
from .graphics_object import ObjectType
from .objects import DeathZone, Side, SideBoundary, SpawnPoint
from .timeline import Timeline

logger = logging.getLogger(__name__)

DEFAULT_DT = 0.01


class ClientGameState(GameState):
    """Holds the client's character, the level's bounds and the server's view of the world."""

    def __init__(self, character_id: int, timeline: Optional[Timeline] = None) -> None:
        super().__init__(timeline)
        self.event_handler = EventHandler(self.timeline, self)
        with self._lock:
            self.side_boundaries = [
                SideBoundary((-500.0, 0.0), self.next_id(), self.timeline, Side.LEFT),
                SideBoundary((3000.0, 0.0), self.next_id(), self.timeline, Side.RIGHT),
            ]
            self.death_zone = DeathZone((0.0, 700.0), self.next_id(), self.timeline)
            self.dt = DEFAULT_DT
            self.tic_size = Timeline.SCALE_REAL

            spawn_point = SpawnPoint()
            self._character = Character(
                spawn_point.position, character_id, self.timeline, self, spawn_point
            )
            self._objects.append(self._character)

    def update_game_state(self) -> None:
        """Handle due events and move this client's character."""
        self.event_handler.handle_events()
        self._character.update_movement()

    @property
    def character(self) -> Character:
        return self._character

    @property
    def character_position(self) -> Vector2:
        return self._character.position

    @property
    def timestamp(self) -> float:
        return self.timeline.timestamp

    def deserialize(self, data: str, character_id: int) -> None:
        """Bring the world in line with the server's serialized state.

        Unknown characters are created, other objects are moved, and objects
        the server no longer lists are removed. The character with
        ``character_id`` is controlled locally and is never moved.
        """
        records = split(data, "]")
        timing = split(records[0], " ")
        self.dt = float(timing[1])
        self.tic_size = float(timing[2])

        seen: set[int] = set()
        for record in records[1:]:
            fields = split(record, " ")
            identifier = int(fields[1])
            seen.add(identifier)

            current = self.find_object(identifier)
            if current is None:
                if int(fields[6]) == ObjectType.CHARACTER:
                    position = (float(fields[2]), float(fields[3]))
                    with self._lock:
                        self._objects.append(
                            Character(position, identifier, self.timeline, self)
                        )
                else:
                    logger.error(
                        "Error in deserialization: object cannot be created. id: %d",
                        identifier,
                    )
            elif current.identifier != character_id:
                with self._lock:
                    current.set_position(float(fields[2]), float(fields[3]))
                    current.velocity = Vector2(float(fields[4]), float(fields[5]))

        if len(seen) != len(self.graphics_objects):
            for obj in self.graphics_objects:
                if obj.identifier not in seen:
                    self.remove_object(obj.identifier)