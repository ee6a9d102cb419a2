"""A time-ordered queue of game events and the actions they trigger."""

from __future__ import annotations

import logging
import threading
from typing import Any

from .character import Character
from .event import Event, EventType, VariantType
from .graphics_object import CollisionType
from .objects import SpawnPoint

logger = logging.getLogger(__name__)

# Seconds a dead character stays off screen before respawning.
CHARACTER_DEATH_TIME = 2.0
# Where a dead character is parked until it respawns.
_OFF_SCREEN = -10_000_000.0

_X_COLLISION = 0


class EventHandler:
    """Queues events by timestamp and processes those that have come due.

    Events sharing a timestamp replace one another. ``state`` supplies
    ``add_character`` and ``remove_object`` for the events that change the
    set of objects in the game.
    """

    def __init__(self, timeline: Any, state: Any = None) -> None:
        self.timeline = timeline
        self.state = state
        self.script_manager: Any = None
        self._queue: dict[float, Event] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def on_event(self, event: Event) -> None:
        """Queue an event at its timestamp."""
        with self._lock:
            self._queue[event.timestamp] = event

    def add_script_manager(self, manager: Any) -> None:
        """Set the object whose ``run_one`` runs scripted event handlers."""
        self.script_manager = manager

    def handle_events(self) -> None:
        """Process, in timestamp order, every event whose time has come."""
        now = self.timeline.timestamp
        with self._lock:
            due = sorted(
                (stamp, event) for stamp, event in self._queue.items() if stamp <= now
            )
        for _, event in due:
            self._process(event)
        with self._lock:
            for stamp, _ in due:
                self._queue.pop(stamp, None)

    def _require_state(self) -> Any:
        if self.state is None:
            raise RuntimeError("no game state to apply the event to")
        return self.state

    def _process(self, event: Event) -> None:
        handlers = {
            EventType.UP: self._handle_input,
            EventType.DOWN: self._handle_input,
            EventType.LEFT: self._handle_input,
            EventType.RIGHT: self._handle_input,
            EventType.DEATH: self._handle_death,
            EventType.RESPAWN: self._handle_respawn,
            EventType.SPAWN: self._handle_spawn,
            EventType.PAUSE: self._handle_pause,
            EventType.TIC_CHANGE: self._handle_tic_change,
            EventType.CLIENT_DISCONNECT: self._handle_disconnect,
            EventType.COLLISION: self._handle_collision,
            EventType.TRIPLE_UP: self._handle_triple_up,
        }
        handlers[event.event_type](event)

    def _handle_input(self, event: Event) -> None:
        character = event.get(VariantType.CHAR_REF)
        moves = {
            EventType.UP: character.up,
            EventType.DOWN: character.down,
            EventType.LEFT: character.left,
            EventType.RIGHT: character.right,
        }
        moves[event.event_type]()

    def _handle_death(self, event: Event) -> None:
        character = event.get(VariantType.CHAR_REF)
        character.set_position(_OFF_SCREEN, _OFF_SCREEN)
        revival = Event(
            EventType.RESPAWN, self.timeline.timestamp + CHARACTER_DEATH_TIME
        )
        revival.add_character(character)
        self.on_event(revival)

    def _handle_respawn(self, event: Event) -> None:
        event.get(VariantType.CHAR_REF).respawn()

    def _handle_spawn(self, event: Event) -> None:
        state = self._require_state()
        identifier = event.get(VariantType.CHAR_ID)
        spawn_point = SpawnPoint()
        state.add_character(
            Character(spawn_point.position, identifier, None, None, spawn_point)
        )

    def _handle_pause(self, event: Event) -> None:
        event.get(VariantType.TIMELINE).pause()

    def _handle_tic_change(self, event: Event) -> None:
        timeline = event.get(VariantType.TIMELINE)
        timeline.edit_tic_size(event.get(VariantType.TIC_SCALE))

    def _handle_disconnect(self, event: Event) -> None:
        self._require_state().remove_object(event.get(VariantType.CHAR_ID))

    def _handle_collision(self, event: Event) -> None:
        obj = event.get(VariantType.GRAPHICS_OBJ)
        direction = event.get(VariantType.COLLISION_DIR)
        if direction == _X_COLLISION and obj.collision_type_x is CollisionType.ERASE:
            self._require_state().remove_object(obj.identifier)

    def _handle_triple_up(self, event: Event) -> None:
        if self.script_manager is None:
            logger.error("No script manager to run script.")
            return
        self.script_manager.run_one("handle_triple_up_event", True, "object_context")