"""The set of objects that make up a running game."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .graphics_object import GraphicsObject, ObjectType
from .objects import Item, Platform
from .timeline import Timeline

logger = logging.getLogger(__name__)


def split(text: str, delimiter: str) -> list[str]:
    """Split text on a one-character delimiter.

    Empty fields are kept, except for a single trailing one, so that
    ``"a]"`` gives ``["a"]`` and an empty text gives no fields at all.
    """
    if len(delimiter) != 1:
        raise ValueError("the delimiter must be a single character")
    parts = text.split(delimiter)
    if parts[-1] == "":
        parts.pop()
    return parts


class GameState:
    """The level's objects, shared by the server and the clients.

    A new state holds six platforms and one item, numbered from 0 in the
    order they are placed; identifiers handed out later continue from there.
    """

    def __init__(self, timeline: Optional[Timeline] = None) -> None:
        self.timeline = timeline if timeline is not None else Timeline()
        self._lock = threading.RLock()
        self._next_id = 0
        self._objects: list[GraphicsObject] = []
        self._setup()

    def _setup(self) -> None:
        with self._lock:
            timeline = self.timeline
            self._objects.extend(
                [
                    Platform((25.0, 520.0), self.next_id(), timeline, 0),
                    Platform((525.0, 650.0), self.next_id(), timeline, 1),
                    Item((800.0, 150.0), self.next_id(), timeline),
                    Platform((1000.0, 500.0), self.next_id(), timeline, 2),
                    Platform((1600.0, 400.0), self.next_id(), timeline, 0),
                    Platform((2200.0, 500.0), self.next_id(), timeline, 1),
                    Platform((2700.0, 500.0), self.next_id(), timeline, 2),
                ]
            )
            logger.info("Successfully added %d Graphics Objects...", len(self._objects))

    def next_id(self) -> int:
        """Hand out the next unused object identifier."""
        with self._lock:
            identifier = self._next_id
            self._next_id += 1
            return identifier

    @property
    def graphics_objects(self) -> list[GraphicsObject]:
        """A snapshot of the objects in the game."""
        with self._lock:
            return list(self._objects)

    def find_object(self, identifier: int) -> Optional[GraphicsObject]:
        """The first object with the given identifier, or None."""
        for obj in self.graphics_objects:
            if obj.identifier == identifier:
                return obj
        return None

    def remove_object(self, identifier: int) -> None:
        """Remove the object with the given identifier; nothing happens if there is none."""
        with self._lock:
            obj = self.find_object(identifier)
            if obj is not None:
                self._objects.remove(obj)

    def characters(self) -> list[GraphicsObject]:
        """The characters among the objects, in order."""
        return [
            obj
            for obj in self.graphics_objects
            if obj.object_type == ObjectType.CHARACTER
        ]