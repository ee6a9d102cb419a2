"""The base class of every object placed in the game world."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, Callable, Optional

from .collider import check_collision
from .geometry import Rect, Vector2

# Distance, per unit of delta time, that one movement step adds to the velocity.
DISPLACEMENT = 0.025

Color = tuple[int, int, int]


class CollisionType(IntEnum):
    """How an object reacts when something collides with it."""

    STOP_MOVEMENT = 0
    ERASE = 1
    PUSH = 2
    CHAR = 3
    DEATH = 4
    SCROLL = 5
    NONE = 6


class ObjectType(IntEnum):
    """The kind of a game object, as sent over the wire."""

    CHARACTER = 1
    PLATFORM = 2
    ITEM = 3
    DEATHZONE = 4
    SIDE_BOUNDARY = 5
    SPAWN_POINT = 6


def _as_vector(value: Any) -> Vector2:
    if isinstance(value, Vector2):
        return Vector2(float(value.x), float(value.y))
    x, y = value
    return Vector2(float(x), float(y))


class GraphicsObject(ABC):
    """A rectangle in the world with a position, a velocity and a timeline.

    ``world``, when set, supplies ``characters()`` and an ``event_handler``;
    it is used to detect characters touching this object while it moves.
    ``movement_function``, when set, is called once per update with the object.
    """

    def __init__(
        self,
        size: Any,
        position: Any,
        is_ground: bool,
        identifier: int,
        timeline: Any,
    ) -> None:
        self.lock = threading.RLock()
        self._size = _as_vector(size)
        self._position = _as_vector(position)
        self._original_position = _as_vector(position)
        self.is_ground = bool(is_ground)
        self.identifier = int(identifier)
        self.timeline = timeline
        self.velocity = Vector2()
        self.previous_velocity = Vector2()
        self.collision_type_x = CollisionType.NONE
        self.collision_type_y = CollisionType.NONE
        self.guid = f"gameobject{self.identifier}"
        self.movement_function: Optional[Callable[[GraphicsObject], None]] = None
        self.world: Any = None
        self.fill_color: Color = (255, 255, 255)
        self.outline_color: Color = (255, 255, 255)
        self.outline_thickness = 0.0
        self.image: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.identifier}, "
            f"position=({self._position.x}, {self._position.y}))"
        )

    @property
    @abstractmethod
    def object_type(self) -> ObjectType:
        """The kind of this object."""

    @property
    def size(self) -> Vector2:
        return Vector2(self._size.x, self._size.y)

    @property
    def position(self) -> Vector2:
        """A copy of the top-left corner of the object."""
        with self.lock:
            return Vector2(self._position.x, self._position.y)

    def set_position(self, x: float, y: float) -> None:
        with self.lock:
            self._position = Vector2(float(x), float(y))

    @property
    def original_position(self) -> Vector2:
        """A copy of the position the object was created at, unless changed."""
        with self.lock:
            return Vector2(self._original_position.x, self._original_position.y)

    def set_original_position(self, x: float, y: float) -> None:
        with self.lock:
            self._original_position = Vector2(float(x), float(y))

    def global_bounds(self) -> Rect:
        """The area the object covers, outline included."""
        with self.lock:
            pad = self.outline_thickness
            return Rect(
                self._position.x - pad,
                self._position.y - pad,
                self._size.x + 2 * pad,
                self._size.y + 2 * pad,
            )

    def move(self, dx: float, dy: float) -> None:
        with self.lock:
            self._position = Vector2(self._position.x + dx, self._position.y + dy)

    def effective_velocity(self) -> Vector2:
        """The current velocity, or the last one if the object has just been stopped."""
        with self.lock:
            if self.velocity.is_zero() and not self.previous_velocity.is_zero():
                return Vector2(self.previous_velocity.x, self.previous_velocity.y)
            return Vector2(self.velocity.x, self.velocity.y)

    def _step(self, sign_x: int, sign_y: int) -> None:
        dt = self.timeline.dt
        if dt != 0:
            tic = self.timeline.tic_size
            with self.lock:
                self.velocity.x += (sign_x * DISPLACEMENT / dt) * tic
                self.velocity.y += (sign_y * DISPLACEMENT / dt) * tic
        self.check_bounds()
        self.update_movement()

    def left(self) -> None:
        self._step(-1, 0)

    def up(self) -> None:
        self._step(0, -1)

    def right(self) -> None:
        self._step(1, 0)

    def down(self) -> None:
        self._step(0, 1)

    def block_move(self) -> None:
        """Remember the current velocity and stop the object."""
        with self.lock:
            self.previous_velocity = Vector2(self.velocity.x, self.velocity.y)
            self.velocity = Vector2()

    def update_movement(self) -> None:
        """Move by the current velocity, then stop."""
        self.move(self.velocity.x, self.velocity.y)
        self.block_move()

    def check_bounds(self) -> bool:
        """False if any character in the world collides with this object.

        Each collision is reported to the world's event handler.
        """
        world = self.world
        if world is None:
            return True
        for character in world.characters():
            if check_collision(character, self, True, world.event_handler):
                return False
        return True