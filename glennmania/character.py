"""The player-controlled character."""

from __future__ import annotations

from typing import Any, Optional

from .collider import check_collision, is_character_grounded
from .event import Event, EventType
from .geometry import Vector2
from .graphics_object import CollisionType, GraphicsObject, ObjectType
from .objects import Side, SpawnPoint

CHARACTER_SIZE = Vector2(116.0, 256.0)
CHARACTER_IMAGE = "images/girl.png"

# Velocity added per step of horizontal or downward input, per unit of delta time.
DISPLACEMENT = 0.15
# How strongly a moving ground carries the character along.
FRICTION = 3.2
DEFAULT_GRAVITY = 700.0
DEFAULT_ACCELERATION = -2500.0

# Gap kept between the character and the edge it is pushed back to.
_EDGE_GAP = 0.1


class Character(GraphicsObject):
    """A character driven by input, gravity and the ground it stands on.

    ``world`` supplies ``dt``, ``tic_size``, ``timestamp``,
    ``graphics_objects``, ``side_boundaries``, ``death_zone`` and an
    ``event_handler``; it is needed for everything that moves the character.
    """

    object_type = ObjectType.CHARACTER

    def __init__(
        self,
        position: Any,
        identifier: int,
        timeline: Any,
        world: Any = None,
        spawn_point: Optional[SpawnPoint] = None,
    ) -> None:
        super().__init__(CHARACTER_SIZE, position, False, identifier, timeline)
        self.world = world
        self.image = CHARACTER_IMAGE
        self.collision_type_x = CollisionType.CHAR
        self.collision_type_y = CollisionType.CHAR
        self.spawn_point = spawn_point
        self.gravity = DEFAULT_GRAVITY
        self.acceleration = DEFAULT_ACCELERATION
        self._respawned = False

    def _require_world(self) -> Any:
        if self.world is None:
            raise RuntimeError(f"character {self.identifier} is not placed in a world")
        return self.world

    def _timing(self) -> tuple[float, float]:
        world = self._require_world()
        return world.dt, world.tic_size

    def effective_velocity(self) -> Vector2:
        """The current velocity, or the last one if the character has just been stopped."""
        return super().effective_velocity()

    def left(self) -> None:
        dt, tic = self._timing()
        with self.lock:
            self.velocity.x += (-DISPLACEMENT / dt) * tic
        self.update_movement()

    def up(self) -> None:
        """Jump: replace the vertical velocity with the jump acceleration."""
        dt, tic = self._timing()
        with self.lock:
            self.velocity.y = (self.acceleration * dt) * tic
        self.update_movement()

    def right(self) -> None:
        dt, tic = self._timing()
        with self.lock:
            self.velocity.x += (DISPLACEMENT / dt) * tic
        self.update_movement()

    def down(self) -> None:
        dt, tic = self._timing()
        with self.lock:
            self.velocity.y += (DISPLACEMENT / dt) * tic
        self.update_movement()

    def ground(self) -> Optional[GraphicsObject]:
        """The first ground object the character stands on, or None."""
        world = self._require_world()
        for obj in world.graphics_objects:
            if obj.is_ground and is_character_grounded(self, obj):
                return obj
        return None

    def update_movement(self) -> None:
        """Apply gravity or the ground's motion, keep within bounds, move, then stop."""
        floor = self.ground()
        dt, tic = self._timing()

        with self.lock:
            if floor is None:
                self.velocity.y += (self.gravity * dt) * tic
            else:
                if self.velocity.y > 0:
                    self.velocity.y = 0.0
                carried = floor.effective_velocity()
                self.velocity.x += carried.x * FRICTION
                self.velocity.y += carried.y * FRICTION
                # Stay ahead of a platform moving down, so the drawing never
                # shows the character sinking below it.
                if self.velocity.y > 1.0:
                    self.velocity.y -= 5.0

        if not self.check_bounds():
            self.move(self.velocity.x, self.velocity.y)
        self.block_move()

    def respawn(self) -> None:
        """Put the character back at a fresh spawn point, at rest."""
        self._respawned = True
        self.spawn_point = SpawnPoint()
        spawn = self.spawn_point.position
        self.set_position(spawn.x, spawn.y)
        with self.lock:
            self.velocity = Vector2()

    def was_respawned(self) -> bool:
        """True once after each respawn."""
        if self._respawned:
            self._respawned = False
            return True
        return False

    def check_bounds(self) -> bool:
        """Keep the character inside the level and raise a death event in the death zone.

        Always returns False, so that the character keeps moving.
        """
        world = self._require_world()
        position = self.position
        bounds = self.global_bounds()

        if bounds.top < 0:
            self.set_position(position.x, _EDGE_GAP)
            return False

        for boundary in world.side_boundaries:
            if check_collision(self, boundary, False):
                if boundary.direction is Side.RIGHT:
                    self.set_position(
                        boundary.position.x - _EDGE_GAP - bounds.width, position.y
                    )
                if boundary.direction is Side.LEFT:
                    self.set_position(_EDGE_GAP, position.y)

        if check_collision(self, world.death_zone, False):
            event = Event(EventType.DEATH, world.timestamp)
            event.add_character(self)
            event.add_metadata(f"Character {self.identifier} death")
            world.event_handler.on_event(event)
            return False

        return False