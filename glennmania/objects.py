"""The concrete kinds of objects placed in the world."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from .geometry import Vector2
from .graphics_object import Color, CollisionType, GraphicsObject, ObjectType

PLATFORM_SIZE = Vector2(256.0, 10.0)
PLATFORM_COLORS: tuple[Color, ...] = (
    (210, 250, 212),
    (210, 211, 250),
    (247, 210, 250),
)
PLATFORM_OUTLINE_THICKNESS = 2.0

ITEM_SIZE = Vector2(100.2, 64.6)
ITEM_IMAGE = "images/money.png"

DEATH_ZONE_SIZE = Vector2(4000.0, 80.0)
SIDE_BOUNDARY_SIZE = Vector2(500.0, 800.0)

SPAWN_POINT_SIZE = Vector2(1.0, 1.0)
SPAWN_POINT_POSITION = Vector2(100.0, 0.0)

_BLACK: Color = (0, 0, 0)
_RED: Color = (255, 0, 0)


class Platform(GraphicsObject):
    """A coloured ledge that characters can stand on."""

    object_type = ObjectType.PLATFORM

    def __init__(
        self, position: Any, identifier: int, timeline: Any, color_index: int = 0
    ) -> None:
        if not 0 <= color_index < len(PLATFORM_COLORS):
            raise IndexError(f"no platform colour {color_index}")
        super().__init__(PLATFORM_SIZE, position, True, identifier, timeline)
        self.fill_color = PLATFORM_COLORS[color_index]
        self.outline_color = _BLACK
        self.outline_thickness = PLATFORM_OUTLINE_THICKNESS
        self.collision_type_x = CollisionType.STOP_MOVEMENT
        self.collision_type_y = CollisionType.NONE


class Item(GraphicsObject):
    """A collectable that disappears when touched."""

    object_type = ObjectType.ITEM

    def __init__(self, position: Any, identifier: int, timeline: Any) -> None:
        super().__init__(ITEM_SIZE, position, False, identifier, timeline)
        self.image = ITEM_IMAGE
        self.collision_type_x = CollisionType.ERASE
        self.collision_type_y = CollisionType.ERASE


class DeathZone(GraphicsObject):
    """The strip below the level that kills characters falling into it."""

    object_type = ObjectType.DEATHZONE

    def __init__(self, position: Any, identifier: int, timeline: Any) -> None:
        super().__init__(DEATH_ZONE_SIZE, position, False, identifier, timeline)
        self.collision_type_x = CollisionType.DEATH
        self.collision_type_y = CollisionType.DEATH


class Side(IntEnum):
    """Which edge of the level a side boundary guards."""

    RIGHT = 0
    LEFT = 1


class SideBoundary(GraphicsObject):
    """A wall at one end of the level that characters cannot pass."""

    object_type = ObjectType.SIDE_BOUNDARY

    def __init__(
        self, position: Any, identifier: int, timeline: Any, direction: Side | int
    ) -> None:
        super().__init__(SIDE_BOUNDARY_SIZE, position, False, identifier, timeline)
        self.direction = Side(direction)
        self.collision_type_x = CollisionType.SCROLL
        self.collision_type_y = CollisionType.SCROLL
        self.fill_color = _RED


class SpawnPoint(GraphicsObject):
    """The place where characters appear."""

    object_type = ObjectType.SPAWN_POINT

    def __init__(self) -> None:
        super().__init__(SPAWN_POINT_SIZE, SPAWN_POINT_POSITION, False, -1, None)