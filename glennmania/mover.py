"""Repeating movement patterns for objects driven by the server."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

CLOCKWISE_SPAN = 100.0
LEFT_RIGHT_SPAN = 200.0
UP_DOWN_SPAN = 200.0


class Heading(IntEnum):
    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


class ClockwiseMovement:
    """Moves an object left, up, right and down around a square next to its origin."""

    def __init__(self) -> None:
        self.heading = Heading.LEFT

    def __call__(self, obj: Any) -> None:
        origin = obj.original_position
        position = obj.position
        x_diff = origin.x - position.x
        y_diff = origin.y - position.y

        if self.heading is Heading.LEFT:
            obj.left()
            if x_diff >= CLOCKWISE_SPAN:
                self.heading = Heading.UP
        if self.heading is Heading.UP:
            obj.up()
            if y_diff >= CLOCKWISE_SPAN:
                self.heading = Heading.RIGHT
        if self.heading is Heading.RIGHT:
            obj.right()
            if x_diff <= 0:
                self.heading = Heading.DOWN
        if self.heading is Heading.DOWN:
            obj.down()
            if y_diff <= 0:
                self.heading = Heading.LEFT


class LeftRightMovement:
    """Moves an object left of its origin and back again."""

    def __init__(self) -> None:
        self.heading = Heading.LEFT

    def __call__(self, obj: Any) -> None:
        x_diff = obj.original_position.x - obj.position.x

        if self.heading is Heading.LEFT:
            obj.left()
            if x_diff >= LEFT_RIGHT_SPAN:
                self.heading = Heading.RIGHT
        if self.heading is Heading.RIGHT:
            obj.right()
            if x_diff <= 0:
                self.heading = Heading.LEFT


class UpDownMovement:
    """Moves an object down from its origin and back up again."""

    def __init__(self) -> None:
        self.heading = Heading.DOWN

    def __call__(self, obj: Any) -> None:
        y_diff = obj.position.y - obj.original_position.y

        if self.heading is Heading.DOWN:
            obj.down()
            if y_diff >= UP_DOWN_SPAN:
                self.heading = Heading.UP
        if self.heading is Heading.UP:
            obj.up()
            if y_diff <= 0:
                self.heading = Heading.DOWN