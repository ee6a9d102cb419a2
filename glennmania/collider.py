"""Collision checks between a character and other game objects."""

from __future__ import annotations

from typing import Any

from .event import Event, EventType
from .geometry import Rect

X_AXIS = 0
Y_AXIS = 1

# The character's box is shortened so that it does not count as touching a
# platform it visibly stands above.
_HEIGHT_REDUCTION = 10.0


def is_character_grounded(character: Any, ground: Any) -> bool:
    """True when the character's feet reach the top of the ground horizontally within it."""
    body = character.global_bounds()
    floor = ground.global_bounds()
    return (
        body.bottom >= floor.top
        and body.right >= floor.left
        and body.left <= floor.right
    )


def _collision_axis(overlap: Rect) -> int | None:
    if overlap.width < overlap.height:
        return X_AXIS
    if overlap.width > overlap.height:
        return Y_AXIS
    return None


def check_collision(
    character: Any, other: Any, with_response: bool, handler: Any = None
) -> bool:
    """Test whether the character's next position overlaps another object.

    With a response, a collision event is raised on the handler, carrying the
    character, the other object and the axis of the collision.
    """
    if with_response and handler is None:
        raise ValueError("a handler is needed to respond to collisions")

    bounds = character.global_bounds()
    velocity = character.effective_velocity()
    next_bounds = Rect(
        bounds.left + velocity.x,
        bounds.top + velocity.y,
        bounds.width,
        bounds.height - _HEIGHT_REDUCTION,
    )

    overlap = other.global_bounds().intersection(next_bounds)
    if overlap is None:
        return False

    if with_response:
        direction = _collision_axis(overlap)
        event = Event(EventType.COLLISION, other.timeline.timestamp)
        event.add_character(character)
        event.add_graphics_object(other)
        event.add_collision_direction(direction)
        event.add_metadata(
            f"Collider, character {character.identifier}, "
            f"object {other.identifier}, direction {direction}"
        )
        handler.on_event(event)
    return True