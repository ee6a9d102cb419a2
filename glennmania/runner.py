"""Draws a client's view of the world, following its character."""

from __future__ import annotations

from typing import Any, Optional

import pygame

from .geometry import Vector2

WINDOW_SIZE = (1000, 800)
WINDOW_TITLE = "Glennwood Mania"
FRAME_RATE = 100

BACKGROUND_COLOR = (200, 252, 252)
BACKGROUND_SIZE = Vector2(3000.0, 800.0)
_CLEAR_COLOR = (0, 0, 0)

# The view never scrolls past the ends of the level.
_VIEW_MIN_X = 500.0
_VIEW_MAX_X = 2500.0
_VIEW_Y = 400.0
_VIEW_NUDGE = 2.0
INITIAL_VIEW_CENTER = Vector2(500.0, 400.0)


def view_center(position: Vector2) -> Vector2:
    """Where to centre the view for a character at the given position."""
    x = min(max(position.x, _VIEW_MIN_X), _VIEW_MAX_X)
    return Vector2(x - _VIEW_NUDGE, _VIEW_Y)


def _screen_rect(
    left: float, top: float, width: float, height: float, offset: Vector2
) -> pygame.Rect:
    return pygame.Rect(
        round(left - offset.x), round(top - offset.y), round(width), round(height)
    )


class GameRunner:
    """Renders a client game state and passes server updates to it.

    As when drawing through a view, each frame is drawn with the view chosen
    after the previous frame; ``center`` holds the view for the next frame.
    """

    def __init__(self, state: Any, character_id: int) -> None:
        self.state = state
        self.character_id = int(character_id)
        self.center = Vector2(INITIAL_VIEW_CENTER.x, INITIAL_VIEW_CENTER.y)
        self._images: dict[str, Optional[pygame.Surface]] = {}

    def deserialize(self, data: str) -> None:
        """Apply a serialized world received from the server."""
        self.state.deserialize(data, self.character_id)

    def _offset(self) -> Vector2:
        return Vector2(
            self.center.x - WINDOW_SIZE[0] / 2, self.center.y - WINDOW_SIZE[1] / 2
        )

    def _image(self, path: str) -> Optional[pygame.Surface]:
        if path not in self._images:
            try:
                self._images[path] = pygame.image.load(path)
            except (pygame.error, OSError):
                self._images[path] = None
        return self._images[path]

    def _draw_object(self, surface: pygame.Surface, obj: Any, offset: Vector2) -> None:
        position = obj.position
        size = obj.size
        body = _screen_rect(position.x, position.y, size.x, size.y, offset)
        image = self._image(obj.image) if obj.image else None
        if image is not None:
            surface.blit(pygame.transform.scale(image, body.size), body.topleft)
        else:
            pygame.draw.rect(surface, obj.fill_color, body)

        thickness = round(obj.outline_thickness)
        if thickness > 0:
            bounds = obj.global_bounds()
            outline = _screen_rect(
                bounds.left, bounds.top, bounds.width, bounds.height, offset
            )
            pygame.draw.rect(surface, obj.outline_color, outline, thickness)

    def draw(self, surface: pygame.Surface) -> Vector2:
        """Draw the background and every object, then follow the character.

        Returns the view centre that the next frame will use.
        """
        offset = self._offset()
        surface.fill(_CLEAR_COLOR)
        pygame.draw.rect(
            surface,
            BACKGROUND_COLOR,
            _screen_rect(0.0, 0.0, BACKGROUND_SIZE.x, BACKGROUND_SIZE.y, offset),
        )
        for obj in self.state.graphics_objects:
            self._draw_object(surface, obj, offset)

        self.center = view_center(self.state.character_position)
        return Vector2(self.center.x, self.center.y)