"""Four draggable handles that outline a projection area.

Handles are numbered 0 to 3: top-left, top-right, bottom-right, bottom-left.
"""

from __future__ import annotations

import math

from .geometry import Vector2D


class BoxAligner:
    """Outline of a projection area defined by four movable corner handles."""

    def __init__(self) -> None:
        self.handles: list[Vector2D] = [Vector2D()] * 4
        self.draw_offset = Vector2D()
        self.res_width = 1.0
        self.res_height = 1.0

    def reset(self) -> None:
        """Collapse every handle and the draw offset onto the origin."""
        self.handles = [Vector2D()] * 4
        self.draw_offset = Vector2D()

    def setup(self, x: float, y: float, w: float, h: float, res_w: float, res_h: float) -> None:
        """Place the handles on a w by h box drawn at offset (x, y)."""
        self.handles = [Vector2D(0.0, h), Vector2D(w, h), Vector2D(w, 0.0), Vector2D(0.0, 0.0)]
        self.draw_offset = Vector2D(x, y)
        self.res_width = res_w
        self.res_height = res_h

    def _distances(self, mouse_x: float, mouse_y: float) -> list[float]:
        local_x = mouse_x - self.draw_offset.x
        local_y = mouse_y - self.draw_offset.y
        return [math.hypot(h.x - local_x, h.y - local_y) for h in self.handles]

    def adjust_handle(self, mouse_x: float, mouse_y: float) -> None:
        """Move the handle nearest to the normalised mouse position onto it."""
        scaled_x = mouse_x * self.res_width
        scaled_y = mouse_y * self.res_height
        index = self.find_closest_handle(scaled_x, scaled_y)
        self.handles[index] = Vector2D(
            scaled_x - self.draw_offset.x * self.res_width,
            scaled_y - self.draw_offset.y * self.res_height,
        )

    def find_closest_handle(self, mouse_x: float, mouse_y: float) -> int:
        """Index of the handle nearest to the mouse; the lowest index wins ties."""
        distances = self._distances(mouse_x, mouse_y)
        return min(range(len(distances)), key=distances.__getitem__)

    def find_selection_distance(self, mouse_x: float, mouse_y: float) -> float:
        """Distance from the mouse to the nearest handle."""
        return min(self._distances(mouse_x, mouse_y))

    @property
    def top_left(self) -> Vector2D:
        return self.handles[0]

    @property
    def top_right(self) -> Vector2D:
        return self.handles[1]

    @property
    def bottom_right(self) -> Vector2D:
        return self.handles[2]

    @property
    def bottom_left(self) -> Vector2D:
        return self.handles[3]