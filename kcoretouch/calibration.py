"""Interactive calibration screen: key handling, touch capture and on-screen guides."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Protocol, Union

from .calibration_utils import CalibrationUtils
from .geometry import Blob, Rect2D, Vector2D

logger = logging.getLogger(__name__)

NUDGE = 0.001
MAX_GRID = 16
MIN_GRID = 1
TARGET_IDLE = 0xFF0000
TARGET_HELD = 0xFFFFFF

_DEG = 3.14 / 180.0

Point = tuple[float, float]
Triangle = tuple[Point, Point, Point]


class Key(Enum):
    """Non-character keys the calibration screen reacts to."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


KeyInput = Union[str, Key]


class _Tracker(Protocol):
    def pass_in_calibration(self, calibration: CalibrationUtils) -> None: ...


CALIBRATING_TEXT = (
    "CALIBRATING: \n\n"
    "-To calibrate, touch and hold current circle target until the circle turns white \n"
    "-Press [b] to recapture background (if there's false blobs) \n"
    "-Press [r] to go back to previous point(s) \n"
)

IDLE_TEXT = (
    "CALIBRATION \n\n"
    "-Press [c] to start calibrating \n"
    "-Press [x] to return main screen \n"
    "-Press [b] to recapture background \n"
    "-Press [t] to toggle blob targets \n\n"
    "CHANGING GRID SIZE (number of points): \n\n"
    "-Current Grid Size is {gx} x {gy} \n"
    "-Press [+]/[-] to add/remove points on X axis \n"
    "-Press [shift][+]/[-] to add/remove points on Y axis \n\n"
    "ALINGING BOUNDING BOX TO PROJECTION SCREEN: \n\n"
    "-Use arrow keys to move bounding box\n"
    "-Press and hold [w],[a],[s],[d] (top, left, bottom, right) and arrow keys "
    "to adjust each side\n"
)


def _nudged(value: float, delta: float) -> float:
    value += delta
    return min(value, 1.0) if delta > 0 else max(value, 0.0)


def circle_loader_triangles(
    xctr: float, yctr: float, radius: float, start_angle: float, end_angle: float
) -> list[Triangle]:
    """Triangle fan covering the arc from start_angle to end_angle (degrees)."""
    ang0 = start_angle * _DEG
    ang1 = end_angle * _DEG
    previous = (xctr + radius * math.cos(ang0), yctr + radius * math.sin(ang0))
    triangles: list[Triangle] = []
    angle = ang0 + _DEG
    while angle < ang1 + _DEG:
        current = (xctr + radius * math.cos(angle), yctr + radius * math.sin(angle))
        triangles.append(((xctr, yctr), previous, current))
        previous = current
        angle += _DEG
    return triangles


class Calibration:
    """Drives a CalibrationUtils mesh from key presses and touches."""

    def __init__(self, utils: CalibrationUtils, tracker: _Tracker | None = None) -> None:
        self.utils = utils
        self.tracker: _Tracker | None = None
        self.calibrating = False
        self.show_targets = True
        self.held = {"w": False, "a": False, "s": False, "d": False}
        self.target_color = TARGET_IDLE
        self.arc_angle = 0.0
        self.last_touch: Blob | None = None
        if tracker is not None:
            self.pass_in_tracker(tracker)

    def pass_in_tracker(self, tracker: _Tracker) -> None:
        self.tracker = tracker
        tracker.pass_in_calibration(self.utils)

    def _publish(self) -> None:
        if self.tracker is not None:
            self.tracker.pass_in_calibration(self.utils)

    # ------------------------------------------------------------------
    # display helpers

    def instructions(self) -> str:
        """The help text shown on the calibration screen."""
        if self.utils.calibrating:
            return CALIBRATING_TEXT
        return IDLE_TEXT.format(gx=self.utils.grid_x + 1, gy=self.utils.grid_y + 1)

    def loader_angle(self, blobs: Mapping[int, Blob] | Iterable[Blob]) -> float:
        """Largest 'sitting' fraction among the blobs; drives the loading circle."""
        values = blobs.values() if isinstance(blobs, Mapping) else blobs
        self.arc_angle = max((b.sitting for b in values), default=0.0)
        self.arc_angle = max(self.arc_angle, 0.0)
        return self.arc_angle

    # ------------------------------------------------------------------
    # keys

    def _regrid(self) -> None:
        self.utils.set_grid(self.utils.grid_x, self.utils.grid_y)
        self.utils.calibration_step = 0

    def _move_box(self, horizontal: bool, delta: float) -> None:
        bb = self.utils.screen_bb
        far_key, near_key = ("d", "a") if horizontal else ("s", "w")
        move_far = self.held[far_key] or not self.held[near_key]
        move_near = not self.held[far_key]
        ul, lr = bb.upper_left, bb.lower_right
        if horizontal:
            if move_far:
                lr = Vector2D(_nudged(lr.x, delta), lr.y)
            if move_near:
                ul = Vector2D(_nudged(ul.x, delta), ul.y)
        else:
            if move_far:
                lr = Vector2D(lr.x, _nudged(lr.y, delta))
            if move_near:
                ul = Vector2D(ul.x, _nudged(ul.y, delta))
        self.utils.screen_bb = Rect2D(ul, lr)
        self._regrid()

    def _change_grid(self, axis: str, delta: int) -> None:
        utils = self.utils
        if axis == "x":
            utils.grid_x = min(max(utils.grid_x + delta, MIN_GRID), MAX_GRID)
        else:
            utils.grid_y = min(max(utils.grid_y + delta, MIN_GRID), MAX_GRID)
        self._regrid()

    def key_pressed(self, key: KeyInput) -> None:
        if not self.calibrating:
            return
        utils = self.utils
        if key == "t":
            self.show_targets = not self.show_targets
        elif key == "c":
            if utils.calibrating:
                utils.calibrating = False
                logger.info("Calibration Stoped")
            else:
                utils.begin_calibration()
                logger.info("Calibration Started")
        elif key == "r":
            if utils.calibrating:
                utils.revert_calibration_step()
        elif isinstance(key, str) and key in self.held:
            self.held[key] = True
        elif key is Key.RIGHT:
            self._move_box(True, NUDGE)
        elif key is Key.LEFT:
            self._move_box(True, -NUDGE)
        elif key is Key.DOWN:
            self._move_box(False, NUDGE)
        elif key is Key.UP:
            self._move_box(False, -NUDGE)
        elif key == "=":
            self._change_grid("x", 1)
        elif key == "-":
            self._change_grid("x", -1)
        elif key == "+":
            self._change_grid("y", 1)
        elif key == "_":
            self._change_grid("y", -1)

    def key_released(self, key: KeyInput) -> None:
        if not self.calibrating:
            return
        if isinstance(key, str) and key in self.held:
            self.held[key] = False
        elif key == "x":
            self._publish()
        elif isinstance(key, Key):
            self.utils.compute_camera_to_screen_map()
            self._publish()

    # ------------------------------------------------------------------
    # touches

    def touch_down(self, blob: Blob) -> None:
        """Remember the new touch; it does not advance calibration."""
        self.last_touch = blob

    def touch_moved(self, blob: Blob) -> None:
        """Remember the moved touch; it does not advance calibration."""
        self.last_touch = blob

    def touch_up(self, blob: Blob) -> None:
        utils = self.utils
        if not (utils.calibrating and utils.go_to_next_step):
            return
        utils.next_calibration_step()
        utils.go_to_next_step = False
        self.target_color = TARGET_IDLE
        if utils.calibration_step != 0:
            logger.info("%d (%f, %f)", utils.calibration_step, blob.centroid.x, blob.centroid.y)
        else:
            logger.info("%d (%f, %f)", utils.grid_points, blob.centroid.x, blob.centroid.y)
            logger.info("Calibration complete")

    def touch_held(self, blob: Blob) -> None:
        utils = self.utils
        if not utils.calibrating:
            return
        utils.camera_points[utils.calibration_step] = Vector2D(blob.centroid.x, blob.centroid.y)
        utils.go_to_next_step = True
        self.target_color = TARGET_HELD