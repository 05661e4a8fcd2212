"""Base class for GUI controls: geometry, hit testing and XML persistence."""

from __future__ import annotations

import math
from enum import Enum, IntEnum
from typing import Any

from .geometry import Vector2D
from .gui_globals import COLOR_RGB as _COLOR_RGB
from .gui_globals import COLOR_RGBA as _COLOR_RGBA
from .gui_globals import GuiGlobals


class Display(IntEnum):
    """How a control shows its value."""

    INT = 0
    HEX = 1
    FLOAT2 = 2
    FLOAT4 = 3
    COLOR_RGB = _COLOR_RGB
    COLOR_RGBA = _COLOR_RGBA
    BUTTON_SWITCH = 20
    BUTTON_TRIGGER = 21


class Task(IntEnum):
    """What kind of value a control update or notification carries."""

    SET_BOOL = 0
    SET_INT = 1
    SET_FLOAT = 2
    SET_STRING = 3
    SET_COLOR = 4
    SET_CELL = 5
    SET_INT_ARRAY = 6


class ObjectType(Enum):
    """Control kinds; the name is the XML tag type."""

    BASE = 0
    PANEL = 1
    BUTTON = 2
    COLOR = 3
    FILES = 4
    KNOB = 5
    MATRIX = 6


def _round_int(value: float) -> int:
    return math.floor(value + 0.5)


def float_to_string(value: float, display: int) -> str:
    """Format a value as a control displays it."""
    if display == Display.INT:
        return str(int(value))
    if display == Display.HEX:
        return f"{int(value) & 0xFFFFFFFF:X}"
    if display == Display.FLOAT2:
        return f"{value:.2f}"
    if display == Display.FLOAT4:
        return f"{value:.4f}"
    return f"{value:g}"


def point_to_string(value: Vector2D, display: int) -> str:
    return f"{float_to_string(value.x, display)} {float_to_string(value.y, display)}"


class GuiObject:
    """A control placed at (obj_x, obj_y) with an active region in local coordinates."""

    param_type = ObjectType.BASE

    def __init__(self, globals_: GuiGlobals) -> None:
        self.globals = globals_
        self.param_id = -1
        self.param_name = ""
        self.obj_x = 0.0
        self.obj_y = 0.0
        self.obj_width = 0.0
        self.obj_height = 0.0
        self.display: int = Display.FLOAT2
        self.steps = 0
        self.mouse_is_down = False
        self.set_control_region(0, 0, 0, 0)

    def _notify(self, task: Task, value: Any) -> None:
        listener = self.globals.listener
        if listener is not None:
            listener(self.param_id, task, value)

    def update(self, parameter_id: int, task: Task, data: Any) -> bool:
        """Apply an external value; True if this control handled it."""
        return False

    def mouse_dragged(self, x: int, y: int, button: int) -> bool:
        return False

    def mouse_pressed(self, x: int, y: int, button: int) -> bool:
        return False

    def mouse_released(self, x: int, y: int, button: int) -> bool:
        return False

    def build_from_xml(self) -> None:
        """Announce the restored value; the base control has none."""

    def save_to_xml(self) -> None:
        self.save_object_data()

    def is_point_inside(self, x: float, y: float) -> bool:
        """True if the local point lies in the control region, edges included."""
        return self.ctr_x <= x <= self.ctr_right and self.ctr_y <= y <= self.ctr_bottom

    def mouse_to_local(self, x: float, y: float) -> Vector2D:
        return Vector2D(float(x - self.obj_x), float(y - self.obj_y))

    def mouse_to_fraction(self, point: Vector2D) -> Vector2D:
        """Clamp a local point to the control region and scale it to 0..1."""
        x = min(max(point.x, self.ctr_x), self.ctr_right)
        y = min(max(point.y, self.ctr_y), self.ctr_bottom)
        fx = (x - self.ctr_x) / self.ctr_width if self.ctr_width else 0.0
        fy = (y - self.ctr_y) / self.ctr_height if self.ctr_height else 0.0
        return Vector2D(fx, fy)

    def fraction_to_local(self, point: Vector2D) -> Vector2D:
        return Vector2D(self.ctr_x + self.ctr_width * point.x, self.ctr_y + self.ctr_height * point.y)

    def set_control_region(self, x: float, y: float, width: float, height: float) -> None:
        self.ctr_x = float(x)
        self.ctr_y = float(y)
        self.ctr_width = float(width)
        self.ctr_height = float(height)
        self.ctr_right = self.ctr_x + self.ctr_width
        self.ctr_bottom = self.ctr_y + self.ctr_height

    def save_object_data(self) -> int:
        """Append an OBJECT tag with the common fields and return its index."""
        xml = self.globals.xml
        index = xml.add_tag("OBJECT")
        xml.set_value("OBJECT:ID", self.param_id, index)
        xml.set_value("OBJECT:TYPE", self.tag_name(), index)
        xml.set_value("OBJECT:NAME", self.param_name, index)
        xml.set_value("OBJECT:LEFT", self.obj_x, index)
        xml.set_value("OBJECT:TOP", self.obj_y, index)
        xml.set_value("OBJECT:WIDTH", self.ctr_width, index)
        xml.set_value("OBJECT:HEIGHT", self.ctr_height, index)
        xml.set_value("OBJECT:DISPLAY", int(self.display), index)
        xml.set_value("OBJECT:STEPS", self.steps, index)
        return index

    def tag_name(self) -> str:
        return self.param_type.name