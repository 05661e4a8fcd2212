"""A grid of pads that can be switched on and off or triggered."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .geometry import Vector2D
from .gui_globals import GuiGlobals
from .gui_object import Display, GuiObject, ObjectType, Task

MATRIX_SET = 0x01
MATRIX_SELECTED = 0x02


@dataclass(frozen=True)
class Cell:
    """A pad index and its flag bits, as reported to the listener."""

    index: int
    value: int


class GuiMatrix(GuiObject):
    """Pads laid out x_grid by y_grid; the value is the index of the current pad."""

    param_type = ObjectType.MATRIX

    def __init__(self, globals_: GuiGlobals) -> None:
        super().__init__(globals_)
        self.value = 0
        self.x_grid = 1
        self.y_grid = 1
        self.spacing = 0
        self.buffer: list[int] = []

    @property
    def _is_trigger(self) -> bool:
        return self.display == Display.BUTTON_TRIGGER

    def _clamp_index(self, index: int) -> int:
        return min(max(index, 0), max(len(self.buffer) - 1, 0))

    def _notify_cell(self) -> None:
        self._notify(Task.SET_CELL, Cell(self.value, self.buffer[self.value]))

    def init(
        self,
        id_: int,
        name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        x_grid: int,
        y_grid: int,
        value: int,
        display: int,
        spacing: int,
    ) -> None:
        if x_grid < 1 or y_grid < 1:
            raise ValueError(f"matrix needs at least one pad per axis, got {x_grid}x{y_grid}")
        text_height = 0 if name == "" else self.globals.param_font_height
        self.param_id = id_
        self.param_name = name
        self.obj_x = x
        self.obj_y = y
        self.obj_width = width
        self.obj_height = text_height + height
        self.x_grid = x_grid
        self.y_grid = y_grid
        self.display = display
        self.spacing = spacing
        self.value = int(value)
        self.set_control_region(0, text_height, width, height)
        self.buffer = [0] * (x_grid * y_grid)
        self._notify(Task.SET_INT_ARRAY, list(self.buffer))

    def update(self, parameter_id: int, task: Task, data: Any) -> bool:
        """Select a pad by index (SET_INT) or by fraction of all pads (SET_FLOAT)."""
        handled = False
        previous = self.value
        if parameter_id == self.param_id:
            if task == Task.SET_FLOAT:
                fraction = min(max(float(data), 0.0), 1.0)
                self.value = self._clamp_index(int(fraction * len(self.buffer) - 1))
            elif task == Task.SET_INT:
                self.value = self._clamp_index(int(data))
            handled = True
        if previous != self.value:
            self._notify_cell()
        return handled

    def mouse_dragged(self, x: int, y: int, button: int) -> bool:
        return self.mouse_is_down

    def mouse_pressed(self, x: int, y: int, button: int) -> bool:
        inside = self.mouse_to_local(x, y)
        self.mouse_is_down = self.is_point_inside(inside.x, inside.y)
        if self.mouse_is_down:
            pad = self.mouse_to_pad_id(self.mouse_to_fraction(inside))
            if self._is_trigger:
                self.buffer[pad] |= MATRIX_SET
            else:
                self.buffer[pad] ^= MATRIX_SET
            self.value = pad
            self._notify_cell()
        return self.mouse_is_down

    def mouse_released(self, x: int, y: int, button: int) -> bool:
        handled = self.mouse_is_down
        if self.mouse_is_down:
            if self._is_trigger:
                self.buffer[self.value] ^= MATRIX_SET
                self._notify(Task.SET_INT, self.value)
            self.mouse_is_down = False
        return handled

    def build_from_xml(self) -> None:
        """Restore pads from PAD tags at the current XML level, then announce the value."""
        xml = self.globals.xml
        count = xml.num_tags("PAD")
        if count > 0:
            self.buffer = [0] * len(self.buffer)
            for i in range(count):
                xml.push_tag("PAD", i)
                index = xml.get_value("INDEX", 0)
                value = xml.get_value("VALUE", 0)
                if 0 <= index < len(self.buffer):
                    self.buffer[index] = value
                xml.pop_tag()
        self._notify(Task.SET_INT, self.value)

    def save_to_xml(self) -> None:
        """Save the object and one PAD tag for every pad with flags set."""
        index = self.save_object_data()
        xml = self.globals.xml
        xml.set_value("OBJECT:XGRID", self.x_grid, index)
        xml.set_value("OBJECT:YGRID", self.y_grid, index)
        xml.set_value("OBJECT:VALUE", self.value, index)
        xml.set_value("OBJECT:SPACING", self.spacing, index)
        xml.push_tag("OBJECT", index)
        for pad, flags in enumerate(self.buffer):
            if flags == 0:
                continue
            tag = xml.add_tag("PAD")
            xml.set_value("PAD:INDEX", pad, tag)
            xml.set_value("PAD:VALUE", flags, tag)
        xml.pop_tag()

    def mouse_to_pad_id(self, point: Vector2D) -> int:
        """Pad index under a point given as fractions of the control region."""
        column = min(max(int(point.x * self.x_grid), 0), self.x_grid - 1)
        row = min(max(int(point.y * self.y_grid), 0), self.y_grid - 1)
        return column + row * self.x_grid