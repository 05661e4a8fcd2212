"""A colour control: one horizontal slider per channel."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from .gui_globals import COLOR_RGB, COLOR_RGBA, RGBA, GuiGlobals
from .gui_object import GuiObject, ObjectType, Task

_CHANNEL_COUNT = 4


class GuiColor(GuiObject):
    """Edits an RGBA value; the alpha slider is shown only in RGBA display."""

    param_type = ObjectType.COLOR

    def __init__(self, globals_: GuiGlobals) -> None:
        super().__init__(globals_)
        self.value = RGBA()
        self.size = 4
        self.slider = 0

    def init(
        self,
        id_: int,
        name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        value: RGBA,
        display: int,
    ) -> None:
        text_height = 0 if name == "" else self.globals.param_font_height
        self.param_id = id_
        self.param_name = name
        self.obj_x = x
        self.obj_y = y
        self.obj_width = width
        self.obj_height = text_height + height
        self.display = display
        self.size = 3 if display == COLOR_RGB else 4
        self.value = replace(value)
        self.set_control_region(0, text_height, width, height)

    def update(self, parameter_id: int, task: Task, data: Any) -> bool:
        if parameter_id == self.param_id and isinstance(data, RGBA):
            self.value = replace(data)
            return True
        return False

    def mouse_dragged(self, x: int, y: int, button: int) -> bool:
        if self.mouse_is_down:
            fraction = self.mouse_to_fraction(self.mouse_to_local(x, y))
            if 0 <= self.slider < _CHANNEL_COUNT:
                self.value.set_channel(self.slider, fraction.x)
            self._notify(Task.SET_COLOR, replace(self.value))
        return self.mouse_is_down

    def mouse_pressed(self, x: int, y: int, button: int) -> bool:
        inside = self.mouse_to_local(x, y)
        self.mouse_is_down = self.is_point_inside(inside.x, inside.y)
        if self.mouse_is_down:
            self.slider = self.mouse_to_slider(self.mouse_to_fraction(inside).y)
            self.mouse_dragged(x, y, button)
        return self.mouse_is_down

    def mouse_released(self, x: int, y: int, button: int) -> bool:
        handled = self.mouse_is_down
        self.mouse_is_down = False
        return handled

    def build_from_xml(self) -> None:
        self._notify(Task.SET_COLOR, replace(self.value))

    def save_to_xml(self) -> None:
        index = self.save_object_data()
        self.globals.xml.set_value("OBJECT:VALUE", self.value.to_string(COLOR_RGBA), index)

    def mouse_to_slider(self, y: float) -> int:
        """The channel slider under a vertical fraction, clamped to 0..size."""
        position = int(y * self.size)
        return min(max(position, 0), self.size)