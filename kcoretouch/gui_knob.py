"""A rotary knob control over a value range, optionally snapping to steps."""

from __future__ import annotations

from typing import Any

from .geometry import Vector2D
from .gui_globals import GuiGlobals
from .gui_object import GuiObject, ObjectType, Task, _round_int


class GuiKnob(GuiObject):
    """Turned by dragging: right and up increase, left and down decrease."""

    param_type = ObjectType.KNOB

    def __init__(self, globals_: GuiGlobals) -> None:
        super().__init__(globals_)
        self.value = 0.0
        self.min_val = 0.0
        self.max_val = 1.0
        self.val_dlt = 1.0
        self.first_hit = Vector2D()

    def init(
        self,
        id_: int,
        name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        minimum: float,
        maximum: float,
        value: float,
        display: int,
        steps: int,
    ) -> None:
        text_height = 0 if name == "" else self.globals.param_font_height
        self.param_id = id_
        self.param_name = name
        self.obj_x = x
        self.obj_y = y
        self.obj_width = width
        self.obj_height = text_height + height
        self.display = display
        self.steps = steps
        self.set_range(minimum, maximum)
        self.set_value(value)
        self.set_control_region(0, text_height, width, height)

    def set_value(self, value: float) -> None:
        """Store value, snapped to the nearest step when steps > 1."""
        if self.steps > 1:
            steps = float(self.steps - 1)
            slice_ = _round_int(self.value_to_fraction(value) * steps) / steps
            value = self.min_val + self.val_dlt * slice_
        self.value = float(value)

    def set_range(self, minimum: float, maximum: float) -> None:
        self.min_val = float(minimum)
        self.max_val = float(maximum)
        self.val_dlt = self.max_val - self.min_val

    def update(self, parameter_id: int, task: Task, data: Any) -> bool:
        if parameter_id != self.param_id:
            return False
        if task == Task.SET_FLOAT:
            self.set_value(float(data))
        return True

    def mouse_dragged(self, x: int, y: int, button: int) -> bool:
        if self.mouse_is_down:
            point = self.mouse_to_local(x, y)
            delta = (point.x - self.first_hit.x) - (point.y - self.first_hit.y)
            value = self.value + delta * (self.val_dlt / 100.0)
            if value < self.min_val:
                value = self.min_val
            elif value > self.max_val:
                value = self.max_val
            if value != self.value:
                self.set_value(value)
                self._notify(Task.SET_FLOAT, self.value)
                self.first_hit = point
        return self.mouse_is_down

    def mouse_pressed(self, x: int, y: int, button: int) -> bool:
        point = self.mouse_to_local(x, y)
        self.mouse_is_down = self.is_point_inside(point.x, point.y)
        if self.mouse_is_down:
            self.first_hit = point
            self.mouse_dragged(x, y, button)
        return self.mouse_is_down

    def mouse_released(self, x: int, y: int, button: int) -> bool:
        handled = self.mouse_is_down
        self.mouse_is_down = False
        return handled

    def build_from_xml(self) -> None:
        self._notify(Task.SET_FLOAT, self.value)

    def save_to_xml(self) -> None:
        index = self.save_object_data()
        xml = self.globals.xml
        xml.set_value("OBJECT:MIN", self.min_val, index)
        xml.set_value("OBJECT:MAX", self.max_val, index)
        xml.set_value("OBJECT:VALUE", self.value, index)

    def value_to_fraction(self, value: float) -> float:
        if self.val_dlt == 0:
            return 0.0
        return (value - self.min_val) / self.val_dlt

    def fraction_to_value(self, fraction: float) -> float:
        return self.val_dlt * fraction + self.min_val