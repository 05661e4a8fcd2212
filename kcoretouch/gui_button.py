"""An on/off button control, either a toggle switch or a momentary trigger."""

from __future__ import annotations

from typing import Any

from .gui_globals import GuiGlobals
from .gui_object import Display, GuiObject, ObjectType, Task, _round_int


class GuiButton(GuiObject):
    """A button whose label sits to the right of its square."""

    param_type = ObjectType.BUTTON

    def __init__(self, globals_: GuiGlobals) -> None:
        super().__init__(globals_)
        self.value = False

    @property
    def _is_trigger(self) -> bool:
        return self.display == Display.BUTTON_TRIGGER

    def init(
        self,
        id_: int,
        name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        value: bool,
        display: int,
    ) -> None:
        text_width = 0 if name == "" else self.globals.button_x_text + _round_int(
            self.globals.text_width(name)
        )
        self.param_id = id_
        self.param_name = name
        self.obj_x = x
        self.obj_y = y
        self.obj_width = text_width + width
        self.obj_height = height
        self.display = display
        self.value = bool(value)
        self.set_control_region(0, 0, width, height)

    def update(self, parameter_id: int, task: Task, data: Any) -> bool:
        if parameter_id == self.param_id and isinstance(data, bool):
            self.value = data
            return True
        return False

    def mouse_dragged(self, x: int, y: int, button: int) -> bool:
        return self.mouse_is_down

    def mouse_pressed(self, x: int, y: int, button: int) -> bool:
        local = self.mouse_to_local(x, y)
        self.mouse_is_down = self.is_point_inside(local.x, local.y)
        if self.mouse_is_down:
            self.value = True if self._is_trigger else not self.value
            self._notify(Task.SET_BOOL, self.value)
        return self.mouse_is_down

    def mouse_released(self, x: int, y: int, button: int) -> bool:
        handled = self.mouse_is_down
        if self.mouse_is_down:
            if self._is_trigger:
                self.value = False
                self._notify(Task.SET_BOOL, self.value)
            self.mouse_is_down = False
        return handled

    def build_from_xml(self) -> None:
        self._notify(Task.SET_BOOL, self.value)

    def save_to_xml(self) -> None:
        """Save the object; a trigger is always stored as released."""
        index = self.save_object_data()
        self.globals.xml.set_value("OBJECT:VALUE", False if self._is_trigger else self.value, index)