"""A control that picks one file from a directory by dragging across it."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .gui_globals import GuiGlobals
from .gui_object import GuiObject, ObjectType, Task, _round_int


class GuiFiles(GuiObject):
    """Selects a file name among those in path ending with suffix."""

    param_type = ObjectType.FILES

    def __init__(self, globals_: GuiGlobals) -> None:
        super().__init__(globals_)
        self.value = ""
        self.memory = ""
        self.path = ""
        self.suffix = ""
        self.selected = 0
        self.number_of_files = 0
        self.file_list: list[str] = []

    def init(
        self,
        id_: int,
        name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        value: str,
        path: str,
        suffix: str,
    ) -> None:
        text_height = 0 if name == "" else self.globals.param_font_height
        self.param_id = id_
        self.param_name = name
        self.obj_x = x
        self.obj_y = y
        self.path = str(path)
        self.suffix = suffix
        width = max(width, self.refresh_file_list())
        self.obj_width = width
        self.obj_height = text_height + height
        self.set_value(value)
        self.set_control_region(0, text_height, width, height)

    def set_value(self, value: str) -> None:
        """Select value if it is listed, else the first file."""
        self.selected = 0
        if value in self.file_list:
            self.selected = self.file_list.index(value)
            self.value = value
        if self.selected == 0 and self.file_list:
            self.value = self.file_list[0]

    def update(self, parameter_id: int, task: Task, data: Any) -> bool:
        if parameter_id != self.param_id:
            return False
        if task == Task.SET_BOOL:
            if data:
                self.refresh_file_list()
        elif task == Task.SET_STRING:
            self.set_value(data)
        return True

    def mouse_dragged(self, x: int, y: int, button: int) -> bool:
        if self.mouse_is_down and self.number_of_files > 0:
            fraction = self.mouse_to_fraction(self.mouse_to_local(x, y))
            self.selected = _round_int(self.fraction_to_value(fraction.x))
            self.value = self.file_list[self.selected]
        return self.mouse_is_down

    def mouse_pressed(self, x: int, y: int, button: int) -> bool:
        local = self.mouse_to_local(x, y)
        self.mouse_is_down = self.is_point_inside(local.x, local.y)
        if self.mouse_is_down:
            self.memory = self.value
            self.mouse_dragged(x, y, button)
        return self.mouse_is_down

    def mouse_released(self, x: int, y: int, button: int) -> bool:
        """Commit the choice if released inside, otherwise restore the old one."""
        handled = self.mouse_is_down
        if self.mouse_is_down:
            local = self.mouse_to_local(x, y)
            if self.is_point_inside(local.x, local.y):
                self._notify(Task.SET_STRING, self.value)
            else:
                self.value = self.memory
            self.mouse_is_down = False
        return handled

    def build_from_xml(self) -> None:
        self._notify(Task.SET_STRING, self.value)

    def save_to_xml(self) -> None:
        index = self.save_object_data()
        xml = self.globals.xml
        xml.set_value("OBJECT:VALUE", self.value, index)
        xml.set_value("OBJECT:SUBPATH", self.path, index)
        xml.set_value("OBJECT:SUFFIX", self.suffix, index)

    def value_to_fraction(self, value: float) -> float:
        if self.number_of_files <= 1:
            return 0.0
        return value / (self.number_of_files - 1)

    def fraction_to_value(self, fraction: float) -> float:
        return fraction * (self.number_of_files - 1)

    def _matches(self, entry: Path) -> bool:
        if not self.suffix:
            return True
        return entry.suffix.lstrip(".").lower() == self.suffix.lstrip(".").lower()

    def refresh_file_list(self) -> int:
        """Re-read the directory; return the widest file name's width."""
        try:
            entries = sorted(
                entry.name
                for entry in Path(self.path).iterdir()
                if entry.is_file() and self._matches(entry)
            )
        except OSError:
            entries = []
        self.file_list = entries
        self.number_of_files = len(entries)
        return max((_round_int(self.globals.text_width(name)) for name in entries), default=0)