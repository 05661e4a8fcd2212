"""A collection of GUI controls sharing one style, with dispatch and persistence."""

from __future__ import annotations

from os import PathLike
from typing import Any, TypeVar

from .gui_globals import GuiGlobals
from .gui_object import GuiObject, Task

GUI_VERSION = "0.1"

_T = TypeVar("_T", bound=GuiObject)


class Gui:
    """Routes input to its controls and saves or restores their state."""

    def __init__(self, globals_: GuiGlobals) -> None:
        self.globals = globals_
        self.objects: list[GuiObject] = []
        self.is_active = False
        self.do_update = False
        self.xml_done = True

    def add(self, obj: _T) -> _T:
        """Register a control and return it."""
        self.objects.append(obj)
        return obj

    def update(self, parameter_id: int, task: Task, data: Any) -> bool:
        """Pass a value to the first control that handles it; only while active or forced."""
        if not (self.is_active or self.do_update):
            return False
        return any(obj.update(parameter_id, task, data) for obj in self.objects)

    def activate(self, active: bool) -> None:
        self.is_active = bool(active)

    def force_update(self, update: bool) -> None:
        self.do_update = bool(update)

    def mouse_dragged(self, x: int, y: int, button: int) -> bool:
        if not self.is_active:
            return False
        return any(obj.mouse_dragged(x, y, button) for obj in self.objects)

    def mouse_pressed(self, x: int, y: int, button: int) -> bool:
        if not self.is_active:
            return False
        return any(obj.mouse_pressed(x, y, button) for obj in self.objects)

    def mouse_released(self, x: int, y: int, button: int) -> bool:
        """Every control sees the release; True if any of them was held."""
        if not self.is_active:
            return False
        results = [obj.mouse_released(x, y, button) for obj in self.objects]
        return any(results)

    def load_state(self, path: str | PathLike[str]) -> bool:
        """Restore flags, style and registered controls from a file.

        Each OBJECT tag is handed to the registered control with the same id and
        type. False if the file cannot be read or does not hold exactly one UI tag.
        """
        if not self.xml_done:
            return False
        xml = self.globals.xml
        if not xml.load_file(path):
            return False
        if xml.num_tags("UI") != 1:
            return False
        self.xml_done = False
        try:
            self.globals.xml_file = str(path)
            xml.push_tag("UI", 0)
            self.is_active = bool(xml.get_value("ISACTIVE", 0))
            self.do_update = bool(xml.get_value("DOUPDATE", 0))
            self.globals.build_from_xml()
            for i in range(xml.num_tags("OBJECT")):
                xml.push_tag("OBJECT", i)
                ident = xml.get_value("ID", 0)
                kind = xml.get_value("TYPE", "")
                for obj in self.objects:
                    if obj.param_id == ident and obj.tag_name() == kind:
                        obj.build_from_xml()
                        break
                xml.pop_tag()
            xml.pop_tag()
        finally:
            self.xml_done = True
        return True

    def save_to_xml(self, path: str | PathLike[str]) -> None:
        """Write flags, style and every control to a file."""
        if not self.xml_done:
            return
        self.xml_done = False
        try:
            xml = self.globals.xml
            xml.clear()
            index = xml.add_tag("UI")
            xml.set_value("UI:VERSION", GUI_VERSION, index)
            xml.set_value("UI:ISACTIVE", self.is_active, index)
            xml.set_value("UI:DOUPDATE", self.do_update, index)
            xml.push_tag("UI", index)
            self.globals.save_to_xml()
            for obj in self.objects:
                obj.save_to_xml()
            xml.pop_tag()
            xml.save_file(path)
        finally:
            self.xml_done = True