import pytest

from kcoretouch.gui_color import GuiColor
from kcoretouch.gui_globals import COLOR_RGB, COLOR_RGBA, RGBA, GuiGlobals
from kcoretouch.gui_object import Task


@pytest.fixture
def calls():
    return []


@pytest.fixture
def color(calls):
    globals_ = GuiGlobals(listener=lambda *args: calls.append(args))
    control = GuiColor(globals_)
    control.init(1, "", 0, 0, 100, 40, RGBA(0.0, 0.0, 0.0, 1.0), COLOR_RGBA)
    return control


def test_size_follows_display():
    control = GuiColor(GuiGlobals())
    control.init(2, "", 0, 0, 10, 10, RGBA(), COLOR_RGB)
    assert control.size == 3
    control.init(2, "", 0, 0, 10, 10, RGBA(), COLOR_RGBA)
    assert control.size == 4


def test_named_control_leaves_room_for_label():
    globals_ = GuiGlobals()
    control = GuiColor(globals_)
    control.init(3, "tint", 0, 0, 50, 20, RGBA(), COLOR_RGBA)
    assert control.ctr_y == globals_.param_font_height
    assert control.obj_height == globals_.param_font_height + 20


def test_init_copies_value():
    original = RGBA(0.1, 0.2, 0.3, 0.4)
    control = GuiColor(GuiGlobals())
    control.init(1, "", 0, 0, 10, 10, original, COLOR_RGBA)
    control.value.r = 0.9
    assert original.r == 0.1


def test_mouse_to_slider_clamps(color):
    assert color.mouse_to_slider(0.0) == 0
    assert color.mouse_to_slider(-1.0) == 0
    assert color.mouse_to_slider(1.0) == color.size


def test_press_sets_red_channel_and_notifies(color, calls):
    assert color.mouse_pressed(50, 5, 0) is True
    assert color.slider == 0
    assert color.value.r == pytest.approx(0.5)
    assert calls[-1][0] == 1
    assert calls[-1][1] == Task.SET_COLOR
    assert calls[-1][2].r == pytest.approx(0.5)


def test_press_outside_is_not_handled(color, calls):
    assert color.mouse_pressed(500, 500, 0) is False
    assert calls == []


def test_release_reports_previous_state(color):
    color.mouse_pressed(10, 10, 0)
    assert color.mouse_released(10, 10, 0) is True
    assert color.mouse_released(10, 10, 0) is False


def test_drag_without_press_does_nothing(color, calls):
    assert color.mouse_dragged(50, 5, 0) is False
    assert calls == []


def test_update(color):
    new = RGBA(1.0, 0.5, 0.25, 1.0)
    assert color.update(1, Task.SET_COLOR, new) is True
    assert color.value == new
    assert color.update(2, Task.SET_COLOR, new) is False
    assert color.update(1, Task.SET_COLOR, 3) is False


def test_save_to_xml(color):
    color.value = RGBA.from_hex("FF8800CC")
    color.save_to_xml()
    xml = color.globals.xml
    assert xml.get_value("OBJECT:TYPE", "") == "COLOR"
    assert xml.get_value("OBJECT:VALUE", "") == "FF8800CC"


def test_build_from_xml_notifies(color, calls):
    color.build_from_xml()
    assert calls[-1][1] == Task.SET_COLOR
    assert calls[-1][2] == color.value