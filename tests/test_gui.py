from kcoretouch.gui import Gui
from kcoretouch.gui_button import GuiButton
from kcoretouch.gui_globals import GuiGlobals
from kcoretouch.gui_matrix import MATRIX_SET, GuiMatrix
from kcoretouch.gui_object import Display, Task


def make_gui(events=None):
    listener = None if events is None else (lambda pid, task, data: events.append((pid, task, data)))
    g = GuiGlobals(listener)
    gui = Gui(g)
    button = gui.add(GuiButton(g))
    button.init(1, "", 0, 0, 20, 20, False, Display.BUTTON_SWITCH)
    matrix = gui.add(GuiMatrix(g))
    matrix.init(2, "", 0, 50, 40, 40, 2, 2, 0, Display.BUTTON_SWITCH, 0)
    return gui, button, matrix


def test_add_returns_object():
    gui, button, matrix = make_gui()
    assert gui.objects == [button, matrix]


def test_update_needs_active_or_forced():
    gui, button, _ = make_gui()
    assert gui.update(1, Task.SET_BOOL, True) is False
    assert button.value is False
    gui.force_update(True)
    assert gui.update(1, Task.SET_BOOL, True) is True
    assert button.value is True


def test_mouse_ignored_when_inactive():
    gui, button, _ = make_gui()
    assert gui.mouse_pressed(5, 5, 0) is False
    assert button.value is False


def test_mouse_dispatch_when_active():
    gui, button, matrix = make_gui()
    gui.activate(True)
    assert gui.mouse_pressed(5, 5, 0) is True
    assert button.value is True
    assert matrix.buffer == [0] * 4
    assert gui.mouse_released(5, 5, 0) is True
    assert gui.mouse_pressed(5, 60, 0) is True
    assert matrix.buffer[0] == MATRIX_SET


def test_save_and_load_round_trip(tmp_path):
    gui, _, matrix = make_gui()
    gui.activate(True)
    gui.mouse_pressed(35, 85, 0)
    saved = list(matrix.buffer)
    gui.globals.knob_size = 17
    path = tmp_path / "ui.xml"
    gui.save_to_xml(path)

    events = []
    other, _, other_matrix = make_gui(events)
    assert other.load_state(path) is True
    assert other.is_active is True
    assert other.do_update is False
    assert other.globals.knob_size == 17
    assert other_matrix.buffer == saved
    assert (1, Task.SET_BOOL, False) in events


def test_load_missing_file(tmp_path):
    gui, _, _ = make_gui()
    assert gui.load_state(tmp_path / "absent.xml") is False
    assert gui.xml_done is True


def test_load_needs_single_ui_tag(tmp_path):
    path = tmp_path / "two.xml"
    path.write_text("<UI><ISACTIVE>1</ISACTIVE></UI><UI></UI>", encoding="utf-8")
    gui, _, _ = make_gui()
    assert gui.load_state(path) is False
    assert gui.is_active is False