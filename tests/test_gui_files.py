import pytest

from kcoretouch.gui_files import GuiFiles
from kcoretouch.gui_globals import GuiGlobals
from kcoretouch.gui_object import Task


@pytest.fixture
def folder(tmp_path):
    for name in ("a.xml", "b.xml", "c.txt"):
        (tmp_path / name).write_text("x")
    return tmp_path


@pytest.fixture
def calls():
    return []


@pytest.fixture
def files(folder, calls):
    control = GuiFiles(GuiGlobals(listener=lambda *args: calls.append(args)))
    control.init(7, "", 0, 0, 100, 20, "b.xml", str(folder), "xml")
    return control


def test_lists_matching_files(files):
    assert files.file_list == ["a.xml", "b.xml"]
    assert files.number_of_files == 2
    assert files.value == "b.xml"
    assert files.selected == 1


def test_unknown_value_selects_first(files):
    files.set_value("missing.xml")
    assert files.selected == 0
    assert files.value == "a.xml"


def test_empty_suffix_lists_everything(folder):
    control = GuiFiles(GuiGlobals())
    control.init(1, "", 0, 0, 10, 10, "", str(folder), "")
    assert control.file_list == ["a.xml", "b.xml", "c.txt"]


def test_missing_directory(tmp_path):
    control = GuiFiles(GuiGlobals())
    control.init(1, "", 0, 0, 10, 10, "a.xml", str(tmp_path / "nope"), "xml")
    assert control.number_of_files == 0
    assert control.value == ""


def test_width_grows_to_longest_name(folder):
    globals_ = GuiGlobals()
    globals_.measure = lambda text: 500.0
    control = GuiFiles(globals_)
    control.init(1, "", 0, 0, 10, 10, "", str(folder), "xml")
    assert control.obj_width == 500
    assert control.ctr_width == 500


def test_fraction_round_trip(files):
    for value in (0.0, 1.0):
        assert files.value_to_fraction(files.fraction_to_value(value)) == pytest.approx(value)


def test_drag_and_release_inside_commits(files, calls):
    files.set_value("a.xml")
    assert files.mouse_pressed(100, 10, 0) is True
    assert files.value == "b.xml"
    assert files.mouse_released(50, 10, 0) is True
    assert calls[-1] == (7, Task.SET_STRING, "b.xml")


def test_release_outside_restores(files, calls):
    files.set_value("a.xml")
    files.mouse_pressed(100, 10, 0)
    files.mouse_released(1000, 1000, 0)
    assert files.value == "a.xml"
    assert calls == []


def test_update_refreshes_and_sets(files, folder):
    (folder / "d.xml").write_text("x")
    assert files.update(7, Task.SET_BOOL, True) is True
    assert files.number_of_files == 3
    assert files.update(7, Task.SET_STRING, "d.xml") is True
    assert files.value == "d.xml"
    assert files.update(8, Task.SET_STRING, "a.xml") is False
    assert files.value == "d.xml"


def test_save_to_xml(files, folder):
    files.save_to_xml()
    xml = files.globals.xml
    assert xml.get_value("OBJECT:TYPE", "") == "FILES"
    assert xml.get_value("OBJECT:VALUE", "") == "b.xml"
    assert xml.get_value("OBJECT:SUBPATH", "") == str(folder)
    assert xml.get_value("OBJECT:SUFFIX", "") == "xml"