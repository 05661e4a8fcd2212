import pytest

from kcoretouch.box_align import BoxAligner
from kcoretouch.geometry import Vector2D


@pytest.fixture
def aligner():
    box = BoxAligner()
    box.setup(0, 0, 10, 20, 1, 1)
    return box


def test_setup_places_handles(aligner):
    assert aligner.top_left == Vector2D(0, 20)
    assert aligner.top_right == Vector2D(10, 20)
    assert aligner.bottom_right == Vector2D(10, 0)
    assert aligner.bottom_left == Vector2D(0, 0)


@pytest.mark.parametrize("index", range(4))
def test_closest_handle_at_each_handle(aligner, index):
    handle = aligner.handles[index]
    assert aligner.find_closest_handle(handle.x, handle.y) == index
    assert aligner.find_selection_distance(handle.x, handle.y) == 0


def test_offset_is_subtracted():
    box = BoxAligner()
    box.setup(5, 5, 10, 20, 1, 1)
    assert box.find_closest_handle(5, 5) == 3
    assert box.find_selection_distance(5 + 3, 5 + 4) == pytest.approx(5.0)


def test_adjust_handle_moves_nearest(aligner):
    aligner.adjust_handle(9, 19)
    assert aligner.top_right == Vector2D(9, 19)
    assert aligner.top_left == Vector2D(0, 20)


def test_adjust_handle_scales_by_resolution():
    box = BoxAligner()
    box.setup(0, 0, 100, 100, 100, 100)
    box.adjust_handle(0.9, 0.95)
    moved = box.top_right
    assert (moved.x, moved.y) == pytest.approx((0.9 * 100, 0.95 * 100))
    assert box.bottom_left == Vector2D(0, 0)


def test_reset_collapses_handles(aligner):
    aligner.reset()
    assert aligner.handles == [Vector2D(0, 0)] * 4
    assert aligner.draw_offset == Vector2D(0, 0)
    assert aligner.find_closest_handle(3, 3) == 0