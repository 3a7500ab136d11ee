from PyQt5.QtGui import QColor

from draftboard.compositor import Compositor
from draftboard.drawing_state import Point
from draftboard.surface import Surface

from pixels import alpha_at, color_at

RED = QColor("#FF0000")


def points(*coords):
    return [Point.create(x, y) for x, y in coords]


def test_single_point_draws_filled_disk(surface):
    compositor = Compositor()
    compositor.render_brush(surface, points((100, 100)), RED, 10, 1.0)
    compositor.commit_brush(surface)

    center = color_at(surface.persistent, 100, 100)
    assert (center.red(), center.green(), center.blue(), center.alpha()) == (255, 0, 0, 255)
    assert alpha_at(surface.persistent, 97, 100) == 255
    assert alpha_at(surface.persistent, 110, 100) == 0
    assert alpha_at(surface.persistent, 100, 108) == 0


def test_continuous_band_through_intermediate_point(surface):
    compositor = Compositor()
    compositor.render_brush(surface, points((10, 10), (55, 10), (100, 10)), RED, 10, 1.0)
    compositor.commit_brush(surface)

    for x in range(12, 99):
        for y in range(6, 14):
            pixel = color_at(surface.persistent, x, y)
            assert pixel.alpha() == 255, (x, y)
            assert pixel.red() == 255 and pixel.green() == 0 and pixel.blue() == 0
    assert alpha_at(surface.persistent, 55, 20) == 0
    assert alpha_at(surface.persistent, 55, 0) == 0


def test_self_overlapping_path_does_not_stack_opacity(surface):
    compositor = Compositor()
    # 兩條對角線在 (55, 55) 交叉
    path = points((10, 10), (100, 100), (100, 10), (10, 100))
    compositor.render_brush(surface, path, RED, 12, 0.5)
    compositor.commit_brush(surface)

    crossing = alpha_at(surface.persistent, 55, 55)
    single = alpha_at(surface.persistent, 30, 30)
    assert 120 <= single <= 135
    assert abs(crossing - single) <= 2


def test_path_that_doubles_back_keeps_single_opacity(surface):
    compositor = Compositor()
    compositor.render_brush(surface, points((10, 50), (200, 50), (10, 50)), RED, 8, 0.5)

    assert 120 <= alpha_at(surface.preview, 100, 50) <= 135


def test_rerendering_clears_previous_preview(surface):
    compositor = Compositor()
    compositor.render_brush(surface, points((300, 300)), RED, 10, 1.0)
    compositor.render_brush(surface, points((10, 10), (50, 10)), RED, 10, 1.0)

    assert alpha_at(surface.preview, 300, 300) == 0
    assert alpha_at(surface.preview, 30, 10) == 255


def test_commit_moves_preview_to_persistent_and_clears_preview(surface):
    compositor = Compositor()
    compositor.render_brush(surface, points((10, 10), (50, 10)), RED, 10, 0.5)
    compositor.commit_brush(surface)

    assert 120 <= alpha_at(surface.persistent, 30, 10) <= 135
    assert alpha_at(surface.preview, 30, 10) == 0


def test_discard_leaves_persistent_untouched(surface):
    compositor = Compositor()
    compositor.render_brush(surface, points((10, 10), (50, 10)), RED, 10, 1.0)
    compositor.discard_brush(surface)

    assert alpha_at(surface.preview, 30, 10) == 0
    assert alpha_at(surface.persistent, 30, 10) == 0


def test_eraser_tap_clears_disk_of_double_size(surface):
    surface.persistent.fill(RED)
    Compositor().erase_dot(surface, Point.create(50, 50), 5)

    assert alpha_at(surface.persistent, 50, 50) == 0
    assert alpha_at(surface.persistent, 47, 52) == 0
    assert alpha_at(surface.persistent, 52, 47) == 0
    for x, y in ((58, 50), (41, 50), (50, 58), (50, 41), (200, 200)):
        pixel = color_at(surface.persistent, x, y)
        assert pixel.alpha() == 255 and pixel.red() == 255, (x, y)


def test_eraser_is_idempotent(surface):
    compositor = Compositor()
    surface.persistent.fill(RED)
    compositor.erase_segment(surface, Point.create(20, 20), Point.create(120, 80), 6)
    once = surface.persistent.copy()

    compositor.erase_segment(surface, Point.create(20, 20), Point.create(120, 80), 6)

    assert surface.persistent == once


def test_eraser_segment_uses_double_width(surface):
    surface.persistent.fill(RED)
    Compositor().erase_segment(surface, Point.create(10, 100), Point.create(200, 100), 5)

    assert alpha_at(surface.persistent, 100, 100) == 0
    assert alpha_at(surface.persistent, 100, 97) == 0
    assert alpha_at(surface.persistent, 100, 110) == 255
    assert alpha_at(surface.persistent, 100, 89) == 255


def test_eraser_never_touches_preview(surface):
    surface.preview.fill(RED)
    Compositor().erase_dot(surface, Point.create(50, 50), 5)

    assert alpha_at(surface.preview, 50, 50) == 255


def test_operations_on_empty_surface_are_noops():
    surface = Surface()
    compositor = Compositor()
    compositor.render_brush(surface, points((1, 1), (5, 5)), RED, 4, 1.0)
    compositor.commit_brush(surface)
    compositor.erase_dot(surface, Point.create(1, 1), 4)
    compositor.erase_segment(surface, Point.create(1, 1), Point.create(5, 5), 4)
    assert surface.is_empty()


def test_empty_point_list_only_clears_preview(surface):
    surface.preview.fill(RED)
    Compositor().render_brush(surface, [], RED, 4, 1.0)
    assert alpha_at(surface.preview, 10, 10) == 0
