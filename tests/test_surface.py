from PyQt5.QtCore import QRect

from draftboard.surface import Surface

from pixels import alpha_at, paint_rect


def test_new_surface_layers_are_transparent_and_same_size():
    surface = Surface(200, 100)
    assert (surface.width, surface.height) == (200, 100)
    assert surface.preview.size() == surface.persistent.size()
    assert alpha_at(surface.persistent, 10, 10) == 0
    assert alpha_at(surface.preview, 10, 10) == 0


def test_resize_to_same_size_is_noop():
    surface = Surface(200, 200)
    paint_rect(surface.persistent, 0, 0, 50, 50)
    before = surface.persistent

    assert surface.resize(200, 200) is False
    assert surface.persistent is before


def test_resize_twice_changes_nothing_second_time():
    surface = Surface(200, 200)
    paint_rect(surface.persistent, 10, 10, 30, 30)
    assert surface.resize(300, 250) is True
    snapshot = surface.persistent.copy()

    assert surface.resize(300, 250) is False
    assert surface.persistent == snapshot


def test_grow_preserves_painted_pixels():
    surface = Surface(100, 80)
    paint_rect(surface.persistent, 5, 5, 60, 40, "#00FF00")
    original = surface.persistent.copy()

    surface.resize(400, 300)

    assert (surface.width, surface.height) == (400, 300)
    assert surface.persistent.copy(QRect(0, 0, 100, 80)) == original
    # 新增的區域是透明的
    assert alpha_at(surface.persistent, 150, 150) == 0
    assert alpha_at(surface.persistent, 399, 299) == 0


def test_preview_layer_is_not_restored_on_resize():
    surface = Surface(100, 100)
    paint_rect(surface.preview, 0, 0, 100, 100)

    surface.resize(120, 120)

    assert surface.preview.size() == surface.persistent.size()
    assert alpha_at(surface.preview, 10, 10) == 0


def test_shrink_discards_outside_and_grow_does_not_resurrect():
    surface = Surface(200, 200)
    paint_rect(surface.persistent, 0, 0, 200, 200, "#FF0000")

    surface.resize(100, 100)
    assert alpha_at(surface.persistent, 50, 50) == 255
    assert alpha_at(surface.persistent, 99, 99) == 255

    surface.resize(200, 200)
    assert alpha_at(surface.persistent, 50, 50) == 255
    assert alpha_at(surface.persistent, 150, 150) == 0
    assert alpha_at(surface.persistent, 100, 10) == 0
    assert alpha_at(surface.persistent, 10, 100) == 0


def test_degenerate_resize_targets_are_ignored():
    surface = Surface(50, 50)
    assert surface.resize(0, 100) is False
    assert surface.resize(100, -3) is False
    assert (surface.width, surface.height) == (50, 50)


def test_resize_from_empty_surface():
    surface = Surface()
    assert surface.is_empty()

    assert surface.resize(64, 32) is True
    assert not surface.is_empty()
    assert alpha_at(surface.persistent, 0, 0) == 0


def test_clear_empties_both_layers():
    surface = Surface(50, 50)
    paint_rect(surface.persistent, 0, 0, 50, 50)
    paint_rect(surface.preview, 0, 0, 50, 50)

    surface.clear()

    assert alpha_at(surface.persistent, 25, 25) == 0
    assert alpha_at(surface.preview, 25, 25) == 0


def test_clear_on_empty_surface_does_not_fail():
    Surface().clear()
