from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QImage, QPainter

from draftboard.cursor_preview import CursorPreview
from draftboard.drawing_state import DrawingState, TOOL_ERASER


def test_brush_cursor_uses_size_and_color():
    cursor = CursorPreview(DrawingState(size=12, color=QColor("#00FF00"), is_open=True))
    assert cursor.diameter == 12
    assert cursor.border_color == QColor("#00FF00")
    assert cursor.fill_color.alpha() == 0


def test_eraser_cursor_is_double_size_and_neutral():
    cursor = CursorPreview(DrawingState(tool=TOOL_ERASER, size=12, color=QColor("#00FF00"), is_open=True))
    assert cursor.diameter == 24
    assert cursor.border_color == QColor(Qt.black)
    assert cursor.fill_color == QColor(255, 255, 255, 128)


def test_visibility_follows_pointer_and_surface():
    cursor = CursorPreview(DrawingState(is_open=True))
    assert not cursor.visible

    cursor.move_to(10, 10)
    assert cursor.visible

    cursor.hide()
    assert not cursor.visible

    cursor.move_to(11, 10)
    cursor.set_state(DrawingState(is_open=False))
    assert not cursor.visible


def test_hidden_cursor_paints_nothing():
    image = QImage(40, 40, QImage.Format_ARGB32_Premultiplied)
    image.fill(Qt.transparent)
    cursor = CursorPreview(DrawingState(is_open=False, size=20))
    cursor.move_to(20, 20)

    painter = QPainter(image)
    cursor.paint(painter)
    painter.end()

    assert image.pixelColor(20, 10).alpha() == 0


def test_visible_cursor_draws_ring():
    image = QImage(40, 40, QImage.Format_ARGB32_Premultiplied)
    image.fill(Qt.transparent)
    cursor = CursorPreview(DrawingState(is_open=True, size=20, color=QColor("#FF0000")))
    cursor.move_to(20, 20)

    painter = QPainter(image)
    cursor.paint(painter)
    painter.end()

    # 圓環上有顏色，中心是空的
    assert image.pixelColor(20, 10).alpha() > 0
    assert image.pixelColor(20, 20).alpha() == 0
