from PyQt5.QtCore import Qt, QPointF, QRectF
from PyQt5.QtGui import QPainter, QPen, QColor, QBrush

from draftboard.drawing_state import DrawingState


class CursorPreview:
    """跟隨指標的圓圈，代表目前筆刷或橡皮擦的範圍。純粹裝飾，不碰任何圖層。"""

    def __init__(self, state: DrawingState = None):
        self.position = QPointF()
        self.has_position = False
        self.hovering = False
        self.diameter = 0
        self.border_color = QColor(Qt.black)
        self.fill_color = QColor(Qt.transparent)
        self.surface_open = False
        self.set_state(state if state is not None else DrawingState())

    @property
    def visible(self) -> bool:
        return self.surface_open and self.hovering and self.has_position

    def set_state(self, state: DrawingState):
        self.surface_open = state.is_open
        if state.is_eraser:
            self.diameter = state.size * 2
            self.border_color = QColor(Qt.black)
            self.fill_color = QColor(255, 255, 255, 128)
        else:
            self.diameter = state.size
            self.border_color = QColor(state.color)
            self.fill_color = QColor(Qt.transparent)

    def move_to(self, x: float, y: float):
        self.position = QPointF(x, y)
        self.has_position = True
        self.hovering = True

    def hide(self):
        self.hovering = False

    def bounding_rect(self) -> QRectF:
        """游標所佔的區域 (含邊框)，用於局部重繪。"""
        radius = self.diameter / 2 + 2
        return QRectF(self.position.x() - radius, self.position.y() - radius, radius * 2, radius * 2)

    def paint(self, painter: QPainter):
        if not self.visible:
            return
        painter.save()
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            painter.setPen(QPen(self.border_color, 1))
            painter.setBrush(QBrush(self.fill_color))
            radius = self.diameter / 2
            painter.drawEllipse(self.position, radius, radius)
        finally:
            painter.restore()
