from PyQt5.QtWidgets import QApplication, QWidget
from PyQt5.QtCore import Qt, QPoint, QRectF, QSize, QByteArray, pyqtSignal
from PyQt5.QtGui import QPainter, QColor, QBrush, QPen
from PyQt5.QtSvg import QSvgRenderer

from draftboard.drawing_state import DrawingState
from draftboard.i18n import tr
from draftboard.toolbar_icons import LOGO_ICON_SVG

DRAG_THRESHOLD = 3  # 移動超過 3px 視為拖曳而非點擊


class FloatingButton(QWidget):
    """浮動的開關按鈕：點一下開關畫布，按住拖曳可移動位置。"""
    clicked_without_drag = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowFlags(
            Qt.FramelessWindowHint |    # 無邊框
            Qt.WindowStaysOnTopHint |   # 永遠在最上層
            Qt.Tool                     # 不顯示在任務欄
        )
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setFixedSize(QSize(48, 48))

        # --- 拖動視窗所需的變數 ---
        self.mouse_down = False
        self.is_dragging = False
        self.press_position = QPoint()
        self.offset = QPoint()

        self.active = False
        self.logo = QSvgRenderer(QByteArray(LOGO_ICON_SVG.encode('utf-8')), self)
        self._move_to_default_position()

    def update_state(self, state: DrawingState):
        self.active = state.is_open
        self.setToolTip(tr(state.lang, 'draft'))
        self.update()

    def _move_to_default_position(self):
        """預設放在主螢幕右下角。"""
        screen_rect = QApplication.primaryScreen().availableGeometry()
        x = screen_rect.x() + screen_rect.width() - self.width() - 24
        y = screen_rect.y() + screen_rect.height() - self.height() - 96
        self.move(x, y)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        # 啟用時以亮藍色外框表示畫布已開啟
        if self.active:
            painter.setPen(QPen(QColor("#87CEFA"), 3))
            painter.setBrush(QBrush(QColor(105, 117, 130, 240)))
        else:
            painter.setPen(Qt.NoPen)
            painter.setBrush(QBrush(QColor(62, 74, 89, 220)))
        painter.drawEllipse(QRectF(self.rect()).adjusted(2, 2, -2, -2))
        self.logo.render(painter, QRectF(self.rect()).adjusted(12, 12, -12, -12))
        painter.end()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.mouse_down = True
            self.is_dragging = False
            self.press_position = event.globalPos()
            self.offset = event.globalPos() - self.pos()
            event.accept()

    def mouseMoveEvent(self, event):
        if self.mouse_down:
            delta = event.globalPos() - self.press_position
            if abs(delta.x()) > DRAG_THRESHOLD or abs(delta.y()) > DRAG_THRESHOLD:
                self.is_dragging = True
            self.move(event.globalPos() - self.offset)
            event.accept()

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton and self.mouse_down:
            self.mouse_down = False
            if not self.is_dragging:
                self.clicked_without_drag.emit()
            self.is_dragging = False
            event.accept()
