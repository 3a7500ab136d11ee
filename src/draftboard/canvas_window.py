import logging

from PyQt5.QtWidgets import QApplication, QWidget
from PyQt5.QtCore import Qt, QObject, QEvent, QSize, QRect, pyqtSignal
from PyQt5.QtGui import QPainter, QColor

from draftboard.cursor_preview import CursorPreview
from draftboard.drawing_state import DrawingState
from draftboard.serial_queue import SerialQueue
from draftboard.stroke_controller import StrokeController, PRIMARY_BUTTON
from draftboard.surface import Surface

logger = logging.getLogger(__name__)

MOUSE_POINTER_ID = "mouse"


def desktop_content_size() -> QSize:
    """所有螢幕合起來的大小，作為預設的「內容尺寸」。"""
    rect = QRect()
    for screen in QApplication.screens():
        rect = rect.united(screen.geometry())
    return rect.size()


class HostResizeSubscription(QObject):
    """
    監聽宿主的尺寸變化 (宿主視窗的 Resize 事件與螢幕幾何變更)，並在 close() 時完整移除。
    每次啟用都建立新的訂閱，停用時關閉，不會殘留重複的監聽。
    """

    def __init__(self, callback, host: QWidget = None, parent=None):
        super().__init__(parent)
        self._callback = callback
        self._host = host
        self._screens = []
        self.active = True

        if self._host is not None:
            self._host.installEventFilter(self)
        for screen in QApplication.screens():
            screen.geometryChanged.connect(self._on_screen_changed)
            self._screens.append(screen)

    def eventFilter(self, watched, event):
        if watched is self._host and event.type() == QEvent.Resize:
            self._callback()
        return super().eventFilter(watched, event)

    def _on_screen_changed(self, *args):
        self._callback()

    def close(self):
        if not self.active:
            return
        self.active = False
        if self._host is not None:
            self._host.removeEventFilter(self)
        for screen in self._screens:
            try:
                screen.geometryChanged.disconnect(self._on_screen_changed)
            except TypeError:
                # 螢幕已被移除，連線跟著消失
                pass
        self._screens = []


class DraftCanvasWindow(QWidget):
    """
    草稿板畫布：一個透明、置頂的視窗，覆蓋在宿主畫面上。
    指標事件與尺寸調整都經過同一個 SerialQueue，交給 StrokeController 處理。
    """
    close_requested = pyqtSignal()

    def __init__(self, state: DrawingState = None, content_size=None, host: QWidget = None):
        super().__init__()
        self.setWindowTitle("Draft Board")

        # --- 視窗底層屬性設定 ---
        self.setWindowFlags(
            Qt.FramelessWindowHint |
            Qt.WindowStaysOnTopHint |
            Qt.Tool
        )
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setFocusPolicy(Qt.StrongFocus)

        # --- 游標與滑鼠追蹤：用自繪圓圈取代系統游標 ---
        self.setMouseTracking(True)
        self.setCursor(Qt.BlankCursor)

        self.state = state if state is not None else DrawingState()
        self._content_size = content_size or desktop_content_size

        # --- 引擎元件 ---
        self.surface = Surface()
        self.cursor_preview = CursorPreview(self.state)
        self.controller = StrokeController(self.surface, self.state, cursor=self.cursor_preview)
        self.queue = SerialQueue()

        self.host = host
        if host is not None:
            self.setGeometry(host.geometry())
        else:
            self.setGeometry(QRect(QApplication.primaryScreen().virtualGeometry()))

        self._subscription = HostResizeSubscription(self.request_resize, host, self)

    # --- 對外介面 ---
    def set_state(self, state: DrawingState):
        """接收完整的設定快照。"""
        was_open = self.state.is_open
        self.state = state
        self.controller.set_state(state)

        if state.is_open:
            self.request_resize()  # 頁面大小可能已改變
            if not was_open:
                self.show()
                self.raise_()
                self.activateWindow()
        elif was_open:
            # hideEvent 會放棄進行中的筆劃
            self.hide()
        self.update()

    def request_resize(self):
        self.queue.submit(self._sync_surface_size)

    def clear(self):
        self.queue.submit(self._clear)

    def resize_surface(self, width: int, height: int):
        self.queue.submit(self._resize_surface, width, height)

    def dispose(self):
        """停用時呼叫：取消訂閱、放棄進行中的筆劃並關閉視窗。"""
        self._subscription.close()
        self.controller.pointer_cancel()
        self.hide()
        self.deleteLater()

    def target_size(self) -> QSize:
        """max(內容尺寸, 視窗尺寸)。"""
        content = self._content_size()
        return QSize(max(content.width(), self.width()), max(content.height(), self.height()))

    # --- 佇列中的工作 ---
    def _sync_surface_size(self):
        target = self.target_size()
        self._resize_surface(target.width(), target.height())

    def _resize_surface(self, width, height):
        if self.surface.resize(width, height):
            # preview 已重新配置，進行中的筆劃要重畫
            self.controller.redraw_preview()
            self.update()

    def _clear(self):
        self.surface.clear()
        logger.info("Canvas cleared")
        self.update()

    # --- 事件處理 ---
    def mousePressEvent(self, event):
        button = PRIMARY_BUTTON if event.button() == Qt.LeftButton else int(event.button())
        pos = event.localPos()
        self.queue.submit(self.controller.pointer_down, MOUSE_POINTER_ID, pos.x(), pos.y(), button)
        self.update()

    def mouseMoveEvent(self, event):
        pos = event.localPos()
        self.queue.submit(self.controller.pointer_move, MOUSE_POINTER_ID, pos.x(), pos.y())
        self.update()

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.queue.submit(self.controller.pointer_up, MOUSE_POINTER_ID)
            self.update()

    def tabletEvent(self, event):
        # 手寫板事件帶有壓力值；接受後 Qt 不會再合成對應的滑鼠事件
        pointer_id = ("tablet", event.uniqueId())
        pos = event.posF()
        if event.type() == QEvent.TabletPress:
            button = PRIMARY_BUTTON if event.button() == Qt.LeftButton else int(event.button())
            self.queue.submit(self.controller.pointer_down, pointer_id, pos.x(), pos.y(), button, event.pressure())
        elif event.type() == QEvent.TabletMove:
            self.queue.submit(self.controller.pointer_move, pointer_id, pos.x(), pos.y(), event.pressure())
        elif event.type() == QEvent.TabletRelease:
            self.queue.submit(self.controller.pointer_up, pointer_id)
        event.accept()
        self.update()

    def leaveEvent(self, event):
        self.controller.pointer_leave()
        self.update()
        super().leaveEvent(event)

    def changeEvent(self, event):
        # 失去焦點等同失去指標擷取
        if event.type() == QEvent.ActivationChange and not self.isActiveWindow():
            self.queue.submit(self.controller.pointer_cancel)
        super().changeEvent(event)

    def hideEvent(self, event):
        self.queue.submit(self.controller.pointer_cancel)
        self.controller.pointer_leave()
        super().hideEvent(event)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape:
            self.close_requested.emit()
        else:
            super().keyPressEvent(event)

    def resizeEvent(self, event):
        self.request_resize()
        super().resizeEvent(event)

    def paintEvent(self, event):
        if self.width() <= 0 or self.height() <= 0:
            return

        painter = QPainter(self)
        try:
            # 1. 背景暗化
            dim = QColor(0, 0, 0)
            dim.setAlphaF(self.state.bg_opacity)
            painter.fillRect(self.rect(), dim)

            # 2. 已提交的筆跡與進行中的筆劃
            if not self.surface.is_empty():
                painter.drawImage(0, 0, self.surface.persistent)
                painter.drawImage(0, 0, self.surface.preview)

            # 3. 游標圓圈
            self.cursor_preview.paint(painter)
        finally:
            painter.end()
