import logging

from PyQt5.QtCore import Qt, QPoint, QSize
from PyQt5.QtGui import QImage, QPainter

logger = logging.getLogger(__name__)

LAYER_FORMAT = QImage.Format_ARGB32_Premultiplied


def _new_layer(width: int, height: int) -> QImage:
    """建立一個全透明的繪圖層。"""
    image = QImage(max(width, 0), max(height, 0), LAYER_FORMAT)
    if not image.isNull():
        image.fill(Qt.transparent)
    return image


class Surface:
    """
    畫布的兩個點陣圖層：
    - persistent: 已提交的筆跡，唯一長期存在的內容。
    - preview: 進行中的筆劃，每次重繪前都會被清空。
    兩層永遠保持相同尺寸。
    """

    def __init__(self, width: int = 0, height: int = 0):
        self.persistent = _new_layer(width, height)
        self.preview = _new_layer(width, height)

    @property
    def width(self) -> int:
        return self.persistent.width()

    @property
    def height(self) -> int:
        return self.persistent.height()

    def size(self) -> QSize:
        return QSize(self.width, self.height)

    def is_empty(self) -> bool:
        return self.persistent.isNull() or self.width <= 0 or self.height <= 0

    def resize(self, target_width: int, target_height: int) -> bool:
        """
        調整兩層的尺寸，並把 persistent 層的內容以左上角 (0,0) 為錨點複製回來。
        尺寸相同時不做任何事；回傳是否真的重新配置了圖層。
        """
        target_width, target_height = int(target_width), int(target_height)
        if target_width <= 0 or target_height <= 0:
            logger.debug("Ignoring degenerate resize to %dx%d", target_width, target_height)
            return False
        if self.width == target_width and self.height == target_height:
            return False

        old_width, old_height = self.width, self.height
        # 先備份舊的 persistent 層 (舊尺寸為 0 時略過)
        backup = None
        if not self.is_empty():
            backup = self.persistent.copy()

        # 重新配置等同清空，preview 層不需要還原
        self.persistent = _new_layer(target_width, target_height)
        self.preview = _new_layer(target_width, target_height)

        if backup is not None:
            painter = QPainter(self.persistent)
            try:
                painter.setCompositionMode(QPainter.CompositionMode_Source)
                painter.drawImage(QPoint(0, 0), backup)
            finally:
                painter.end()

        logger.info("Surface resized from %dx%d to %dx%d", old_width, old_height, target_width, target_height)
        return True

    def clear(self):
        """清空兩層，無法復原。"""
        if self.is_empty():
            return
        self.persistent.fill(Qt.transparent)
        self.preview.fill(Qt.transparent)

    def clear_preview(self):
        if not self.preview.isNull():
            self.preview.fill(Qt.transparent)
