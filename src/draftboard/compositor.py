import logging
from typing import Sequence

from PyQt5.QtCore import Qt, QPoint, QPointF
from PyQt5.QtGui import QPainter, QPainterPath, QPen, QColor, QBrush

from draftboard.drawing_state import Point
from draftboard.surface import Surface

logger = logging.getLogger(__name__)


class Compositor:
    """
    將取樣點轉成像素的規則。

    畫筆：整條筆劃畫在 preview 層，每次都清空後以「單一路徑」重畫，放開時才合成到 persistent 層。
    橡皮擦：不經過 preview 層，直接以 DestinationOut 逐段扣除 persistent 層的透明度。
    """

    # --- 畫筆 ---
    def render_brush(self, surface: Surface, points: Sequence[Point], color: QColor, size: int, opacity: float):
        """清空 preview 層，並把目前累積的所有點一次畫成一條路徑。"""
        surface.clear_preview()
        if not points or surface.is_empty():
            return

        painter = QPainter(surface.preview)
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            painter.setCompositionMode(QPainter.CompositionMode_SourceOver)
            painter.setOpacity(opacity)

            if len(points) == 1:
                # 只有一個點 (輕點) 時沒有線段可畫，改畫一個直徑為 size 的實心圓
                point = points[0]
                painter.setPen(Qt.NoPen)
                painter.setBrush(QBrush(color))
                radius = size / 2
                painter.drawEllipse(QPointF(point.x, point.y), radius, radius)
            else:
                # 整條路徑一次描邊，自我重疊的部分只會被塗一次，透明度不會疊加
                path = QPainterPath()
                path.moveTo(points[0].x, points[0].y)
                for point in points[1:]:
                    path.lineTo(point.x, point.y)
                painter.setBrush(Qt.NoBrush)
                painter.setPen(QPen(color, size, Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
                painter.drawPath(path)
        finally:
            painter.end()

    def commit_brush(self, surface: Surface):
        """把 preview 層以完全不透明的 SourceOver 合成到 persistent 層，再清空 preview。"""
        if surface.is_empty():
            return
        painter = QPainter(surface.persistent)
        try:
            painter.setCompositionMode(QPainter.CompositionMode_SourceOver)
            painter.setOpacity(1.0)  # 透明度已經烤進 preview 了
            painter.drawImage(QPoint(0, 0), surface.preview)
        finally:
            painter.end()
        surface.clear_preview()

    def discard_brush(self, surface: Surface):
        surface.clear_preview()

    # --- 橡皮擦 ---
    def _eraser_painter(self, surface: Surface) -> QPainter:
        painter = QPainter(surface.persistent)
        # 不開反鋸齒：覆蓋率只有 0 或 1，重複擦除同一區域的結果完全相同
        painter.setRenderHint(QPainter.Antialiasing, False)
        painter.setCompositionMode(QPainter.CompositionMode_DestinationOut)
        return painter

    def erase_dot(self, surface: Surface, point: Point, size: int):
        """在 persistent 層擦出一個直徑為 2×size 的圓。"""
        if surface.is_empty():
            return
        painter = self._eraser_painter(surface)
        try:
            painter.setPen(Qt.NoPen)
            painter.setBrush(QBrush(Qt.black))
            painter.drawEllipse(QPointF(point.x, point.y), size, size)
        finally:
            painter.end()

    def erase_segment(self, surface: Surface, start: Point, end: Point, size: int):
        """擦除兩點之間的線段，線寬為 2×size，圓頭圓角。"""
        if surface.is_empty():
            return
        painter = self._eraser_painter(surface)
        try:
            painter.setBrush(Qt.NoBrush)
            painter.setPen(QPen(Qt.black, size * 2, Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
            painter.drawLine(QPointF(start.x, start.y), QPointF(end.x, end.y))
        finally:
            painter.end()
