"""
筆劃控制器
==========
一個只有兩個狀態 (Idle / Active) 的狀態機：消化指標事件、累積取樣點、驅動預覽，
並在放開時提交 (畫筆) 或在失去指標擷取時放棄。
"""
import logging
from typing import Hashable, List, Optional

from PyQt5.QtGui import QColor

from draftboard.compositor import Compositor
from draftboard.cursor_preview import CursorPreview
from draftboard.drawing_state import DrawingState, Point, TOOL_ERASER
from draftboard.surface import Surface

logger = logging.getLogger(__name__)

PRIMARY_BUTTON = 0


class Stroke:
    """一次手勢內的取樣點。工具與筆刷參數在按下時凍結，整條筆劃都使用同一份快照。"""

    def __init__(self, pointer_id: Hashable, state: DrawingState):
        self.pointer_id = pointer_id
        self.tool = state.tool
        self.color = QColor(state.color)
        self.size = state.size
        self.brush_opacity = state.brush_opacity
        self.points: List[Point] = []

    @property
    def is_eraser(self) -> bool:
        return self.tool == TOOL_ERASER

    def append(self, point: Point):
        self.points.append(point)


class StrokeController:
    def __init__(self, surface: Surface, state: DrawingState = None,
                 compositor: Compositor = None, cursor: CursorPreview = None):
        self.surface = surface
        self.state = state if state is not None else DrawingState()
        self.compositor = compositor if compositor is not None else Compositor()
        self.cursor = cursor
        self.stroke: Optional[Stroke] = None

    # --- 狀態 ---
    @property
    def is_active(self) -> bool:
        return self.stroke is not None

    @property
    def captured_pointer_id(self):
        return self.stroke.pointer_id if self.stroke else None

    def set_state(self, state: DrawingState):
        """接收新的設定快照；只影響之後開始的筆劃。"""
        self.state = state
        if self.cursor:
            self.cursor.set_state(state)

    # --- 指標事件 ---
    def pointer_down(self, pointer_id, x, y, button=PRIMARY_BUTTON, pressure=None) -> bool:
        if button != PRIMARY_BUTTON:
            return False
        if self.stroke is not None:
            # 已有其他指標在畫，先到先得
            logger.debug("Pointer %r ignored, stroke owned by %r", pointer_id, self.stroke.pointer_id)
            return False

        self.stroke = Stroke(pointer_id, self.state)
        point = Point.create(x, y, pressure)
        self.stroke.append(point)
        if self.cursor:
            self.cursor.move_to(point.x, point.y)

        if self.stroke.is_eraser:
            self.compositor.erase_dot(self.surface, point, self.stroke.size)
        else:
            self._render_brush()
        return True

    def pointer_move(self, pointer_id, x, y, pressure=None) -> bool:
        if self.cursor:
            self.cursor.move_to(x, y)
        if self.stroke is None or pointer_id != self.stroke.pointer_id:
            return False

        previous = self.stroke.points[-1]
        point = Point.create(x, y, pressure)
        self.stroke.append(point)

        if self.stroke.is_eraser:
            self.compositor.erase_segment(self.surface, previous, point, self.stroke.size)
        else:
            self._render_brush()
        return True

    def pointer_up(self, pointer_id) -> bool:
        if self.stroke is None or pointer_id != self.stroke.pointer_id:
            return False
        # 橡皮擦已經直接改動 persistent 層，放開時不需再做任何事
        if not self.stroke.is_eraser:
            # 尺寸調整會重新配置 preview，提交前以完整路徑重畫一次
            self._render_brush()
            self.compositor.commit_brush(self.surface)
        stroke, self.stroke = self.stroke, None
        logger.debug("Stroke committed: %s, %d points", stroke.tool, len(stroke.points))
        return True

    def pointer_cancel(self, pointer_id=None) -> bool:
        """
        失去指標擷取。畫筆視為放棄 (清空 preview、不提交)；
        橡皮擦的結果已經寫入，直接結束即可。
        pointer_id 為 None 時取消目前任何筆劃。
        """
        if self.stroke is None:
            return False
        if pointer_id is not None and pointer_id != self.stroke.pointer_id:
            return False
        stroke, self.stroke = self.stroke, None
        if not stroke.is_eraser:
            self.compositor.discard_brush(self.surface)
        logger.debug("Stroke aborted: %s, %d points", stroke.tool, len(stroke.points))
        return True

    def pointer_leave(self):
        """指標離開畫布：只隱藏游標預覽，進行中的筆劃繼續。"""
        if self.cursor:
            self.cursor.hide()

    def redraw_preview(self) -> bool:
        """重畫進行中的畫筆筆劃 (圖層重新配置之後使用)。"""
        if self.stroke is None or self.stroke.is_eraser:
            return False
        self._render_brush()
        return True

    def _render_brush(self):
        stroke = self.stroke
        self.compositor.render_brush(self.surface, stroke.points, stroke.color, stroke.size, stroke.brush_opacity)
