"""
繪圖狀態 (資料模型)
===================
定義畫布引擎讀取的設定快照：目前工具、筆觸顏色、粗細、透明度、背景暗度與顯示狀態。

引擎只會「讀取」這些快照；任何變更都由外部 (工具列、設定儲存) 產生新的快照後推送進來。
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace as dc_replace
import logging
from typing import Any, Dict

from PyQt5.QtGui import QColor

logger = logging.getLogger(__name__)

TOOL_BRUSH = 'brush'
TOOL_ERASER = 'eraser'
TOOLS = (TOOL_BRUSH, TOOL_ERASER)

DEFAULT_COLOR = "#FF3CAC"
DEFAULT_PRESSURE = 0.5

SIZE_RANGE = (1, 50)
BRUSH_OPACITY_RANGE = (0.01, 1.0)
BG_OPACITY_RANGE = (0.0, 0.9)

# 工具列上的預設顏色
PRESET_COLORS = [
    "#000000",  # 黑
    "#FF3B30",  # 紅
    "#FF9500",  # 橘
    "#FFCC00",  # 黃
    "#4CD964",  # 綠
    "#5AC8FA",  # 藍
    "#007AFF",  # 深藍
    "#5856D6",  # 紫
    "#FFFFFF",  # 白
]

# 會被持久化的欄位 (is_open 與 lang 不屬於每個設定檔)
PERSISTED_KEYS = ('tool', 'color', 'size', 'brush_opacity', 'bg_opacity')


def _clamp(value, low, high):
    return max(low, min(high, value))


@dataclass(frozen=True)
class Point:
    """畫布座標系中的一個取樣點，記錄後不可變更。"""
    x: float
    y: float
    pressure: float = DEFAULT_PRESSURE

    @classmethod
    def create(cls, x: float, y: float, pressure: float = None) -> "Point":
        # 裝置未回報壓力 (或回報 0) 時使用預設值
        if not pressure:
            pressure = DEFAULT_PRESSURE
        return cls(float(x), float(y), _clamp(float(pressure), 0.0, 1.0))


@dataclass(frozen=True)
class DrawingState:
    tool: str = TOOL_BRUSH
    color: QColor = field(default_factory=lambda: QColor(DEFAULT_COLOR))
    size: int = 5
    brush_opacity: float = 1.0
    bg_opacity: float = 0.3
    is_open: bool = False
    lang: str = 'en'

    @property
    def is_eraser(self) -> bool:
        return self.tool == TOOL_ERASER

    def replace(self, **updates: Any) -> "DrawingState":
        """回傳套用更新後的新快照，超出範圍的數值會被夾回有效區間。"""
        clean = {}
        for key, value in updates.items():
            if key == 'tool':
                if value not in TOOLS:
                    logger.debug("Ignoring unknown tool %r", value)
                    continue
            elif key == 'color':
                value = QColor(value)
                if not value.isValid():
                    logger.debug("Ignoring invalid color %r", updates[key])
                    continue
            elif key == 'size':
                value = int(_clamp(int(value), *SIZE_RANGE))
            elif key == 'brush_opacity':
                value = _clamp(float(value), *BRUSH_OPACITY_RANGE)
            elif key == 'bg_opacity':
                value = _clamp(float(value), *BG_OPACITY_RANGE)
            elif key == 'is_open':
                value = bool(value)
            elif key == 'lang':
                value = 'zh' if str(value).startswith('zh') else 'en'
            else:
                logger.debug("Ignoring unknown state field %r", key)
                continue
            clean[key] = value
        return dc_replace(self, **clean)

    def to_settings(self) -> Dict[str, Any]:
        return {
            'tool': self.tool,
            'color': self.color.name(),
            'size': self.size,
            'brush_opacity': self.brush_opacity,
            'bg_opacity': self.bg_opacity,
        }

    @classmethod
    def from_settings(cls, values: Dict[str, Any], base: "DrawingState" = None) -> "DrawingState":
        """從設定字典還原快照；壞掉的值會被略過並保留預設。"""
        state = base if base is not None else cls()
        for key in PERSISTED_KEYS:
            if values.get(key) is None:
                continue
            try:
                state = state.replace(**{key: values[key]})
            except (TypeError, ValueError):
                logger.warning("Stored setting %s=%r is corrupt, keeping default", key, values[key])
        return state
