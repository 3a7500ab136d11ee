"""
草稿板應用程式
==============
DraftBoardApp 是一個明確的生命週期物件：啟用時建立、停用時 destroy()。
它持有目前的 DrawingState，並在每次變更時把完整的新快照推送給畫布、工具列與浮動按鈕。
"""
import logging

from PyQt5.QtCore import QObject, pyqtSignal

from draftboard.canvas_window import DraftCanvasWindow
from draftboard.drawing_state import DrawingState
from draftboard.floating_button import FloatingButton
from draftboard.i18n import detect_language
from draftboard.settings_store import SettingsStore
from draftboard.toolbar import DraftToolbar

logger = logging.getLogger(__name__)


class DraftBoardApp(QObject):
    visibility_changed = pyqtSignal(bool)

    def __init__(self, store: SettingsStore, lang: str = None, content_size=None, host=None, parent=None):
        super().__init__(parent)
        self.store = store
        base = DrawingState(lang=lang or detect_language())
        self.state = store.load_state(base)

        self.canvas = DraftCanvasWindow(self.state, content_size=content_size, host=host)
        self.toolbar = DraftToolbar(self.state)
        self.floating_button = FloatingButton()

        # --- 連接信號 ---
        self.toolbar.state_changed.connect(self._on_toolbar_change)
        self.toolbar.clear_requested.connect(self.clear)
        self.toolbar.close_requested.connect(self.toggle_canvas)
        self.canvas.close_requested.connect(lambda: self.update_state(is_open=False))
        self.floating_button.clicked_without_drag.connect(self.toggle_canvas)

        self.is_destroyed = False
        self._push_state()
        self.floating_button.show()
        logger.info("Draft board created for profile %r", store.profile)

    # --- 狀態管理 ---
    def update_state(self, **updates):
        """合併更新並推送完整快照；同時儲存設定。"""
        if self.is_destroyed:
            return
        was_open = self.state.is_open
        self.state = self.state.replace(**updates)
        self._push_state()
        self.store.save_state(self.state)
        if self.state.is_open != was_open:
            self.visibility_changed.emit(self.state.is_open)

    def _on_toolbar_change(self, updates: dict):
        self.update_state(**updates)

    def _push_state(self):
        self.canvas.set_state(self.state)
        self.toolbar.update_state(self.state)
        self.floating_button.update_state(self.state)

    # --- 對外操作 ---
    @property
    def is_open(self) -> bool:
        return self.state.is_open

    def toggle_canvas(self):
        self.update_state(is_open=not self.state.is_open)

    def clear(self):
        self.canvas.clear()

    def set_language(self, lang: str):
        self.update_state(lang=lang)

    def resize(self, width: int, height: int):
        """直接指定畫布圖層的尺寸 (宿主通知尺寸改變時使用)。"""
        self.canvas.resize_surface(width, height)

    def destroy(self):
        """停用：釋放所有視窗與監聽。呼叫多次也安全。"""
        if self.is_destroyed:
            return
        self.is_destroyed = True
        self.canvas.dispose()
        self.toolbar.close_popups()
        self.toolbar.hide()
        self.toolbar.deleteLater()
        self.floating_button.hide()
        self.floating_button.deleteLater()
        logger.info("Draft board destroyed for profile %r", self.store.profile)
