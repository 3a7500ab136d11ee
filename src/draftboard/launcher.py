"""
啟用/停用控制
=============
取代全域單例：DraftBoardLauncher 在啟用時建立 DraftBoardApp，停用時將它 destroy()，
並把啟用狀態與語言寫回設定。
"""
import logging

from PyQt5.QtCore import QObject, pyqtSignal

from draftboard.app import DraftBoardApp
from draftboard.i18n import LANGUAGES, detect_language
from draftboard.settings_store import SettingsStore

logger = logging.getLogger(__name__)


class DraftBoardLauncher(QObject):
    enabled_changed = pyqtSignal(bool)

    def __init__(self, store: SettingsStore, content_size=None, host=None, parent=None):
        super().__init__(parent)
        self.store = store
        self.content_size = content_size
        self.host = host
        self.app = None
        self.lang = store.language() or detect_language()

    @property
    def enabled(self) -> bool:
        return self.app is not None

    def set_enabled(self, enabled: bool):
        enabled = bool(enabled)
        self.store.set_enabled(enabled)
        if enabled == self.enabled:
            return
        if enabled:
            self.app = DraftBoardApp(self.store, lang=self.lang, content_size=self.content_size, host=self.host)
            logger.info("Draft board enabled")
        else:
            self.app.destroy()
            self.app = None
            logger.info("Draft board disabled")
        self.enabled_changed.emit(enabled)

    def toggle(self):
        self.set_enabled(not self.enabled)

    def set_language(self, lang: str):
        if lang not in LANGUAGES:
            logger.debug("Ignoring unsupported language %r", lang)
            return
        self.lang = lang
        self.store.set_language(lang)
        if self.app is not None:
            self.app.set_language(lang)

    def shutdown(self):
        """結束程式前呼叫：銷毀畫布但保留使用者的啟用設定。"""
        if self.app is not None:
            self.app.destroy()
            self.app = None
