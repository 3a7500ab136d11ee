import logging

from PyQt5.QtCore import QSettings

from draftboard.drawing_state import DrawingState, PERSISTED_KEYS

logger = logging.getLogger(__name__)

ORGANIZATION = "DraftBoard"
APPLICATION = "DraftBoard"
DEFAULT_PROFILE = "default"


class SettingsStore:
    """
    以 QSettings 持久化畫筆設定。
    每個設定檔 (profile) 各自記錄筆刷設定與啟用狀態；語言是全域設定。
    """

    def __init__(self, profile: str = DEFAULT_PROFILE, path: str = None):
        self.profile = profile
        if path:
            self.settings = QSettings(path, QSettings.IniFormat)
        else:
            self.settings = QSettings(QSettings.IniFormat, QSettings.UserScope, ORGANIZATION, APPLICATION)

    def _key(self, name: str) -> str:
        return f"profiles/{self.profile}/{name}"

    def load_state(self, base: DrawingState = None) -> DrawingState:
        """讀取設定並合併到 base 快照上，沒有儲存過的欄位維持 base 的值。"""
        values = {}
        for name in PERSISTED_KEYS:
            values[name] = self.settings.value(self._key(name), None)
        return DrawingState.from_settings(values, base)

    def save_state(self, state: DrawingState):
        for name, value in state.to_settings().items():
            self.settings.setValue(self._key(name), value)
        self.settings.sync()

    def is_enabled(self, default: bool = True) -> bool:
        return self.settings.value(self._key("enabled"), default, type=bool)

    def set_enabled(self, enabled: bool):
        self.settings.setValue(self._key("enabled"), bool(enabled))
        self.settings.sync()

    def language(self, default: str = None):
        return self.settings.value("app_language", default)

    def set_language(self, lang: str):
        self.settings.setValue("app_language", lang)
        self.settings.sync()
