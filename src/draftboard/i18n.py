# 介面文字
from PyQt5.QtCore import QLocale

I18N = {
    'en': {
        'draft': "Draft Board",
        'settings': "Settings",
        'color': "Color",
        'size': "Size",
        'brushOpacity': "Stroke Opacity",
        'bgOpacity': "Dim Background",
        'tools': "Tools",
        'brush': "Brush",
        'eraser': "Eraser",
        'clear': "Clear All",
        'close': "Close",
        'enabled': "Enabled",
        'disabled': "Disabled",
        'language': "Language",
        'quit': "Quit",
    },
    'zh': {
        'draft': "草稿板",
        'settings': "設定",
        'color': "顏色",
        'size': "筆觸粗細",
        'brushOpacity': "筆觸透明度",
        'bgOpacity': "背景暗度",
        'tools': "工具",
        'brush': "畫筆",
        'eraser': "橡皮擦",
        'clear': "清空畫板",
        'close': "關閉",
        'enabled': "已啟用",
        'disabled': "已停用",
        'language': "語言",
        'quit': "結束",
    },
}

LANGUAGES = tuple(I18N)


def detect_language(locale: QLocale = None) -> str:
    """依系統語系決定預設語言，中文語系使用 zh，其餘使用 en。"""
    name = (locale or QLocale.system()).name()
    return 'zh' if name.startswith('zh') else 'en'


def tr(lang: str, key: str) -> str:
    table = I18N.get(lang, I18N['en'])
    return table.get(key, I18N['en'].get(key, key))
