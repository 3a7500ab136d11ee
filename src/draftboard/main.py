import logging
import sys

from PyQt5.QtWidgets import QApplication, QSystemTrayIcon, QMenu, QAction, QActionGroup
from PyQt5.QtCore import Qt

from draftboard.i18n import LANGUAGES, tr
from draftboard.launcher import DraftBoardLauncher
from draftboard.logging_config import setup_logging
from draftboard.settings_store import SettingsStore
from draftboard.toolbar import icon_from_svg
from draftboard.toolbar_icons import LOGO_ICON_SVG

logger = logging.getLogger(__name__)


def build_tray(app: QApplication, launcher: DraftBoardLauncher) -> QSystemTrayIcon:
    """系統匣選單：啟用開關、語言、結束。"""
    tray = QSystemTrayIcon(icon_from_svg(LOGO_ICON_SVG), app)
    menu = QMenu()

    enable_action = QAction(menu)
    enable_action.setCheckable(True)
    enable_action.setChecked(launcher.enabled)
    enable_action.toggled.connect(launcher.set_enabled)
    launcher.enabled_changed.connect(enable_action.setChecked)
    menu.addAction(enable_action)

    language_menu = menu.addMenu("")
    language_group = QActionGroup(language_menu)
    language_actions = {}
    for lang in LANGUAGES:
        action = QAction(lang, language_menu)
        action.setCheckable(True)
        action.setChecked(lang == launcher.lang)
        action.triggered.connect(lambda _, l=lang: launcher.set_language(l))
        language_group.addAction(action)
        language_menu.addAction(action)
        language_actions[lang] = action

    menu.addSeparator()
    quit_action = menu.addAction("")
    quit_action.triggered.connect(app.quit)

    def retranslate(*args):
        lang = launcher.lang
        state = 'enabled' if launcher.enabled else 'disabled'
        enable_action.setText(f"{tr(lang, 'draft')} ({tr(lang, state)})")
        language_menu.setTitle(tr(lang, 'language'))
        quit_action.setText(tr(lang, 'quit'))
        tray.setToolTip(tr(lang, 'draft'))

    launcher.enabled_changed.connect(retranslate)
    for action in language_actions.values():
        action.triggered.connect(retranslate)
    retranslate()

    tray.setContextMenu(menu)
    tray.menu = menu  # 保留參照，避免選單被回收
    return tray


def main():
    setup_logging(level=logging.INFO)

    QApplication.setAttribute(Qt.AA_EnableHighDpiScaling)
    QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps)
    app = QApplication(sys.argv)
    app.setApplicationName("Draft Board")
    app.setQuitOnLastWindowClosed(False)

    store = SettingsStore()
    launcher = DraftBoardLauncher(store)
    app.aboutToQuit.connect(launcher.shutdown)

    tray = None
    if QSystemTrayIcon.isSystemTrayAvailable():
        tray = build_tray(app, launcher)
        tray.show()
    else:
        logger.info("System tray not available, starting enabled")

    # 沒有系統匣時無法切換啟用狀態，直接啟用
    launcher.set_enabled(store.is_enabled() or tray is None)
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
