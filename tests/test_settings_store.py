from PyQt5.QtGui import QColor

from draftboard.drawing_state import DrawingState, TOOL_ERASER
from draftboard.settings_store import SettingsStore


def test_load_without_saved_values_returns_base(store):
    base = DrawingState(lang='zh')
    assert store.load_state(base) == base


def test_save_and_load_round_trip(tmp_path):
    path = str(tmp_path / "settings.ini")
    state = DrawingState(tool=TOOL_ERASER, color=QColor("#5856D6"), size=17, brush_opacity=0.35, bg_opacity=0.6, is_open=True)
    SettingsStore(profile="work", path=path).save_state(state)

    loaded = SettingsStore(profile="work", path=path).load_state()

    assert loaded.tool == TOOL_ERASER
    assert loaded.color == QColor("#5856D6")
    assert loaded.size == 17
    assert loaded.brush_opacity == 0.35
    assert loaded.bg_opacity == 0.6
    # 開啟狀態不會被保存
    assert loaded.is_open is False


def test_profiles_are_independent(tmp_path):
    path = str(tmp_path / "settings.ini")
    SettingsStore(profile="a", path=path).save_state(DrawingState(size=30))

    assert SettingsStore(profile="b", path=path).load_state().size == 5


def test_enabled_flag_and_language(store):
    assert store.is_enabled() is True
    assert store.is_enabled(default=False) is False

    store.set_enabled(False)
    assert store.is_enabled() is False

    assert store.language() is None
    store.set_language('zh')
    assert store.language() == 'zh'
