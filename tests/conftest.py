import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import QApplication

from draftboard.drawing_state import DrawingState
from draftboard.settings_store import SettingsStore
from draftboard.surface import Surface


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _ensure_app(qapp):
    yield


@pytest.fixture
def surface():
    return Surface(800, 600)


@pytest.fixture
def store(tmp_path):
    return SettingsStore(profile="test", path=str(tmp_path / "draftboard.ini"))


@pytest.fixture
def red_brush():
    return DrawingState(color=QColor("#FF0000"), size=10, brush_opacity=1.0, is_open=True)
