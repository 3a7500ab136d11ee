from PyQt5.QtWidgets import (QWidget, QPushButton, QSlider, QHBoxLayout, QVBoxLayout,
                             QButtonGroup, QApplication, QColorDialog, QSizePolicy, QFrame)
from PyQt5.QtCore import Qt, QPoint, QSize, QByteArray, pyqtSignal
from PyQt5.QtGui import QColor, QPainter, QBrush, QIcon, QPixmap, QFont

from draftboard.drawing_state import DrawingState, PRESET_COLORS, TOOL_BRUSH, TOOL_ERASER
from draftboard.i18n import tr
from draftboard.toolbar_icons import (
    BRUSH_ICON_SVG, ERASER_ICON_SVG, CLEAR_ICON_SVG, CLOSE_ICON_SVG,
    SIZE_ICON_SVG, OPACITY_ICON_SVG, BACKGROUND_ICON_SVG
)


def icon_from_svg(svg_data: str) -> QIcon:
    """從 SVG 字串建立一個 QIcon。"""
    pixmap = QPixmap()
    pixmap.loadFromData(QByteArray(svg_data.encode('utf-8')))
    return QIcon(pixmap)


class SliderPopup(QFrame):
    """按下滑桿按鈕時彈出的垂直滑桿。點擊外部時由 Qt.Popup 自動關閉。"""
    value_changed = pyqtSignal(int)

    def __init__(self, minimum, maximum, parent=None):
        super().__init__(parent)
        self.setWindowFlags(Qt.Popup | Qt.FramelessWindowHint)
        self.setStyleSheet("""
            SliderPopup { background-color: rgba(62, 74, 89, 230); border: 1px solid #5A6B7C; border-radius: 6px; }
        """)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 8, 6, 8)

        self.slider = QSlider(Qt.Vertical)
        self.slider.setRange(minimum, maximum)
        self.slider.setFixedHeight(120)
        self.slider.valueChanged.connect(self.value_changed)
        layout.addWidget(self.slider)

    def set_value(self, value: int):
        self.slider.blockSignals(True)
        self.slider.setValue(value)
        self.slider.blockSignals(False)

    def value(self) -> int:
        return self.slider.value()


class DraftToolbar(QWidget):
    """
    草稿板底部工具列，透過信號與主程式溝通。
    它只送出「離散的設定變更」，畫布的狀態由主程式推送回來同步。
    """
    # --- 定義信號 ---
    state_changed = pyqtSignal(dict)
    clear_requested = pyqtSignal()
    close_requested = pyqtSignal()

    def __init__(self, state: DrawingState = None, parent=None):
        super().__init__(parent)
        self.state = state if state is not None else DrawingState()
        self.custom_color = QColor("#FF0000")

        # --- 視窗拖曳相關狀態 ---
        self.offset = QPoint()
        self.mouse_down = False
        self.is_dragging = False
        self.drag_start_position = QPoint()

        self.setWindowFlags(Qt.WindowStaysOnTopHint | Qt.FramelessWindowHint | Qt.Tool)
        self.setFocusPolicy(Qt.NoFocus)
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Preferred)

        self.setStyleSheet("""
            QPushButton { background-color: #7E8A97; color: white; border: 2px solid transparent; border-radius: 5px; padding: 4px 6px; font-weight: bold; }
            QPushButton:hover:!checked { background-color: #98A3AF; }
            QPushButton:pressed, QPushButton:checked { background-color: #697582; border: 2px solid #87CEFA; }
        """)

        self._setup_ui()
        self._connect_signals()
        self.update_state(self.state)

    def _setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 6, 10, 6)
        layout.setSpacing(6)

        # --- 工具 ---
        self.tool_button_group = QButtonGroup(self)
        self.tool_button_group.setExclusive(True)
        self.brush_button = self._create_icon_button(icon_from_svg(BRUSH_ICON_SVG))
        self.eraser_button = self._create_icon_button(icon_from_svg(ERASER_ICON_SVG))
        self.tool_button_group.addButton(self.brush_button)
        self.tool_button_group.addButton(self.eraser_button)
        layout.addWidget(self.brush_button)
        layout.addWidget(self.eraser_button)
        layout.addWidget(self._create_separator())

        # --- 顏色 ---
        self.color_button_group = QButtonGroup(self)
        self.color_button_group.setExclusive(True)
        self.color_buttons = {}
        for color_hex in PRESET_COLORS:
            button = self._create_color_button(QColor(color_hex), color_hex)
            self.color_button_group.addButton(button)
            self.color_buttons[color_hex] = button
            layout.addWidget(button)

        self.custom_color_button = self._create_color_button(self.custom_color, "", size=24)
        self.custom_color_button.setText("…")
        self.color_button_group.addButton(self.custom_color_button)
        layout.addWidget(self.custom_color_button)
        layout.addWidget(self._create_separator())

        # --- 滑桿 (大小、筆觸透明度、背景暗度) ---
        self.size_button = self._create_slider_button(icon_from_svg(SIZE_ICON_SVG))
        self.size_popup = SliderPopup(1, 50, self)
        self.opacity_button = self._create_slider_button(icon_from_svg(OPACITY_ICON_SVG))
        self.opacity_popup = SliderPopup(1, 100, self)
        self.bg_button = self._create_slider_button(icon_from_svg(BACKGROUND_ICON_SVG))
        self.bg_popup = SliderPopup(0, 90, self)
        self.popups = {
            self.size_button: self.size_popup,
            self.opacity_button: self.opacity_popup,
            self.bg_button: self.bg_popup,
        }
        for button in self.popups:
            layout.addWidget(button)
        layout.addWidget(self._create_separator())

        # --- 功能按鈕 ---
        self.clear_button = self._create_icon_button(icon_from_svg(CLEAR_ICON_SVG), checkable=False)
        layout.addWidget(self.clear_button)
        self.close_button = self._create_icon_button(icon_from_svg(CLOSE_ICON_SVG), checkable=False)
        layout.addWidget(self.close_button)

        layout.addStretch()

    def _connect_signals(self):
        self.brush_button.clicked.connect(lambda: self.state_changed.emit({'tool': TOOL_BRUSH}))
        self.eraser_button.clicked.connect(lambda: self.state_changed.emit({'tool': TOOL_ERASER}))

        for color_hex, button in self.color_buttons.items():
            button.clicked.connect(lambda _, c=color_hex: self._select_color(QColor(c)))
        self.custom_color_button.clicked.connect(self._choose_custom_color)

        for button in self.popups:
            button.clicked.connect(lambda _, b=button: self.toggle_popup(b))
        self.size_popup.value_changed.connect(lambda v: self.state_changed.emit({'size': v}))
        self.opacity_popup.value_changed.connect(lambda v: self.state_changed.emit({'brush_opacity': v / 100}))
        self.bg_popup.value_changed.connect(lambda v: self.state_changed.emit({'bg_opacity': v / 100}))

        self.clear_button.clicked.connect(self.clear_requested)
        self.close_button.clicked.connect(self.close_requested)

    # --- UI Helper Methods ---
    def _create_icon_button(self, icon, checkable=True):
        button = QPushButton()
        button.setIcon(icon)
        button.setCheckable(checkable)
        button.setFixedSize(32, 32)
        button.setIconSize(QSize(20, 20))
        button.setStyleSheet("QPushButton { padding: 0px; }")
        return button

    def _create_slider_button(self, icon):
        button = QPushButton()
        button.setIcon(icon)
        button.setIconSize(QSize(16, 16))
        button.setFont(QFont("Arial", 9))
        button.setMinimumWidth(56)
        return button

    def _create_color_button(self, color, tooltip, size=22):
        button = QPushButton()
        button.setFixedSize(size, size)
        button.setToolTip(tooltip)
        button.setCheckable(True)
        self._style_color_button(button, color)
        return button

    def _style_color_button(self, button, color):
        # 根據背景亮度決定文字顏色，以確保可見性
        luminance = (color.red() * 299 + color.green() * 587 + color.blue() * 114) / 1000
        text_color = "black" if luminance > 128 else "white"
        button.setStyleSheet(f"""
            QPushButton {{ background-color: {color.name()}; color: {text_color}; border: 2px solid transparent; border-radius: 11px; padding: 0px; }}
            QPushButton:checked {{ border: 2px solid #87CEFA; }}
        """)

    def _create_separator(self):
        line = QFrame()
        line.setFrameShape(QFrame.VLine)
        line.setStyleSheet("color: #5A6B7C;")
        return line

    # --- Slots ---
    def _select_color(self, color: QColor):
        # 選擇顏色時自動切回畫筆
        self.state_changed.emit({'color': color.name(), 'tool': TOOL_BRUSH})

    def _choose_custom_color(self):
        color = QColorDialog.getColor(self.custom_color, self, tr(self.state.lang, 'color'))
        if color.isValid():
            self.custom_color = color
            self._select_color(color)
        else:
            self.update_state(self.state)

    def toggle_popup(self, button):
        """開啟一個滑桿面板，同時關閉其他面板。"""
        popup = self.popups[button]
        for other in self.popups.values():
            if other is not popup:
                other.hide()
        if popup.isVisible():
            popup.hide()
            return
        pos = button.mapToGlobal(QPoint(0, -popup.sizeHint().height()))
        popup.move(pos)
        popup.show()

    def close_popups(self):
        for popup in self.popups.values():
            popup.hide()

    # --- Public Methods ---
    def update_state(self, state: DrawingState):
        """依據快照同步所有元件，不會反過來觸發 state_changed。"""
        self.state = state
        lang = state.lang

        self.brush_button.setChecked(state.tool == TOOL_BRUSH)
        self.eraser_button.setChecked(state.tool == TOOL_ERASER)

        color_hex = state.color.name().upper()
        self.color_button_group.setExclusive(False)
        for button in self.color_button_group.buttons():
            button.setChecked(False)
        self.color_button_group.setExclusive(True)
        if not state.is_eraser:
            if color_hex in self.color_buttons:
                self.color_buttons[color_hex].setChecked(True)
            else:
                self.custom_color = QColor(state.color)
                self._style_color_button(self.custom_color_button, self.custom_color)
                self.custom_color_button.setChecked(True)

        self.size_popup.set_value(state.size)
        self.opacity_popup.set_value(round(state.brush_opacity * 100))
        self.bg_popup.set_value(round(state.bg_opacity * 100))
        self.size_button.setText(str(state.size))
        self.opacity_button.setText(f"{round(state.brush_opacity * 100)}%")
        self.bg_button.setText(f"{round(state.bg_opacity * 100)}%")

        # --- 文字 ---
        self.brush_button.setToolTip(tr(lang, 'brush'))
        self.eraser_button.setToolTip(tr(lang, 'eraser'))
        self.custom_color_button.setToolTip(tr(lang, 'color'))
        self.size_button.setToolTip(tr(lang, 'size'))
        self.opacity_button.setToolTip(tr(lang, 'brushOpacity'))
        self.bg_button.setToolTip(tr(lang, 'bgOpacity'))
        self.clear_button.setToolTip(tr(lang, 'clear'))
        self.close_button.setToolTip(tr(lang, 'close'))

        if state.is_open:
            if not self.isVisible():
                self.adjustSize()
                self._move_to_default_position()
                self.show()
        else:
            self.close_popups()
            self.hide()

    def _move_to_default_position(self):
        """工具列預設置中於主螢幕下方。"""
        screen_rect = QApplication.primaryScreen().availableGeometry()
        x = screen_rect.x() + (screen_rect.width() - self.width()) // 2
        y = screen_rect.y() + screen_rect.height() - self.height() - 24
        self.move(x, y)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(QColor(62, 74, 89, 220)))
        painter.drawRoundedRect(self.rect(), 10, 10)
        painter.end()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.mouse_down = True
            self.is_dragging = False
            self.drag_start_position = event.pos()
            self.offset = event.globalPos() - self.pos()

    def mouseMoveEvent(self, event):
        if self.mouse_down:
            if not self.is_dragging and (event.pos() - self.drag_start_position).manhattanLength() > QApplication.startDragDistance():
                self.is_dragging = True
            if self.is_dragging:
                self.move(event.globalPos() - self.offset)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.mouse_down = False
            self.is_dragging = False
