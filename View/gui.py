from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QPushButton, QLineEdit, QLabel, QComboBox, QSizePolicy

from config import Config
from Controller.LensController import LensController
from .capture_dialog import CaptureDialog
from .lens_canvas import LensCanvas
from .panel import Panel


class LayoutLensGUI(QWidget):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(Config.APP_NAME)
        self._init_ui()
        self.controller = LensController(self)

    def _init_ui(self):
        self.setAutoFillBackground(True)
        self.setMinimumSize(Config.MIN_WINDOW_WIDTH, Config.MIN_WINDOW_HEIGHT)
        self.resize(Config.DEFAULT_WINDOW_WIDTH, Config.DEFAULT_WINDOW_HEIGHT)

        self.lensPanel = Panel(Config.APP_NAME)

        # Set Main Layout
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.lensPanel, 1)

        self._setup_toolbar()
        self._setup_canvas()
        self._setup_status_line(layout)

    # ------- Helper function to build the toolBar Buttons -------
    def _setup_toolbar(self):
        # Mode buttons: exclusive, exactly one is checked
        self.lensPanel.add_toolbar_buttons({
            "Dot": self._btn("Dot"),
            "Vertical": self._btn("Vertical"),
            "Horizontal": self._btn("Horizontal"),
            "Slant": self._btn("Slant"),
            "Select": self._btn("Select"),
        }, exclusive=True)
        self.lensPanel.toolbarButtons["Dot"].setChecked(True)

        tips = {
            "Dot": "Click inside the frame to place a point.",
            "Vertical": "Click inside the frame to place a vertical guide. Drag to move it.",
            "Horizontal": "Click inside the frame to place a horizontal guide. Drag to move it.",
            "Slant": "Click inside the frame to place a slanted guide (-45°). Drag to move it.",
            "Select": "Click a guide to select and drag it. Clicking empty space clears the selection.",
        }
        for key, tip in tips.items():
            self.lensPanel.toolbarButtons[key].setToolTip(tip)

        self.lensPanel.add_separator()

        # Aspect ratio selector + current ratio label
        self.ratioCombo = QComboBox()
        for label, value in Config.RATIO_PRESETS:
            self.ratioCombo.addItem(label, value)
        self.ratioCombo.setMinimumHeight(36)
        self.ratioCombo.setToolTip("Aspect ratio of the guide frame")
        self.lensPanel.add_toolbar_widget(self.ratioCombo)

        self.currentRatioLabel = QLabel("1")
        self.currentRatioLabel.setMinimumWidth(60)
        self.currentRatioLabel.setAlignment(Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft)
        self.lensPanel.add_toolbar_widget(self.currentRatioLabel)

        self.lensPanel.add_separator()

        self.lensPanel.add_toolbar_buttons({
            "Delete": self._btn("Delete"),
            "Capture": self._btn("Capture"),
            "Switch": self._btn("Switch Camera"),
        })
        self.lensPanel.toolbarButtons["Delete"].setToolTip("Delete the selected guide (Del).")
        self.lensPanel.toolbarButtons["Delete"].setVisible(False)
        self.lensPanel.toolbarButtons["Capture"].setToolTip(
            "Export the current camera image with the frame and all guides burned in.")
        self.lensPanel.toolbarButtons["Switch"].setToolTip("Cycle through the available cameras.")

    def _setup_canvas(self):
        self.canvas = LensCanvas()
        self.lensPanel.set_content(self.canvas)

    def _setup_status_line(self, layout):
        self.statusLine = QLineEdit()
        self.statusLine.setReadOnly(True)
        self.statusLine.setFixedHeight(22)
        self.statusLine.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.statusLine.setStyleSheet("QLineEdit { background:#1e1e1e; color:#d8d8d8; padding:2px 6px; }")
        layout.addWidget(self.statusLine)

    @staticmethod
    def _btn(text: str) -> QPushButton:
        btn = QPushButton(text)
        btn.setMinimumHeight(36)
        return btn

    # ---- Called by the controller ----
    def set_delete_visible(self, visible: bool):
        self.lensPanel.toolbarButtons["Delete"].setVisible(visible)

    def set_ratio_label(self, text: str):
        self.currentRatioLabel.setText(text)

    def show_capture(self, qimg, default_path: str) -> bool:
        # Returns False when the image cannot be presented (caller falls back to saving)
        dlg = CaptureDialog(self, qimg, default_path)
        dlg.show()
        return dlg.isVisible()

    def closeEvent(self, e):
        self.controller.shutdown()
        super().closeEvent(e)
