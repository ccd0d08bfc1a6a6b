from PyQt6.QtWidgets import QDialog, QLabel, QVBoxLayout, QHBoxLayout, QPushButton, QApplication, QFileDialog
from PyQt6.QtGui import QPixmap, QImage
from PyQt6.QtCore import Qt


class CaptureDialog(QDialog):
    """
    Shows the flattened capture (camera still + guides).
    - static, fitted to the window (aspect kept)
    - "Save..." writes the full-resolution PNG, identical to the capture
    """
    def __init__(self, parent, qimg: QImage, default_path: str = "viewfinder.png"):
        super().__init__(parent)
        self.setWindowTitle("Capture")
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose, True)

        # 80% of the screen, like a preview window
        screen = QApplication.primaryScreen()
        if screen is not None:
            scr = screen.availableGeometry()
            self.resize(int(scr.width() * 0.8), int(scr.height() * 0.8))

        self._img = qimg
        self._default_path = default_path

        self._label = QLabel()
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setMinimumSize(200, 200)

        save_btn = QPushButton("Save...")
        save_btn.clicked.connect(self._save_as)
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.close)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(save_btn)
        buttons.addWidget(close_btn)

        lay = QVBoxLayout(self)
        lay.addWidget(self._label, 1)
        lay.addLayout(buttons)

        self._render_and_set_pixmap()

    def _render_and_set_pixmap(self):
        """fits the capture into the label, keeping its aspect ratio"""
        if self._img is None or self._img.isNull():
            self._label.setText("No capture")
            return
        target_w = max(200, self._label.width())
        target_h = max(200, self._label.height())
        pm = QPixmap.fromImage(self._img).scaled(
            target_w, target_h, Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation
        )
        self._label.setPixmap(pm)

    def resizeEvent(self, ev):
        super().resizeEvent(ev)
        self._render_and_set_pixmap()

    def _save_as(self):
        path, _ = QFileDialog.getSaveFileName(self, "Save capture", self._default_path, "PNG (*.png)")
        if path:
            self._img.save(path, "PNG")
