from __future__ import annotations
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QImage, QPainter
from PyQt6.QtWidgets import QWidget

from Model.annotations import AnnotationStore
from Model.frame import Frame
from View.compositor import Compositor


class LensCanvas(QWidget):
    # This class is the live preview: the camera raster stretched over the whole widget,
    # with the guide overlay painted on top by the Compositor.

    # Signals with the user interaction, coordinates are widget (= viewport) pixels
    pointerDown = pyqtSignal(float, float)
    pointerMove = pyqtSignal(float, float)
    pointerUp = pyqtSignal(float, float)
    viewportResized = pyqtSignal(int, int)
    deleteRequested = pyqtSignal()

    def __init__(self, compositor: Compositor | None = None):
        super().__init__()
        self.setObjectName("LensCanvas")
        self.setMouseTracking(False)  # moves only while a button is held
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent, True)

        self._compositor = compositor or Compositor()
        self._raster: Optional[QImage] = None
        self._frame = Frame()
        self._store: Optional[AnnotationStore] = None

        # Cached overlay, rebuilt only when store revision / frame / size change
        self._overlay: Optional[QImage] = None
        self._overlay_key = None

    # ---- Public API ----
    def set_scene(self, frame: Frame, store: AnnotationStore):
        self._frame = frame
        self._store = store

    def set_raster(self, qimg: Optional[QImage]):
        # None -> no image layer, the overlay is still drawn
        self._raster = qimg if qimg is not None and not qimg.isNull() else None

    # Mouse events
    def mousePressEvent(self, e):
        if e.button() == Qt.MouseButton.LeftButton:
            pos = e.position()
            self.pointerDown.emit(pos.x(), pos.y())
            e.accept()
            return
        super().mousePressEvent(e)

    def mouseMoveEvent(self, e):
        if e.buttons() & Qt.MouseButton.LeftButton:
            pos = e.position()
            self.pointerMove.emit(pos.x(), pos.y())
            e.accept()
            return
        super().mouseMoveEvent(e)

    def mouseReleaseEvent(self, e):
        if e.button() == Qt.MouseButton.LeftButton:
            pos = e.position()
            self.pointerUp.emit(pos.x(), pos.y())
            e.accept()
            return
        super().mouseReleaseEvent(e)

    def keyPressEvent(self, e):
        if e.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            self.deleteRequested.emit()
            e.accept()
            return
        super().keyPressEvent(e)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.viewportResized.emit(self.width(), self.height())
        self.update()

    # Paint
    def paintEvent(self, e):
        p = QPainter(self)
        try:
            p.fillRect(self.rect(), Qt.GlobalColor.black)
            if self._raster is not None:
                p.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, True)
                p.drawImage(self.rect(), self._raster)
            if self._store is not None and self.width() > 0 and self.height() > 0:
                p.drawImage(0, 0, self._overlay_image())
        finally:
            p.end()

    def _overlay_image(self) -> QImage:
        key = (id(self._store), self._store.revision, self._frame, self.width(), self.height())
        if self._overlay is None or key != self._overlay_key:
            img = QImage(self.width(), self.height(), QImage.Format.Format_ARGB32_Premultiplied)
            img.fill(Qt.GlobalColor.transparent)
            p = QPainter(img)
            try:
                self._compositor.paint_overlay(p, self.width(), self.height(), self._frame, self._store)
            finally:
                p.end()
            self._overlay = img
            self._overlay_key = key
        return self._overlay
