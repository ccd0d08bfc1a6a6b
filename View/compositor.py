from __future__ import annotations
from typing import Optional

import numpy as np
from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QBrush, QColor, QImage, QPainter, QPen

from config import Config
from Model.annotations import AnnotationStore, HorizontalLine, Line, SlantedLine, VerticalLine
from Model.frame import Frame, mask_bands
from Model.image_ops import fit_raster, numpy_rgb_to_qimage


class Compositor:
    """
    Paints the guide overlay (mask, frame border, dots, lines) with a QPainter.
    Every call is a pure function of frame + store + selection; painter state is saved
    and restored so nothing leaks from one tick into the next.
    """

    def __init__(self):
        self._mask_brush = QBrush(QColor(*Config.MASK_RGBA))
        self._border_pen = QPen(QColor(*Config.BORDER_RGBA), Config.BORDER_WIDTH)
        self._dot_brush = QBrush(QColor(Config.DOT_FILL))
        self._dot_pen = QPen(QColor(Config.DOT_OUTLINE), Config.DOT_OUTLINE_WIDTH)
        self._line_color = QColor(Config.LINE_COLOR)
        self._selected_color = QColor(Config.SELECTED_COLOR)

    # ---- Live overlay ----
    def paint_overlay(self, p: QPainter, width: int, height: int,
                      frame: Frame, store: AnnotationStore, *, with_selection: bool = True,
                      line_width: float = Config.LINE_WIDTH) -> None:
        p.save()
        try:
            p.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            self._paint_mask_and_border(p, width, height, frame)
            self._paint_dots(p, store)
            selected = store.selected if with_selection else None
            for i, line in enumerate(store.lines):
                if i == selected:
                    self._paint_selected_line(p, line, frame)
                else:
                    self._stroke_line(p, line, frame, QPen(self._line_color, line_width))
        finally:
            p.restore()

    # ---- Export ----
    def render_export(self, raster: Optional[np.ndarray], width: int, height: int,
                      frame: Frame, store: AnnotationStore) -> QImage:
        """
        Flattens one still raster + overlay into a width x height image.
        Without a raster (camera not ready) the image layer is black.
        """
        out = QImage(width, height, QImage.Format.Format_RGB32)
        out.fill(Qt.GlobalColor.black)

        p = QPainter(out)
        try:
            if raster is not None:
                p.drawImage(0, 0, numpy_rgb_to_qimage(fit_raster(raster, width, height)))
            self.paint_overlay(p, width, height, frame, store,
                               with_selection=False, line_width=Config.EXPORT_LINE_WIDTH)
        finally:
            p.end()
        return out

    # ---- Helpers ----
    def _paint_mask_and_border(self, p: QPainter, width: int, height: int, frame: Frame) -> None:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(self._mask_brush)
        for x, y, w, h in mask_bands(frame, width, height):
            if w > 0 and h > 0:
                p.drawRect(QRectF(x, y, w, h))

        if frame.is_empty:
            return
        # Border sits inside the frame (inset by half the pen width)
        inset = Config.BORDER_WIDTH / 2.0
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.setPen(self._border_pen)
        p.drawRect(QRectF(frame.x + inset, frame.y + inset,
                          frame.w - 2 * inset, frame.h - 2 * inset))

    def _paint_dots(self, p: QPainter, store: AnnotationStore) -> None:
        r = Config.DOT_RADIUS
        p.setBrush(self._dot_brush)
        p.setPen(self._dot_pen)
        for d in store.dots:
            p.drawEllipse(QPointF(d.x, d.y), r, r)

    def _paint_selected_line(self, p: QPainter, line: Line, frame: Frame) -> None:
        # Halo: wide, faint strokes first, the solid accent stroke on top
        blur = Config.GLOW_BLUR
        for step in range(blur, 0, -2):
            halo = QColor(self._selected_color)
            halo.setAlpha(max(8, int(90 * (1.0 - step / (blur + 1)))))
            self._stroke_line(p, line, frame, QPen(halo, Config.SELECTED_WIDTH + step))
        self._stroke_line(p, line, frame, QPen(self._selected_color, Config.SELECTED_WIDTH))

    @staticmethod
    def _stroke_line(p: QPainter, line: Line, frame: Frame, pen: QPen) -> None:
        pen.setCapStyle(Qt.PenCapStyle.FlatCap)
        p.setPen(pen)
        p.setBrush(Qt.BrushStyle.NoBrush)
        if isinstance(line, VerticalLine):
            p.drawLine(QPointF(line.x, frame.y), QPointF(line.x, frame.bottom))
        elif isinstance(line, HorizontalLine):
            p.drawLine(QPointF(frame.x, line.y), QPointF(frame.right, line.y))
        elif isinstance(line, SlantedLine):
            p.drawLine(QPointF(line.x1, line.y1), QPointF(line.x2, line.y2))
