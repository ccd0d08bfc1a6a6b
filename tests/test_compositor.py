import numpy as np
import pytest

from Model.annotations import AnnotationStore, VerticalLine
from Model.frame import compute_frame

W, H = 200, 100


@pytest.fixture
def compositor(qapp):
    from View.compositor import Compositor

    return Compositor()


def _overlay(compositor, frame, store):
    from PyQt6.QtCore import Qt
    from PyQt6.QtGui import QImage, QPainter

    img = QImage(W, H, QImage.Format.Format_ARGB32)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    compositor.paint_overlay(p, W, H, frame, store)
    p.end()
    return img


def test_export_has_canvas_size_and_masks_outside(compositor, qimage_rgb):
    frame = compute_frame(W, H, 1)
    white = np.full((50, 60, 3), 255, dtype=np.uint8)

    img = compositor.render_export(white, W, H, frame, AnnotationStore())

    assert (img.width(), img.height()) == (W, H)
    rgb = qimage_rgb(img)
    # inside the frame the still is untouched
    assert tuple(rgb[50, 100]) == (255, 255, 255)
    # outside it is darkened by the translucent mask
    assert 130 <= int(rgb[50, 10, 0]) <= 150


def test_export_without_raster_still_draws_guides(compositor, qimage_rgb):
    frame = compute_frame(W, H, 1)
    store = AnnotationStore(lines=[VerticalLine(100)])

    rgb = qimage_rgb(compositor.render_export(None, W, H, frame, store))

    r, g, b = (int(c) for c in rgb[50, 100])
    assert g > 200 and r < 60 and b < 60
    assert tuple(rgb[50, 80]) == (0, 0, 0)


def test_selected_line_uses_accent_color(compositor):
    frame = compute_frame(W, H, 1)
    store = AnnotationStore(lines=[VerticalLine(80), VerticalLine(120)], selected=1)

    img = _overlay(compositor, frame, store)

    plain = img.pixelColor(80, 50)
    accent = img.pixelColor(120, 50)
    assert plain.green() > 200 and plain.blue() < 60
    assert accent.green() > 200 and accent.blue() > 200 and accent.red() < 60


def test_redraw_does_not_accumulate(compositor):
    frame = compute_frame(W, H, 16 / 9)
    store = AnnotationStore(lines=[VerticalLine(100)], selected=0)
    assert _overlay(compositor, frame, store) == _overlay(compositor, frame, store)
