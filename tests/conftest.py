from __future__ import annotations

import os

import numpy as np
import pytest

# Painting tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


def qimage_to_numpy_rgb(qimg) -> np.ndarray:
    """Reads a QImage back as an HxWx3 uint8 array (owned copy)."""
    from PyQt6.QtGui import QImage

    src = qimg.convertToFormat(QImage.Format.Format_RGB888)
    w, h = src.width(), src.height()
    bytes_per_line = src.bytesPerLine()

    ptr = src.bits()
    ptr.setsize(bytes_per_line * h)
    arr = np.frombuffer(ptr, dtype=np.uint8).reshape((h, bytes_per_line))
    # drop row padding
    return arr[:, :w * 3].reshape((h, w, 3)).copy()


@pytest.fixture
def qimage_rgb():
    return qimage_to_numpy_rgb
