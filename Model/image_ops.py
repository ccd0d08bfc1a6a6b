import cv2
import numpy as np
from PyQt6.QtGui import QImage


def bgr_to_rgb(bgr: np.ndarray) -> np.ndarray:
    # OpenCV delivers BGR, everything downstream works on RGB
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)


def fit_raster(rgb: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Stretches the raster to exactly width x height (canvas resolution).
    """
    h, w = rgb.shape[:2]
    if (w, h) == (width, height):
        return rgb
    # INTER_AREA for shrinking, INTER_LINEAR for enlarging
    interp = cv2.INTER_AREA if w > width or h > height else cv2.INTER_LINEAR
    return cv2.resize(rgb, (width, height), interpolation=interp)


def numpy_rgb_to_qimage(rgb: np.ndarray) -> QImage:
    rgb = np.ascontiguousarray(rgb, dtype=np.uint8)
    h, w, _ = rgb.shape
    # QImage darf nicht auf flüchtigen Speicher zeigen -> copy()
    qimg = QImage(
        rgb.data, w, h, 3 * w,
        QImage.Format.Format_RGB888
    ).copy()
    return qimg

