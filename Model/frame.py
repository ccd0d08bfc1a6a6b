# Model/frame.py
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple

from config import Config

Rect = Tuple[float, float, float, float]  # (x, y, w, h)


@dataclass(frozen=True)
class Frame:
    """
    The guide rectangle in viewport coordinates plus the ratio that produced it.
    Immutable - a resize or ratio change replaces the whole Frame.
    """
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0
    ratio: float = Config.DEFAULT_RATIO

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def is_empty(self) -> bool:
        return self.w <= 0 or self.h <= 0

    def contains(self, x: float, y: float) -> bool:
        # Edges count as inside
        if self.is_empty:
            return False
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def clamp_x(self, x: float) -> float:
        return max(self.x, min(self.right, x))

    def clamp_y(self, y: float) -> float:
        return max(self.y, min(self.bottom, y))


def compute_frame(viewport_w: float, viewport_h: float, ratio: float,
                  margin: float = Config.FRAME_MARGIN) -> Frame:
    """
    Fits the largest box of the given aspect ratio into margin * viewport and centers it.
    If the viewport is proportionally wider than the ratio the box is fitted by height,
    otherwise by width.
    """
    if viewport_w <= 0 or viewport_h <= 0:
        # Widget not laid out yet - nothing can be placed into the frame
        return Frame(viewport_w / 2.0 if viewport_w > 0 else 0.0,
                     viewport_h / 2.0 if viewport_h > 0 else 0.0, 0.0, 0.0, ratio)

    if viewport_w / viewport_h > ratio:
        box_h = viewport_h * margin
        box_w = box_h * ratio
    else:
        box_w = viewport_w * margin
        box_h = box_w / ratio

    x = (viewport_w - box_w) / 2.0
    y = (viewport_h - box_h) / 2.0
    return Frame(x, y, box_w, box_h, ratio)


def ratio_label(ratio: float) -> str:
    # Golden ratio gets a name, everything else 3 decimals (half-up) without trailing zeros
    if ratio == Config.GOLDEN_RATIO:
        return "Golden"
    rounded = math.floor(ratio * 1000 + 0.5) / 1000
    return f"{rounded:.3f}".rstrip("0").rstrip(".")


def mask_bands(frame: Frame, viewport_w: float, viewport_h: float) -> list[Rect]:
    """The four mask rectangles around the frame: top, bottom, left, right."""
    return [
        (0.0, 0.0, viewport_w, frame.y),
        (0.0, frame.bottom, viewport_w, viewport_h - frame.bottom),
        (0.0, frame.y, frame.x, frame.h),
        (frame.right, frame.y, viewport_w - frame.right, frame.h),
    ]
