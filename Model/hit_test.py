# Model/hit_test.py
from __future__ import annotations
import math
from typing import Optional, Tuple

from config import Config
from Model.annotations import AnnotationStore, HorizontalLine, SlantedLine, VerticalLine
from Model.frame import Frame

Point = Tuple[float, float]


def point_to_segment_distance(px: float, py: float,
                              x1: float, y1: float, x2: float, y2: float) -> float:
    """Shortest distance from (px, py) to the segment, using the clamped projection."""
    cx, cy = x2 - x1, y2 - y1
    len_sq = cx * cx + cy * cy
    if len_sq == 0:
        # Degenerate segment -> distance to the single point
        return math.hypot(px - x1, py - y1)

    t = ((px - x1) * cx + (py - y1) * cy) / len_sq
    t = max(0.0, min(1.0, t))
    xx, yy = x1 + t * cx, y1 + t * cy
    return math.hypot(px - xx, py - yy)


def find_line_at(store: AnnotationStore, frame: Frame, p: Point,
                 threshold: float = Config.HIT_THRESHOLD) -> Optional[int]:
    """
    Index of the first line (insertion order) the point lies on, or None.
    Dots are never hit. The comparison is strict: exactly `threshold` away is a miss.
    """
    x, y = p
    for i, line in enumerate(store.lines):
        if isinstance(line, VerticalLine):
            # The whole guide length is eligible since drawn segment == frame span
            if abs(x - line.x) < threshold and frame.y <= y <= frame.bottom:
                return i
        elif isinstance(line, HorizontalLine):
            if abs(y - line.y) < threshold and frame.x <= x <= frame.right:
                return i
        elif isinstance(line, SlantedLine):
            if point_to_segment_distance(x, y, line.x1, line.y1, line.x2, line.y2) < threshold:
                return i
    return None
