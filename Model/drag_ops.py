# Model/drag_ops.py
from __future__ import annotations
from dataclasses import replace
from typing import Tuple

from Model.annotations import HorizontalLine, Line, SlantedLine, VerticalLine
from Model.frame import Frame


def _axis_correction(a: float, b: float, lo: float, hi: float) -> float:
    """
    Smallest shift that brings both coordinates a, b back into [lo, hi].
    If the span is wider than [lo, hi] the low edge wins and the caller clamps the rest.
    """
    low, high = min(a, b), max(a, b)
    if low < lo:
        return lo - low
    if high > hi:
        return hi - high
    return 0.0


def translate_slanted(line: SlantedLine, dx: float, dy: float, frame: Frame) -> SlantedLine:
    """
    Moves both endpoints by (dx, dy), then shifts the whole segment back inside the frame.
    Length and angle survive unless the segment is bigger than the frame on an axis -
    only then does the final per-endpoint clamp reshape it.
    """
    x1, y1 = line.x1 + dx, line.y1 + dy
    x2, y2 = line.x2 + dx, line.y2 + dy

    cx = _axis_correction(x1, x2, frame.x, frame.right)
    cy = _axis_correction(y1, y2, frame.y, frame.bottom)
    x1, x2 = x1 + cx, x2 + cx
    y1, y2 = y1 + cy, y2 + cy

    return SlantedLine(frame.clamp_x(x1), frame.clamp_y(y1),
                       frame.clamp_x(x2), frame.clamp_y(y2))


def apply_drag(line: Line, delta: Tuple[float, float], frame: Frame) -> Line:
    """Orientation specific drag update. Returns the moved line, the input stays untouched."""
    dx, dy = delta
    if isinstance(line, VerticalLine):
        return replace(line, x=frame.clamp_x(line.x + dx))
    if isinstance(line, HorizontalLine):
        return replace(line, y=frame.clamp_y(line.y + dy))
    if isinstance(line, SlantedLine):
        return translate_slanted(line, dx, dy, frame)
    raise TypeError(f"Not a line: {line!r}")
