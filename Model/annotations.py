# Model/annotations.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple, Union

from config import Config
from Model.frame import Frame

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class Orientation(Enum):
    VERTICAL = auto()
    HORIZONTAL = auto()
    SLANTED = auto()


@dataclass(frozen=True)
class Dot:
    x: float
    y: float


@dataclass(frozen=True)
class VerticalLine:
    x: float
    orientation = Orientation.VERTICAL


@dataclass(frozen=True)
class HorizontalLine:
    y: float
    orientation = Orientation.HORIZONTAL


@dataclass(frozen=True)
class SlantedLine:
    x1: float
    y1: float
    x2: float
    y2: float
    orientation = Orientation.SLANTED

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)


Line = Union[VerticalLine, HorizontalLine, SlantedLine]


def default_slanted_line(cx: float, cy: float, frame: Frame) -> SlantedLine:
    """
    Segment of length frame.w * 0.75 at -45 degrees centered on (cx, cy).
    Each endpoint is clamped into the frame on its own, so a segment that sticks out
    gets shortened / reshaped.
    """
    half = frame.w * Config.SLANT_LENGTH_FACTOR / 2.0
    dx = math.cos(Config.SLANT_ANGLE) * half
    dy = math.sin(Config.SLANT_ANGLE) * half
    return SlantedLine(
        frame.clamp_x(cx - dx), frame.clamp_y(cy - dy),
        frame.clamp_x(cx + dx), frame.clamp_y(cy + dy),
    )


@dataclass
class AnnotationStore:
    """
    Owns the ordered dots and lines and the index of the selected line.
    Every mutation bumps `revision` so cached renders know they are stale;
    the store itself never triggers rendering.
    """
    dots: List[Dot] = field(default_factory=list)
    lines: List[Line] = field(default_factory=list)
    selected: Optional[int] = None
    revision: int = 0

    # ---- Dots ----
    def add_dot(self, p: Point, frame: Frame) -> bool:
        x, y = p
        if not frame.contains(x, y):
            logger.debug("Dot at (%.1f, %.1f) ignored - outside frame", x, y)
            return False
        self.dots.append(Dot(x, y))
        self._touch()
        return True

    # ---- Lines ----
    def add_line(self, orientation: Orientation, p: Point, frame: Frame) -> Optional[int]:
        if frame.is_empty:
            return None
        x, y = p
        if orientation is Orientation.VERTICAL:
            line = VerticalLine(frame.clamp_x(x))
        elif orientation is Orientation.HORIZONTAL:
            line = HorizontalLine(frame.clamp_y(y))
        elif orientation is Orientation.SLANTED:
            line = default_slanted_line(frame.clamp_x(x), frame.clamp_y(y), frame)
        else:
            raise ValueError(f"Unknown orientation: {orientation!r}")

        self.lines.append(line)
        self.selected = len(self.lines) - 1
        self._touch()
        logger.debug("Added %s at index %d", line, self.selected)
        return self.selected

    def update_line(self, index: int, line: Line) -> None:
        # Replaces the line in place, order is kept
        self.lines[index] = line
        self._touch()

    def delete_selected(self) -> Optional[Line]:
        if self.selected is None:
            return None
        removed = self.lines.pop(self.selected)
        self.selected = None
        self._touch()
        logger.debug("Deleted %s", removed)
        return removed

    # ---- Selection ----
    def select(self, index: int) -> None:
        if not 0 <= index < len(self.lines):
            raise IndexError(f"No line at index {index}")
        if self.selected != index:
            self.selected = index
            self._touch()

    def clear_selection(self) -> None:
        if self.selected is not None:
            self.selected = None
            self._touch()

    @property
    def selected_line(self) -> Optional[Line]:
        if self.selected is None or not 0 <= self.selected < len(self.lines):
            return None
        return self.lines[self.selected]

    def _touch(self) -> None:
        self.revision += 1
