from __future__ import annotations
import logging
from typing import Optional

from Controller.enums import DragState, MODE_ORIENTATION, Mode
from Model.annotations import AnnotationStore
from Model.drag_ops import apply_drag
from Model.frame import Frame
from Model.hit_test import find_line_at

logger = logging.getLogger(__name__)


class DragController:
    """
    Pointer state machine: IDLE -> ARMED(index) -> DRAGGING(index) -> IDLE.

    Pointer-down selects a hit line (and arms it on the same event) or creates a new
    entity according to the current mode. Pointer-move drags the selected line while
    armed, pointer-up always returns to IDLE but keeps the selection.
    The store is passed in and referenced by index only - no copies of lines are kept.
    """

    def __init__(self, store: AnnotationStore, frame: Frame, mode: Mode = Mode.DOT):
        self.store = store
        self.frame = frame
        self.mode = mode
        self.state = DragState.IDLE
        self._last_xy: Optional[tuple[float, float]] = None

    # ---- Setup ----
    def set_frame(self, frame: Frame) -> None:
        # A resize mid-drag keeps the drag: selection is an index, unaffected by geometry
        self.frame = frame

    def set_mode(self, mode: Mode) -> None:
        self.mode = mode

    # ---- Pointer events ----
    def pointer_down(self, x: float, y: float) -> None:
        self._last_xy = (x, y)

        hit = find_line_at(self.store, self.frame, (x, y))
        if hit is not None:
            self.store.select(hit)
            self.state = DragState.ARMED
            return

        self.store.clear_selection()
        self.state = DragState.IDLE

        if self.mode is Mode.SELECT or not self.frame.contains(x, y):
            return

        if self.mode is Mode.DOT:
            self.store.add_dot((x, y), self.frame)
            return

        orientation = MODE_ORIENTATION.get(self.mode)
        if orientation is None:
            return
        if self.store.add_line(orientation, (x, y), self.frame) is not None:
            # New lines are armed right away so the same gesture can drag them
            self.state = DragState.ARMED

    def pointer_move(self, x: float, y: float) -> bool:
        """Returns True when the selected line was moved."""
        if self.state is DragState.IDLE or self._last_xy is None:
            return False
        index = self.store.selected
        line = self.store.selected_line
        if line is None:
            self.state = DragState.IDLE
            return False

        lx, ly = self._last_xy
        dx, dy = x - lx, y - ly
        self._last_xy = (x, y)
        self.state = DragState.DRAGGING
        if dx == 0 and dy == 0:
            return False

        self.store.update_line(index, apply_drag(line, (dx, dy), self.frame))
        return True

    def pointer_up(self) -> None:
        if self.state is DragState.DRAGGING:
            logger.debug("Drag of line %s finished", self.store.selected)
        self.state = DragState.IDLE
        self._last_xy = None

    # ---- Actions ----
    def delete_selected(self) -> bool:
        removed = self.store.delete_selected()
        self.state = DragState.IDLE
        return removed is not None
