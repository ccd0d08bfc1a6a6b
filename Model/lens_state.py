from __future__ import annotations
from dataclasses import dataclass, field

from config import Config
from Model.annotations import AnnotationStore
from Model.frame import Frame, compute_frame


@dataclass
class LensState:
    viewport_w: int = 0
    viewport_h: int = 0
    ratio: float = Config.DEFAULT_RATIO
    frame: Frame = field(default_factory=Frame)
    store: AnnotationStore = field(default_factory=AnnotationStore)

    def resize(self, w: int, h: int) -> Frame:
        # The ratio survives a resize, only the viewport changes
        self.viewport_w, self.viewport_h = w, h
        self.frame = compute_frame(w, h, self.ratio)
        return self.frame

    def set_ratio(self, ratio: float) -> Frame:
        if ratio <= 0:
            raise ValueError(f"Aspect ratio must be positive, got {ratio}")
        self.ratio = ratio
        self.frame = compute_frame(self.viewport_w, self.viewport_h, ratio)
        return self.frame
