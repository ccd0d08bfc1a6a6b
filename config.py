"""
Global configuration for Layout Lens
"""

import math
from pathlib import Path
from typing import Final


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "Layout Lens"
    APP_VERSION: Final[str] = "1.0.0"

    # Paths
    APP_ROOT: Final[Path] = Path(__file__).resolve().parent
    RESOURCES_DIR: Final[Path] = APP_ROOT / "Resources"
    LOG_DIR: Final[Path] = Path.home() / ".layout_lens" / "logs"
    CAPTURE_DIR: Final[Path] = Path.home() / "Pictures"
    CAPTURE_FILENAME: Final[str] = "viewfinder.png"

    # Frame fitting
    FRAME_MARGIN: Final[float] = 0.92
    DEFAULT_RATIO: Final[float] = 1.0
    GOLDEN_RATIO: Final[float] = 1.618
    RATIO_PRESETS: Final[list] = [
        ("1:1", 1.0),
        ("4:3", 4 / 3),
        ("3:2", 3 / 2),
        ("16:9", 16 / 9),
        ("3:4", 3 / 4),
        ("9:16", 9 / 16),
        ("Golden", 1.618),
    ]

    # Annotation geometry
    HIT_THRESHOLD: Final[float] = 18.0  # viewport pixels, strict less-than
    SLANT_LENGTH_FACTOR: Final[float] = 0.75  # fraction of frame width
    SLANT_ANGLE: Final[float] = -math.pi / 4

    # Overlay styling
    MASK_RGBA: Final[tuple] = (0, 0, 0, 115)  # 0.45 alpha
    BORDER_RGBA: Final[tuple] = (255, 255, 255, 242)  # 0.95 alpha
    BORDER_WIDTH: Final[float] = 3.0
    DOT_RADIUS: Final[float] = 8.0
    DOT_FILL: Final[str] = "#4da3ff"
    DOT_OUTLINE: Final[str] = "#ffffff"
    DOT_OUTLINE_WIDTH: Final[float] = 2.0
    LINE_COLOR: Final[str] = "lime"
    LINE_WIDTH: Final[float] = 3.0
    SELECTED_COLOR: Final[str] = "cyan"
    SELECTED_WIDTH: Final[float] = 4.0
    GLOW_BLUR: Final[int] = 14  # halo spread in pixels
    EXPORT_LINE_WIDTH: Final[float] = 4.0

    # Render loop / camera
    RENDER_INTERVAL_MS: Final[int] = 16
    PREFERRED_CAMERA_INDEX: Final[int] = 0
    PREFERRED_RESOLUTION: Final[tuple] = (1280, 720)
    MAX_CAMERA_SCAN: Final[int] = 5

    # Window settings
    DEFAULT_WINDOW_WIDTH: Final[int] = 1200
    DEFAULT_WINDOW_HEIGHT: Final[int] = 800
    MIN_WINDOW_WIDTH: Final[int] = 640
    MIN_WINDOW_HEIGHT: Final[int] = 480


__all__ = ['Config']
