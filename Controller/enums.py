from enum import Enum, auto

from Model.annotations import Orientation

# Pointer-down behaviour chosen in the toolbar
class Mode(Enum):
    DOT = auto()
    VERTICAL = auto()
    HORIZONTAL = auto()
    SLANT = auto()
    SELECT = auto()

# Line creation modes map onto the line orientation they create
MODE_ORIENTATION = {
    Mode.VERTICAL: Orientation.VERTICAL,
    Mode.HORIZONTAL: Orientation.HORIZONTAL,
    Mode.SLANT: Orientation.SLANTED,
}

# Setting the status of the pointer
class DragState(Enum):
    IDLE = auto()
    ARMED = auto()
    DRAGGING = auto()
