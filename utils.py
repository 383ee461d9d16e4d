"""
utils.py — Shared constants, geometry helpers, and smoothing utilities.

This module is the foundation layer: every other module imports from here.
"""

import collections
import math

# ─── Window names (used by cv2.imshow / cv2.namedWindow) ──────────────────────
INTERACTOR_WINDOW = "FSM Interactor"
CAMERA_WINDOW     = "Camera Window"

# ─── Canvas ───────────────────────────────────────────────────────────────────
DEFAULT_CANVAS_W = 640
DEFAULT_CANVAS_H = 480
BACKGROUND_COLOR = (235, 235, 235)   # BGR

# ─── Debug overlay ────────────────────────────────────────────────────────────
DEBUG_FRAME_COLOR = (0, 0, 0)        # Bounding box of every region
DEBUG_LABEL_COLOR = (40, 40, 200)    # Region name text
DEBUG_FONT_SCALE  = 0.4

# ─── Loading ──────────────────────────────────────────────────────────────────
LOAD_TIMEOUT_SECONDS = 10.0          # HTTP fetch timeout for FSM descriptions

# ─── Performance ──────────────────────────────────────────────────────────────
TARGET_FPS = 30

# ─── Hand pointer thresholds ──────────────────────────────────────────────────
PINCH_THRESHOLD = 0.06           # Normalized thumb/index distance that counts as a press
GESTURE_HYSTERESIS = 2           # Frames a pinch change must hold before it is reported
POINTER_SMOOTH_WINDOW = 4        # Rolling window for the pointer position


# ═══════════════════════════════════════════════════════════════════════════════
#  Math helpers
# ═══════════════════════════════════════════════════════════════════════════════

def clamp(val: float, lo: float, hi: float) -> float:
    """Clamp *val* to the range [lo, hi]."""
    return max(lo, min(hi, val))


def distance(p1: tuple, p2: tuple) -> float:
    """Euclidean distance between two (x, y) or (x, y, z) points."""
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(p1, p2)))


def midpoint(p1: tuple, p2: tuple) -> tuple:
    """Point halfway between *p1* and *p2*."""
    return tuple((a + b) / 2 for a, b in zip(p1, p2))


def box_contains(x: float, y: float, w: float, h: float,
                 px: float, py: float) -> bool:
    """True if (px, py) lies in the box at (x, y) of size (w, h).

    All four edges count as inside.
    """
    return x <= px <= x + w and y <= py <= y + h


# ═══════════════════════════════════════════════════════════════════════════════
#  Moving average filter
# ═══════════════════════════════════════════════════════════════════════════════

class MovingAverage:
    """Simple moving-average filter backed by a fixed-size deque.

    Usage:
        smoother = MovingAverage(window=8)
        smooth_val = smoother.update(raw_val)
    """

    def __init__(self, window: int = POINTER_SMOOTH_WINDOW):
        self._buf: collections.deque = collections.deque(maxlen=window)

    def update(self, value: float) -> float:
        """Push *value* and return the current average."""
        self._buf.append(value)
        return sum(self._buf) / len(self._buf)

    def reset(self):
        """Clear the buffer."""
        self._buf.clear()
