"""
gesture_detector.py — Turn tracked hand poses into raw pointer events.

The pointer is the (smoothed) midpoint between thumb tip and index tip.
A pinch (thumb and index tips together) holds the primary button down:

  • "move"     — every frame a hand is visible
  • "press"    — pinch closed and stable for GESTURE_HYSTERESIS frames
  • "release"  — pinch opened and stable for GESTURE_HYSTERESIS frames,
                 or the hand disappeared while pressed

Hysteresis prevents jitter: a pinch change must be seen for several
consecutive frames before it is reported.
"""

from dataclasses import dataclass, field

from utils import (
    clamp,
    distance,
    midpoint,
    MovingAverage,
    GESTURE_HYSTERESIS,
    PINCH_THRESHOLD,
    POINTER_SMOOTH_WINDOW,
)


@dataclass(slots=True)
class HandData:
    """Lightweight container for the landmarks we actually need.

    All coordinates are normalised to [0, 1] of the camera frame.
    """
    thumb_tip:   tuple[float, float]
    index_tip:   tuple[float, float]
    all_landmarks: list = field(default_factory=list)


class PinchPointer:
    """Stateful translator from HandData frames to (kind, x, y) samples."""

    def __init__(self, canvas_size: tuple[int, int],
                 threshold: float = PINCH_THRESHOLD,
                 hysteresis: int = GESTURE_HYSTERESIS):
        """
        Parameters
        ----------
        canvas_size : tuple[int, int]
            (width, height) in pixels that normalised positions scale to.
        threshold : float
            Normalised thumb/index distance below which the hand is pinching.
        hysteresis : int
            Consecutive frames a pinch change must hold before it counts.
        """
        self.canvas_w, self.canvas_h = canvas_size
        self._threshold = threshold
        self._hysteresis = max(1, hysteresis)

        self._x_smoother = MovingAverage(window=POINTER_SMOOTH_WINDOW)
        self._y_smoother = MovingAverage(window=POINTER_SMOOTH_WINDOW)

        self._pressed: bool = False
        self._pending: bool = False      # Raw pinch state being confirmed
        self._stable_count: int = 0
        self._last_pos: tuple[float, float] = (0.0, 0.0)

    # ── Public API ────────────────────────────────────────────────────────

    @property
    def pressed(self) -> bool:
        return self._pressed

    @property
    def position(self) -> tuple[float, float]:
        """Last reported pointer position in canvas pixels."""
        return self._last_pos

    def update(self, hand: "HandData | None") -> list[tuple[str, float, float]]:
        """Consume one frame and return the raw events it produces."""
        if hand is None:
            return self._hand_lost()

        nx, ny = midpoint(hand.thumb_tip, hand.index_tip)
        x = self._x_smoother.update(clamp(nx, 0.0, 1.0)) * self.canvas_w
        y = self._y_smoother.update(clamp(ny, 0.0, 1.0)) * self.canvas_h
        self._last_pos = (x, y)

        events = [("move", x, y)]

        # ── Hysteresis ────────────────────────────────────────────────
        pinching = self._is_pinch(hand)
        if pinching == self._pending:
            self._stable_count += 1
        else:
            self._pending = pinching
            self._stable_count = 1

        if self._stable_count >= self._hysteresis and self._pending != self._pressed:
            self._pressed = self._pending
            events.append(("press" if self._pressed else "release", x, y))

        return events

    def reset(self):
        """Clear internal state (e.g. when tracking is restarted)."""
        self._x_smoother.reset()
        self._y_smoother.reset()
        self._pressed = False
        self._pending = False
        self._stable_count = 0

    # ── Helpers ───────────────────────────────────────────────────────────

    def _is_pinch(self, hand: HandData) -> bool:
        """True when thumb tip and index tip are pinched together."""
        return distance(hand.thumb_tip, hand.index_tip) < self._threshold

    def _hand_lost(self) -> list[tuple[str, float, float]]:
        was_pressed = self._pressed
        x, y = self._last_pos
        self.reset()
        if was_pressed:
            return [("release", x, y)]
        return []
