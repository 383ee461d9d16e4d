"""
renderer.py — Drawing surface used to paint regions onto a canvas.

Responsibilities:
  • Load RGBA region images (transparent PNG), cached per path.
  • Keep a translated drawing origin with save / restore, like a 2D
    canvas context, so each region paints in its own local coordinates.
  • Alpha-blend images onto a BGR numpy canvas, clipped to its bounds.
  • Draw the debug overlay primitives (frames and labels).
"""

import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)

# path -> BGRA image, or None if it could not be loaded
_image_cache: dict[str, "np.ndarray | None"] = {}


def load_image(path: str) -> "np.ndarray | None":
    """Return the BGRA image at *path*, or None if it cannot be read.

    Failures are logged once per path and remembered, so a missing file
    does not hit the disk on every redraw.
    """
    if path in _image_cache:
        return _image_cache[path]

    # Load with alpha channel (BGRA)
    raw = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if raw is None:
        logger.warning("Cannot load region image: %s", path)
        _image_cache[path] = None
        return None

    if raw.ndim == 2:
        raw = cv2.cvtColor(raw, cv2.COLOR_GRAY2BGR)

    # Ensure 4 channels
    if raw.shape[2] == 3:
        # No alpha — add a fully opaque channel
        alpha = np.full((*raw.shape[:2], 1), 255, dtype=raw.dtype)
        raw = np.concatenate([raw, alpha], axis=2)

    _image_cache[path] = raw
    return raw


def clear_image_cache():
    """Forget every cached image (e.g. after assets were regenerated)."""
    _image_cache.clear()


class DrawContext:
    """A translatable drawing context over a BGR canvas."""

    def __init__(self, canvas: np.ndarray):
        """
        Parameters
        ----------
        canvas : np.ndarray
            BGR image to draw into (modified in place).
        """
        self.canvas = canvas
        self.canvas_h, self.canvas_w = canvas.shape[:2]
        self._origin: tuple[float, float] = (0.0, 0.0)
        self._saved: list[tuple[float, float]] = []

    # ── Origin handling ───────────────────────────────────────────────────

    @property
    def origin(self) -> tuple[float, float]:
        return self._origin

    def save(self):
        self._saved.append(self._origin)

    def restore(self):
        if self._saved:
            self._origin = self._saved.pop()

    def translate(self, dx: float, dy: float):
        ox, oy = self._origin
        self._origin = (ox + dx, oy + dy)

    def _to_canvas(self, x: float, y: float) -> tuple[int, int]:
        ox, oy = self._origin
        return int(round(ox + x)), int(round(oy + y))

    # ── Drawing ───────────────────────────────────────────────────────────

    def draw_image(self, image: np.ndarray, x: float, y: float):
        """Composite *image* (BGRA) with its top-left at local (x, y)."""
        img_h, img_w = image.shape[:2]
        x1, y1 = self._to_canvas(x, y)
        x2 = x1 + img_w
        y2 = y1 + img_h

        # ── Clamp to canvas bounds ────────────────────────────────────
        # Source region in image that actually overlaps the canvas
        sx1 = max(0, -x1)
        sy1 = max(0, -y1)
        sx2 = img_w - max(0, x2 - self.canvas_w)
        sy2 = img_h - max(0, y2 - self.canvas_h)

        # Destination region on canvas
        dx1 = max(0, x1)
        dy1 = max(0, y1)
        dx2 = min(self.canvas_w, x2)
        dy2 = min(self.canvas_h, y2)

        # Only draw if there is an overlapping region
        if dx1 < dx2 and dy1 < dy2 and sx1 < sx2 and sy1 < sy2:
            patch = image[sy1:sy2, sx1:sx2]
            self._alpha_blend(self.canvas, patch, dy1, dy2, dx1, dx2)

    def stroke_rect(self, x: float, y: float, w: float, h: float,
                    color: tuple[int, int, int], thickness: int = 1):
        """Outline the rectangle at local (x, y) of size (w, h)."""
        x1, y1 = self._to_canvas(x, y)
        x2, y2 = self._to_canvas(x + w, y + h)
        cv2.rectangle(self.canvas, (x1, y1), (x2, y2), color, thickness)

    def fill_text(self, text: str, x: float, y: float,
                  color: tuple[int, int, int], font_scale: float = 0.4):
        """Draw *text* with its baseline starting at local (x, y)."""
        cv2.putText(self.canvas, text, self._to_canvas(x, y),
                    cv2.FONT_HERSHEY_SIMPLEX, font_scale, color, 1, cv2.LINE_AA)

    # ── Alpha blending ────────────────────────────────────────────────────

    @staticmethod
    def _alpha_blend(
        canvas: np.ndarray,
        patch: np.ndarray,
        y1: int, y2: int,
        x1: int, x2: int,
    ):
        """Composite *patch* (BGRA) onto *canvas* (BGR) at [y1:y2, x1:x2].

        Uses the alpha channel of the patch for per-pixel transparency.
        """
        alpha = patch[:, :, 3:4].astype(np.float32) / 255.0
        fg = patch[:, :, :3].astype(np.float32)
        bg = canvas[y1:y2, x1:x2].astype(np.float32)

        blended = fg * alpha + bg * (1.0 - alpha)
        canvas[y1:y2, x1:x2] = blended.astype(np.uint8)
