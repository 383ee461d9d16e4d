"""
root.py — Host container for FSM interactors.

The Root owns the canvas size and the list of child interactors.  Children
declare damage here; the Root only records it, and the host loop calls
``redraw()`` which repaints everything when (and only when) something is
damaged.  Raw pointer events arrive in canvas coordinates and are passed to
each child in that child's local coordinates.
"""

import logging

import numpy as np

from interactor import FSMInteractor
from renderer import DrawContext
from utils import BACKGROUND_COLOR, DEFAULT_CANVAS_H, DEFAULT_CANVAS_W

logger = logging.getLogger(__name__)


class Root:
    """Owns the drawing canvas and the interactors drawn on it."""

    def __init__(self, width: int = DEFAULT_CANVAS_W, height: int = DEFAULT_CANVAS_H,
                 background: tuple[int, int, int] = BACKGROUND_COLOR):
        self.width = width
        self.height = height
        self.background = background
        self._children: list[FSMInteractor] = []
        self._damaged = True
        self._canvas: "np.ndarray | None" = None

    # ── Children ──────────────────────────────────────────────────────────

    @property
    def children(self) -> list[FSMInteractor]:
        return list(self._children)

    def add_child(self, child: FSMInteractor):
        if child not in self._children:
            self._children.append(child)
        if child.parent is not self:
            child.parent = self
        self.damage()

    def remove_child(self, child: FSMInteractor):
        if child in self._children:
            self._children.remove(child)
            if child.parent is self:
                child.parent = None
            self.damage()

    # ── Damage & redraw ───────────────────────────────────────────────────

    @property
    def damaged(self) -> bool:
        return self._damaged

    def damage(self):
        """Record that the display is out of date."""
        self._damaged = True

    def redraw(self, show_debugging: bool = False) -> np.ndarray:
        """Return the current canvas, repainting it first if damaged."""
        if self._canvas is None or self._damaged:
            logger.debug("Repainting %dx%d canvas (%d children)",
                         self.width, self.height, len(self._children))
            canvas = np.zeros((self.height, self.width, 3), dtype=np.uint8)
            canvas[:] = self.background
            ctx = DrawContext(canvas)
            for child in self._children:
                ctx.save()
                ctx.translate(child.x, child.y)
                child.draw(ctx, show_debugging)
                ctx.restore()
            self._canvas = canvas
            self._damaged = False
        return self._canvas

    # ── Input ─────────────────────────────────────────────────────────────

    def dispatch_raw_event(self, kind: str, x: float, y: float):
        """Deliver a raw pointer event (canvas coordinates) to every child."""
        for child in list(self._children):
            child.dispatch_raw_event(kind, x - child.x, y - child.y)
