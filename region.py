"""
region.py — Named rectangles that carry the interactor's images.

A Region has a position and size (in the interactor's local coordinates)
which define its bounding box for picking, plus an image locator that
decides what is drawn there.  Images are not clipped to the bounding box.
Changing the image declares damage up through the owning FSM.
"""

import os
from typing import TYPE_CHECKING

from description import parse_record, RegionJson
from renderer import load_image
from utils import box_contains, DEBUG_FONT_SCALE, DEBUG_FRAME_COLOR, DEBUG_LABEL_COLOR

if TYPE_CHECKING:
    from renderer import DrawContext
    from state_machine import FSM


class Region:
    """A pickable, drawable rectangle within an FSM."""

    def __init__(self, name: str = "", x: float = 0, y: float = 0,
                 w: float = 0, h: float = 0, image_loc: str = ""):
        self.name = name
        self.x = x
        self.y = y
        self.w = w
        self.h = h
        self._image_loc = image_loc
        # Owning FSM; only used to pass damage upward.
        self.parent: "FSM | None" = None

    @classmethod
    def from_json(cls, data) -> "Region":
        """Build a Region from a parsed ``{name, x, y, w, h, image}`` record."""
        return cls.from_model(parse_record(RegionJson, data))

    @classmethod
    def from_model(cls, model: RegionJson) -> "Region":
        return cls(model.name, model.x, model.y, model.w, model.h, model.image)

    # ── Properties ────────────────────────────────────────────────────────

    @property
    def image_loc(self) -> str:
        """Locator of the image drawn for this region ("" for none)."""
        return self._image_loc

    @image_loc.setter
    def image_loc(self, value: str):
        if value != self._image_loc:
            self._image_loc = value
            self.damage()

    # ── Public API ────────────────────────────────────────────────────────

    def contains(self, px: float, py: float) -> bool:
        """True if (px, py) is inside our bounding box, edges included."""
        return box_contains(self.x, self.y, self.w, self.h, px, py)

    def damage(self):
        """Pass a redraw request up to the owning FSM."""
        if self.parent is not None:
            self.parent.damage()

    def image_path(self) -> str:
        """Resolve the image locator against the owning FSM's base directory."""
        loc = self._image_loc
        if not loc or os.path.isabs(loc):
            return loc
        base_dir = self.parent.base_dir if self.parent is not None else None
        return os.path.join(base_dir, loc) if base_dir else loc

    def draw(self, ctx: "DrawContext", show_debugging: bool = False):
        """Draw at the local origin of *ctx* (already translated to x, y)."""
        if self._image_loc:
            image = load_image(self.image_path())
            if image is not None:
                ctx.draw_image(image, 0, 0)

        if show_debugging:
            ctx.stroke_rect(0, 0, self.w, self.h, DEBUG_FRAME_COLOR)
            ctx.fill_text(self.name, 2, 12, DEBUG_LABEL_COLOR, DEBUG_FONT_SCALE)

    # ── Debugging support ─────────────────────────────────────────────────

    def debug_tag(self) -> str:
        return f"Region({self.name})"

    def debug_string(self, indent: int = 0) -> str:
        result = "  " * indent
        result += f"{self.name} ({self.x},{self.y},{self.w},{self.h}) '{self._image_loc}'"
        if self.parent is None:
            result += " no parent"
        return result

    def dump(self):
        print(self.debug_string())

    def __repr__(self) -> str:
        return f"Region(name={self.name!r}, x={self.x}, y={self.y}, w={self.w}, h={self.h})"
