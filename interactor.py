"""
interactor.py — An on-screen object whose look and behaviour come from an FSM.

The interactor has a position within its parent Root, but no size of its
own: its regions (positioned in the interactor's local coordinates) give it
both its appearance and its input bounding boxes.

Raw input (press / move / release of the primary pointer at a local
position) is translated into high-level region events, which are fed to the
FSM one at a time:

    exit <region>  →  enter <region>  →  press | move_inside | release <region>
    release_none   (a release that lands over no region)

Within each event kind, regions drawn later (on top) receive their event
first.
"""

import asyncio
import json
import logging
import os
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

import httpx

from errors import emit, FSMLoadError
from event_spec import EventType
from region import Region
from state_machine import FSM
from utils import LOAD_TIMEOUT_SECONDS

if TYPE_CHECKING:
    from renderer import DrawContext
    from root import Root

logger = logging.getLogger(__name__)

RAW_EVENT_KINDS = ("press", "move", "release")

# Raw event kind → the event sent for every region under the pointer
_PER_REGION_EVENT = {
    "press":   EventType.PRESS,
    "move":    EventType.MOVE_INSIDE,
    "release": EventType.RELEASE,
}


class FSMInteractor:
    """Draws an FSM's regions and drives the FSM from raw pointer input."""

    def __init__(self, fsm: "FSM | None" = None, x: float = 0, y: float = 0,
                 parent: "Root | None" = None):
        self._fsm = fsm
        self._x = x
        self._y = y
        self._parent: "Root | None" = None
        # Regions under the pointer at the previous raw event (topmost first)
        self._last_picked: list[Region] = []

        if fsm is not None:
            fsm.parent = self
        self.parent = parent

    # ── Properties ────────────────────────────────────────────────────────

    @property
    def x(self) -> float:
        return self._x

    @x.setter
    def x(self, value: float):
        if value != self._x:
            self._x = value
            self.damage()

    @property
    def y(self) -> float:
        return self._y

    @y.setter
    def y(self, value: float):
        if value != self._y:
            self._y = value
            self.damage()

    @property
    def position(self) -> tuple[float, float]:
        return self._x, self._y

    @position.setter
    def position(self, value: tuple[float, float]):
        x, y = value
        if x != self._x or y != self._y:
            self._x, self._y = x, y
            self.damage()

    @property
    def parent(self) -> "Root | None":
        return self._parent

    @parent.setter
    def parent(self, value: "Root | None"):
        if value is self._parent:
            return
        if self._parent is not None:
            old = self._parent
            self.damage()
            self._parent = None
            old.remove_child(self)
        self._parent = value
        if value is not None:
            value.add_child(self)
            self.damage()

    @property
    def fsm(self) -> "FSM | None":
        return self._fsm

    # ── Public API ────────────────────────────────────────────────────────

    def damage(self):
        """Tell the hosting Root that our display needs to be redrawn."""
        if self._parent is not None:
            self._parent.damage()

    def draw(self, ctx: "DrawContext", show_debugging: bool = False):
        """Draw every region in declaration order.

        *ctx* must already be translated to our position; each region is
        drawn with the origin moved to its own top-left corner.
        """
        if self._fsm is None:
            return

        for reg in self._fsm.regions:
            ctx.save()
            ctx.translate(reg.x, reg.y)
            reg.draw(ctx, show_debugging)
            ctx.restore()

    def pick(self, local_x: float, local_y: float) -> list[Region]:
        """Regions whose bounding box contains the local point.

        Ordered in reverse drawing order, so the region drawn on top comes
        first.
        """
        if self._fsm is None:
            return []
        return [reg for reg in reversed(self._fsm.regions) if reg.contains(local_x, local_y)]

    def dispatch_raw_event(self, kind: str, local_x: float, local_y: float):
        """Translate one raw event into region events and feed them to the FSM.

        Parameters
        ----------
        kind : str
            One of "press", "move" or "release".
        local_x, local_y : float
            Pointer position in our local coordinates.
        """
        if self._fsm is None:
            return
        if kind not in _PER_REGION_EVENT:
            raise ValueError(f"Unknown raw event kind {kind!r}; expected one of {RAW_EVENT_KINDS}")

        fsm = self._fsm
        current = self.pick(local_x, local_y)
        previous = self._last_picked

        exited = [reg for reg in previous if reg not in current]
        entered = [reg for reg in current if reg not in previous]

        for reg in exited:
            fsm.act_on_event(EventType.EXIT, reg)
        for reg in entered:
            fsm.act_on_event(EventType.ENTER, reg)

        evt_type = _PER_REGION_EVENT[kind]
        for reg in current:
            fsm.act_on_event(evt_type, reg)

        if kind == "release" and not current:
            fsm.act_on_event(EventType.RELEASE_NONE)

        self._last_picked = current

    # ── Loading ───────────────────────────────────────────────────────────

    async def start_load_from_json(self, location: str,
                                   client: "httpx.AsyncClient | None" = None):
        """Fetch an FSM description and install the FSM built from it.

        *location* is an http(s) URL or a local path / file:// URL.  Until
        the fetch completes the current FSM (if any) stays in place.  On any
        failure the FSM is removed and the error is reported (and raised);
        on success the new FSM replaces the old one in a single step.

        Raises
        ------
        FSMLoadError
            The description could not be fetched or is not valid JSON.
        FSMDescriptionError
            The description does not describe a valid FSM.
        """
        try:
            text = await _fetch_text(location, client)
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                emit(f'FSM description at "{location}" is not valid JSON: {exc}', FSMLoadError)
            fsm = FSM.from_json(data, base_dir=_base_dir(location))
        except Exception:
            self._install(None)
            raise

        self._install(fsm)
        logger.debug("Loaded %s from %s", fsm.debug_tag(), location)

    def _install(self, fsm: "FSM | None"):
        old = self._fsm
        if old is not None and old is not fsm:
            old.parent = None
        self._fsm = fsm
        self._last_picked = []
        if fsm is not None:
            fsm.parent = self
        self.damage()

    # ── Debugging support ─────────────────────────────────────────────────

    def debug_tag(self) -> str:
        fsm_tag = self._fsm.debug_tag() if self._fsm is not None else "no fsm"
        return f"FSMInteractor({self._x},{self._y} {fsm_tag})"

    def __repr__(self) -> str:
        return self.debug_tag()


# ═══════════════════════════════════════════════════════════════════════════════
#  Fetch helpers
# ═══════════════════════════════════════════════════════════════════════════════

def _is_http(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


def _local_path(location: str) -> str:
    parsed = urlparse(location)
    if parsed.scheme == "file":
        return unquote(parsed.path)
    return location


def _base_dir(location: str) -> "str | None":
    """Directory relative image locators are resolved against."""
    if _is_http(location):
        return None
    return os.path.dirname(os.path.abspath(_local_path(location)))


async def _fetch_text(location: str, client: "httpx.AsyncClient | None") -> str:
    if not _is_http(location):
        path = _local_path(location)
        try:
            return await asyncio.to_thread(_read_file, path)
        except (OSError, UnicodeDecodeError) as exc:
            emit(f'Load of FSM from "{location}" failed: {exc}', FSMLoadError)

    own_client = client is None
    if own_client:
        client = httpx.AsyncClient(timeout=LOAD_TIMEOUT_SECONDS)
    try:
        response = await client.get(location)
    except httpx.HTTPError as exc:
        emit(f'Load of FSM from "{location}" failed: {exc}', FSMLoadError)
    finally:
        if own_client:
            await client.aclose()

    if not response.is_success:
        emit(f'Load of FSM from "{location}" failed with status {response.status_code}',
             FSMLoadError)
    return response.text


def _read_file(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()
