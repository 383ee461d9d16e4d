"""
action.py — Effects carried out when an FSM transition is taken.

Action types:
    set_image    set the bound region's image to ``param``
    clear_image  remove the bound region's image
    none         do nothing
    print        print ``param``
    print_event  print ``param`` followed by the triggering event
"""

from typing import TYPE_CHECKING, Sequence

from description import ActionJson, ActionType, parse_record
from errors import emit

if TYPE_CHECKING:
    from description import EventType
    from region import Region


# Action types that never need a bound region
_REGION_FREE = (ActionType.NONE, ActionType.PRINT, ActionType.PRINT_EVENT)


class Action:
    """One effect, optionally applied to a named region."""

    def __init__(self, act_type: ActionType, region_name: str = "", param: str = ""):
        self._act_type = act_type
        self._on_region_name = region_name or ""
        self._param = param or ""
        self._on_region: "Region | None" = None   # set by bind_region()

    @classmethod
    def from_json(cls, data) -> "Action":
        """Build from a parsed ``{act, region, param}`` record.

        An unknown action type turns the action into ``none``.
        """
        return cls.from_model(parse_record(ActionJson, data))

    @classmethod
    def from_model(cls, model: ActionJson) -> "Action":
        return cls(model.act, model.region, model.param)

    # ── Properties ────────────────────────────────────────────────────────

    @property
    def act_type(self) -> ActionType:
        return self._act_type

    @property
    def on_region_name(self) -> str:
        return self._on_region_name

    @property
    def on_region(self) -> "Region | None":
        return self._on_region

    @property
    def param(self) -> str:
        return self._param

    # ── Public API ────────────────────────────────────────────────────────

    def execute(self, evt_type: "EventType", evt_region: "Region | None" = None):
        """Carry out the action.

        *evt_type* and *evt_region* describe the event that caused it and
        are only used by ``print_event``.
        """
        act = self._act_type
        if act is ActionType.NONE:
            return

        if act is ActionType.SET_IMAGE:
            if self._on_region is not None:
                self._on_region.image_loc = self._param
        elif act is ActionType.CLEAR_IMAGE:
            if self._on_region is not None:
                self._on_region.image_loc = ""
        elif act is ActionType.PRINT:
            print(self._param)
        elif act is ActionType.PRINT_EVENT:
            region_name = evt_region.name if evt_region is not None else "undefined"
            print(f"{self._param}{evt_type.value}({region_name})")

    def bind_region(self, regions: Sequence["Region"]):
        """Resolve our region name against *regions*.

        Only none / print / print_event may be left without a region.
        """
        for reg in regions:
            if reg.name == self._on_region_name:
                self._on_region = reg
                return

        if self._act_type in _REGION_FREE:
            self._on_region = None
            return

        emit(f"Region '{self._on_region_name}' in action does not match any region.")

    # ── Debugging support ─────────────────────────────────────────────────

    def debug_tag(self) -> str:
        return f'Action({self._act_type.value} {self._on_region_name} "{self._param}")'

    def debug_string(self, indent: int = 0) -> str:
        result = "  " * indent
        result += f'{self._act_type.value} {self._on_region_name} "{self._param}"'
        if self._on_region is None and self._act_type not in _REGION_FREE:
            result += " unbound"
        return result

    def dump(self):
        print(self.debug_string())

    def __repr__(self) -> str:
        return self.debug_tag()
