"""
state_machine.py — Data-driven finite state machine for an interactor.

The FSM owns a list of Regions (in drawing order) and a list of States.
Each State holds an ordered list of Transitions; each Transition pairs an
EventSpec with the Actions to run and the name of the State to move to.

Construction is two-phase: all objects are built first from the
description, then a single binding pass turns every region and state name
into a reference.  Any name that cannot be resolved aborts construction,
so a live FSM never fails on names while acting on events.

Events that match no transition of the current state are ignored.
"""

import logging
from typing import TYPE_CHECKING, Sequence

from action import Action
from description import FSMJson, parse_description, parse_record, StateJson, TransitionJson
from errors import emit
from event_spec import EventSpec, EventType
from region import Region

if TYPE_CHECKING:
    from interactor import FSMInteractor

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
#  Transition
# ═══════════════════════════════════════════════════════════════════════════════

class Transition:
    """An edge out of a State: trigger, actions, and target."""

    def __init__(self, target_name: str, on_event: EventSpec, actions: list[Action]):
        self._target_name = target_name
        self._on_event = on_event
        self._actions = actions
        self._target: "State | None" = None   # set by bind_target()

    @classmethod
    def from_json(cls, data) -> "Transition":
        """Build from a parsed ``{event, actions, target}`` record."""
        return cls.from_model(parse_record(TransitionJson, data))

    @classmethod
    def from_model(cls, model: TransitionJson) -> "Transition":
        return cls(model.target,
                   EventSpec.from_model(model.event),
                   [Action.from_model(act) for act in model.actions])

    @property
    def target_name(self) -> str:
        return self._target_name

    @property
    def target(self) -> "State | None":
        return self._target

    @property
    def on_event(self) -> EventSpec:
        return self._on_event

    @property
    def actions(self) -> list[Action]:
        return self._actions

    def match(self, evt_type: EventType, region: "Region | None" = None) -> bool:
        return self._on_event.match(evt_type, region)

    def bind_target(self, states: Sequence["State"]):
        """Resolve the target state name against *states*."""
        for state in states:
            if state.name == self._target_name:
                self._target = state
                return
        emit(f"Target state '{self._target_name}' in transition does not match any state.")

    def debug_tag(self) -> str:
        return f"Transition({self._on_event.debug_tag()} => {self._target_name})"

    def debug_string(self, indent: int = 0) -> str:
        result = "  " * indent + f"{self._on_event.debug_string()} => {self._target_name}"
        if self._target is None:
            result += " unbound"
        for act in self._actions:
            result += "\n" + act.debug_string(indent + 1)
        return result

    def __repr__(self) -> str:
        return self.debug_tag()


# ═══════════════════════════════════════════════════════════════════════════════
#  State
# ═══════════════════════════════════════════════════════════════════════════════

class State:
    """A named state; its transitions are tried in declaration order."""

    def __init__(self, name: str, transitions: list[Transition]):
        self._name = name
        self._transitions = transitions

    @classmethod
    def from_json(cls, data) -> "State":
        return cls.from_model(parse_record(StateJson, data))

    @classmethod
    def from_model(cls, model: StateJson) -> "State":
        return cls(model.name, [Transition.from_model(tr) for tr in model.transitions])

    @property
    def name(self) -> str:
        return self._name

    @property
    def transitions(self) -> list[Transition]:
        return self._transitions

    def debug_tag(self) -> str:
        return f"State({self._name})"

    def debug_string(self, indent: int = 0) -> str:
        result = "  " * indent + f"{self._name}:"
        for tr in self._transitions:
            result += "\n" + tr.debug_string(indent + 1)
        return result

    def __repr__(self) -> str:
        return self.debug_tag()


# ═══════════════════════════════════════════════════════════════════════════════
#  FSM
# ═══════════════════════════════════════════════════════════════════════════════

class FSM:
    """Regions, states and the current state of one interactor."""

    def __init__(self, regions: list[Region], states: list[State],
                 parent: "FSMInteractor | None" = None, base_dir: "str | None" = None):
        """
        Parameters
        ----------
        regions : list[Region]
            Regions in drawing order (first drawn first, picked last).
        states : list[State]
            At least one state; the first is the start state.
        parent : FSMInteractor | None
            Interactor that receives damage notifications.
        base_dir : str | None
            Directory that relative region image locators resolve against.
        """
        if not states:
            emit("No states provided for FSM")
        _check_unique((reg.name for reg in regions), "region")
        _check_unique((st.name for st in states), "state")

        self._regions = regions
        self._states = states
        self._start_state = states[0]
        self._current_state = self._start_state
        self._parent = parent
        self.base_dir = base_dir

        self._finalize()

    @classmethod
    def from_json(cls, data, parent: "FSMInteractor | None" = None,
                  base_dir: "str | None" = None) -> "FSM":
        """Validate a parsed ``{regions, states}`` description and build an FSM.

        Raises
        ------
        FSMDescriptionError
            If the description is malformed in any way; no partial FSM is
            ever returned.
        """
        model: FSMJson = parse_description(data)
        regions = [Region.from_model(reg) for reg in model.regions]
        states = [State.from_model(st) for st in model.states]
        return cls(regions, states, parent, base_dir)

    # ── Properties ────────────────────────────────────────────────────────

    @property
    def regions(self) -> list[Region]:
        return self._regions

    @property
    def states(self) -> list[State]:
        return self._states

    @property
    def start_state(self) -> State:
        return self._start_state

    @property
    def current_state(self) -> State:
        return self._current_state

    @property
    def parent(self) -> "FSMInteractor | None":
        return self._parent

    @parent.setter
    def parent(self, value: "FSMInteractor | None"):
        if value is not self._parent:
            if self._parent is not None:
                self._parent.damage()
            self._parent = value
            if self._parent is not None:
                self._parent.damage()

    # ── Public API ────────────────────────────────────────────────────────

    def damage(self):
        """Pass a redraw request from a region up to the interactor."""
        if self._parent is not None:
            self._parent.damage()

    def reset(self):
        """Return to the start state.  Region images are left as they are."""
        self._current_state = self._start_state

    def act_on_event(self, evt_type: EventType, region: "Region | None" = None):
        """Make at most one transition in response to an event.

        The first transition of the current state whose EventSpec matches is
        taken: its actions run in order and the FSM moves to its target.
        """
        for tr in self._current_state.transitions:
            if tr.match(evt_type, region):
                for act in tr.actions:
                    act.execute(evt_type, region)
                logger.debug("%s: %s --%s--> %s", self.debug_tag(),
                             self._current_state.name, evt_type.value, tr.target_name)
                self._current_state = tr.target
                return

    # ── Binding ───────────────────────────────────────────────────────────

    def _finalize(self):
        """Bind every name in the machine to the object it refers to."""
        for state in self._states:
            for tr in state.transitions:
                tr.bind_target(self._states)
                tr.on_event.bind_region(self._regions)
                for act in tr.actions:
                    act.bind_region(self._regions)

        for reg in self._regions:
            reg.parent = self

    # ── Debugging support ─────────────────────────────────────────────────

    def debug_tag(self) -> str:
        return f"FSM([reg:{len(self._regions)}],st:[{len(self._states)}])"

    def debug_string(self, indent: int = 0) -> str:
        result = "  " * indent + "FSM: "
        result += f"currentState: {self._current_state.name} "
        if self._parent is None:
            result += "no parent"
        result += f"\n Regions[{len(self._regions)}]:\n"
        for reg in self._regions:
            result += reg.debug_string(2) + "\n"
        result += f" States[{len(self._states)}]:\n"
        for st in self._states:
            result += st.debug_string(2) + "\n"
        return result

    def dump(self):
        print(self.debug_string())

    def __repr__(self) -> str:
        return f"FSM(current_state={self._current_state.name})"


def _check_unique(names, kind: str):
    seen = set()
    for name in names:
        if name in seen:
            emit(f"Duplicate {kind} '{name}' declaration in FSM")
        seen.add(name)
