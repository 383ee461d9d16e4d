"""
description.py — Pydantic models for the JSON form of an FSM description.

A description is an object ``{regions: [...], states: [...]}``.  It is
validated in one pass by ``parse_description`` before any Region, State or
FSM object is built, so a bad description never produces a partial machine.

Shape errors (wrong types, missing names or targets, no states) are fatal
and reported through ``errors.emit``.  An unknown ``evtType`` or ``act`` tag
is not: it falls back to ``nevermatch`` / ``none`` with a warning so that one
bad tag degrades into a harmless no-op.
"""

import logging
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr, ValidationError, field_validator

from errors import emit

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
E = TypeVar("E", bound=Enum)

# ============================================================================
# Tags
# ============================================================================


class EventType(Enum):
    """Event types an EventSpec can be declared with."""

    PRESS        = "press"
    RELEASE      = "release"
    RELEASE_NONE = "release_none"
    ENTER        = "enter"
    EXIT         = "exit"
    MOVE_INSIDE  = "move_inside"
    ANY          = "any"
    NEVERMATCH   = "nevermatch"


class ActionType(Enum):
    """Action types a transition can carry."""

    SET_IMAGE   = "set_image"
    CLEAR_IMAGE = "clear_image"
    NONE        = "none"
    PRINT       = "print"
    PRINT_EVENT = "print_event"


def _limited(value: Any, allowed: type[E], default: E, field: str) -> E:
    """Map *value* onto a member of *allowed*, falling back to *default*."""
    if isinstance(value, allowed):
        return value
    for member in allowed:
        if member.value == value:
            return member
    logger.warning("Unknown value %r for '%s'; using %r", value, field, default.value)
    return default


# ============================================================================
# Records
# ============================================================================


class RegionJson(BaseModel):
    """``{name, x, y, w, h, image}``; coordinates are local to the interactor."""

    name: StrictStr
    x: StrictInt | StrictFloat = 0
    y: StrictInt | StrictFloat = 0
    w: StrictInt | StrictFloat = 0
    h: StrictInt | StrictFloat = 0
    image: StrictStr = ""


class EventSpecJson(BaseModel):
    """``{evtType, region}``."""

    evt_type: EventType = Field(None, alias="evtType", validate_default=True)
    region: StrictStr = ""

    model_config = {"populate_by_name": True}

    @field_validator("evt_type", mode="before")
    @classmethod
    def known_event_type(cls, v: Any) -> EventType:
        return _limited(v, EventType, EventType.NEVERMATCH, "evtType")


class ActionJson(BaseModel):
    """``{act, region, param}``."""

    act: ActionType = Field(None, validate_default=True)
    region: StrictStr = ""
    param: StrictStr = ""

    @field_validator("act", mode="before")
    @classmethod
    def known_action_type(cls, v: Any) -> ActionType:
        return _limited(v, ActionType, ActionType.NONE, "act")


class TransitionJson(BaseModel):
    """``{event, actions, target}``."""

    event: EventSpecJson
    actions: list[ActionJson] = Field(default_factory=list)
    target: StrictStr


class StateJson(BaseModel):
    """``{name, transitions}``."""

    name: StrictStr
    transitions: list[TransitionJson] = Field(default_factory=list)


class FSMJson(BaseModel):
    """``{regions, states}``; the first state is the start state."""

    regions: list[RegionJson]
    states: list[StateJson]

    @field_validator("states")
    @classmethod
    def has_start_state(cls, v: list[StateJson]) -> list[StateJson]:
        if not v:
            raise ValueError("No states provided for FSM")
        return v


# ============================================================================
# Entry point
# ============================================================================


def parse_record(model: type[M], data: Any) -> M:
    """Validate *data* against *model*; a mismatch is an FSMDescriptionError."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        emit(f"Invalid {model.__name__} in FSM description: {problems}")


def parse_description(data: Any) -> FSMJson:
    """Validate a whole parsed description."""
    return parse_record(FSMJson, data)
