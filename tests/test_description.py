from __future__ import annotations

import logging

import pytest

from description import (
    ActionJson,
    ActionType,
    EventSpecJson,
    EventType,
    FSMJson,
    parse_description,
    parse_record,
    RegionJson,
)
from errors import FSMDescriptionError


def test_region_defaults_and_integer_coordinates_are_kept() -> None:
    reg = parse_record(RegionJson, {"name": "r", "x": 3, "w": 2.5})

    assert (reg.x, reg.y, reg.w, reg.h) == (3, 0, 2.5, 0)
    assert isinstance(reg.x, int)
    assert reg.image == ""


@pytest.mark.parametrize("bad", ["left", True, None, [1]])
def test_region_coordinates_must_be_numbers(bad) -> None:
    with pytest.raises(FSMDescriptionError, match="RegionJson"):
        parse_record(RegionJson, {"name": "r", "x": bad})


def test_region_name_is_required() -> None:
    with pytest.raises(FSMDescriptionError, match="name"):
        parse_record(RegionJson, {"x": 1})


def test_event_type_is_read_from_camel_case_key() -> None:
    spec = parse_record(EventSpecJson, {"evtType": "move_inside", "region": "a"})

    assert spec.evt_type is EventType.MOVE_INSIDE
    assert spec.region == "a"


def test_missing_event_type_falls_back_to_nevermatch(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        spec = parse_record(EventSpecJson, {"region": "a"})

    assert spec.evt_type is EventType.NEVERMATCH
    assert "evtType" in caplog.text


def test_non_string_event_type_falls_back_to_nevermatch() -> None:
    spec = parse_record(EventSpecJson, {"evtType": 4})

    assert spec.evt_type is EventType.NEVERMATCH
    assert spec.region == ""


def test_unknown_action_type_falls_back_to_none(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        act = parse_record(ActionJson, {"act": "teleport", "region": "a"})

    assert act.act is ActionType.NONE
    assert act.region == "a"
    assert "teleport" in caplog.text


def test_region_name_in_event_is_not_coerced() -> None:
    with pytest.raises(FSMDescriptionError):
        parse_record(EventSpecJson, {"evtType": "press", "region": 12})


def test_description_needs_a_state() -> None:
    with pytest.raises(FSMDescriptionError, match="No states provided for FSM"):
        parse_description({"regions": [], "states": []})


def test_error_message_names_the_offending_field(caplog) -> None:
    data = {
        "regions": [],
        "states": [{"name": "a", "transitions": [{"event": {"evtType": "press"}}]}],
    }
    with caplog.at_level(logging.ERROR), pytest.raises(FSMDescriptionError) as info:
        parse_description(data)

    assert "states.0.transitions.0.target" in str(info.value)
    assert "states.0.transitions.0.target" in caplog.text


def test_non_object_description_is_rejected() -> None:
    with pytest.raises(FSMDescriptionError, match="FSMJson"):
        parse_description(["regions", "states"])


def test_extra_keys_are_ignored() -> None:
    model = parse_description({"regions": [], "states": [{"name": "a"}], "comment": "demo"})

    assert isinstance(model, FSMJson)
    assert model.states[0].name == "a"
    assert model.states[0].transitions == []
