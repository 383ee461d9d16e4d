from __future__ import annotations

import pytest

from action import Action, ActionType
from errors import FSMDescriptionError
from event_spec import EventType
from region import Region


class _FakeFSM:
    def __init__(self) -> None:
        self.damage_calls = 0
        self.base_dir = None

    def damage(self) -> None:
        self.damage_calls += 1


def _region_with_parent(name: str = "a", image: str = "") -> tuple[Region, _FakeFSM]:
    region = Region(name, 0, 0, 10, 10, image)
    parent = _FakeFSM()
    region.parent = parent
    return region, parent


def test_set_image_writes_param_and_declares_damage() -> None:
    region, parent = _region_with_parent()
    act = Action(ActionType.SET_IMAGE, "a", "down.png")
    act.bind_region([region])

    act.execute(EventType.PRESS, region)

    assert region.image_loc == "down.png"
    assert parent.damage_calls == 1


def test_set_image_to_same_value_does_not_damage() -> None:
    region, parent = _region_with_parent(image="up.png")
    act = Action(ActionType.SET_IMAGE, "a", "up.png")
    act.bind_region([region])

    act.execute(EventType.ENTER, region)

    assert parent.damage_calls == 0


def test_clear_image_empties_the_slot() -> None:
    region, parent = _region_with_parent(image="up.png")
    act = Action(ActionType.CLEAR_IMAGE, "a")
    act.bind_region([region])

    act.execute(EventType.EXIT, region)

    assert region.image_loc == ""
    assert parent.damage_calls == 1


def test_actions_apply_to_bound_region_not_event_region() -> None:
    target, _ = _region_with_parent("target")
    other, _ = _region_with_parent("other")
    act = Action(ActionType.SET_IMAGE, "target", "x.png")
    act.bind_region([other, target])

    act.execute(EventType.PRESS, other)

    assert target.image_loc == "x.png"
    assert other.image_loc == ""


def test_print_emits_param(capsys) -> None:
    act = Action(ActionType.PRINT, "", "hello there")
    act.bind_region([])

    act.execute(EventType.PRESS)

    assert capsys.readouterr().out == "hello there\n"


def test_print_event_renders_event_and_region(capsys) -> None:
    region = Region("knob")
    act = Action(ActionType.PRINT_EVENT, "", "got ")
    act.bind_region([region])

    act.execute(EventType.MOVE_INSIDE, region)
    act.execute(EventType.RELEASE_NONE, None)

    assert capsys.readouterr().out.splitlines() == [
        "got move_inside(knob)",
        "got release_none(undefined)",
    ]


def test_none_does_nothing(capsys) -> None:
    region, parent = _region_with_parent(image="keep.png")
    act = Action(ActionType.NONE, "a", "ignored.png")
    act.bind_region([region])

    act.execute(EventType.PRESS, region)

    assert region.image_loc == "keep.png"
    assert parent.damage_calls == 0
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("act_type", [ActionType.NONE, ActionType.PRINT, ActionType.PRINT_EVENT])
def test_region_free_actions_may_stay_unbound(act_type: ActionType) -> None:
    act = Action(act_type, "nowhere", "x")
    act.bind_region([Region("a")])
    assert act.on_region is None


@pytest.mark.parametrize("act_type", [ActionType.SET_IMAGE, ActionType.CLEAR_IMAGE])
def test_image_actions_require_a_region(act_type: ActionType) -> None:
    act = Action(act_type, "nowhere", "x")
    with pytest.raises(FSMDescriptionError, match="nowhere"):
        act.bind_region([Region("a")])


def test_from_json_defaults_and_unknown_type() -> None:
    act = Action.from_json({"act": "explode"})

    assert act.act_type is ActionType.NONE
    assert act.on_region_name == ""
    assert act.param == ""


def test_from_json_reads_all_fields() -> None:
    act = Action.from_json({"act": "set_image", "region": "a", "param": "img.png"})

    assert act.act_type is ActionType.SET_IMAGE
    assert act.on_region_name == "a"
    assert act.param == "img.png"
    assert act.debug_tag() == 'Action(set_image a "img.png")'


def test_from_json_rejects_non_string_param() -> None:
    with pytest.raises(FSMDescriptionError):
        Action.from_json({"act": "print", "param": ["not", "text"]})
