from __future__ import annotations

import logging

import pytest

from errors import FSMDescriptionError
from event_spec import EventSpec, EventType
from region import Region


def _bound(evt_type: EventType, name: str, regions: list[Region]) -> EventSpec:
    spec = EventSpec(evt_type, name)
    spec.bind_region(regions)
    return spec


def test_nevermatch_never_matches_anything() -> None:
    a = Region("a", 0, 0, 10, 10)
    for name in ("a", "*", "", "missing"):
        spec = _bound(EventType.NEVERMATCH, name, [a])
        for evt in EventType:
            assert spec.match(evt, a) is False
            assert spec.match(evt, None) is False


def test_any_matches_every_event_type_on_its_region_only() -> None:
    a = Region("a", 0, 0, 10, 10)
    b = Region("b", 20, 0, 10, 10)
    spec = _bound(EventType.ANY, "a", [a, b])

    assert spec.region is a
    for evt in EventType:
        assert spec.match(evt, a) is True
        assert spec.match(evt, b) is False
        assert spec.match(evt, None) is False


def test_any_with_wildcard_matches_every_region() -> None:
    a = Region("a", 0, 0, 10, 10)
    b = Region("b", 20, 0, 10, 10)
    spec = _bound(EventType.ANY, "*", [a, b])

    assert spec.region is None
    assert spec.is_wildcard
    assert spec.match(EventType.PRESS, a)
    assert spec.match(EventType.EXIT, b)
    assert spec.match(EventType.RELEASE_NONE, None)


def test_release_none_ignores_region() -> None:
    a = Region("a", 0, 0, 10, 10)
    spec = _bound(EventType.RELEASE_NONE, "", [a])

    assert spec.region is None
    assert spec.match(EventType.RELEASE_NONE, None) is True
    assert spec.match(EventType.RELEASE_NONE, a) is True
    assert spec.match(EventType.RELEASE, None) is False


def test_plain_event_needs_type_and_region() -> None:
    a = Region("a", 0, 0, 10, 10)
    b = Region("b", 20, 0, 10, 10)
    spec = _bound(EventType.PRESS, "a", [a, b])

    assert spec.match(EventType.PRESS, a) is True
    assert spec.match(EventType.RELEASE, a) is False
    assert spec.match(EventType.PRESS, b) is False
    assert spec.match(EventType.PRESS, None) is False


def test_wildcard_region_matches_any_region_for_that_type() -> None:
    a = Region("a", 0, 0, 10, 10)
    b = Region("b", 20, 0, 10, 10)
    spec = _bound(EventType.ENTER, "*", [a, b])

    assert spec.match(EventType.ENTER, a)
    assert spec.match(EventType.ENTER, b)
    assert not spec.match(EventType.EXIT, a)


def test_region_identity_not_name_decides_match() -> None:
    a = Region("a", 0, 0, 10, 10)
    lookalike = Region("a", 0, 0, 10, 10)
    spec = _bound(EventType.PRESS, "a", [a])

    assert not spec.match(EventType.PRESS, lookalike)


def test_unknown_region_name_is_fatal() -> None:
    spec = EventSpec(EventType.PRESS, "missing")
    with pytest.raises(FSMDescriptionError, match="missing"):
        spec.bind_region([Region("a")])


@pytest.mark.parametrize("evt_type", [EventType.RELEASE_NONE, EventType.ANY])
def test_empty_region_name_is_allowed_for_region_free_types(evt_type: EventType) -> None:
    spec = EventSpec(evt_type, "")
    spec.bind_region([Region("a")])
    assert spec.region is None


def test_release_none_with_unknown_name_is_fatal() -> None:
    spec = EventSpec(EventType.RELEASE_NONE, "missing")
    with pytest.raises(FSMDescriptionError):
        spec.bind_region([])


def test_nevermatch_with_unknown_name_is_allowed() -> None:
    spec = EventSpec(EventType.NEVERMATCH, "missing")
    spec.bind_region([])
    assert spec.region is None


def test_from_json_unknown_event_type_becomes_nevermatch(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        spec = EventSpec.from_json({"evtType": "double_click", "region": "a"})

    assert spec.evt_type is EventType.NEVERMATCH
    assert spec.region_name == "a"
    assert "double_click" in caplog.text


def test_from_json_rejects_non_string_region() -> None:
    with pytest.raises(FSMDescriptionError):
        EventSpec.from_json({"evtType": "press", "region": 3})


def test_debug_string_marks_unbound_specs() -> None:
    spec = EventSpec(EventType.ENTER, "*")
    spec.bind_region([])
    assert spec.debug_string(1) == "  enter * unbound"
    assert spec.debug_tag() == "EventSpec(enter *)"
