from __future__ import annotations

import pytest

from gesture_detector import HandData, PinchPointer

OPEN = HandData(thumb_tip=(0.4, 0.5), index_tip=(0.6, 0.5))
PINCH = HandData(thumb_tip=(0.5, 0.5), index_tip=(0.51, 0.5))


def _kinds(events) -> list[str]:
    return [kind for kind, _, _ in events]


def test_open_hand_only_moves_at_the_scaled_pinch_point() -> None:
    pointer = PinchPointer((640, 480), hysteresis=2)

    events = pointer.update(OPEN)

    assert _kinds(events) == ["move"]
    _, x, y = events[0]
    assert x == pytest.approx(320)
    assert y == pytest.approx(240)
    assert not pointer.pressed


def test_pinch_must_hold_for_hysteresis_frames() -> None:
    pointer = PinchPointer((100, 100), hysteresis=2)
    pointer.update(OPEN)

    assert _kinds(pointer.update(PINCH)) == ["move"]
    assert _kinds(pointer.update(PINCH)) == ["move", "press"]
    assert _kinds(pointer.update(PINCH)) == ["move"]
    assert pointer.pressed


def test_single_frame_flicker_is_ignored() -> None:
    pointer = PinchPointer((100, 100), hysteresis=2)

    for hand in (OPEN, PINCH, OPEN, PINCH, OPEN):
        assert _kinds(pointer.update(hand)) == ["move"]
    assert not pointer.pressed


def test_opening_the_pinch_releases() -> None:
    pointer = PinchPointer((100, 100), hysteresis=1)
    assert _kinds(pointer.update(PINCH)) == ["move", "press"]

    assert _kinds(pointer.update(OPEN)) == ["move", "release"]
    assert not pointer.pressed


def test_losing_the_hand_while_pressed_releases_at_last_position() -> None:
    pointer = PinchPointer((200, 100), hysteresis=1)
    pointer.update(PINCH)
    last = pointer.position

    events = pointer.update(None)

    assert events == [("release", last[0], last[1])]
    assert not pointer.pressed
    assert pointer.update(None) == []


def test_position_is_smoothed() -> None:
    pointer = PinchPointer((100, 100), hysteresis=1)
    pointer.update(HandData(thumb_tip=(0.0, 0.0), index_tip=(0.0, 0.0)))

    _, x, y = pointer.update(HandData(thumb_tip=(1.0, 1.0), index_tip=(1.0, 1.0)))[0]

    assert x == pytest.approx(50)
    assert y == pytest.approx(50)
