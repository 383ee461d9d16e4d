"""
main.py — Entry point: show an FSM-driven interactor in an OpenCV window.

The interactor is loaded from a JSON FSM description (local path or
http(s) URL) and placed on a Root canvas.  Input comes either from the
mouse over the window, or (with --hand) from a webcam: a thumb/index
pinch presses the pointer and the pinch point moves it.

Press ESC or close the window to quit.
"""

import argparse
import asyncio
import logging
import os
import sys

import cv2

from errors import FSMError
from interactor import FSMInteractor
from root import Root
from utils import (
    CAMERA_WINDOW, INTERACTOR_WINDOW, TARGET_FPS,
    DEFAULT_CANVAS_W, DEFAULT_CANVAS_H,
)

# cv2 mouse event → raw interactor event
_MOUSE_EVENTS = {
    cv2.EVENT_LBUTTONDOWN: "press",
    cv2.EVENT_MOUSEMOVE:   "move",
    cv2.EVENT_LBUTTONUP:   "release",
}


def _parse_args(argv=None) -> argparse.Namespace:
    project_dir = os.path.dirname(os.path.abspath(__file__))
    parser = argparse.ArgumentParser(description="Run an FSM-driven interactor.")
    parser.add_argument("description", nargs="?",
                        default=os.path.join(project_dir, "assets", "button.json"),
                        help="FSM description: local JSON path or http(s) URL")
    parser.add_argument("--x", type=float, default=0, help="interactor left edge")
    parser.add_argument("--y", type=float, default=0, help="interactor top edge")
    parser.add_argument("--width", type=int, default=DEFAULT_CANVAS_W)
    parser.add_argument("--height", type=int, default=DEFAULT_CANVAS_H)
    parser.add_argument("--debug", action="store_true",
                        help="draw region bounding boxes and names")
    parser.add_argument("--hand", action="store_true",
                        help="drive the pointer with a webcam pinch instead of the mouse")
    parser.add_argument("--model", default=os.path.join(project_dir, "assets",
                                                        "hand_landmarker.task"),
                        help="MediaPipe hand landmarker model (with --hand)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def _run_mouse(root: Root, show_debugging: bool):
    def on_mouse(event, x, y, flags, param):
        kind = _MOUSE_EVENTS.get(event)
        if kind is not None:
            root.dispatch_raw_event(kind, x, y)

    cv2.setMouseCallback(INTERACTOR_WINDOW, on_mouse)
    delay_ms = max(1, 1000 // TARGET_FPS)

    while True:
        cv2.imshow(INTERACTOR_WINDOW, root.redraw(show_debugging))
        key = cv2.waitKey(delay_ms) & 0xFF
        if key == 27:
            break
        if cv2.getWindowProperty(INTERACTOR_WINDOW, cv2.WND_PROP_VISIBLE) < 1:
            break


def _run_hand(root: Root, show_debugging: bool, model_path: str) -> int:
    # Imported here so mouse mode does not need MediaPipe
    from gesture_detector import PinchPointer
    from hand_tracker import HandTracker

    cap = cv2.VideoCapture(0)
    if not cap.isOpened():
        print("[ERROR] Cannot open webcam (index 0).")
        return 1

    try:
        tracker = HandTracker(model_path)
    except FileNotFoundError as exc:
        print(f"[ERROR] {exc}")
        cap.release()
        return 1
    pointer = PinchPointer((root.width, root.height))
    cv2.namedWindow(CAMERA_WINDOW, cv2.WINDOW_NORMAL)

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                break
            frame = cv2.flip(frame, 1)

            hand = tracker.process(frame)
            for kind, x, y in pointer.update(hand):
                root.dispatch_raw_event(kind, x, y)

            tracker.draw(frame, hand, pointer.pressed)
            cv2.imshow(CAMERA_WINDOW, frame)

            # Draw the cursor on a copy so the cached canvas stays clean
            canvas = root.redraw(show_debugging).copy()
            if hand is not None:
                px, py = (int(v) for v in pointer.position)
                color = (0, 0, 255) if pointer.pressed else (0, 160, 0)
                cv2.circle(canvas, (px, py), 6, color, 2, cv2.LINE_AA)
            cv2.imshow(INTERACTOR_WINDOW, canvas)

            key = cv2.waitKey(1) & 0xFF
            if key == 27:
                break
            if cv2.getWindowProperty(INTERACTOR_WINDOW, cv2.WND_PROP_VISIBLE) < 1:
                break
    finally:
        tracker.release()
        cap.release()
    return 0


def main(argv=None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # ── Build the interactor ──────────────────────────────────────────
    root = Root(args.width, args.height)
    interactor = FSMInteractor(x=args.x, y=args.y, parent=root)
    try:
        asyncio.run(interactor.start_load_from_json(args.description))
    except FSMError as exc:
        print(f"[ERROR] {exc}")
        return 1

    cv2.namedWindow(INTERACTOR_WINDOW, cv2.WINDOW_AUTOSIZE)

    print("[INFO] System ready.")
    if args.hand:
        print("       Pinch thumb and index finger to press.")
    else:
        print("       Use the left mouse button over the window.")
    print("       Press ESC to quit.")

    # ══════════════════════════════════════════════════════════════════
    #  MAIN LOOP
    # ══════════════════════════════════════════════════════════════════
    status = 0
    try:
        if args.hand:
            status = _run_hand(root, args.debug, args.model)
        else:
            _run_mouse(root, args.debug)
    finally:
        print("[INFO] Shutting down...")
        cv2.destroyAllWindows()
    return status


if __name__ == "__main__":
    sys.exit(main())
