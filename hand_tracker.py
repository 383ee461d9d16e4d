"""
hand_tracker.py — MediaPipe Tasks-based hand tracking for the hand pointer.

Responsibilities:
  • Initialise HandLandmarker with a model file.
  • Process each BGR frame → extract the landmarks the pointer needs.
  • Return a lightweight HandData dataclass.
  • Draw the tracked hand on the camera preview using OpenCV.
"""

import os

import cv2
import mediapipe as mp
import numpy as np

from gesture_detector import HandData

# Modern Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode

_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (9, 10), (10, 11), (11, 12),
    (13, 14), (14, 15), (15, 16),
    (0, 17), (17, 18), (18, 19), (19, 20),
    (5, 9), (9, 13), (13, 17),
]


class HandTracker:
    """Wraps MediaPipe HandLandmarker for single-hand tracking."""

    def __init__(self, model_path: str = "assets/hand_landmarker.task"):
        if not os.path.exists(model_path):
            raise FileNotFoundError(f"MediaPipe model not found at {model_path}")

        options = HandLandmarkerOptions(
            base_options=BaseOptions(model_asset_path=model_path),
            running_mode=VisionRunningMode.IMAGE,
            num_hands=1,
            min_hand_detection_confidence=0.7,
            min_hand_presence_confidence=0.6,
        )
        self._detector = HandLandmarker.create_from_options(options)

    # ── Public API ────────────────────────────────────────────────────────

    def process(self, bgr_frame: np.ndarray) -> "HandData | None":
        """Run detection and return HandData for the first detected hand."""
        rgb = np.ascontiguousarray(bgr_frame[:, :, ::-1])
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)
        results = self._detector.detect(mp_image)

        if not results.hand_landmarks:
            return None

        lm = results.hand_landmarks[0]
        return HandData(
            thumb_tip=(lm[4].x, lm[4].y),
            index_tip=(lm[8].x, lm[8].y),
            all_landmarks=lm,
        )

    def draw(self, bgr_frame: np.ndarray, hd: "HandData | None",
             pressed: bool = False) -> np.ndarray:
        """Draw the hand skeleton; the pinch tips turn red while pressed."""
        if not hd:
            return bgr_frame

        h, w = bgr_frame.shape[:2]
        lm = hd.all_landmarks

        for start_idx, end_idx in _CONNECTIONS:
            pt1 = (int(lm[start_idx].x * w), int(lm[start_idx].y * h))
            pt2 = (int(lm[end_idx].x * w), int(lm[end_idx].y * h))
            cv2.line(bgr_frame, pt1, pt2, (200, 200, 200), 2, cv2.LINE_AA)

        tip_color = (0, 0, 255) if pressed else (0, 255, 0)
        for i, point in enumerate(lm):
            px, py = int(point.x * w), int(point.y * h)
            color = tip_color if i in (4, 8) else (60, 60, 255)
            cv2.circle(bgr_frame, (px, py), 4, color, -1, cv2.LINE_AA)

        return bgr_frame

    def release(self):
        self._detector.close()
