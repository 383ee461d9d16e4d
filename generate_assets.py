"""
generate_assets.py — Creates the demo button sprites (RGBA PNG) using OpenCV.

Run this script once to generate the images referenced by
assets/button.json.  Each sprite is a rounded button face with full alpha
transparency around the corners.
"""

import os

import cv2
import numpy as np

# name → (face colour BGR, label, vertical text offset)
BUTTON_STYLES = {
    "button_up":    ((200, 140, 60),  "Press me", 0),
    "button_hover": ((230, 170, 80),  "Press me", 0),
    "button_down":  ((150, 100, 40),  "Pressed!", 2),
}


def generate_button(output_path: str, face_color: tuple[int, int, int], label: str,
                    size: tuple[int, int] = (160, 60), text_offset: int = 0):
    """Draw a rounded button with a text label and save it as PNG."""
    w, h = size
    img = np.zeros((h, w, 4), dtype=np.uint8)  # BGRA, fully transparent
    radius = h // 4
    color = (*face_color, 255)

    # ── Rounded body: two rectangles plus four corner circles ──────────
    cv2.rectangle(img, (radius, 0), (w - 1 - radius, h - 1), color, -1)
    cv2.rectangle(img, (0, radius), (w - 1, h - 1 - radius), color, -1)
    for cx, cy in ((radius, radius), (w - 1 - radius, radius),
                   (radius, h - 1 - radius), (w - 1 - radius, h - 1 - radius)):
        cv2.circle(img, (cx, cy), radius, color, -1, cv2.LINE_AA)

    # ── Label ─────────────────────────────────────────────────────────
    font = cv2.FONT_HERSHEY_SIMPLEX
    (tw, th), _ = cv2.getTextSize(label, font, 0.6, 2)
    org = ((w - tw) // 2, (h + th) // 2 + text_offset)
    cv2.putText(img, label, org, font, 0.6, (255, 255, 255, 255), 2, cv2.LINE_AA)

    # ── Save ──────────────────────────────────────────────────────────
    os.makedirs(os.path.dirname(output_path), exist_ok=True)
    cv2.imwrite(output_path, img)
    print(f"[generate_assets] Saved {w}x{h} RGBA button → {output_path}")


def generate_all(asset_dir: str):
    for name, (color, label, offset) in BUTTON_STYLES.items():
        generate_button(os.path.join(asset_dir, f"{name}.png"), color, label,
                        text_offset=offset)


if __name__ == "__main__":
    script_dir = os.path.dirname(os.path.abspath(__file__))
    generate_all(os.path.join(script_dir, "assets"))
