"""
Renderer Module - Frame Composition
===================================
Draws one display frame from the sketch state: camera image, strokes,
buttons, color picker, status text, effects, and the fingertip cursor.

Shapes are drawn with OpenCV. Text goes through Pillow so it can be
outlined, anti-aliased, and use any glyphs the configured font has; all
text of a frame is queued and rendered in a single pass.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import cv2
import numpy as np
from PIL import Image, ImageDraw, ImageFont

from fingerpaint.buttons import ButtonId, Rect
from fingerpaint.canvas import RGB, draw_stroke, draw_strokes
from fingerpaint.config import BUTTON_ALPHA, COLOR_PICKER_TOP, STROKE_THICKNESS
from fingerpaint.effects import EFFECT_STYLES, EffectKind
from fingerpaint.gesture_logic import HandInput, InputKind
from fingerpaint.landmarks import FINGERTIPS, HAND_CONNECTIONS, HandData
from fingerpaint.sketch import SketchController, SketchState

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def bgr(color: RGB) -> Tuple[int, int, int]:
    r, g, b = color
    return (b, g, r)


def fill_rect(frame: np.ndarray, rect: Rect, color: RGB, alpha: int = 255,
              border: Optional[RGB] = BLACK, border_thickness: int = 2) -> np.ndarray:
    """
    Draw a filled rectangle blended at `alpha` (0-255), with an opaque border.
    """
    (x1, y1), (x2, y2) = rect.corners
    h, w = frame.shape[:2]
    x1, y1 = max(0, x1), max(0, y1)
    x2, y2 = min(w, x2), min(h, y2)

    if x2 > x1 and y2 > y1:
        roi = frame[y1:y2, x1:x2]
        if alpha >= 255:
            roi[:] = bgr(color)
        else:
            fill = np.empty_like(roi)
            fill[:] = bgr(color)
            roi[:] = cv2.addWeighted(fill, alpha / 255.0, roi, 1 - alpha / 255.0, 0)

    if border is not None:
        cv2.rectangle(frame, rect.corners[0], rect.corners[1], bgr(border), border_thickness)
    return frame


def overlay_image(background: np.ndarray, overlay: np.ndarray,
                  x: int, y: int) -> np.ndarray:
    """
    Alpha-blend a BGRA image onto a BGR frame at (x, y).

    Overlays that do not fit inside the frame are skipped.
    """
    h, w = overlay.shape[:2]
    if x < 0 or y < 0 or x + w > background.shape[1] or y + h > background.shape[0]:
        return background

    roi = background[y:y + h, x:x + w].astype(np.float32)
    mask = overlay[:, :, 3:4].astype(np.float32) / 255.0
    blended = overlay[:, :, :3].astype(np.float32) * mask + roi * (1.0 - mask)
    background[y:y + h, x:x + w] = blended.astype(np.uint8)
    return background


def draw_landmarks(frame: np.ndarray, hand: HandData,
                   landmark_color: RGB = (0, 255, 0),
                   connection_color: RGB = WHITE) -> np.ndarray:
    """Draw a hand skeleton; fingertips in red."""
    for start, end in HAND_CONNECTIONS:
        p1 = hand.landmarks.get(start)
        p2 = hand.landmarks.get(end)
        if p1 and p2:
            cv2.line(frame, p1.to_pixel(), p2.to_pixel(), bgr(connection_color), 1)

    for landmark, point in hand.landmarks.items():
        if landmark in FINGERTIPS:
            cv2.circle(frame, point.to_pixel(), 5, bgr((255, 0, 0)), -1)
        else:
            cv2.circle(frame, point.to_pixel(), 3, bgr(landmark_color), -1)
    return frame


class TextLayer:
    """
    Queues outlined text and renders it onto a frame with Pillow.

    Args:
        font_path: TrueType/OpenType font; Pillow's bundled font if None
    """

    def __init__(self, font_path: Optional[Path] = None):
        self.font_path = font_path
        self._fonts: Dict[int, ImageFont.ImageFont] = {}
        self._items: List[Tuple[str, Tuple[float, float], int, RGB, str]] = []

    def font(self, size: int) -> ImageFont.ImageFont:
        if size not in self._fonts:
            if self.font_path is not None:
                try:
                    self._fonts[size] = ImageFont.truetype(str(self.font_path), size)
                except OSError:
                    logger.warning("Cannot load font %s, using default", self.font_path)
                    self.font_path = None
                    self._fonts[size] = ImageFont.load_default(size=size)
            else:
                self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]

    def add(self, text: str, position: Tuple[float, float], size: int = 16,
            color: RGB = WHITE, anchor: str = "mm"):
        """Queue `text` centered (by default) on `position`."""
        self._items.append((text, position, size, color, anchor))

    def render(self, frame: np.ndarray) -> np.ndarray:
        """Draw queued text onto the BGR frame in place and empty the queue."""
        if not self._items:
            return frame

        image = Image.fromarray(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))
        draw = ImageDraw.Draw(image)
        for text, position, size, color, anchor in self._items:
            draw.text(position, text, font=self.font(size), fill=color,
                      anchor=anchor, stroke_width=2, stroke_fill=BLACK)
        self._items.clear()

        frame[:] = cv2.cvtColor(np.asarray(image), cv2.COLOR_RGB2BGR)
        return frame


# Button faces: (label, RGB fill)
STATIC_BUTTONS = {
    ButtonId.CLEAR_ALL: ("Erase All", (255, 0, 0)),
    ButtonId.FIREWORK: ("Firework", (255, 128, 0)),
    ButtonId.GOOD: ("Good", (0, 200, 0)),
    ButtonId.COLOR: ("Color", (128, 0, 255)),
    ButtonId.HEART: ("Heart", (255, 0, 127)),
    ButtonId.SAD: ("Sad", (100, 100, 255)),
}


class SketchRenderer:
    """
    Composes the display frame for a SketchController.

    Attributes:
        controller: Source of state, layout and color wheel
        show_landmarks: Draw the detected hand skeletons
    """

    def __init__(self, controller: SketchController, font_path: Optional[Path] = None,
                 show_landmarks: bool = False):
        self.controller = controller
        self.text = TextLayer(font_path)
        self.show_landmarks = show_landmarks

    @property
    def state(self) -> SketchState:
        return self.controller.state

    def draw(self, frame: np.ndarray, hands: Sequence[HandData],
             hand_input: HandInput, now: float) -> np.ndarray:
        """
        Draw everything for one frame on a copy of `frame`.

        Args:
            frame: BGR camera frame, already at canvas size
            hands: Latest detections
            hand_input: Classified input of this frame
            now: Current time in seconds
        """
        display = frame.copy()
        state = self.state

        draw_strokes(display, state.store, STROKE_THICKNESS)
        draw_stroke(display, state.current_points, state.stroke_color, STROKE_THICKNESS)

        if self.show_landmarks:
            for hand in hands:
                draw_landmarks(display, hand)

        self._draw_buttons(display)
        if state.color_picker_open:
            self._draw_color_picker(display, hands)
        self._draw_status(display)
        self._draw_effect(display, now)
        self._draw_notice(now)
        self._draw_cursor(display, hand_input)

        return self.text.render(display)

    def _draw_buttons(self, frame: np.ndarray):
        layout = self.controller.layout
        state = self.state

        for button, (label, color) in STATIC_BUTTONS.items():
            rect = layout[button]
            fill_rect(frame, rect, color, BUTTON_ALPHA)
            size = 16 if button is ButtonId.CLEAR_ALL else 14
            self.text.add(label, rect.center, size)

        write = layout[ButtonId.WRITE]
        fill_rect(frame, write, (0, 128, 255) if state.writing else (128, 128, 128),
                  BUTTON_ALPHA)
        self.text.add("Writing: ON" if state.writing else "Writing: OFF",
                      write.center, 14)

        erase = layout[ButtonId.ERASE]
        fill_rect(frame, erase, (255, 0, 255) if state.erasing else (100, 100, 100),
                  BUTTON_ALPHA)
        self.text.add("Erase Mode: ON" if state.erasing else "Erase Mode: OFF",
                      erase.center, 16)

    def _draw_color_picker(self, frame: np.ndarray, hands: Sequence[HandData]):
        wheel = self.controller.wheel
        layout = self.controller.layout
        state = self.state
        w = frame.shape[1]
        cx, cy = wheel.center

        panel = Rect(w / 2 - 160, COLOR_PICKER_TOP, 320, 280)
        fill_rect(frame, panel, (50, 50, 50), 200, border=None)
        self.text.add("HSV Color Picker", (w / 2, COLOR_PICKER_TOP + 10), 16)

        overlay_image(frame, wheel.image, *wheel.top_left)

        preview = state.selected_color.rgb if state.selected_color else WHITE
        fill_rect(frame, layout.preview_box, preview)
        fill_rect(frame, layout.confirm_box, (0, 200, 0))
        self.text.add("OK", layout.confirm_box.center, 16)

        if hands:
            index = hands[0].get_fingertip('index')
            if index is not None and wheel.contains(index.x, index.y):
                cv2.circle(frame, index.to_pixel(), 7, WHITE, -1)
                cv2.circle(frame, index.to_pixel(), 7, BLACK, 2)

            if state.selected_position is not None:
                sx, sy = state.selected_position
                cv2.circle(frame, (int(sx), int(sy)), 10, WHITE, 2)

        self.text.add("Raise both hands to lock the color",
                      (w / 2, cy + wheel.radius + 5), 14)

    def _draw_status(self, frame: np.ndarray):
        state = self.state
        w = frame.shape[1]

        if state.erasing:
            status = "Erase Mode ON"
        else:
            status = "Writing Mode ON" if state.writing else "Writing Mode OFF"
        self.text.add(status, (w / 2, 30), 24)

        fill_rect(frame, Rect(w / 2 - 15, 50, 30, 20), state.stroke_color)
        self.text.add("Color:", (w / 2 - 50, 60), 16)

    def _draw_effect(self, frame: np.ndarray, now: float):
        kind = self.state.effect.update(now)
        if kind is EffectKind.NONE:
            return
        style = EFFECT_STYLES[kind]
        h, w = frame.shape[:2]
        self.text.add(style.text, (w / 2, h / 2), style.size, style.color)

    def _draw_notice(self, now: float):
        message = self.state.notices.current(now)
        if message:
            self.text.add(message, (self.controller.wheel.center[0], 95), 18, (0, 255, 0))

    def _draw_cursor(self, frame: np.ndarray, hand_input: HandInput):
        if hand_input.kind is not InputKind.SINGLE or self.state.color_picker_open:
            return
        x, y = hand_input.fingertip
        center = (int(x), int(y))
        if self.state.erasing:
            cv2.circle(frame, center, int(self.controller.erase_radius), (200, 200, 200), 2)
        elif hand_input.ok_gesture and self.state.writing:
            cv2.circle(frame, center, 6, bgr(self.state.stroke_color), -1)
        else:
            cv2.circle(frame, center, 6, bgr((0, 200, 255)), 2)
