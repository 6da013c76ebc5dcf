"""
Buttons Module - On-Screen Button Layout and Hit Testing
========================================================
Fixed pixel rectangles for every interactive region. Hit tests use
strict inequalities, so a fingertip exactly on an edge is outside.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from fingerpaint.config import CANVAS_HEIGHT, CANVAS_WIDTH, COLOR_PICKER_TOP, WHEEL_RADIUS


class ButtonId(Enum):
    """Interactive regions of the sketch."""
    CLEAR_ALL = "clear_all"
    WRITE = "write"
    ERASE = "erase"
    GOOD = "good"
    FIREWORK = "firework"
    HEART = "heart"
    SAD = "sad"
    COLOR = "color"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle (x, y, width, height) in pixels."""
    x: float
    y: float
    w: float
    h: float

    def contains(self, px: float, py: float) -> bool:
        return self.x < px < self.x + self.w and self.y < py < self.y + self.h

    @property
    def center(self) -> Tuple[int, int]:
        return (int(self.x + self.w / 2), int(self.y + self.h / 2))

    @property
    def corners(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Top-left and bottom-right corners for cv2.rectangle."""
        return ((int(self.x), int(self.y)),
                (int(self.x + self.w), int(self.y + self.h)))


class ButtonLayout:
    """
    Button rectangles for a canvas size.

    The confirm button of the color picker is not part of `buttons`:
    it only exists while the picker is open and is positioned relative
    to the color wheel.
    """

    def __init__(
        self,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
        wheel_center: Tuple[float, float] = (CANVAS_WIDTH / 2, COLOR_PICKER_TOP + 120),
        wheel_radius: int = WHEEL_RADIUS
    ):
        self.width = width
        self.height = height
        cx = width / 2

        self.buttons: Dict[ButtonId, Rect] = {
            ButtonId.CLEAR_ALL: Rect(20, 20, 100, 50),
            ButtonId.WRITE: Rect(cx - 50, height - 80, 100, 50),
            ButtonId.ERASE: Rect(30, height - 80, 150, 50),
            ButtonId.GOOD: Rect(width - 130, height - 80, 100, 50),
            ButtonId.FIREWORK: Rect(width - 250, height - 80, 100, 50),
            ButtonId.HEART: Rect(width - 150, height - 390, 100, 50),
            ButtonId.SAD: Rect(width - 150, height - 320, 100, 50),
            ButtonId.COLOR: Rect(width - 150, height - 460, 100, 50),
        }

        _, wheel_cy = wheel_center
        self.confirm = Rect(cx + 80, wheel_cy + wheel_radius + 30, 60, 30)
        # Drawn box is taller than the hit region, as on the original panel
        self.confirm_box = Rect(cx + 80, wheel_cy + wheel_radius + 20, 60, 30)
        self.preview_box = Rect(cx - 40, wheel_cy + wheel_radius + 20, 60, 30)

    def __getitem__(self, button: ButtonId) -> Rect:
        return self.buttons[button]

    def hit(self, x: float, y: float, button: ButtonId) -> bool:
        """Whether (x, y) is inside `button`."""
        return self.buttons[button].contains(x, y)

    def button_at(self, x: float, y: float) -> Optional[ButtonId]:
        """First button containing (x, y), or None."""
        for button, rect in self.buttons.items():
            if rect.contains(x, y):
                return button
        return None

    def is_over_button(self, x: float, y: float) -> bool:
        """Whether (x, y) is over any button."""
        return self.button_at(x, y) is not None
