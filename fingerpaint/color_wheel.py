"""
Color Wheel Module - HSV Disc Color Picker
==========================================
Maps positions on a fixed-radius disc to colors: the angle around the
center is the hue, the distance from the center is the saturation, and
brightness is always at maximum.
"""

import colorsys
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import cv2
import numpy as np

from fingerpaint.config import WHEEL_RADIUS


@dataclass(frozen=True)
class PickedColor:
    """
    A color picked from the wheel.

    Attributes:
        hue: Degrees in [0, 360)
        saturation: 0-1
        brightness: 0-1
    """
    hue: float
    saturation: float
    brightness: float = 1.0

    @property
    def rgb(self) -> Tuple[int, int, int]:
        """The color as 8-bit RGB."""
        r, g, b = colorsys.hsv_to_rgb(self.hue / 360.0, self.saturation, self.brightness)
        return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


class ColorWheel:
    """
    HSV color wheel centered at a screen position.

    Attributes:
        center: (x, y) of the disc center
        radius: Disc radius in pixels
    """

    def __init__(self, center: Tuple[float, float], radius: int = WHEEL_RADIUS):
        self.center = center
        self.radius = radius
        self._image: Optional[np.ndarray] = None

    def contains(self, x: float, y: float) -> bool:
        """Whether (x, y) lies on the disc, edge included."""
        cx, cy = self.center
        return math.hypot(x - cx, y - cy) <= self.radius

    def color_at(self, x: float, y: float) -> Optional[PickedColor]:
        """
        Color under a screen position.

        Returns:
            PickedColor, or None outside the disc
        """
        cx, cy = self.center
        dx = x - cx
        dy = y - cy
        distance = math.hypot(dx, dy)

        if distance > self.radius:
            return None

        angle = math.degrees(math.atan2(dy, dx))
        if angle < 0:
            angle += 360.0

        return PickedColor(hue=angle % 360.0, saturation=distance / self.radius)

    @property
    def image(self) -> np.ndarray:
        """The wheel as a BGRA image, transparent outside the disc."""
        if self._image is None:
            self._image = render_wheel(self.radius)
        return self._image

    @property
    def top_left(self) -> Tuple[int, int]:
        """Where to place `image` so it lines up with `center`."""
        cx, cy = self.center
        return (int(cx) - self.radius, int(cy) - self.radius)


def render_wheel(radius: int) -> np.ndarray:
    """
    Render the wheel as a (2r, 2r, 4) BGRA image.

    Uses the same angle/radius mapping as ColorWheel.color_at, in
    OpenCV's HSV ranges (hue 0-179, saturation and value 0-255).
    """
    coords = np.arange(2 * radius, dtype=np.float32) - radius + 0.5
    X, Y = np.meshgrid(coords, coords)

    rho = np.sqrt(X ** 2 + Y ** 2)
    phi = np.degrees(np.arctan2(Y, X)) % 360.0

    hue = (phi / 2.0).astype(np.uint8)
    sat = np.clip(rho / radius * 255.0, 0, 255).astype(np.uint8)
    val = np.full_like(hue, 255)

    bgr = cv2.cvtColor(cv2.merge((hue, sat, val)), cv2.COLOR_HSV2BGR)
    mask = (rho <= radius).astype(np.uint8) * 255
    return cv2.merge((bgr, mask))
