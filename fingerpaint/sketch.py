"""
Sketch Module - Mode State Machine and Drawing Engine
=====================================================
Turns classified hand input into sketch state changes, one frame at a
time: button presses toggle modes, the OK gesture draws, erase mode
wipes points near the fingertip, and the color picker chooses the pen
color.

All mutable state lives in a single SketchState owned by the
SketchController. Time is passed in explicitly (seconds) so behavior
is deterministic under test.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence

from fingerpaint.buttons import ButtonId, ButtonLayout
from fingerpaint.canvas import RGB, PointXY, StrokeStore
from fingerpaint.color_wheel import ColorWheel, PickedColor
from fingerpaint.config import (
    CANVAS_HEIGHT, CANVAS_WIDTH, COLOR_PICKER_TOP, DEFAULT_STROKE_COLOR,
    ERASE_RADIUS, OK_GESTURE_THRESHOLD, SMOOTHING_FACTOR, TOGGLE_DELAY,
    WHEEL_RADIUS
)
from fingerpaint.effects import EffectKind, EffectTimer, NoticeBoard
from fingerpaint.gesture_logic import HandInput, InputKind, classify_hands
from fingerpaint.landmarks import HandData

logger = logging.getLogger(__name__)


class SketchMode(Enum):
    """Coarse mode, derived from the state flags."""
    IDLE = auto()
    WRITING = auto()
    ERASING = auto()
    COLOR_PICKING = auto()


EFFECT_BUTTONS = {
    ButtonId.GOOD: EffectKind.GOOD,
    ButtonId.FIREWORK: EffectKind.FIREWORK,
    ButtonId.HEART: EffectKind.HEART,
    ButtonId.SAD: EffectKind.SAD,
}


def smooth_toward(anchor: PointXY, target: PointXY,
                  factor: float = SMOOTHING_FACTOR) -> PointXY:
    """Move `anchor` a fraction `factor` of the way to `target`."""
    return (anchor[0] + (target[0] - anchor[0]) * factor,
            anchor[1] + (target[1] - anchor[1]) * factor)


@dataclass
class SketchState:
    """
    Everything the sketch remembers between frames.

    Attributes:
        writing: Write mode on (never together with `erasing`)
        erasing: Erase mode on
        color_picker_open: The HSV picker is showing
        stroke_color: RGB color new strokes are drawn with
        selected_color: Color under the fingertip in the picker
        selected_position: Where `selected_color` was picked
        current_points: Points of the stroke being drawn
        was_ok_gesture: The OK gesture was held on the previous drawing frame
        is_first_point: Next drawn point resets the smoothing anchor
        anchor: Smoothed pen position
        last_toggle: Time of the last write/erase toggle
        store: Committed strokes
        effect: Active celebratory effect
        notices: Transient status messages
    """
    writing: bool = False
    erasing: bool = False
    color_picker_open: bool = False
    stroke_color: RGB = DEFAULT_STROKE_COLOR
    selected_color: Optional[PickedColor] = None
    selected_position: Optional[PointXY] = None
    current_points: List[PointXY] = field(default_factory=list)
    was_ok_gesture: bool = False
    is_first_point: bool = True
    anchor: PointXY = (0.0, 0.0)
    last_toggle: Optional[float] = None
    store: StrokeStore = field(default_factory=StrokeStore)
    effect: EffectTimer = field(default_factory=EffectTimer)
    notices: NoticeBoard = field(default_factory=NoticeBoard)

    @property
    def mode(self) -> SketchMode:
        if self.color_picker_open:
            return SketchMode.COLOR_PICKING
        if self.erasing:
            return SketchMode.ERASING
        if self.writing:
            return SketchMode.WRITING
        return SketchMode.IDLE


class SketchController:
    """
    Per-frame update logic for the sketch.

    Call `update()` once per rendered frame with the latest detections.
    The keyboard shortcuts call the same action methods, so they obey
    the same guards as the on-screen buttons.
    """

    def __init__(
        self,
        state: Optional[SketchState] = None,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
        toggle_delay: float = TOGGLE_DELAY,
        erase_radius: float = ERASE_RADIUS,
        ok_threshold: float = OK_GESTURE_THRESHOLD
    ):
        self.state = state if state is not None else SketchState()
        self.toggle_delay = toggle_delay
        self.erase_radius = erase_radius
        self.ok_threshold = ok_threshold

        self.wheel = ColorWheel(
            center=(width / 2, COLOR_PICKER_TOP + 120),
            radius=WHEEL_RADIUS
        )
        self.layout = ButtonLayout(
            width, height,
            wheel_center=self.wheel.center,
            wheel_radius=self.wheel.radius
        )

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------

    def update(self, hands: Sequence[HandData], now: float) -> HandInput:
        """
        Advance the sketch by one frame.

        Args:
            hands: Latest detections (possibly stale)
            now: Current time in seconds

        Returns:
            The classified input, for rendering the cursor
        """
        self.state.effect.update(now)
        hand_input = classify_hands(hands, self.ok_threshold)

        if hand_input.kind is InputKind.SINGLE:
            x, y = hand_input.fingertip
            if self.state.color_picker_open:
                self._pick_color(x, y)
            else:
                self._handle_buttons(x, y, now)
                self._handle_drawing(hand_input)

        elif hand_input.kind is InputKind.MULTI:
            if self.state.color_picker_open and self.state.selected_color is not None:
                self.lock_color(now)
            self.commit_stroke()
            self.state.was_ok_gesture = False

        return hand_input

    def _handle_buttons(self, x: float, y: float, now: float):
        layout = self.layout

        if layout.hit(x, y, ButtonId.WRITE):
            self.toggle_writing(now)

        if layout.hit(x, y, ButtonId.ERASE):
            self.toggle_erasing(now)

        if layout.hit(x, y, ButtonId.CLEAR_ALL):
            self.clear_all()

        for button, kind in EFFECT_BUTTONS.items():
            if layout.hit(x, y, button):
                self.trigger_effect(kind, now)

        if layout.hit(x, y, ButtonId.COLOR):
            self.open_color_picker()

    def _handle_drawing(self, hand_input: HandInput):
        state = self.state
        x, y = hand_input.fingertip

        # No drawing or erasing under the buttons
        if self.layout.is_over_button(x, y):
            if state.was_ok_gesture:
                self.commit_stroke()
            state.was_ok_gesture = False
            return

        if state.erasing:
            removed = state.store.erase_near(x, y, self.erase_radius)
            if removed:
                logger.debug("Erased %d points at (%.0f, %.0f)", removed, x, y)

        if not state.erasing and state.writing and hand_input.ok_gesture:
            if not state.was_ok_gesture:
                state.is_first_point = True
                state.was_ok_gesture = True

            if state.is_first_point:
                state.anchor = (x, y)
                state.is_first_point = False
            else:
                state.anchor = smooth_toward(state.anchor, (x, y))

            state.current_points.append(state.anchor)
        else:
            if state.was_ok_gesture:
                self.commit_stroke()
            state.was_ok_gesture = False

    def _pick_color(self, x: float, y: float):
        state = self.state
        color = self.wheel.color_at(x, y)
        if color is not None:
            state.selected_color = color
            state.selected_position = (x, y)

        if self.layout.confirm.contains(x, y):
            self.confirm_color()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _debounced(self, now: float) -> bool:
        last = self.state.last_toggle
        return last is not None and now - last < self.toggle_delay

    def toggle_writing(self, now: float) -> bool:
        """
        Flip write mode and turn erase mode off.

        Ignored while the picker is open or within the debounce window.

        Returns:
            True if the mode flipped
        """
        state = self.state
        if state.color_picker_open or self._debounced(now):
            return False
        state.writing = not state.writing
        state.erasing = False
        state.last_toggle = now
        logger.debug("Writing mode %s", "on" if state.writing else "off")
        return True

    def toggle_erasing(self, now: float) -> bool:
        """Flip erase mode and turn write mode off. Same guards as writing."""
        state = self.state
        if state.color_picker_open or self._debounced(now):
            return False
        state.erasing = not state.erasing
        state.writing = False
        state.last_toggle = now
        logger.debug("Erase mode %s", "on" if state.erasing else "off")
        return True

    def clear_all(self) -> bool:
        """Drop every stroke, including the one being drawn."""
        state = self.state
        if state.color_picker_open:
            return False
        state.store.clear()
        state.current_points = []
        state.is_first_point = True
        return True

    def trigger_effect(self, kind: EffectKind, now: float) -> bool:
        """Start an effect unless one is already showing or the picker is open."""
        if self.state.color_picker_open:
            return False
        started = self.state.effect.activate(kind, now)
        if started:
            logger.debug("Effect %s started", kind.name)
        return started

    def open_color_picker(self) -> bool:
        """Show the picker; not available while an effect is showing."""
        if self.state.effect.active:
            return False
        self.state.color_picker_open = True
        return True

    def confirm_color(self) -> bool:
        """
        Apply the selected color and close the picker.

        Returns:
            False if nothing was selected
        """
        state = self.state
        if not state.color_picker_open or state.selected_color is None:
            return False
        state.stroke_color = state.selected_color.rgb
        state.selected_color = None
        state.selected_position = None
        state.color_picker_open = False
        logger.debug("Stroke color set to %s", state.stroke_color)
        return True

    def lock_color(self, now: float) -> bool:
        """Confirm the selection and post the "locked" notice."""
        if not self.confirm_color():
            return False
        self.state.notices.post("Color locked", now)
        return True

    def commit_stroke(self) -> bool:
        """
        Move the in-progress stroke into the store.

        Returns:
            True if a stroke was stored
        """
        state = self.state
        if not state.current_points:
            return False
        state.store.add(state.current_points, state.stroke_color)
        logger.debug("Committed stroke of %d points", len(state.current_points))
        state.current_points = []
        state.is_first_point = True
        return True
