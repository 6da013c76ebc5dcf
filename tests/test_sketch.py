import pytest

from fingerpaint.buttons import ButtonId
from fingerpaint.effects import EffectKind
from fingerpaint.landmarks import HandData, HandLandmark, Point
from fingerpaint.sketch import SketchMode, smooth_toward
from tests.helpers import CANVAS_SPOT, make_hand, ok_hand, two_hands


def press(controller, button, now, ok=False):
    """Put a single fingertip on the center of `button`."""
    center = controller.layout[button].center
    hand = ok_hand(center) if ok else make_hand(center)
    return controller.update([hand], now)


def draw_points(controller, count, start=CANVAS_SPOT, now=100.0):
    x, y = start
    for i in range(count):
        controller.update([ok_hand((x + i * 3, y))], now + i * 0.03)


class TestModeToggles:

    def test_write_toggle_is_debounced(self, controller, state):
        press(controller, ButtonId.WRITE, 10.0)
        assert state.writing

        press(controller, ButtonId.WRITE, 10.3)
        assert state.writing

        press(controller, ButtonId.WRITE, 10.5)
        assert not state.writing

    def test_toggles_far_apart_both_flip(self, controller, state):
        press(controller, ButtonId.WRITE, 1.0)
        press(controller, ButtonId.WRITE, 2.0)
        assert not state.writing
        assert state.last_toggle == 2.0

    def test_debounce_is_shared_between_buttons(self, controller, state):
        press(controller, ButtonId.WRITE, 5.0)
        press(controller, ButtonId.ERASE, 5.2)
        assert state.writing
        assert not state.erasing

    def test_write_and_erase_never_both_on(self, controller, state):
        sequence = [ButtonId.WRITE, ButtonId.ERASE, ButtonId.ERASE, ButtonId.WRITE,
                    ButtonId.ERASE, ButtonId.WRITE, ButtonId.WRITE, ButtonId.ERASE]
        for i, button in enumerate(sequence):
            press(controller, button, float(i))
            assert not (state.writing and state.erasing)

    def test_erase_clears_writing(self, controller, state):
        press(controller, ButtonId.WRITE, 1.0)
        press(controller, ButtonId.ERASE, 2.0)
        assert state.erasing
        assert not state.writing
        assert state.mode is SketchMode.ERASING

    def test_first_toggle_is_not_debounced(self, controller, state):
        assert controller.toggle_writing(0.0)
        assert state.writing

    def test_toggles_ignored_while_picking(self, controller, state):
        state.color_picker_open = True
        assert not controller.toggle_writing(1.0)
        assert not controller.toggle_erasing(2.0)
        press(controller, ButtonId.WRITE, 3.0)
        assert not state.writing
        assert state.last_toggle is None


class TestDrawing:

    def test_ok_gesture_builds_stroke(self, controller, state):
        controller.toggle_writing(0.0)
        draw_points(controller, 4)
        assert len(state.current_points) == 4
        assert state.current_points[0] == CANVAS_SPOT
        assert len(state.store) == 0

    def test_no_drawing_without_write_mode(self, controller, state):
        draw_points(controller, 3)
        assert state.current_points == []

    def test_releasing_ok_commits(self, controller, state):
        controller.toggle_writing(0.0)
        draw_points(controller, 3)
        controller.update([make_hand(CANVAS_SPOT)], 101.0)

        assert len(state.store) == 1
        assert len(state.store[0].points) == 3
        assert state.current_points == []
        assert not state.was_ok_gesture

    def test_two_hands_commit_stroke(self, controller, state):
        controller.toggle_writing(0.0)
        draw_points(controller, 5)

        controller.update(two_hands(), 101.0)

        assert len(state.store) == 1
        assert len(state.store[0].points) == 5
        assert state.current_points == []
        assert state.is_first_point

    def test_stroke_keeps_color_at_commit(self, controller, state):
        state.stroke_color = (10, 20, 30)
        controller.toggle_writing(0.0)
        draw_points(controller, 2)
        controller.update(two_hands(), 101.0)
        state.stroke_color = (200, 200, 200)
        assert state.store[0].color == (10, 20, 30)

    def test_no_hands_keeps_stroke_in_progress(self, controller, state):
        controller.toggle_writing(0.0)
        draw_points(controller, 2)
        controller.update([], 101.0)
        assert len(state.current_points) == 2
        assert state.was_ok_gesture

    def test_partial_hand_keeps_stroke_in_progress(self, controller, state):
        controller.toggle_writing(0.0)
        draw_points(controller, 2)
        thumbless = HandData(landmarks={HandLandmark.INDEX_TIP: Point(*CANVAS_SPOT)})

        controller.update([thumbless], 101.0)

        assert len(state.current_points) == 2
        assert state.was_ok_gesture
        assert len(state.store) == 0

    def test_moving_over_button_commits(self, controller, state):
        controller.toggle_writing(0.0)
        draw_points(controller, 3)
        press(controller, ButtonId.HEART, 101.0, ok=True)

        assert len(state.store) == 1
        assert state.current_points == []
        assert not state.was_ok_gesture

    def test_no_drawing_over_buttons(self, controller, state):
        controller.toggle_writing(0.0)
        press(controller, ButtonId.SAD, 1.0, ok=True)
        assert state.current_points == []

    def test_new_ok_gesture_resets_anchor(self, controller, state):
        controller.toggle_writing(0.0)
        controller.update([ok_hand((200, 250))], 1.0)
        controller.update([make_hand((200, 250))], 1.1)
        controller.update([ok_hand((300, 300))], 1.2)
        assert state.current_points == [(300, 300)]

    def test_smoothing_converges(self, controller, state):
        state.writing = True
        state.was_ok_gesture = True
        state.is_first_point = False
        state.anchor = (0.0, 0.0)

        previous = 0.0
        for k in range(1, 9):
            controller.update([ok_hand((100.0, 0.0))], float(k))
            x, y = state.anchor
            assert x == pytest.approx(100 * (1 - 0.75 ** k))
            assert y == pytest.approx(0.0)
            assert previous < x < 100
            previous = x
        assert len(state.current_points) == 8

    def test_smooth_toward(self):
        assert smooth_toward((0.0, 0.0), (100.0, 40.0)) == pytest.approx((25.0, 10.0))


class TestErasing:

    def test_erase_removes_near_points(self, controller, state):
        state.store.add([(100.0, 100.0), (100.0, 101.0)], (255, 0, 0))
        state.store.add([(300.0, 300.0), (310.0, 300.0)], (0, 255, 0))
        controller.toggle_erasing(0.0)

        controller.update([make_hand((100.0, 100.0))], 1.0)

        assert len(state.store) == 1
        assert state.store[0].color == (0, 255, 0)

    def test_erasing_is_continuous(self, controller, state):
        state.store.add([(100.0, 300.0), (200.0, 300.0), (300.0, 300.0)], (255, 0, 0))
        controller.toggle_erasing(0.0)

        controller.update([make_hand((100.0, 300.0))], 1.0)
        controller.update([make_hand((300.0, 300.0))], 1.1)

        assert [s.points for s in state.store] == [[(200.0, 300.0)]]

    def test_erase_mode_does_not_draw(self, controller, state):
        controller.toggle_erasing(0.0)
        draw_points(controller, 3)
        assert state.current_points == []


class TestButtons:

    def test_clear_all(self, controller, state):
        state.store.add([(1.0, 1.0)], (0, 0, 0))
        state.current_points = [(5.0, 5.0)]
        state.is_first_point = False

        press(controller, ButtonId.CLEAR_ALL, 1.0)

        assert len(state.store) == 0
        assert state.current_points == []
        assert state.is_first_point

    def test_clear_all_ignored_while_picking(self, controller, state):
        state.store.add([(1.0, 1.0)], (0, 0, 0))
        state.color_picker_open = True
        assert not controller.clear_all()
        assert len(state.store) == 1

    def test_effect_button_starts_effect(self, controller, state):
        press(controller, ButtonId.GOOD, 1.0)
        assert state.effect.kind is EffectKind.GOOD

    def test_effects_are_exclusive(self, controller, state):
        press(controller, ButtonId.FIREWORK, 1.0)
        press(controller, ButtonId.GOOD, 1.5)
        assert state.effect.kind is EffectKind.FIREWORK

    def test_effect_expires(self, controller, state):
        press(controller, ButtonId.GOOD, 1.0)
        controller.update([], 3.0)
        assert state.effect.kind is EffectKind.GOOD
        controller.update([], 3.01)
        assert state.effect.kind is EffectKind.NONE

        press(controller, ButtonId.SAD, 3.1)
        assert state.effect.kind is EffectKind.SAD

    def test_effects_suppressed_while_picking(self, controller, state):
        state.color_picker_open = True
        assert not controller.trigger_effect(EffectKind.HEART, 1.0)
        assert state.effect.kind is EffectKind.NONE

    def test_color_button_opens_picker(self, controller, state):
        press(controller, ButtonId.COLOR, 1.0)
        assert state.color_picker_open
        assert state.mode is SketchMode.COLOR_PICKING

    def test_color_button_disabled_during_effect(self, controller, state):
        controller.trigger_effect(EffectKind.HEART, 1.0)
        press(controller, ButtonId.COLOR, 1.2)
        assert not state.color_picker_open


class TestColorPicker:

    @pytest.fixture
    def picking(self, controller, state):
        press(controller, ButtonId.COLOR, 1.0)
        return controller

    def test_selection_follows_fingertip(self, picking, state):
        cx, cy = picking.wheel.center
        picking.update([make_hand((cx + 100, cy))], 2.0)

        assert state.selected_color.hue == pytest.approx(0.0)
        assert state.selected_color.saturation == pytest.approx(1.0)
        assert state.selected_position == (cx + 100, cy)

    def test_outside_wheel_keeps_selection(self, picking, state):
        cx, cy = picking.wheel.center
        picking.update([make_hand((cx + 50, cy))], 2.0)
        first = state.selected_color
        picking.update([make_hand((cx + 150, cy))], 2.1)
        assert state.selected_color == first

    def test_confirm_applies_color(self, picking, state):
        cx, cy = picking.wheel.center
        picking.update([make_hand((cx + 100, cy))], 2.0)
        picking.update([make_hand(picking.layout.confirm.center)], 2.1)

        assert state.stroke_color == (255, 0, 0)
        assert not state.color_picker_open
        assert state.selected_color is None
        assert state.selected_position is None

    def test_confirm_without_selection_does_nothing(self, picking, state):
        before = state.stroke_color
        picking.update([make_hand(picking.layout.confirm.center)], 2.0)
        assert state.color_picker_open
        assert state.stroke_color == before

    def test_two_hands_lock_color(self, picking, state):
        cx, cy = picking.wheel.center
        picking.update([make_hand((cx, cy + 100))], 2.0)  # 90 degrees
        picking.update(two_hands(), 2.1)

        assert not state.color_picker_open
        assert state.stroke_color == (128, 255, 0)
        assert state.notices.current(2.2) == "Color locked"
        assert state.notices.current(10.0) is None

    def test_two_hands_without_selection_keep_picker(self, picking, state):
        picking.update(two_hands(), 2.0)
        assert state.color_picker_open
        assert state.notices.current(2.0) is None

    def test_no_drawing_while_picking(self, picking, state):
        state.writing = True
        picking.update([ok_hand(CANVAS_SPOT)], 2.0)
        assert state.current_points == []
