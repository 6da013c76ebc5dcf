from fingerpaint.gesture_logic import InputKind, classify_hands, is_ok_gesture
from fingerpaint.landmarks import HandData, HandLandmark, Point
from tests.helpers import make_hand, ok_hand, two_hands


def test_no_hands():
    result = classify_hands([])
    assert result.kind is InputKind.NONE
    assert result.fingertip is None


def test_single_hand_reports_index_tip():
    result = classify_hands([make_hand((120.5, 80.25))])
    assert result.kind is InputKind.SINGLE
    assert result.fingertip == (120.5, 80.25)
    assert not result.ok_gesture


def test_ok_gesture_below_threshold():
    assert is_ok_gesture(make_hand((100, 100), thumb=(100, 149)))
    assert not is_ok_gesture(make_hand((100, 100), thumb=(100, 150)))
    assert classify_hands([ok_hand((300, 200))]).ok_gesture


def test_custom_threshold():
    hand = make_hand((100, 100), thumb=(130, 100))
    assert not is_ok_gesture(hand, threshold=20)
    assert is_ok_gesture(hand, threshold=40)


def test_two_or_more_hands():
    result = classify_hands(two_hands())
    assert result.kind is InputKind.MULTI
    assert result.fingertip is None

    three = two_hands() + [make_hand((10, 10))]
    assert classify_hands(three).kind is InputKind.MULTI


def test_hand_without_index_tip_gives_no_position():
    partial = HandData(landmarks={HandLandmark.THUMB_TIP: Point(1, 1)})
    assert classify_hands([partial]).kind is InputKind.NONE
    assert not is_ok_gesture(partial)


def test_hand_without_thumb_tip_gives_no_position():
    partial = HandData(landmarks={HandLandmark.INDEX_TIP: Point(200, 250)})
    result = classify_hands([partial])
    assert result.kind is InputKind.NONE
    assert result.fingertip is None
