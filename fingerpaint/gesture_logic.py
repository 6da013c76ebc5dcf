"""
Gesture Logic Module - Hand Detections to Drawing Input
=======================================================
Reduces the latest hand detections to what the sketch needs each frame:
where the index fingertip is and whether the thumb and index finger are
pinched into an "OK" sign (pen down).
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence, Tuple

from fingerpaint.config import OK_GESTURE_THRESHOLD
from fingerpaint.landmarks import HandData


class InputKind(Enum):
    """How many hands the frame carried, as far as drawing is concerned."""
    NONE = auto()       # No hands - keep gesture state as is
    SINGLE = auto()     # One hand - positional input
    MULTI = auto()      # Two or more hands - commit and reset


@dataclass
class HandInput:
    """
    Classified input for one frame.

    Attributes:
        kind: Number-of-hands classification
        fingertip: Index fingertip (x, y), only for SINGLE
        ok_gesture: Thumb tip and index tip are closer than the threshold
        hand: The hand the input came from, only for SINGLE
    """
    kind: InputKind
    fingertip: Optional[Tuple[float, float]] = None
    ok_gesture: bool = False
    hand: Optional[HandData] = None


def is_ok_gesture(hand: HandData, threshold: float = OK_GESTURE_THRESHOLD) -> bool:
    """Check whether thumb tip and index tip are pinched together."""
    thumb = hand.get_fingertip('thumb')
    index = hand.get_fingertip('index')
    if thumb is None or index is None:
        return False
    return thumb.distance_to(index) < threshold


def classify_hands(
    hands: Sequence[HandData],
    threshold: float = OK_GESTURE_THRESHOLD
) -> HandInput:
    """
    Classify the detections of one frame.

    Args:
        hands: Detected hands, in any order
        threshold: OK-gesture distance in pixels

    Returns:
        HandInput for the frame
    """
    if len(hands) >= 2:
        return HandInput(InputKind.MULTI)

    if len(hands) == 1:
        hand = hands[0]
        index = hand.get_fingertip('index')
        # A partial hand gives no usable position
        if index is None or hand.get_fingertip('thumb') is None:
            return HandInput(InputKind.NONE)
        return HandInput(
            kind=InputKind.SINGLE,
            fingertip=index.to_tuple(),
            ok_gesture=is_ok_gesture(hand, threshold),
            hand=hand
        )

    return HandInput(InputKind.NONE)
