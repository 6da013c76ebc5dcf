"""
Landmarks Module - Hand Detection Data Types
============================================
Plain data produced by the hand tracker: landmark indices, pixel points,
per-hand data, and the single-slot mailbox the asynchronous detector
writes into.

Kept free of MediaPipe imports so the drawing logic can be used and
tested without the model runtime.
"""

import math
import threading
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple


class HandLandmark(IntEnum):
    """
    MediaPipe hand landmark indices.
    Reference: https://mediapipe.dev/images/mobile/hand_landmarks.png
    """
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


FINGERTIPS = (
    HandLandmark.THUMB_TIP,
    HandLandmark.INDEX_TIP,
    HandLandmark.MIDDLE_TIP,
    HandLandmark.RING_TIP,
    HandLandmark.PINKY_TIP,
)


@dataclass(frozen=True)
class Point:
    """A landmark position in canvas pixel coordinates."""
    x: float
    y: float
    z: float = 0.0  # Relative depth, as reported by the model

    def to_tuple(self) -> Tuple[float, float]:
        """Return (x, y)."""
        return (self.x, self.y)

    def to_pixel(self) -> Tuple[int, int]:
        """Return integer pixel coordinates for OpenCV drawing."""
        return (int(round(self.x)), int(round(self.y)))

    def distance_to(self, other: "Point") -> float:
        """Planar Euclidean distance in pixels."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class HandData:
    """
    Contains all data for a detected hand.

    Attributes:
        landmarks: Dict mapping HandLandmark to Point
        handedness: 'Left' or 'Right'
        confidence: Handedness classification score
    """
    landmarks: Dict[HandLandmark, Point]
    handedness: str = "Right"
    confidence: float = 0.0

    def get_landmark(self, landmark: HandLandmark) -> Optional[Point]:
        """Get a specific landmark point."""
        return self.landmarks.get(landmark)

    def get_fingertip(self, finger: str) -> Optional[Point]:
        """
        Get fingertip point by finger name.

        Args:
            finger: One of 'thumb', 'index', 'middle', 'ring', 'pinky'
        """
        finger_map = {
            'thumb': HandLandmark.THUMB_TIP,
            'index': HandLandmark.INDEX_TIP,
            'middle': HandLandmark.MIDDLE_TIP,
            'ring': HandLandmark.RING_TIP,
            'pinky': HandLandmark.PINKY_TIP
        }
        landmark = finger_map.get(finger.lower())
        return self.landmarks.get(landmark) if landmark is not None else None


@dataclass
class DetectionMailbox:
    """
    Most-recent-value cell for hand detections.

    The detector callback overwrites the slot; the render loop reads
    whatever is there. Stale or dropped results are tolerated.
    """
    _hands: List[HandData] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def post(self, hands: List[HandData]):
        """Replace the stored detections."""
        with self._lock:
            self._hands = list(hands)

    def latest(self) -> List[HandData]:
        """Return the most recently posted detections."""
        with self._lock:
            return self._hands


# Bones of the hand skeleton, as landmark pairs
HAND_CONNECTIONS = [
    # Thumb
    (HandLandmark.WRIST, HandLandmark.THUMB_CMC),
    (HandLandmark.THUMB_CMC, HandLandmark.THUMB_MCP),
    (HandLandmark.THUMB_MCP, HandLandmark.THUMB_IP),
    (HandLandmark.THUMB_IP, HandLandmark.THUMB_TIP),
    # Index
    (HandLandmark.WRIST, HandLandmark.INDEX_MCP),
    (HandLandmark.INDEX_MCP, HandLandmark.INDEX_PIP),
    (HandLandmark.INDEX_PIP, HandLandmark.INDEX_DIP),
    (HandLandmark.INDEX_DIP, HandLandmark.INDEX_TIP),
    # Middle
    (HandLandmark.MIDDLE_MCP, HandLandmark.MIDDLE_PIP),
    (HandLandmark.MIDDLE_PIP, HandLandmark.MIDDLE_DIP),
    (HandLandmark.MIDDLE_DIP, HandLandmark.MIDDLE_TIP),
    # Ring
    (HandLandmark.RING_MCP, HandLandmark.RING_PIP),
    (HandLandmark.RING_PIP, HandLandmark.RING_DIP),
    (HandLandmark.RING_DIP, HandLandmark.RING_TIP),
    # Pinky
    (HandLandmark.WRIST, HandLandmark.PINKY_MCP),
    (HandLandmark.PINKY_MCP, HandLandmark.PINKY_PIP),
    (HandLandmark.PINKY_PIP, HandLandmark.PINKY_DIP),
    (HandLandmark.PINKY_DIP, HandLandmark.PINKY_TIP),
    # Palm
    (HandLandmark.INDEX_MCP, HandLandmark.MIDDLE_MCP),
    (HandLandmark.MIDDLE_MCP, HandLandmark.RING_MCP),
    (HandLandmark.RING_MCP, HandLandmark.PINKY_MCP),
]
