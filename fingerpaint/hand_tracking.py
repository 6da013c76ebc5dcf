"""
Hand Tracking Module - MediaPipe Hand Landmark Detection
=========================================================
Detects hand landmarks with the MediaPipe Hand Landmarker (Tasks API).

Runs in LIVE_STREAM mode: frames are submitted without blocking and the
detector reports results on its own thread through a callback. The
callback only converts the result and posts it to a DetectionMailbox;
the render loop reads the mailbox once per frame.
"""

import logging
import time
import urllib.error
import urllib.request
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import mediapipe as mp
import numpy as np
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

from fingerpaint.config import DEFAULT_MODEL_PATH, MODEL_URL
from fingerpaint.errors import ModelDownloadError
from fingerpaint.landmarks import (
    DetectionMailbox, HandData, HandLandmark, Point
)

logger = logging.getLogger(__name__)


def ensure_model(model_path: Path, url: str = MODEL_URL) -> Path:
    """
    Download the hand landmarker model if it is not present.

    Raises:
        ModelDownloadError: if the file cannot be fetched
    """
    if model_path.exists():
        return model_path

    logger.info("Downloading hand landmarker model...")
    model_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        urllib.request.urlretrieve(url, model_path)
    except (urllib.error.URLError, OSError) as e:
        if model_path.exists():
            model_path.unlink()
        raise ModelDownloadError(url, str(e)) from e
    logger.info("Model downloaded to %s", model_path)
    return model_path

def hands_from_result(result, width: int, height: int) -> List[HandData]:
    """
    Convert a HandLandmarkerResult into HandData in pixel coordinates.

    Args:
        result: Result object passed to the landmarker callback
        width: Width of the submitted frame
        height: Height of the submitted frame
    """
    hands = []
    if not result.hand_landmarks:
        return hands

    for idx, hand_landmarks in enumerate(result.hand_landmarks):
        handedness = "Right"
        confidence = 0.0
        if result.handedness and idx < len(result.handedness):
            hand_info = result.handedness[idx]
            if hand_info:
                handedness = hand_info[0].category_name
                confidence = hand_info[0].score

        landmarks = {}
        for lm_idx, lm in enumerate(hand_landmarks):
            # Clamp to frame bounds
            px = min(max(lm.x * width, 0.0), width - 1.0)
            py = min(max(lm.y * height, 0.0), height - 1.0)
            landmarks[HandLandmark(lm_idx)] = Point(x=px, y=py, z=lm.z or 0.0)

        hands.append(HandData(
            landmarks=landmarks,
            handedness=handedness,
            confidence=confidence
        ))
    return hands

class HandTracker:
    """
    Hand tracking using MediaPipe Hand Landmarker in LIVE_STREAM mode.

    Results arrive asynchronously and overwrite `mailbox`; nothing is
    queued, so the render loop always sees the newest detections.
    """

    def __init__(
        self,
        mailbox: Optional[DetectionMailbox] = None,
        model_path: Path = DEFAULT_MODEL_PATH,
        max_hands: int = 2,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5
    ):
        """
        Initialize the hand tracker.

        Args:
            mailbox: Slot receiving detections (created if omitted)
            model_path: Path to the `.task` model, downloaded if missing
            max_hands: Maximum number of hands to detect
            min_detection_confidence: Minimum confidence for detection
            min_tracking_confidence: Minimum confidence for tracking
        """
        self.mailbox = mailbox if mailbox is not None else DetectionMailbox()
        self.max_hands = max_hands

        ensure_model(Path(model_path))

        base_options = python.BaseOptions(model_asset_path=str(model_path))
        options = vision.HandLandmarkerOptions(
            base_options=base_options,
            running_mode=vision.RunningMode.LIVE_STREAM,
            num_hands=max_hands,
            min_hand_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
            min_hand_presence_confidence=min_detection_confidence,
            result_callback=self._on_result
        )
        self.detector = vision.HandLandmarker.create_from_options(options)

        # Timestamps passed to detect_async must increase strictly
        self._start_time = time.time()
        self._last_timestamp_ms = -1

        self._frame_size: Tuple[int, int] = (0, 0)

    def _on_result(self, result, output_image, timestamp_ms: int):
        """Landmarker callback; runs on the MediaPipe thread."""
        width, height = self._frame_size
        self.mailbox.post(hands_from_result(result, width, height))

    def submit(self, frame: np.ndarray):
        """
        Submit a BGR frame for asynchronous detection.

        Returns immediately; results land in the mailbox later.
        """
        height, width = frame.shape[:2]
        self._frame_size = (width, height)

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        timestamp_ms = int((time.time() - self._start_time) * 1000)
        timestamp_ms = max(timestamp_ms, self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp_ms

        self.detector.detect_async(mp_image, timestamp_ms)

    def latest(self) -> List[HandData]:
        """Most recent detections, possibly stale."""
        return self.mailbox.latest()

    def release(self):
        """Release resources."""
        if self.detector:
            self.detector.close()
            self.detector = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False
