"""
Camera Module - Webcam Stream Handler
======================================
Handles webcam capture on a background thread. Frames are mirrored so
the picture behaves like a mirror for the person drawing, and only the
newest frame is kept.
"""

import logging
import threading
import time
from typing import Optional

import cv2
import numpy as np

from fingerpaint.config import CANVAS_HEIGHT, CANVAS_WIDTH
from fingerpaint.errors import CameraError

logger = logging.getLogger(__name__)


class Camera:
    """
    Webcam stream handler with threading support for smooth frame capture.

    Attributes:
        camera_id: Index of the camera device (default 0)
        width: Frame width in pixels
        height: Frame height in pixels
        fps: Target frames per second
        mirror: Flip frames horizontally
    """

    def __init__(
        self,
        camera_id: int = 0,
        width: int = CANVAS_WIDTH,
        height: int = CANVAS_HEIGHT,
        fps: int = 30,
        mirror: bool = True
    ):
        self.camera_id = camera_id
        self.width = width
        self.height = height
        self.fps = fps
        self.mirror = mirror

        self.cap: Optional[cv2.VideoCapture] = None

        # Latest frame, written by the capture thread
        self._frame: Optional[np.ndarray] = None
        self._frame_lock = threading.Lock()
        self._running = False
        self._thread: Optional[threading.Thread] = None

    def start(self) -> bool:
        """
        Start the camera capture.

        Returns:
            True if camera started successfully, False otherwise
        """
        self.cap = cv2.VideoCapture(self.camera_id)

        if not self.cap.isOpened():
            self.cap.release()
            self.cap = None
            return False

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.fps)
        # Buffer of 1 keeps latency low
        self.cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)

        # Actual resolution may differ from the request
        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

        logger.info("Camera started: %dx%d @ %dfps", self.width, self.height, self.fps)

        self._running = True
        self._thread = threading.Thread(target=self._capture_loop, daemon=True)
        self._thread.start()

        return True

    def _capture_loop(self):
        while self._running:
            ret, frame = self.cap.read()

            if ret:
                if self.mirror:
                    frame = cv2.flip(frame, 1)

                with self._frame_lock:
                    self._frame = frame
            else:
                time.sleep(0.001)

    def get_frame(self) -> Optional[np.ndarray]:
        """
        Get a copy of the latest frame.

        Returns:
            Frame as numpy array or None if no frame available yet
        """
        with self._frame_lock:
            if self._frame is None:
                return None
            return self._frame.copy()

    def stop(self):
        """Stop the camera capture and release resources."""
        self._running = False

        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None

        if self.cap is not None:
            self.cap.release()
            self.cap = None
            logger.info("Camera stopped")

    def __enter__(self):
        if not self.start():
            raise CameraError(self.camera_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
