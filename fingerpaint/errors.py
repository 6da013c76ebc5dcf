"""
Errors Module - Application Exceptions
======================================
Failures of the hardware-facing adapters. The sketch state machine itself
never raises: missing hands and out-of-wheel picks are normal states.
"""


class FingerPaintError(Exception):
    """Base class for all application errors."""


class CameraError(FingerPaintError):
    """Raised when the webcam cannot be opened."""

    def __init__(self, camera_id: int):
        super().__init__(f"Failed to open camera {camera_id}")
        self.camera_id = camera_id


class ModelDownloadError(FingerPaintError):
    """Raised when the hand landmarker model cannot be fetched."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not download model from {url}: {reason}")
        self.url = url
        self.reason = reason
