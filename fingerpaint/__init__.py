# Finger Paint - Hand-Tracked Drawing over a Webcam Feed
# Version: 1.0.0

"""
Core modules for the finger paint sketch:
- camera: Webcam stream handler
- landmarks: Hand detection data types and the detection mailbox
- hand_tracking: MediaPipe hand landmark detection
- gesture_logic: Fingertip position and OK-gesture classification
- buttons: On-screen button layout and hit testing
- color_wheel: HSV color picker
- canvas: Stroke store and stroke rendering
- effects: Timed effect overlays and notices
- sketch: Mode state machine and drawing engine
- renderer: Frame composition
- ui: Main application interface
"""

__version__ = "1.0.0"
