"""
UI Module - Main Application Interface
======================================
Real-time finger painting over the webcam feed.
Combines capture, hand tracking, the sketch state machine and the
renderer into one frame loop.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import cv2
from dotenv import load_dotenv

from fingerpaint.camera import Camera
from fingerpaint.config import CANVAS_HEIGHT, CANVAS_WIDTH, WINDOW_NAME, Settings
from fingerpaint.effects import EffectKind
from fingerpaint.errors import CameraError, FingerPaintError
from fingerpaint.hand_tracking import HandTracker
from fingerpaint.renderer import SketchRenderer
from fingerpaint.sketch import SketchController

logger = logging.getLogger(__name__)


EFFECT_KEYS = {
    ord('1'): EffectKind.GOOD,
    ord('2'): EffectKind.FIREWORK,
    ord('3'): EffectKind.HEART,
    ord('4'): EffectKind.SAD,
}


class FingerPaintApp:
    """
    Main application class for the finger paint sketch.

    Owns the camera and the hand tracker; everything the sketch
    remembers lives in `controller.state`.
    """

    def __init__(self, settings: Settings, show_landmarks: bool = False):
        self.settings = settings

        self.camera = Camera(
            camera_id=settings.camera_id,
            width=CANVAS_WIDTH,
            height=CANVAS_HEIGHT,
            fps=30
        )
        self.hand_tracker: Optional[HandTracker] = None

        self.controller = SketchController(width=CANVAS_WIDTH, height=CANVAS_HEIGHT)
        self.renderer = SketchRenderer(
            self.controller,
            font_path=settings.font_path,
            show_landmarks=show_landmarks
        )

        self._running = False

    def handle_key(self, key: int, now: float) -> bool:
        """
        Handle keyboard input.

        Returns:
            False if should quit, True otherwise
        """
        if key == ord('q') or key == 27:  # Q or Escape
            return False

        controller = self.controller
        if key == ord('w'):
            controller.toggle_writing(now)
        elif key == ord('e'):
            controller.toggle_erasing(now)
        elif key == ord('c'):
            if controller.clear_all():
                controller.state.notices.post("Canvas cleared", now)
        elif key == ord('p'):
            controller.open_color_picker()
        elif key == ord('l'):
            controller.lock_color(now)
        elif key == ord('h'):
            self.renderer.show_landmarks = not self.renderer.show_landmarks
        elif key in EFFECT_KEYS:
            controller.trigger_effect(EFFECT_KEYS[key], now)

        return True

    def step(self, frame, hands: List, now: float):
        """Advance the sketch one frame and return the display image."""
        hand_input = self.controller.update(hands, now)
        return self.renderer.draw(frame, hands, hand_input, now)

    def run(self) -> int:
        """
        Run the main application loop.

        Returns:
            Process exit code
        """
        logger.info("Finger Paint - draw in the air with an OK sign")
        logger.info("Keys: [W] write [E] erase [C] clear [P] color [L] lock color "
                    "[1-4] effects [H] landmarks [Q] quit")

        try:
            self.hand_tracker = HandTracker(
                model_path=self.settings.model_path,
                max_hands=self.settings.max_hands
            )
        except FingerPaintError as e:
            logger.error("%s", e)
            return 1

        try:
            with self.camera:
                self._running = True
                cv2.namedWindow(WINDOW_NAME, cv2.WINDOW_AUTOSIZE)
                self._loop()
        except CameraError as e:
            logger.error("%s", e)
            return 1
        finally:
            self._running = False
            self.hand_tracker.release()
            cv2.destroyAllWindows()
            logger.info("Application closed")

        return 0

    def _loop(self):
        while self._running:
            frame = self.camera.get_frame()
            if frame is None:
                time.sleep(0.001)
                continue

            # Landmarks are reported in the pixels of the submitted frame
            if frame.shape[:2] != (CANVAS_HEIGHT, CANVAS_WIDTH):
                frame = cv2.resize(frame, (CANVAS_WIDTH, CANVAS_HEIGHT))

            self.hand_tracker.submit(frame)
            hands = self.hand_tracker.latest()

            now = time.time()
            display = self.step(frame, hands, now)
            cv2.imshow(WINDOW_NAME, display)

            key = cv2.waitKey(1) & 0xFF
            if key != 0xFF and not self.handle_key(key, now):
                break


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(levelname)s] %(message)s"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="Finger Paint - draw on your webcam with hand gestures")
    parser.add_argument('--camera', type=int, help='Camera device index')
    parser.add_argument('--model', type=Path, help='Path to hand_landmarker.task (downloaded if missing)')
    parser.add_argument('--font', type=Path, help='TrueType font for overlay text')
    parser.add_argument('--log-level', help='Logging level')
    parser.add_argument('--landmarks', action='store_true', help='Draw hand skeletons')

    try:
        settings = Settings.from_env()
    except ValueError as e:
        parser.error(str(e))

    parser.set_defaults(
        camera=settings.camera_id,
        model=settings.model_path,
        font=settings.font_path,
        log_level=settings.log_level
    )
    args = parser.parse_args(argv)

    settings.camera_id = args.camera
    settings.model_path = args.model
    settings.font_path = args.font
    settings.log_level = args.log_level.upper()

    configure_logging(settings.log_level)

    app = FingerPaintApp(settings, show_landmarks=args.landmarks)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
