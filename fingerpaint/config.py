"""
Config Module - Tunable Parameters and Runtime Settings
=======================================================
Behavioral constants (thresholds, durations, layout) and the environment
driven runtime settings. Values from a `.env` file are loaded by the entry
point before `Settings.from_env()` is called.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


# Canvas
CANVAS_WIDTH = 640
CANVAS_HEIGHT = 480

# Gestures
OK_GESTURE_THRESHOLD = 50.0   # thumb tip to index tip, pixels
SMOOTHING_FACTOR = 0.25       # lerp factor toward the raw fingertip
ERASE_RADIUS = 25.0           # pixels

# Timing (seconds)
TOGGLE_DELAY = 0.5
EFFECT_DURATION = 2.0
NOTICE_DURATION = 1.5

# Color wheel
WHEEL_RADIUS = 100
COLOR_PICKER_TOP = 110
DEFAULT_STROKE_COLOR = (0, 0, 255)  # RGB, blue

# Rendering
STROKE_THICKNESS = 4
CURVE_SAMPLES = 8             # spline samples per segment
BUTTON_ALPHA = 180            # button fill opacity (0-255)

# Hand landmarker model
MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/hand_landmarker/"
    "hand_landmarker/float16/1/hand_landmarker.task"
)
DEFAULT_MODEL_PATH = Path(__file__).parent.parent / "models" / "hand_landmarker.task"

WINDOW_NAME = "Finger Paint"


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    value = env.get(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}") from None


@dataclass
class Settings:
    """
    Runtime settings for the application.

    Attributes:
        camera_id: Camera device index
        model_path: Location of the hand landmarker `.task` file
        font_path: Optional TrueType font for overlay text
        log_level: Name of the logging level
        max_hands: Hands the landmarker looks for (2 enables the lock gesture)
    """
    camera_id: int = 0
    model_path: Path = DEFAULT_MODEL_PATH
    font_path: Optional[Path] = None
    log_level: str = "INFO"
    max_hands: int = 2

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read from (defaults to `os.environ`)
        """
        env = os.environ if env is None else env

        model = env.get("FINGERPAINT_MODEL_PATH")
        font = env.get("FINGERPAINT_FONT")

        return cls(
            camera_id=_env_int(env, "FINGERPAINT_CAMERA", 0),
            model_path=Path(model) if model else DEFAULT_MODEL_PATH,
            font_path=Path(font) if font else None,
            log_level=env.get("FINGERPAINT_LOG_LEVEL", "INFO").upper(),
            max_hands=max(1, _env_int(env, "FINGERPAINT_MAX_HANDS", 2)),
        )
