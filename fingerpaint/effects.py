"""
Effects Module - Timed Overlays
===============================
Celebratory text effects and short status notices. Both expire on their
own; expiry is checked whenever the state is read for a frame.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple

from fingerpaint.config import EFFECT_DURATION, NOTICE_DURATION


class EffectKind(Enum):
    """Mutually exclusive full-screen effects."""
    NONE = auto()
    GOOD = auto()
    FIREWORK = auto()
    HEART = auto()
    SAD = auto()


@dataclass(frozen=True)
class EffectStyle:
    """How an effect is shown: text, RGB color, font size."""
    text: str
    color: Tuple[int, int, int]
    size: int = 48


EFFECT_STYLES: Dict[EffectKind, EffectStyle] = {
    EffectKind.GOOD: EffectStyle("GOOD!", (255, 215, 0)),
    EffectKind.FIREWORK: EffectStyle("* FIREWORK *", (255, 0, 0)),
    EffectKind.HEART: EffectStyle("<3 LOVE!", (255, 0, 127)),
    EffectKind.SAD: EffectStyle("So Sad...", (100, 100, 255)),
}


class EffectTimer:
    """
    The active effect and when it started.

    Only one effect runs at a time; a new one can start once the current
    one has expired.
    """

    def __init__(self, duration: float = EFFECT_DURATION):
        self.duration = duration
        self.kind = EffectKind.NONE
        self.started_at = 0.0

    @property
    def active(self) -> bool:
        return self.kind is not EffectKind.NONE

    def activate(self, kind: EffectKind, now: float) -> bool:
        """
        Start `kind` unless another effect is showing.

        Returns:
            True if the effect was started
        """
        if kind is EffectKind.NONE or self.active:
            return False
        self.kind = kind
        self.started_at = now
        return True

    def update(self, now: float) -> EffectKind:
        """Expire the effect if its time is up, then return the current kind."""
        if self.active and now - self.started_at > self.duration:
            self.kind = EffectKind.NONE
        return self.kind


@dataclass
class Notice:
    """A short message shown until `expires_at`."""
    text: str
    expires_at: float


class NoticeBoard:
    """Holds at most one notice; posting replaces the current one."""

    def __init__(self, duration: float = NOTICE_DURATION):
        self.duration = duration
        self._notice: Optional[Notice] = None

    def post(self, text: str, now: float):
        self._notice = Notice(text, now + self.duration)

    def current(self, now: float) -> Optional[str]:
        """Text of the live notice, or None once expired."""
        if self._notice is not None and now >= self._notice.expires_at:
            self._notice = None
        return self._notice.text if self._notice else None
