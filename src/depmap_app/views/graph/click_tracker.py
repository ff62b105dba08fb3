"""
Per-target single/double click detection.
"""

import time
from enum import Enum
from typing import Callable, Dict, Hashable, Optional


class ClickState(Enum):
    IDLE = "idle"
    ARMED = "armed"


class ClickDetector:
    """
    Two-state machine for one interactive shape.

    IDLE --press--> ARMED (single click)
    ARMED --press within window--> IDLE (double click)
    ARMED --press after window--> ARMED (single click, re-armed)
    """

    def __init__(self, window_ms: float = 300.0):
        self.window_ms = window_ms
        self.state = ClickState.IDLE
        self._armed_at = 0.0

    def press(self, now_ms: float) -> int:
        """Register a press. Returns 1 for a single click, 2 for a double."""
        if self.state is ClickState.ARMED and now_ms - self._armed_at < self.window_ms:
            self.state = ClickState.IDLE
            return 2

        self.state = ClickState.ARMED
        self._armed_at = now_ms
        return 1

    def expire(self, now_ms: float) -> None:
        if self.state is ClickState.ARMED and now_ms - self._armed_at >= self.window_ms:
            self.state = ClickState.IDLE


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class ClickTracker:
    """Keeps one ClickDetector per target key (node id, plate id, background)."""

    DOUBLE_CLICK_MS = 300.0

    def __init__(
        self,
        window_ms: float = DOUBLE_CLICK_MS,
        clock: Callable[[], float] = _monotonic_ms,
    ):
        self.window_ms = window_ms
        self._clock = clock
        self._detectors: Dict[Hashable, ClickDetector] = {}

    def click(self, target: Hashable, now_ms: Optional[float] = None) -> int:
        """Register a click on target. Returns the click count (1 or 2)."""
        if now_ms is None:
            now_ms = self._clock()
        detector = self._detectors.get(target)
        if detector is None:
            detector = self._detectors[target] = ClickDetector(self.window_ms)
        return detector.press(now_ms)

    def state_of(self, target: Hashable) -> ClickState:
        detector = self._detectors.get(target)
        return detector.state if detector else ClickState.IDLE

    def reset(self) -> None:
        self._detectors.clear()
