"""
Pointer and wheel input for the map surface.

Turns raw presses, moves, releases and wheel deltas into two callbacks:
zoom(scale, anchor_x, anchor_y) and pan(dx, dy). Qt-free so the rules
can be exercised directly.
"""

from typing import Callable, Optional


ZoomCallback = Callable[[float, float, float], None]
PanCallback = Callable[[float, float], None]


class InputManager:
    """
    Tracks zoom scale and background panning.

    Panning starts only from a press on the background while pan is
    enabled. The pressing pointer is captured until release, so moves
    outside the surface keep panning and any release ends the drag.
    """

    MAX_SCALE = 5.0
    DEFAULT_MIN_SCALE = 0.1
    ZOOM_INTENSITY = 0.001

    def __init__(
        self,
        on_zoom: Optional[ZoomCallback] = None,
        on_pan: Optional[PanCallback] = None,
    ):
        self.on_zoom = on_zoom
        self.on_pan = on_pan

        self.scale = 1.0
        self.min_scale = self.DEFAULT_MIN_SCALE
        self.max_scale = self.MAX_SCALE

        self._pan_enabled = True
        self._dragging = False
        self._captured: Optional[int] = None
        self._last_x = 0.0
        self._last_y = 0.0

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def dragging(self) -> bool:
        return self._dragging

    @property
    def pan_enabled(self) -> bool:
        return self._pan_enabled

    @property
    def captured_pointer(self) -> Optional[int]:
        return self._captured

    def set_pan_enabled(self, enabled: bool) -> None:
        """Enable or disable panning; disabling also ends a pan in progress."""
        self._pan_enabled = enabled
        if not enabled:
            self._dragging = False

    def set_min_scale(self, value: float) -> None:
        self.min_scale = min(value, self.max_scale)

    def sync_scale(self, scale: float) -> None:
        """Follow a scale set elsewhere (e.g. by a camera animation)."""
        self.scale = scale

    def clamp(self, scale: float) -> float:
        return max(self.min_scale, min(self.max_scale, scale))

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def handle_down(self, x: float, y: float, on_background: bool, pointer_id: int = 0) -> bool:
        """
        Pointer pressed.

        Returns:
            True if a pan started
        """
        if not on_background or not self._pan_enabled:
            return False

        self._dragging = True
        self._captured = pointer_id
        self._last_x = x
        self._last_y = y
        return True

    def handle_move(self, x: float, y: float) -> None:
        if not self._dragging or not self._pan_enabled:
            return

        dx = x - self._last_x
        dy = y - self._last_y
        self._last_x = x
        self._last_y = y
        if self.on_pan and (dx or dy):
            self.on_pan(dx, dy)

    def handle_up(self, pointer_id: int = 0) -> None:
        """Pointer released anywhere; always ends the pan."""
        self._dragging = False
        if self._captured == pointer_id:
            self._captured = None

    def handle_cancel(self) -> None:
        """Capture lost (window deactivated, grab stolen)."""
        self._dragging = False
        self._captured = None

    def handle_wheel(self, delta_y: float, x: float, y: float) -> float:
        """
        Wheel turned. Positive delta_y zooms out.

        Returns:
            The new scale
        """
        self.scale = self.clamp(self.scale - delta_y * self.ZOOM_INTENSITY)
        if self.on_zoom:
            self.on_zoom(self.scale, x, y)
        return self.scale
