"""
Camera transform and eased look-at animation.

The world container is drawn at (x, y) with uniform scale; a world point
p lands on screen at p * scale + (x, y).
"""

from dataclasses import dataclass
from typing import Optional, Tuple


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


@dataclass
class CameraState:
    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        return wx * self.scale + self.x, wy * self.scale + self.y

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        return (sx - self.x) / self.scale, (sy - self.y) / self.scale


def look_at_target(
    world_x: float, world_y: float, scale: float,
    screen_w: float, screen_h: float,
) -> CameraState:
    """Camera that puts (world_x, world_y) at the screen centre at scale."""
    return CameraState(
        x=screen_w / 2 - world_x * scale,
        y=screen_h / 2 - world_y * scale,
        scale=scale,
    )


class Camera:
    """
    Owns the camera state and at most one running animation.

    Starting a new animation replaces any in-flight one, capturing the
    current (possibly mid-animation) values as its start.
    """

    FRAMES = 60

    def __init__(self, frames: int = FRAMES):
        self.frames = frames
        self.state = CameraState()
        self._start: Optional[CameraState] = None
        self._target: Optional[CameraState] = None
        self._frame = 0

    @property
    def animating(self) -> bool:
        return self._target is not None

    def center_on_screen(self, screen_w: float, screen_h: float) -> None:
        self.state.x = screen_w / 2
        self.state.y = screen_h / 2

    def pan(self, dx: float, dy: float) -> None:
        self.state.x += dx
        self.state.y += dy

    def zoom_to(self, scale: float, anchor_x: float, anchor_y: float) -> None:
        """Set scale, keeping the world point under the screen anchor fixed."""
        ratio = scale / self.state.scale
        self.state.x = anchor_x - (anchor_x - self.state.x) * ratio
        self.state.y = anchor_y - (anchor_y - self.state.y) * ratio
        self.state.scale = scale

    def look_at(
        self, world_x: float, world_y: float, scale: float,
        screen_w: float, screen_h: float,
    ) -> None:
        """Begin an eased move that centres (world_x, world_y) at scale."""
        self._start = CameraState(self.state.x, self.state.y, self.state.scale)
        self._target = look_at_target(world_x, world_y, scale, screen_w, screen_h)
        self._frame = 0

    def cancel(self) -> None:
        self._start = None
        self._target = None

    def step(self) -> bool:
        """
        Advance one animation frame.

        Returns:
            True while the animation has frames left
        """
        if self._target is None or self._start is None:
            return False

        self._frame += 1
        t = min(1.0, self._frame / self.frames)
        k = ease_out_cubic(t)
        start, target = self._start, self._target
        self.state.x = start.x + (target.x - start.x) * k
        self.state.y = start.y + (target.y - start.y) * k
        self.state.scale = start.scale + (target.scale - start.scale) * k

        if self._frame >= self.frames:
            self.cancel()
            return False
        return True
