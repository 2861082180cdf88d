"""Pan/zoom state for the rendered forest.

Pure presentation state: the rendering layer applies
``translate(position) scale(scale)`` to the whole laid-out forest as one group.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

DEFAULT_SCALE = 1.0
DEFAULT_POSITION = (50.0, 50.0)
MIN_SCALE = 0.5
MAX_SCALE = 2.0
ZOOM_STEP = 0.1


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


@dataclass
class Viewport:
    scale: float = DEFAULT_SCALE
    x: float = DEFAULT_POSITION[0]
    y: float = DEFAULT_POSITION[1]
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE
    step: float = ZOOM_STEP
    _drag_offset: Optional[tuple[float, float]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.min_scale <= 0 or self.min_scale > self.max_scale:
            raise ValueError(f"invalid scale bounds: [{self.min_scale}, {self.max_scale}]")
        self.scale = _clamp(self.scale, self.min_scale, self.max_scale)

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def dragging(self) -> bool:
        return self._drag_offset is not None

    # Drag

    def pointer_down(self, px: float, py: float) -> None:
        self._drag_offset = (px - self.x, py - self.y)

    def pointer_move(self, px: float, py: float) -> None:
        if self._drag_offset is None:
            return
        ox, oy = self._drag_offset
        self.x = px - ox
        self.y = py - oy

    def pointer_up(self) -> None:
        self._drag_offset = None

    pointer_leave = pointer_up

    # Zoom

    def _set_scale(self, value: float) -> None:
        # Round so repeated 0.1 steps land on exact tenths.
        self.scale = round(_clamp(value, self.min_scale, self.max_scale), 6)

    def zoom_in(self) -> None:
        self._set_scale(self.scale + self.step)

    def zoom_out(self) -> None:
        self._set_scale(self.scale - self.step)

    def reset(self) -> None:
        self._drag_offset = None
        self.scale = DEFAULT_SCALE
        self.x, self.y = DEFAULT_POSITION

    def transform(self) -> str:
        return f"translate({self.x:g}px, {self.y:g}px) scale({self.scale:g})"

    def to_public(self) -> dict[str, Any]:
        return {
            "scale": self.scale,
            "position": {"x": self.x, "y": self.y},
            "min_scale": self.min_scale,
            "max_scale": self.max_scale,
            "transform": self.transform(),
        }
