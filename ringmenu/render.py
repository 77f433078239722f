"""
Render handle capability.

The ring never draws anything itself: it pushes computed values through a
:class:`RenderHandle`.  :class:`RectHandle` keeps them in memory, which is all
a headless host or a test needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class RenderHandle(Protocol):
    def set_position(self, x: float, y: float) -> None: ...

    def set_scale(self, x: float, y: float) -> None: ...

    def set_depth(self, depth: float) -> None: ...

    def set_draw_order(self, index: int) -> None: ...

    def get_last_depth(self) -> float: ...


@dataclass
class RectHandle:
    """
    In-memory transform mirroring the last values pushed by the ring.
    """

    x: float = 0.0
    y: float = 0.0
    depth: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    draw_order: int = 0

    def set_position(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def set_scale(self, x: float, y: float) -> None:
        self.scale_x = float(x)
        self.scale_y = float(y)

    def set_depth(self, depth: float) -> None:
        self.depth = float(depth)

    def set_draw_order(self, index: int) -> None:
        self.draw_order = int(index)

    def get_last_depth(self) -> float:
        return self.depth

    def to_dict(self) -> dict:
        return {
            "x": float(self.x),
            "y": float(self.y),
            "depth": float(self.depth),
            "scale": [float(self.scale_x), float(self.scale_y)],
            "drawOrder": int(self.draw_order),
        }
