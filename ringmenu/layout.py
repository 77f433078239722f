"""
Ring geometry: depth, scale, position and draw order for items on an ellipse.

Angles are in degrees.  270° is the front of the ring (screen-space "up" in
the ``(cos, sin)`` mapping used by :func:`compute_position`), 90° the back.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable, List, Tuple, TypeVar

T = TypeVar("T")

FRONT_ANGLE = 270.0
FULL_TURN = 360.0
MAX_DEPTH = 180.0


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def normalize_angle(angle: float) -> float:
    """
    Wrap ``angle`` into ``[0, 360)``.
    """

    wrapped = float(angle) % FULL_TURN
    # Tiny negative inputs round up to exactly 360.0.
    if wrapped >= FULL_TURN:
        return 0.0
    return wrapped


def effective_angle(slot_angle: float, rotation_offset: float) -> float:
    return normalize_angle(float(slot_angle) + float(rotation_offset))


def compute_depth(slot_angle: float, rotation_offset: float) -> float:
    """
    Angular distance from the front of the ring, folded into ``[0, 180]``.
    """

    depth = abs(effective_angle(slot_angle, rotation_offset) - FRONT_ANGLE)
    if depth > MAX_DEPTH:
        depth = abs(FULL_TURN - depth)
    return depth


def compute_scale(depth: float, min_scale: float) -> float:
    """
    Interpolate from ``1.0`` at the front to ``min_scale`` at the back.
    """

    t = clamp01(float(depth) / MAX_DEPTH)
    return float(min_scale) + (1.0 - float(min_scale)) * (1.0 - t)


def compute_position(angle: float) -> Tuple[float, float]:
    radians = math.radians(angle)
    return math.cos(radians), math.sin(radians)


def order_by_depth_descending(items: Iterable[T], depth_of: Callable[[T], float]) -> List[T]:
    """
    Farthest item first, nearest last.  Equal depths keep their input order.
    """

    # ``sorted`` stays stable with reverse=True.
    return sorted(items, key=depth_of, reverse=True)


@dataclass(frozen=True, slots=True)
class ItemLayout:
    effective_angle: float
    depth: float
    scale: float
    x: float
    y: float

    def to_dict(self) -> dict:
        return {
            "angle": float(self.effective_angle),
            "depth": float(self.depth),
            "scale": float(self.scale),
            "x": float(self.x),
            "y": float(self.y),
        }


def layout_item(
    slot_angle: float,
    rotation_offset: float,
    *,
    ring_width: float,
    ring_height: float,
    min_scale: float,
) -> ItemLayout:
    angle = effective_angle(slot_angle, rotation_offset)
    depth = compute_depth(slot_angle, rotation_offset)
    unit_x, unit_y = compute_position(angle)
    return ItemLayout(
        effective_angle=angle,
        depth=depth,
        scale=compute_scale(depth, min_scale),
        x=unit_x * float(ring_width),
        y=unit_y * float(ring_height),
    )
