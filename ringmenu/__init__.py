"""
Ring selector core.

Items sit on an ellipse and rotate by whole steps.  :mod:`ringmenu.layout`
holds the geometry (depth, scale, position, draw order) and
:mod:`ringmenu.controller` the step state machine that animates the rotation
offset and pushes results to each item's render handle.
"""

from __future__ import annotations

from .animation import AnimationError, Tween, TweenEngine
from .config import ConfigError, RingConfig, load_config
from .controller import RingController, RingItem, RingPhase
from .render import RectHandle, RenderHandle
from .runtime import FrameLoop

__all__ = [
    "AnimationError",
    "ConfigError",
    "FrameLoop",
    "RectHandle",
    "RenderHandle",
    "RingConfig",
    "RingController",
    "RingItem",
    "RingPhase",
    "Tween",
    "TweenEngine",
    "load_config",
]
