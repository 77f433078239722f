"""
Step-rotated ring selector.

:class:`RingController` owns the registered items, the step counter and the
animated rotation offset.  Each step cancels the in-flight transition (if
any) and starts a new one from wherever the offset currently is, so rapid
steps compose instead of snapping.  Layout is recomputed on every animation
progress callback and, when a :class:`~ringmenu.runtime.FrameLoop` is
supplied, once per frame while a transition is running.

Misuse (double init, registering after init, stepping before init) is
reported through logging and otherwise ignored.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .animation import AnimationEngine, TransitionHandle, TweenEngine
from .config import RingConfig
from .layout import FRONT_ANGLE, FULL_TURN, MAX_DEPTH, layout_item, normalize_angle, order_by_depth_descending
from .render import RenderHandle
from .runtime import FrameLoop

LOG = logging.getLogger(__name__)


class RingPhase(Enum):
    UNINITIALIZED = "uninitialized"
    IDLE = "idle"
    TRANSITIONING = "transitioning"


class RingItem:
    """
    One slot on the ring.  ``slot_angle`` is assigned by
    :meth:`RingController.init` and never changes afterwards.
    """

    def __init__(self, render: Optional[RenderHandle] = None, *, name: str = "") -> None:
        self.render = render
        self.name = name
        self._slot_angle: Optional[float] = None

    @property
    def slot_angle(self) -> Optional[float]:
        return self._slot_angle

    def _assign_slot(self, angle: float) -> None:
        self._slot_angle = normalize_angle(angle)

    def __repr__(self) -> str:
        return f"RingItem(name={self.name!r}, slot_angle={self._slot_angle!r})"


def _last_depth(item: RingItem) -> float:
    if item.render is None:
        return MAX_DEPTH
    return float(item.render.get_last_depth())


class RingController:
    def __init__(
        self,
        config: Optional[RingConfig] = None,
        *,
        animator: Optional[AnimationEngine] = None,
        frame_loop: Optional[FrameLoop] = None,
        items: Iterable[RingItem] = (),
    ) -> None:
        self._config = config if config is not None else RingConfig()
        self._frame_loop = frame_loop
        self._frame_token: Optional[int] = None
        self._engine_token: Optional[int] = None
        if animator is not None:
            self._animator: AnimationEngine = animator
        else:
            engine = TweenEngine()
            self._animator = engine
            if frame_loop is not None:
                # An owned engine advances on the frame loop ahead of update().
                self._engine_token = frame_loop.subscribe(engine.tick)

        self._items: List[RingItem] = []
        self._ordering: List[RingItem] = []
        self._initialized = False
        self._transitioning = False
        self._step_count = 0
        self._rotation_offset = 0.0
        self._slot_spacing = 0.0
        self._transition: Optional[TransitionHandle] = None

        for item in items:
            self.register_item(item)

    # ------------------------------------------------------------------ accessors

    @property
    def config(self) -> RingConfig:
        return self._config

    @property
    def animator(self) -> AnimationEngine:
        return self._animator

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def phase(self) -> RingPhase:
        if not self._initialized:
            return RingPhase.UNINITIALIZED
        if self._transitioning:
            return RingPhase.TRANSITIONING
        return RingPhase.IDLE

    @property
    def step_count(self) -> int:
        return self._step_count

    @property
    def rotation_offset(self) -> float:
        return self._rotation_offset

    @property
    def slot_spacing(self) -> float:
        return self._slot_spacing

    @property
    def active_transition(self) -> Optional[TransitionHandle]:
        return self._transition

    @property
    def items(self) -> Tuple[RingItem, ...]:
        return tuple(self._items)

    @property
    def draw_order(self) -> Tuple[RingItem, ...]:
        """Items back to front as of the last layout pass."""
        return tuple(self._ordering)

    @property
    def front_index(self) -> Optional[int]:
        """Index of the item that sits at the front once the current step settles."""
        if not self._initialized:
            return None
        return (-self._step_count) % len(self._items)

    @property
    def front_item(self) -> Optional[RingItem]:
        index = self.front_index
        return None if index is None else self._items[index]

    # ------------------------------------------------------------------ public API

    def register_item(self, item: RingItem) -> None:
        if not isinstance(item, RingItem):
            raise TypeError("item must be a RingItem")
        if self._initialized:
            LOG.warning("Cannot add ring items after init().")
            return
        self._items.append(item)

    def init(self) -> None:
        if self._initialized:
            LOG.warning("Ring is already initialised.")
            return
        count = len(self._items)
        if count == 0:
            LOG.warning("Cannot initialise a ring without items.")
            return

        self._slot_spacing = FULL_TURN / count
        for index, item in enumerate(self._items):
            # Index 0 lands on the front angle.
            item._assign_slot(self._slot_spacing * index + FRONT_ANGLE)
        self._ordering = list(self._items)
        self._initialized = True
        LOG.debug("Ring initialised with %d items (%.3f° apart).", count, self._slot_spacing)

        self.recompute_layout()

    def step_right(self) -> None:
        self._step(1)

    def step_left(self) -> None:
        self._step(-1)

    def update(self) -> None:
        """
        Per-frame hook.  Only does work while a transition is running.
        """

        if not self._initialized or not self._transitioning:
            return
        self.recompute_layout()

    def recompute_layout(self) -> None:
        if not self._initialized:
            return

        config = self._config
        for index, item in enumerate(self._items):
            render = item.render
            if render is None:
                LOG.warning("Ring item %d has no render handle; skipping.", index)
                continue
            layout = layout_item(
                item.slot_angle,
                self._rotation_offset,
                ring_width=config.ring_width,
                ring_height=config.ring_height,
                min_scale=config.back_zoom_scale,
            )
            render.set_depth(layout.depth)
            render.set_scale(layout.scale, layout.scale)
            render.set_position(layout.x, layout.y)

        self._ordering[:] = order_by_depth_descending(self._ordering, _last_depth)
        draw_index = 0
        for item in self._ordering:
            if item.render is None:
                continue
            item.render.set_draw_order(draw_index)
            draw_index += 1

    def update_configuration(self, config: Union[RingConfig, Mapping[str, Any]]) -> RingConfig:
        """
        Replace the configuration (mappings are merged onto the current one)
        and refresh the layout if the ring is live.
        """

        if isinstance(config, RingConfig):
            self._config = config
        else:
            self._config = self._config.merged(config)
        if self._initialized:
            self.recompute_layout()
        return self._config

    def dispose(self) -> None:
        self._cancel_transition()
        self._stop_frame_updates()
        if self._frame_loop is not None and self._engine_token is not None:
            self._frame_loop.unsubscribe(self._engine_token)
        self._engine_token = None

    def describe(self) -> dict:
        # Same numbering as recompute_layout: items without a handle get none.
        draw_positions = {}
        for item in self._ordering:
            if item.render is not None:
                draw_positions[id(item)] = len(draw_positions)
        items = []
        for index, item in enumerate(self._items):
            entry = {
                "index": index,
                "name": item.name,
                "slotAngle": item.slot_angle,
                "hasRender": item.render is not None,
            }
            if self._initialized:
                entry["layout"] = layout_item(
                    item.slot_angle,
                    self._rotation_offset,
                    ring_width=self._config.ring_width,
                    ring_height=self._config.ring_height,
                    min_scale=self._config.back_zoom_scale,
                ).to_dict()
                entry["drawPosition"] = draw_positions.get(id(item))
            items.append(entry)

        return {
            "phase": self.phase.value,
            "stepCount": int(self._step_count),
            "rotationOffset": float(self._rotation_offset),
            "slotSpacing": float(self._slot_spacing),
            "frontIndex": self.front_index,
            "config": self._config.to_dict(),
            "items": items,
        }

    # ------------------------------------------------------------------ helpers

    def _step(self, direction: int) -> None:
        if not self._initialized:
            LOG.warning("Ring is not initialised.")
            return

        step_count = self._step_count + direction
        target = step_count * self._slot_spacing

        self._cancel_transition()
        try:
            transition = self._animator.animate(
                self._get_offset,
                self._set_offset,
                target,
                self._config.magnet_speed,
            )
        except Exception:
            # The cancelled transition is gone; nothing is moving any more.
            self._stop_frame_updates()
            raise
        self._step_count = step_count
        self._start_frame_updates()
        transition.on_update(self._on_transition_update).on_complete(self._on_transition_complete)
        self._transition = transition

    def _get_offset(self) -> float:
        return self._rotation_offset

    def _set_offset(self, value: float) -> None:
        self._rotation_offset = float(value)

    def _on_transition_update(self, _value: float) -> None:
        self.recompute_layout()

    def _on_transition_complete(self) -> None:
        self._transition = None
        self._stop_frame_updates()
        LOG.debug("Ring settled at step %d (%.3f°).", self._step_count, self._rotation_offset)

    def _cancel_transition(self) -> None:
        if self._transition is None:
            return
        self._transition.cancel()
        self._transition = None

    def _start_frame_updates(self) -> None:
        self._transitioning = True
        if self._frame_loop is not None and self._frame_token is None:
            self._frame_token = self._frame_loop.subscribe(self.update)

    def _stop_frame_updates(self) -> None:
        self._transitioning = False
        if self._frame_loop is not None and self._frame_token is not None:
            self._frame_loop.unsubscribe(self._frame_token)
        self._frame_token = None
