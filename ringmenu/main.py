"""
Headless ring driver.

Builds a ring of in-memory render handles from a configuration profile, plays
a sequence of steps against a simulated frame clock and prints the settled
state after each step as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from pydantic import ValidationError

from .animation import US_PER_SECOND, TweenEngine
from .config import DEFAULT_PROFILE, ConfigError, RingConfig, load_config
from .controller import RingController, RingItem, RingPhase
from .render import RectHandle
from .runtime import FrameLoop
from .utils.logging import configure_logging, resolve_level

LOG = logging.getLogger(__name__)

MAX_SETTLE_FRAMES = 10_000
STEP_DIRECTIONS = {"R": 1, "+": 1, "L": -1, "-": -1}


class SimulatedClock:
    """Monotonic microsecond clock advanced by hand, one frame at a time."""

    def __init__(self) -> None:
        self.now_us = 0

    def __call__(self) -> int:
        return self.now_us

    def advance(self, seconds: float) -> None:
        self.now_us += int(round(seconds * US_PER_SECOND))


def parse_steps(text: str) -> List[int]:
    steps: List[int] = []
    for char in str(text or "").upper():
        if char.isspace() or char == ",":
            continue
        try:
            steps.append(STEP_DIRECTIONS[char])
        except KeyError:
            raise ValueError(f"Unsupported step '{char}' (use R or L)") from None
    return steps


def build_ring(config: RingConfig, item_count: int, clock: SimulatedClock) -> Tuple[RingController, FrameLoop]:
    animator = TweenEngine(monotonic=clock)
    frame_loop = FrameLoop()
    # Tweens advance before the ring reads the offset.
    frame_loop.subscribe(animator.tick)

    ring = RingController(config, animator=animator, frame_loop=frame_loop)
    for index in range(item_count):
        ring.register_item(RingItem(RectHandle(), name=f"item-{index}"))
    ring.init()
    return ring, frame_loop


def settle(ring: RingController, frame_loop: FrameLoop, clock: SimulatedClock, fps: float) -> int:
    frames = 0
    while ring.phase is RingPhase.TRANSITIONING and frames < MAX_SETTLE_FRAMES:
        clock.advance(1.0 / fps)
        frame_loop.tick()
        frames += 1
    return frames


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Headless ring selector driver")
    parser.add_argument("--profile", default=DEFAULT_PROFILE, help="configuration profile to load")
    parser.add_argument("--config", default=None, help="path to a profiles YAML file")
    parser.add_argument("--items", type=int, default=4, help="number of items on the ring")
    parser.add_argument("--steps", default="", help="steps to play, e.g. 'RRL'")
    parser.add_argument("--fps", type=float, default=60.0, help="simulated frame rate")
    parser.add_argument("--log-level", default="WARNING", help="root log level")
    return parser.parse_args(argv)


def run(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(resolve_level(args.log_level))

    if args.items < 1:
        LOG.error("--items must be at least 1.")
        return 2
    if args.fps <= 0:
        LOG.error("--fps must be positive.")
        return 2
    try:
        steps = parse_steps(args.steps)
        config = load_config(args.profile, args.config)
    except (ConfigError, ValidationError, ValueError) as exc:
        LOG.error("%s", exc)
        return 2

    clock = SimulatedClock()
    ring, frame_loop = build_ring(config, args.items, clock)
    report = {"initial": ring.describe(), "steps": []}
    for direction in steps:
        if direction > 0:
            ring.step_right()
        else:
            ring.step_left()
        frames = settle(ring, frame_loop, clock, args.fps)
        report["steps"].append(
            {
                "direction": "right" if direction > 0 else "left",
                "frames": frames,
                "state": ring.describe(),
            }
        )
    ring.dispose()

    json.dump(report, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(run())
