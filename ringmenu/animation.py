"""
Scalar tweening driven by a monotonic clock.

:class:`TweenEngine` animates a single float from its current value toward a
target over a fixed duration.  Nothing runs in the background: the host calls
:meth:`TweenEngine.tick` once per frame and every active tween is advanced to
the clock's current time on the calling thread.
"""

from __future__ import annotations

import logging
import math
import time
from enum import Enum
from typing import Callable, Dict, List, Optional, Protocol, Union

LOG = logging.getLogger(__name__)

MonotonicCallable = Callable[[], int]
Easing = Callable[[float], float]
Getter = Callable[[], float]
Setter = Callable[[float], None]

US_PER_SECOND = 1_000_000


class AnimationError(RuntimeError):
    """Raised for invalid animation requests."""


def _linear(t: float) -> float:
    return t


def _out_quad(t: float) -> float:
    return 1.0 - (1.0 - t) * (1.0 - t)


def _in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1.0) / 2.0


EASINGS: Dict[str, Easing] = {
    "linear": _linear,
    "out_quad": _out_quad,
    "in_out_sine": _in_out_sine,
}


def resolve_easing(easing: Union[str, Easing]) -> Easing:
    if callable(easing):
        return easing
    key = str(easing or "").strip().lower()
    try:
        return EASINGS[key]
    except KeyError:
        raise AnimationError(f"Unknown easing '{easing}'") from None


class TransitionHandle(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...

    def on_update(self, callback: Callable[[float], None]) -> "TransitionHandle": ...

    def on_complete(self, callback: Callable[[], None]) -> "TransitionHandle": ...


class AnimationEngine(Protocol):
    def animate(self, getter: Getter, setter: Setter, target: float, duration: float) -> TransitionHandle: ...


class TweenState(Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Tween:
    """
    One in-flight scalar animation.

    The start value is read from ``getter`` when the tween is created, so a
    tween started over a cancelled one picks up wherever that one stopped.
    """

    def __init__(
        self,
        getter: Getter,
        setter: Setter,
        target: float,
        *,
        duration_us: int,
        start_us: int,
        easing: Easing,
    ) -> None:
        self._setter = setter
        self._start_value = float(getter())
        self._target = float(target)
        self._duration_us = max(0, int(duration_us))
        self._start_us = int(start_us)
        self._easing = easing
        self._state = TweenState.RUNNING
        self._update_callbacks: List[Callable[[float], None]] = []
        self._complete_callbacks: List[Callable[[], None]] = []

    @property
    def state(self) -> TweenState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is TweenState.RUNNING

    @property
    def start_value(self) -> float:
        return self._start_value

    @property
    def target(self) -> float:
        return self._target

    def on_update(self, callback: Callable[[float], None]) -> "Tween":
        if self.active:
            self._update_callbacks.append(callback)
        return self

    def on_complete(self, callback: Callable[[], None]) -> "Tween":
        if self.active:
            self._complete_callbacks.append(callback)
        return self

    def cancel(self) -> None:
        """
        Stop immediately.  The animated value is left as is and no callback
        registered on this tween fires afterwards.
        """

        if not self.active:
            return
        self._state = TweenState.CANCELLED
        self._update_callbacks.clear()
        self._complete_callbacks.clear()

    def advance(self, now_us: int) -> bool:
        """
        Move the value to its position at ``now_us``.  Returns ``True`` once
        the tween is no longer running.
        """

        if not self.active:
            return True

        elapsed = max(0, int(now_us) - self._start_us)
        if self._duration_us <= 0 or elapsed >= self._duration_us:
            progress = 1.0
            value = self._target
        else:
            progress = elapsed / self._duration_us
            value = self._start_value + (self._target - self._start_value) * self._easing(progress)

        self._setter(value)
        for callback in list(self._update_callbacks):
            if not self.active:
                return True
            self._invoke(callback, value)

        if progress < 1.0:
            return False
        if not self.active:
            return True

        self._state = TweenState.COMPLETED
        callbacks = list(self._complete_callbacks)
        self._update_callbacks.clear()
        self._complete_callbacks.clear()
        for callback in callbacks:
            self._invoke(callback)
        return True

    @staticmethod
    def _invoke(callback: Callable, *args: float) -> None:
        try:
            callback(*args)
        except Exception:
            LOG.exception("Tween callback %r failed.", callback)


class TweenEngine:
    """
    Owns the active tweens and advances them on :meth:`tick`.
    """

    def __init__(
        self,
        *,
        monotonic: Optional[MonotonicCallable] = None,
        easing: Union[str, Easing] = "out_quad",
    ) -> None:
        self._monotonic: MonotonicCallable = (
            monotonic if monotonic is not None else lambda: time.monotonic_ns() // 1000
        )
        self._easing = resolve_easing(easing)
        self._tweens: List[Tween] = []

    @property
    def active_count(self) -> int:
        return sum(1 for tween in self._tweens if tween.active)

    def animate(
        self,
        getter: Getter,
        setter: Setter,
        target: float,
        duration: float,
        *,
        easing: Union[str, Easing, None] = None,
    ) -> Tween:
        duration_us = int(round(max(0.0, float(duration)) * US_PER_SECOND))
        tween = Tween(
            getter,
            setter,
            target,
            duration_us=duration_us,
            start_us=self._monotonic(),
            easing=self._easing if easing is None else resolve_easing(easing),
        )
        self._tweens.append(tween)
        LOG.debug("Tween started %.3f -> %.3f over %dus", tween.start_value, tween.target, duration_us)
        return tween

    def tick(self) -> int:
        """
        Advance every tween to the current clock time.  Tweens started by a
        callback during this tick begin advancing on the next one.
        """

        now_us = self._monotonic()
        for tween in list(self._tweens):
            tween.advance(now_us)
        self._tweens = [tween for tween in self._tweens if tween.active]
        return len(self._tweens)

    def cancel_all(self) -> int:
        count = self.active_count
        for tween in self._tweens:
            tween.cancel()
        self._tweens.clear()
        return count
