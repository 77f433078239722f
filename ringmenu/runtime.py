"""
Per-frame dispatch for hosts that drive the ring from a render loop.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

LOG = logging.getLogger(__name__)


class FrameLoop:
    """
    Calls its subscribers once per :meth:`tick`, in subscription order.
    """

    def __init__(self) -> None:
        self._subscriber_counter = 0
        self._subscribers: Dict[int, Callable[[], None]] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[], None]) -> int:
        if not callable(callback):
            raise TypeError("callback must be callable")
        self._subscriber_counter += 1
        token = self._subscriber_counter
        self._subscribers[token] = callback
        return token

    def unsubscribe(self, token: int) -> None:
        self._subscribers.pop(token, None)

    def tick(self) -> None:
        # Subscribers may (un)subscribe while being dispatched.
        for token, callback in list(self._subscribers.items()):
            if token not in self._subscribers:
                continue
            try:
                callback()
            except Exception:
                LOG.exception("Frame subscriber %s failed.", token)
