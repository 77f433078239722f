"""
Logging helpers for the ring selector.

Library modules only create module-level loggers and report misuse through
them; attaching handlers is left to the entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"


def resolve_level(level: Union[int, str, None], default: int = logging.WARNING) -> int:
    """
    Map a level name such as ``"debug"`` or a numeric level to a logging level.
    Unknown names fall back to ``default``.
    """

    if isinstance(level, int):
        return level
    candidate = logging.getLevelName(str(level or "").strip().upper())
    return candidate if isinstance(candidate, int) else default


def configure_logging(level: Union[int, str] = logging.INFO, format: Optional[str] = None) -> None:
    """
    Ensure the root logger is configured exactly once.  Output goes to stderr
    so stdout stays free for JSON reports.
    """

    if logging.getLogger().handlers:
        # Respect any user provided configuration.
        return

    logging.basicConfig(
        level=resolve_level(level, logging.INFO),
        format=format or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
