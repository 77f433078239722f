"""Utility helpers for the ring selector."""

from .logging import configure_logging, resolve_level

__all__ = ["configure_logging", "resolve_level"]
