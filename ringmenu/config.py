"""
Ring configuration and YAML profile loading.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

CONFIG_DIR = Path(__file__).resolve().parent / "configs"
PROFILES_PATH = CONFIG_DIR / "profiles.yaml"
DEFAULT_PROFILE = "default"

LOG = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a profile cannot be resolved."""


class RingConfig(BaseModel):
    """
    Geometry and timing of a ring.

    ``ring_width``/``ring_height`` are the ellipse radii in host units,
    ``magnet_speed`` the duration of one step in seconds and
    ``back_zoom_scale`` the scale of the rearmost item.
    """

    ring_width: float = Field(default=0.0, validation_alias=AliasChoices("ring_width", "ringWidth"))
    ring_height: float = Field(default=0.0, validation_alias=AliasChoices("ring_height", "ringHeight"))
    magnet_speed: float = Field(default=0.18, validation_alias=AliasChoices("magnet_speed", "magnetSpeed"))
    back_zoom_scale: float = Field(
        default=0.5,
        validation_alias=AliasChoices("back_zoom_scale", "backZoomScale"),
    )

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    @field_validator("magnet_speed")
    @classmethod
    def _validate_magnet_speed(cls, value: float) -> float:
        if value < 0.0:
            raise ValueError("magnet_speed must be non-negative")
        return value

    @field_validator("back_zoom_scale")
    @classmethod
    def _validate_back_zoom_scale(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("back_zoom_scale must lie in (0, 1]")
        return value

    def merged(self, changes: Mapping[str, Any]) -> "RingConfig":
        """
        Return a validated copy with ``changes`` applied.  Keys may use either
        the snake_case or the camelCase spelling.
        """

        payload = self.model_dump()
        payload.update(_normalise_keys(changes))
        return RingConfig.model_validate(payload)

    def to_dict(self) -> dict:
        return {
            "ringWidth": float(self.ring_width),
            "ringHeight": float(self.ring_height),
            "magnetSpeed": float(self.magnet_speed),
            "backZoomScale": float(self.back_zoom_scale),
        }


_CAMEL_TO_FIELD = {
    "ringWidth": "ring_width",
    "ringHeight": "ring_height",
    "magnetSpeed": "magnet_speed",
    "backZoomScale": "back_zoom_scale",
}


def _normalise_keys(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return {_CAMEL_TO_FIELD.get(str(key), str(key)): value for key, value in payload.items()}


def load_profiles(path: Union[str, Path, None] = None) -> Dict[str, dict]:
    """
    Read the profile map from ``path`` (defaults to the bundled profiles).
    A missing file yields an empty map.
    """

    target = Path(path) if path is not None else PROFILES_PATH
    try:
        with target.open("r", encoding="utf-8") as handle:
            profiles = yaml.safe_load(handle) or {}
    except FileNotFoundError:
        LOG.debug("Profile file %s not found.", target)
        return {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed profile file {target}: {exc}") from exc
    if not isinstance(profiles, dict):
        raise ConfigError(f"Profile file {target} must contain a mapping")
    return profiles


def load_config(profile: str = DEFAULT_PROFILE, path: Union[str, Path, None] = None) -> RingConfig:
    profiles = load_profiles(path)
    entry: Optional[object] = profiles.get(profile)
    if entry is None:
        if profile == DEFAULT_PROFILE:
            return RingConfig()
        raise ConfigError(f"Unknown profile '{profile}'")
    if not isinstance(entry, dict):
        raise ConfigError(f"Profile '{profile}' must be a mapping")
    return RingConfig.model_validate(_normalise_keys(entry))
