"""Scene parameters and their YAML/JSON configuration files.

A configuration file is a flat mapping whose keys are the field names of
``SceneConfig``; any field left out keeps its default::

    function1: "x+6"
    function2: "x^2"
    orientation: x
    interval_start: -2
    interval_end: 3
    step: 0.2
    profile: semicircle
"""

from __future__ import annotations

import dataclasses
import json
import logging
import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from solidviz.geometry import Orientation, Vec3
from solidviz.profiles import CrossSectionProfile

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised for unreadable configuration files or ill-typed values."""


@dataclass(frozen=True)
class SceneConfig:
    """Everything the geometry builders need, with the application's defaults."""

    function1: str = "x+6"
    function2: str = "x^2"
    orientation: Orientation = Orientation.X
    interval_start: float = -2.0
    interval_end: float = 3.0
    step: float = 0.2
    profile: CrossSectionProfile = CrossSectionProfile.SQUARE
    rotation_axis: float = 0.0
    domain: Tuple[float, float] = (-60.0, 60.0)
    sample_count: int = 2000
    axial_step: float = 0.3
    angular_steps: int = 30
    semicircle_segments: int = 20
    camera_position: Vec3 = (0.0, 0.0, -50.0)

    def __post_init__(self):
        try:
            object.__setattr__(self, "orientation", Orientation.parse(self.orientation))
            object.__setattr__(self, "profile", CrossSectionProfile.parse(self.profile))
        except ValueError as err:
            raise ConfigError(str(err)) from None

        for name in ("function1", "function2"):
            if not isinstance(getattr(self, name), str):
                raise ConfigError(f"{name} must be a string")
        for name in ("interval_start", "interval_end", "step", "rotation_axis", "axial_step"):
            object.__setattr__(self, name, _number(name, getattr(self, name)))
        for name in ("sample_count", "angular_steps", "semicircle_segments"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        object.__setattr__(self, "domain", _vector("domain", self.domain, 2))
        object.__setattr__(self, "camera_position", _vector("camera_position", self.camera_position, 3))

    def replace(self, **overrides) -> "SceneConfig":
        """Return a copy with ``overrides`` applied; ``None`` values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - field_names()
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form suitable for ``yaml.safe_dump`` or ``json.dump``."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (Orientation, CrossSectionProfile)):
                value = value.value
            elif isinstance(value, tuple):
                value = list(value)
            data[f.name] = value
        return data


def field_names():
    return {f.name for f in fields(SceneConfig)}


def _number(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be finite")
    return value


def _vector(name: str, value, length: int) -> tuple:
    if not isinstance(value, (list, tuple)) or len(value) != length:
        raise ConfigError(f"{name} must be a list of {length} numbers, got {value!r}")
    return tuple(_number(name, v) for v in value)


def config_from_mapping(data: Dict[str, Any]) -> SceneConfig:
    """Build a ``SceneConfig`` from a mapping, rejecting unknown keys."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("configuration must be a mapping of option names to values")
    unknown = set(data) - field_names()
    if unknown:
        raise ConfigError(f"unknown configuration keys: {', '.join(sorted(unknown))}")
    return SceneConfig(**data)


def load_config(path) -> SceneConfig:
    """Read a YAML (or ``.json``) configuration file."""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"configuration file not found: {path}")
    with path.open("r", encoding="utf-8") as fp:
        try:
            if path.suffix.lower() == ".json":
                data = json.load(fp)
            else:
                data = yaml.safe_load(fp)
        except (yaml.YAMLError, json.JSONDecodeError) as err:
            raise ConfigError(f"cannot parse {path}: {err}") from err
    config = config_from_mapping(data)
    logger.debug("loaded configuration from %s", path)
    return config


def save_config(config: SceneConfig, path) -> None:
    """Write ``config`` as YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config.to_dict(), fp, sort_keys=False)
