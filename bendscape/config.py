"""Configuration models for Bendscape drawings.

:class:`Parameters` is the single record a generation run reads.  It is
treated as read-only for the duration of a run; use :func:`with_updates` to
derive a changed copy.  The dictionary form uses the camelCase keys of the
browser application so exported files and presets stay interchangeable.
"""

from __future__ import annotations

import math
import os
import random
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ParameterError
from .geometry import Point


class LengthMode(str, Enum):
    FIXED = "fixed"
    RANDOM = "random"


class AngleMode(str, Enum):
    FIXED = "fixed"
    RANDOM = "random"


class ColorMode(str, Enum):
    FIXED = "fixed"
    RANDOM = "random"
    # Declared by the UI but drawn exactly like RANDOM.
    GRADIENT = "gradient"


class Palette(str, Enum):
    PASTEL = "pastel"
    BOLD = "bold"
    MONOCHROME = "monochrome"


class StoppingCondition(str, Enum):
    DISTANCE = "distance"
    COUNT = "count"
    EXACT = "exact"


@dataclass
class Parameters:
    """Every policy choice and numeric bound of one drawing."""

    # length
    length_mode: LengthMode = LengthMode.RANDOM
    fixed_length: float = 50.0
    min_length: float = 20.0
    max_length: float = 100.0

    # angle
    angle_mode: AngleMode = AngleMode.FIXED
    fixed_angle: float = 45.0
    min_angle: float = 30.0
    max_angle: float = 60.0

    # color
    color_mode: ColorMode = ColorMode.RANDOM
    fixed_color: str = "#000000"
    color_palette: str = Palette.PASTEL.value  # unknown names draw from pastel

    # stopping
    stopping_condition: StoppingCondition = StoppingCondition.COUNT
    min_distance: float = 20.0
    max_lines: int = 100

    # canvas
    start_point: Point = field(default_factory=lambda: Point(400.0, 300.0))
    canvas_width: float = 800.0
    canvas_height: float = 600.0

    def copy(self) -> "Parameters":
        return replace(self, start_point=self.start_point.copy())

    # ------------------------------- serialisation ---------------------------
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, Point):
                value = value.to_dict()
            data[_WIRE_KEYS[f.name]] = value
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any], *, base: Optional["Parameters"] = None) -> "Parameters":
        """Build parameters from a camelCase mapping.

        Keys that are missing are taken from ``base`` (the defaults when not
        given).  Unknown keys are ignored.
        """

        if not isinstance(data, dict):
            raise ParameterError("parameters must be an object")
        params = (base or Parameters()).copy()
        for f in fields(params):
            key = _WIRE_KEYS[f.name]
            if key not in data:
                continue
            setattr(params, f.name, _coerce(f.name, key, data[key]))
        return params


_WIRE_KEYS = {
    "length_mode": "lengthMode",
    "fixed_length": "fixedLength",
    "min_length": "minLength",
    "max_length": "maxLength",
    "angle_mode": "angleMode",
    "fixed_angle": "fixedAngle",
    "min_angle": "minAngle",
    "max_angle": "maxAngle",
    "color_mode": "colorMode",
    "fixed_color": "fixedColor",
    "color_palette": "colorPalette",
    "stopping_condition": "stoppingCondition",
    "min_distance": "minDistance",
    "max_lines": "maxLines",
    "start_point": "startPoint",
    "canvas_width": "canvasWidth",
    "canvas_height": "canvasHeight",
}

_ENUM_FIELDS = {
    "length_mode": LengthMode,
    "angle_mode": AngleMode,
    "color_mode": ColorMode,
    "stopping_condition": StoppingCondition,
}


def _as_float(value: Any, key: str) -> float:
    if isinstance(value, bool):
        raise ParameterError(f"{key} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ParameterError(f"{key} must be a number") from exc
    if not math.isfinite(number):
        raise ParameterError(f"{key} must be a finite number")
    return number


def _coerce(name: str, key: str, value: Any) -> Any:
    if name in _ENUM_FIELDS:
        enum_cls = _ENUM_FIELDS[name]
        try:
            return enum_cls(value)
        except ValueError as exc:
            allowed = ", ".join(m.value for m in enum_cls)
            raise ParameterError(f"{key} must be one of: {allowed}") from exc
    if name == "start_point":
        if not isinstance(value, dict) or "x" not in value or "y" not in value:
            raise ParameterError(f"{key} must be an object with x and y")
        return Point(_as_float(value["x"], f"{key}.x"), _as_float(value["y"], f"{key}.y"))
    if name == "max_lines":
        return int(_as_float(value, key))
    if name in ("fixed_color", "color_palette"):
        if not isinstance(value, str):
            raise ParameterError(f"{key} must be a string")
        return value
    return _as_float(value, key)


def default_parameters() -> Parameters:
    return Parameters()


def with_updates(params: Parameters, **changes: Any) -> Parameters:
    """Return a copy of ``params`` with the given fields replaced."""
    return replace(params.copy(), **changes)


def randomize_parameters(base: Parameters, rng: Optional[random.Random] = None) -> Parameters:
    """Draw a fresh set of modes and bounds, keeping colors and canvas geometry."""

    r = rng or random
    return with_updates(
        base,
        length_mode=LengthMode.FIXED if r.random() < 0.5 else LengthMode.RANDOM,
        fixed_length=float(r.randint(25, 174)),
        min_length=float(r.randint(10, 49)),
        max_length=float(r.randint(50, 249)),
        angle_mode=AngleMode.FIXED if r.random() < 0.5 else AngleMode.RANDOM,
        fixed_angle=float(r.randint(10, 179)),
        min_angle=float(r.randint(10, 69)),
        max_angle=float(r.randint(60, 179)),
        color_mode=ColorMode.FIXED if r.random() < 0.3 else ColorMode.RANDOM,
        color_palette=r.choice(list(Palette)).value,
        stopping_condition=r.choice(list(StoppingCondition)),
        min_distance=float(r.randint(10, 59)),
        max_lines=r.randint(50, 449),
    )


@dataclass
class AppSettings:
    """Settings for the HTTP server and command line tool."""

    preset_path: Path = field(default_factory=lambda: Path.home() / ".bendscape" / "presets.json")
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "AppSettings":
        settings = cls()
        if os.environ.get("BENDSCAPE_PRESETS"):
            settings.preset_path = Path(os.environ["BENDSCAPE_PRESETS"]).expanduser()
        if os.environ.get("BENDSCAPE_HOST"):
            settings.host = os.environ["BENDSCAPE_HOST"]
        if os.environ.get("BENDSCAPE_PORT"):
            settings.port = int(os.environ["BENDSCAPE_PORT"])
        return settings


__all__ = [
    "LengthMode",
    "AngleMode",
    "ColorMode",
    "Palette",
    "StoppingCondition",
    "Parameters",
    "default_parameters",
    "with_updates",
    "randomize_parameters",
    "AppSettings",
]
