"""Geometry primitives for Bendscape drawings.

A drawing is an ordered list of :class:`Segment` objects.  Each segment keeps
the absolute heading it was drawn with so exports can annotate it, and knows
how to convert itself to the plain dictionaries used by the JSON export.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple
import math

XY = Tuple[float, float]


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


@dataclass
class Point:
    """Plain 2D coordinate in canvas units (y grows downwards)."""

    x: float = 0.0
    y: float = 0.0

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> XY:
        return self.x, self.y

    def copy(self) -> "Point":
        return Point(self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        return {"x": float(self.x), "y": float(self.y)}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Point":
        return Point(float(data["x"]), float(data["y"]))


@dataclass(frozen=True)
class Segment:
    """One generated line.

    ``angle`` is the absolute heading in degrees at the time the segment was
    drawn.  It accumulates across turns and is never wrapped into [0, 360).
    """

    start: Point
    end: Point
    length: float
    angle: float
    color: str

    def midpoint(self) -> XY:
        return 0.5 * (self.start.x + self.end.x), 0.5 * (self.start.y + self.end.y)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "length": float(self.length),
            "angle": float(self.angle),
            "color": self.color,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Segment":
        return Segment(
            start=Point.from_dict(data["start"]),
            end=Point.from_dict(data["end"]),
            length=float(data["length"]),
            angle=float(data["angle"]),
            color=str(data["color"]),
        )


def endpoint(origin: Point, length: float, angle_deg: float) -> Point:
    """Walk ``length`` units from ``origin`` along heading ``angle_deg``."""
    a = math.radians(angle_deg)
    return Point(origin.x + math.cos(a) * length, origin.y + math.sin(a) * length)


# ---------------------------------------------------------------------------
# Sequence helpers
# ---------------------------------------------------------------------------


def total_length(segments: Iterable[Segment]) -> float:
    return sum(seg.length for seg in segments)


def bounding_box(segments: Iterable[Segment]) -> Optional[Tuple[XY, XY]]:
    xs = []
    ys = []
    for seg in segments:
        xs.extend((seg.start.x, seg.end.x))
        ys.extend((seg.start.y, seg.end.y))
    if not xs:
        return None
    return (min(xs), min(ys)), (max(xs), max(ys))


__all__ = [
    "XY",
    "Point",
    "Segment",
    "endpoint",
    "total_length",
    "bounding_box",
]
