"""Top-level package for Bendscape.

Bendscape grows line art one segment at a time: each step picks a length, a
turn and a color from configurable policies until a stopping condition is
met.  The package exposes the parameter model, the generation engine and the
SVG/JSON exporters.
"""

from .geometry import Point, Segment
from .config import Parameters, default_parameters
from .engine import GenerationEngine, GenerationState, StopReason, MAX_SEGMENTS
from .controller import BendscapeController

__all__ = [
    "Point",
    "Segment",
    "Parameters",
    "default_parameters",
    "GenerationEngine",
    "GenerationState",
    "StopReason",
    "MAX_SEGMENTS",
    "BendscapeController",
]
