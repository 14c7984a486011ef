"""Length, angle, color and stopping policies.

Each family is a closed set of plain functions keyed by its mode enum.  A
:class:`PolicySet` picks one function per family from a :class:`Parameters`
record and is never modified afterwards; changing parameters means building
a new set.

Inverted ranges (``min > max``) are not rejected.  The random draw collapses
to the lower bound instead, so ``min_length=100, max_length=20`` always yields
length 100 and ``min_angle=90, max_angle=10`` always turns by 90 degrees.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from .config import AngleMode, ColorMode, LengthMode, Palette, Parameters, StoppingCondition

if TYPE_CHECKING:  # pragma: no cover
    from .engine import GenerationState

Rng = random.Random
LengthPolicy = Callable[[Parameters, Rng], float]
AnglePolicy = Callable[[Parameters, float, Rng], float]
ColorPolicy = Callable[[Parameters, int, Rng], str]
StopPolicy = Callable[["GenerationState", Parameters], bool]

PALETTES: Dict[str, Tuple[str, ...]] = {
    Palette.PASTEL.value: (
        "#FFB3BA", "#FFDFBA", "#FFFFBA", "#BAFFC9", "#BAE1FF",
        "#FFB3E6", "#E6B3FF", "#B3D9FF", "#B3FFB3", "#FFCCB3",
    ),
    Palette.BOLD.value: (
        "#FF0000", "#00FF00", "#0000FF", "#FFFF00", "#FF00FF",
        "#00FFFF", "#FFA500", "#800080", "#FFC0CB", "#A52A2A",
    ),
    Palette.MONOCHROME.value: (
        "#000000", "#1A1A1A", "#333333", "#4D4D4D", "#666666",
        "#808080", "#999999", "#B3B3B3", "#CCCCCC", "#E6E6E6",
    ),
}

# Per-axis tolerance of the "exact" stopping condition, in canvas units.
EXACT_TOLERANCE = 2.0


def uniform_draw(lo: float, hi: float, rng: Rng) -> float:
    """Uniform value in ``[lo, hi)``; an empty or inverted range returns ``lo``."""
    if hi <= lo:
        return lo
    return lo + rng.random() * (hi - lo)


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def fixed_length(params: Parameters, rng: Rng) -> float:
    return params.fixed_length


def random_length(params: Parameters, rng: Rng) -> float:
    return uniform_draw(params.min_length, params.max_length, rng)


# ---------------------------------------------------------------------------
# Angle (returns the new absolute heading, not the turn)
# ---------------------------------------------------------------------------


def fixed_angle(params: Parameters, current_angle: float, rng: Rng) -> float:
    return current_angle + params.fixed_angle


def random_angle(params: Parameters, current_angle: float, rng: Rng) -> float:
    return current_angle + uniform_draw(params.min_angle, params.max_angle, rng)


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------


def fixed_color(params: Parameters, line_index: int, rng: Rng) -> str:
    return params.fixed_color


def random_color(params: Parameters, line_index: int, rng: Rng) -> str:
    palette = PALETTES.get(params.color_palette, PALETTES[Palette.PASTEL.value])
    return rng.choice(palette)


# ---------------------------------------------------------------------------
# Stopping (evaluated before every candidate segment)
# ---------------------------------------------------------------------------


def stop_on_distance(state: "GenerationState", params: Parameters) -> bool:
    # Distance is 0 before the first segment, so any positive min_distance
    # halts the run with no segments.
    return state.current_point.distance_to(params.start_point) <= params.min_distance


def stop_on_count(state: "GenerationState", params: Parameters) -> bool:
    return state.total_lines >= params.max_lines


def stop_on_exact(state: "GenerationState", params: Parameters) -> bool:
    dx = abs(state.current_point.x - params.start_point.x)
    dy = abs(state.current_point.y - params.start_point.y)
    return dx <= EXACT_TOLERANCE and dy <= EXACT_TOLERANCE and state.total_lines > 1


LENGTH_POLICIES: Dict[LengthMode, LengthPolicy] = {
    LengthMode.FIXED: fixed_length,
    LengthMode.RANDOM: random_length,
}

ANGLE_POLICIES: Dict[AngleMode, AnglePolicy] = {
    AngleMode.FIXED: fixed_angle,
    AngleMode.RANDOM: random_angle,
}

COLOR_POLICIES: Dict[ColorMode, ColorPolicy] = {
    ColorMode.FIXED: fixed_color,
    ColorMode.RANDOM: random_color,
    ColorMode.GRADIENT: random_color,
}

STOP_POLICIES: Dict[StoppingCondition, StopPolicy] = {
    StoppingCondition.DISTANCE: stop_on_distance,
    StoppingCondition.COUNT: stop_on_count,
    StoppingCondition.EXACT: stop_on_exact,
}


@dataclass(frozen=True)
class PolicySet:
    """The four policies selected for one run."""

    length: LengthPolicy
    angle: AnglePolicy
    color: ColorPolicy
    should_stop: StopPolicy
    rng: Rng = field(default_factory=random.Random)

    @classmethod
    def from_parameters(cls, params: Parameters, rng: Optional[Rng] = None) -> "PolicySet":
        return cls(
            length=LENGTH_POLICIES[params.length_mode],
            angle=ANGLE_POLICIES[params.angle_mode],
            color=COLOR_POLICIES[params.color_mode],
            should_stop=STOP_POLICIES[params.stopping_condition],
            rng=rng if rng is not None else random.Random(),
        )

    def next_length(self, params: Parameters) -> float:
        return self.length(params, self.rng)

    def next_angle(self, params: Parameters, current_angle: float) -> float:
        return self.angle(params, current_angle, self.rng)

    def next_color(self, params: Parameters, line_index: int) -> str:
        return self.color(params, line_index, self.rng)


__all__ = [
    "PALETTES",
    "EXACT_TOLERANCE",
    "uniform_draw",
    "fixed_length",
    "random_length",
    "fixed_angle",
    "random_angle",
    "fixed_color",
    "random_color",
    "stop_on_distance",
    "stop_on_count",
    "stop_on_exact",
    "LENGTH_POLICIES",
    "ANGLE_POLICIES",
    "COLOR_POLICIES",
    "STOP_POLICIES",
    "PolicySet",
]
