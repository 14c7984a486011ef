"""The segment generation state machine.

A run starts from :meth:`GenerationEngine.reset`, then calls
:meth:`GenerationEngine.step` until the state is complete.  ``step`` only
creates the next segment and advances the cursor; collecting segments into
the state is done by :meth:`GenerationEngine.run` (or by whoever drives
``step`` directly).
"""
from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from .config import Parameters
from .geometry import Point, Segment, endpoint, total_length
from .policies import PolicySet

logger = logging.getLogger(__name__)

# Hard ceiling on segments per run; reaching it forces completion.
MAX_SEGMENTS = 10000


class StopReason(str, Enum):
    POLICY = "policy"
    SAFETY_LIMIT = "safety_limit"


@dataclass
class GenerationState:
    segments: List[Segment] = field(default_factory=list)
    current_point: Point = field(default_factory=Point)
    current_angle: float = 0.0
    is_complete: bool = False
    total_lines: int = 0
    stop_reason: Optional[StopReason] = None

    def complete(self, reason: StopReason) -> None:
        """Flip to complete.  The first reason wins; completion is final."""
        if self.is_complete:
            return
        self.is_complete = True
        self.stop_reason = reason

    def summary(self) -> Dict[str, Any]:
        return {
            "segments": len(self.segments),
            "total_lines": self.total_lines,
            "total_length": total_length(self.segments),
            "is_complete": self.is_complete,
            "stop_reason": self.stop_reason.value if self.stop_reason else None,
            "current_point": self.current_point.to_dict(),
            "current_angle": self.current_angle,
        }


class GenerationEngine:
    """Drive runs with policies selected from a parameter record.

    The engine keeps one :class:`PolicySet` for callers that drive
    :meth:`step` themselves, once it has been given parameters either on
    construction or through :meth:`update_parameters`, which replaces it as a
    whole.  :meth:`run` never reads it and builds its own set from the
    parameters it was handed, so a run is unaffected by updates made while it
    is in flight.
    """

    def __init__(self, params: Optional[Parameters] = None, *, rng: Optional[random.Random] = None) -> None:
        self._rng = rng
        self._lock = threading.Lock()
        self._policies: Optional[PolicySet] = None
        if params is not None:
            self._policies = PolicySet.from_parameters(params, rng)

    @property
    def policies(self) -> Optional[PolicySet]:
        with self._lock:
            return self._policies

    def update_parameters(self, params: Parameters) -> None:
        policies = PolicySet.from_parameters(params, self._rng)
        with self._lock:
            self._policies = policies

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------
    def reset(self, params: Parameters) -> GenerationState:
        return GenerationState(current_point=params.start_point.copy())

    def step(
        self,
        state: GenerationState,
        params: Parameters,
        policies: Optional[PolicySet] = None,
    ) -> Optional[Segment]:
        """Produce the next segment, or ``None`` once the state is complete.

        Policies come from ``policies`` when given, else from the set the
        engine holds.  An engine that was never given parameters selects them
        from ``params`` on every call.
        """

        if state.is_complete:
            return None
        if policies is None:
            policies = self.policies or PolicySet.from_parameters(params, self._rng)

        if policies.should_stop(state, params):
            state.complete(StopReason.POLICY)
            return None

        length = policies.next_length(params)
        angle = policies.next_angle(params, state.current_angle)
        end = endpoint(state.current_point, length, angle)
        color = policies.next_color(params, state.total_lines)

        segment = Segment(
            start=state.current_point.copy(),
            end=end,
            length=length,
            angle=angle,
            color=color,
        )

        state.current_point = end
        state.current_angle = angle
        state.total_lines += 1
        return segment

    def iter_segments(self, params: Parameters, state: Optional[GenerationState] = None) -> Iterator[Segment]:
        """Yield segments one at a time until the run completes.

        The segments are appended to ``state`` (a fresh one when not given)
        before being yielded, so the state is always consistent with what
        the caller has seen.
        """

        params = params.copy()
        policies = PolicySet.from_parameters(params, self._rng)
        if state is None:
            state = self.reset(params)

        while not state.is_complete:
            segment = self.step(state, params, policies)
            if segment is None:
                break
            state.segments.append(segment)
            yield segment
            if state.total_lines >= MAX_SEGMENTS and not policies.should_stop(state, params):
                logger.warning(
                    "Safety limit of %d segments reached; forcing completion", MAX_SEGMENTS
                )
                state.complete(StopReason.SAFETY_LIMIT)

    def run(self, params: Parameters) -> GenerationState:
        """Execute one full run and return its terminal state."""

        state = self.reset(params)
        logger.debug(
            "begin run: length=%s angle=%s color=%s stop=%s",
            params.length_mode.value,
            params.angle_mode.value,
            params.color_mode.value,
            params.stopping_condition.value,
        )
        for _ in self.iter_segments(params, state):
            pass
        logger.debug(
            "end run: segments=%d reason=%s",
            len(state.segments),
            state.stop_reason.value if state.stop_reason else None,
        )
        return state


__all__ = ["MAX_SEGMENTS", "StopReason", "GenerationState", "GenerationEngine"]
