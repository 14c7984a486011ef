"""High level orchestration for the Bendscape server and CLI."""
from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import Parameters, default_parameters, randomize_parameters
from .engine import GenerationEngine, GenerationState
from .export import from_json, preview_strokes, state_from_segments, to_json, to_svg
from .geometry import bounding_box
from .presets import Preset, PresetStore

logger = logging.getLogger(__name__)


@dataclass
class BendscapeController:
    """Coordinate parameters, generation, export and presets.

    Parameter updates and state swaps happen under a lock.  Generation runs
    outside it on a snapshot of the parameters taken when the run starts.
    """

    presets: Optional[PresetStore] = None
    parameters: Parameters = field(default_factory=default_parameters)
    rng: Optional[random.Random] = None

    def __post_init__(self) -> None:
        self.engine = GenerationEngine(self.parameters, rng=self.rng)
        self._lock = threading.Lock()
        self._state = self.engine.reset(self.parameters)

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------
    def get_parameters(self) -> Parameters:
        with self._lock:
            return self.parameters.copy()

    def set_parameters(self, params: Parameters) -> Parameters:
        params = params.copy()
        with self._lock:
            self.parameters = params
            self.engine.update_parameters(params)
        return params.copy()

    def update_parameters(self, data: Dict[str, Any]) -> Parameters:
        """Apply a partial camelCase mapping on top of the current parameters."""
        return self.set_parameters(Parameters.from_dict(data, base=self.get_parameters()))

    def reset_parameters(self) -> Parameters:
        return self.set_parameters(default_parameters())

    def randomize(self) -> Parameters:
        return self.set_parameters(randomize_parameters(self.get_parameters(), self.rng))

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def generate(self) -> GenerationState:
        params = self.get_parameters()
        state = self.engine.run(params)
        logger.info(
            "Generated %d segments (%s)",
            len(state.segments),
            state.stop_reason.value if state.stop_reason else "unknown",
        )
        with self._lock:
            self._state = state
        return state

    def clear(self) -> GenerationState:
        with self._lock:
            self._state = self.engine.reset(self.parameters)
            return self._state

    @property
    def state(self) -> GenerationState:
        with self._lock:
            return self._state

    def summary(self) -> Dict[str, Any]:
        with self._lock:
            state = self._state
        out = state.summary()
        bbox = bounding_box(state.segments)
        out["bounding_box"] = None if bbox is None else [list(bbox[0]), list(bbox[1])]
        return out

    def strokes(self) -> Dict[str, Any]:
        return preview_strokes(self.state)

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------
    def export_svg(self, *, annotations: bool = False) -> str:
        with self._lock:
            state, params = self._state, self.parameters.copy()
        return to_svg(state, params, annotations=annotations)

    def export_json(self) -> str:
        with self._lock:
            state, params = self._state, self.parameters.copy()
        return to_json(state, params)

    def import_json(self, text: str) -> GenerationState:
        params, segments = from_json(text)
        state = state_from_segments(params, segments)
        with self._lock:
            self.parameters = params
            self.engine.update_parameters(params)
            self._state = state
        return state

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------
    def _store(self) -> PresetStore:
        if self.presets is None:
            raise RuntimeError("No preset store configured")
        return self.presets

    def list_presets(self) -> List[Preset]:
        return self._store().load_all()

    def save_preset(self, name: str) -> Preset:
        return self._store().save(name, self.get_parameters())

    def load_preset(self, name: str) -> Optional[Parameters]:
        preset = self._store().get(name)
        if preset is None:
            return None
        return self.set_parameters(preset.parameters)

    def delete_preset(self, name: str) -> bool:
        return self._store().delete(name)


__all__ = ["BendscapeController"]
