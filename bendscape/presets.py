"""Named parameter presets kept in a small JSON file.

The file is a key-value store: each namespace key maps to a list of presets,
so several tools can share one file.  Saving a name that already exists
replaces the old entry (last write wins).
"""
from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import Parameters
from .errors import BendscapeError, PresetError

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "bendscape-presets"


@dataclass
class Preset:
    name: str
    parameters: Parameters
    timestamp: int  # epoch milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "parameters": self.parameters.to_dict(),
            "timestamp": self.timestamp,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Preset":
        return Preset(
            name=str(data["name"]),
            parameters=Parameters.from_dict(data["parameters"]),
            timestamp=int(data.get("timestamp", 0)),
        )


class PresetStore:
    """Load, save and delete presets in a JSON file."""

    def __init__(self, path: Union[str, Path], *, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.path = Path(path)
        self.namespace = namespace

    # ------------------------------------------------------------------
    def load_all(self) -> List[Preset]:
        """Return all presets; an unreadable store reads as empty."""

        raw = self._read_file().get(self.namespace, [])
        if not isinstance(raw, list):
            logger.warning("Preset namespace %s in %s is not a list; ignoring", self.namespace, self.path)
            return []
        presets: List[Preset] = []
        for item in raw:
            try:
                presets.append(Preset.from_dict(item))
            except (BendscapeError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping unreadable preset in %s: %s", self.path, exc)
        return presets

    def names(self) -> List[str]:
        return [p.name for p in self.load_all()]

    def get(self, name: str) -> Optional[Preset]:
        for preset in self.load_all():
            if preset.name == name:
                return preset
        return None

    def save(self, name: str, parameters: Parameters) -> Preset:
        preset = Preset(name=name, parameters=parameters.copy(), timestamp=int(time.time() * 1000))
        presets = [p for p in self.load_all() if p.name != name]
        presets.append(preset)
        self._write(presets)
        logger.info("Saved preset %r to %s", name, self.path)
        return preset

    def delete(self, name: str) -> bool:
        presets = self.load_all()
        kept = [p for p in presets if p.name != name]
        if len(kept) == len(presets):
            return False
        self._write(kept)
        logger.info("Deleted preset %r from %s", name, self.path)
        return True

    # ------------------------------------------------------------------
    def _read_file(self) -> Dict[str, Any]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Could not read preset store %s: %s", self.path, exc)
            return {}
        try:
            data = json.loads(text)
        except ValueError as exc:
            logger.warning("Preset store %s is not valid JSON: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _read_for_update(self) -> Dict[str, Any]:
        """Read the store before rewriting it; anything unreadable is an error."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise PresetError(f"Could not read preset store {self.path}: {exc}") from exc
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise PresetError(f"Preset store {self.path} is not valid JSON; refusing to overwrite it") from exc
        if not isinstance(data, dict):
            raise PresetError(f"Preset store {self.path} is not a JSON object; refusing to overwrite it")
        return data

    def _write(self, presets: List[Preset]) -> None:
        data = self._read_for_update()
        data[self.namespace] = [p.to_dict() for p in presets]
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            raise PresetError(f"Could not write presets to {self.path}: {exc}") from exc


__all__ = ["DEFAULT_NAMESPACE", "Preset", "PresetStore"]
