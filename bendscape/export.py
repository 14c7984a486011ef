"""SVG and JSON export of finished drawings.

The exports mirror what the browser application writes: an SVG with a white
background, one ``<line>`` per segment and a red marker at the start point,
and a JSON document carrying the parameters, the segments and a small
metadata block.
"""
from __future__ import annotations

import html
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .config import Parameters
from .engine import GenerationState
from .errors import BendscapeError, ExportError
from .geometry import Segment, total_length

STROKE_WIDTH = 2
START_MARKER_RADIUS = 4
START_MARKER_COLOR = "red"


def _num(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


# ---------------------------------------------------------------------------
# SVG
# ---------------------------------------------------------------------------


def to_svg(state: GenerationState, params: Parameters, *, annotations: bool = False) -> str:
    """Render the segments of ``state`` as a standalone SVG document."""

    body: List[str] = ['<rect width="100%" height="100%" fill="white"/>']
    for seg in state.segments:
        body.append(
            f'<line x1="{_num(seg.start.x)}" y1="{_num(seg.start.y)}" '
            f'x2="{_num(seg.end.x)}" y2="{_num(seg.end.y)}" '
            f'stroke="{html.escape(seg.color, quote=True)}" stroke-width="{STROKE_WIDTH}"/>'
        )
        if annotations:
            mx, my = seg.midpoint()
            body.append(
                f'<text x="{_num(mx + 5)}" y="{_num(my - 5)}" fill="black" font-size="10" '
                f'font-family="Arial">L:{seg.length:.1f}</text>'
            )
            body.append(
                f'<text x="{_num(mx + 5)}" y="{_num(my + 10)}" fill="black" font-size="10" '
                f'font-family="Arial">A:{seg.angle:.1f}°</text>'
            )
    sp = params.start_point
    body.append(
        f'<circle cx="{_num(sp.x)}" cy="{_num(sp.y)}" r="{START_MARKER_RADIUS}" '
        f'fill="{START_MARKER_COLOR}"/>'
    )
    return (
        f'<svg width="{_num(params.canvas_width)}" height="{_num(params.canvas_height)}" '
        f'xmlns="http://www.w3.org/2000/svg">' + "".join(body) + "</svg>"
    )


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def _timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def export_dict(state: GenerationState, params: Parameters, *, exported_at: Optional[str] = None) -> Dict[str, Any]:
    return {
        "parameters": params.to_dict(),
        "segments": [seg.to_dict() for seg in state.segments],
        "metadata": {
            "totalSegments": len(state.segments),
            "totalLength": total_length(state.segments),
            "exportedAt": exported_at or _timestamp(),
        },
    }


def to_json(state: GenerationState, params: Parameters, *, exported_at: Optional[str] = None) -> str:
    try:
        return json.dumps(export_dict(state, params, exported_at=exported_at), indent=2)
    except (TypeError, ValueError) as exc:
        raise ExportError(f"Could not serialise drawing: {exc}") from exc


def from_json(text: str) -> Tuple[Parameters, List[Segment]]:
    """Parse a document written by :func:`to_json`."""

    try:
        data = json.loads(text)
    except ValueError as exc:
        raise ExportError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict) or "parameters" not in data or "segments" not in data:
        raise ExportError("Export document needs 'parameters' and 'segments'")
    try:
        params = Parameters.from_dict(data["parameters"])
        segments = [Segment.from_dict(item) for item in data["segments"]]
    except BendscapeError as exc:
        raise ExportError(str(exc)) from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise ExportError(f"Malformed segment: {exc!r}") from exc
    return params, segments


def state_from_segments(params: Parameters, segments: List[Segment]) -> GenerationState:
    """Rebuild a completed state around previously generated segments."""

    state = GenerationState(segments=list(segments), current_point=params.start_point.copy())
    if segments:
        state.current_point = segments[-1].end.copy()
        state.current_angle = segments[-1].angle
    state.total_lines = len(segments)
    state.is_complete = True
    return state


# ---------------------------------------------------------------------------
# Front-end preview
# ---------------------------------------------------------------------------


def preview_strokes(state: GenerationState, *, width: float = STROKE_WIDTH) -> Dict[str, Any]:
    strokes = []
    for seg in state.segments:
        strokes.append(
            {
                "pts": [list(seg.start.as_tuple()), list(seg.end.as_tuple())],
                "color": seg.color,
                "width": width,
            }
        )
    return {"strokes": strokes, "complete": state.is_complete}


__all__ = [
    "to_svg",
    "export_dict",
    "to_json",
    "from_json",
    "state_from_segments",
    "preview_strokes",
]
