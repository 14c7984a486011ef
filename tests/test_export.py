import json

import pytest

from bendscape.config import LengthMode, Parameters, with_updates
from bendscape.engine import GenerationEngine
from bendscape.errors import ExportError
from bendscape.export import (
    export_dict,
    from_json,
    preview_strokes,
    state_from_segments,
    to_json,
    to_svg,
)


@pytest.fixture
def square_state(square_params):
    return GenerationEngine(square_params).run(square_params)


def test_svg_structure(square_state, square_params):
    svg = to_svg(square_state, square_params)
    assert svg.startswith('<svg width="800" height="600" xmlns="http://www.w3.org/2000/svg">')
    assert svg.endswith("</svg>")
    assert '<rect width="100%" height="100%" fill="white"/>' in svg
    assert svg.count("<line ") == 4
    assert svg.count('stroke="#123456" stroke-width="2"') == 4
    assert '<circle cx="0" cy="0" r="4" fill="red"/>' in svg
    assert "<text" not in svg


def test_svg_first_line_coordinates(square_state, square_params):
    svg = to_svg(square_state, square_params)
    first = svg.split("<line ", 2)[1]
    assert first.startswith('x1="0" y1="0" x2=')


def test_svg_annotations(square_state, square_params):
    svg = to_svg(square_state, square_params, annotations=True)
    assert svg.count("<text") == 8
    assert ">L:50.0</text>" in svg
    assert ">A:90.0°</text>" in svg
    assert ">A:360.0°</text>" in svg


def test_svg_escapes_color(square_params):
    params = with_updates(square_params, fixed_color='"><script>')
    state = GenerationEngine(params).run(params)
    svg = to_svg(state, params)
    assert "<script>" not in svg


def test_json_layout(square_state, square_params):
    data = json.loads(to_json(square_state, square_params, exported_at="2024-01-01T00:00:00.000Z"))
    assert set(data) == {"parameters", "segments", "metadata"}
    assert data["parameters"]["lengthMode"] == "fixed"
    assert data["parameters"]["startPoint"] == {"x": 0.0, "y": 0.0}
    assert data["segments"][0]["start"] == {"x": 0.0, "y": 0.0}
    assert data["metadata"] == {
        "totalSegments": 4,
        "totalLength": 200.0,
        "exportedAt": "2024-01-01T00:00:00.000Z",
    }


def test_json_default_timestamp_is_utc(square_state, square_params):
    stamp = export_dict(square_state, square_params)["metadata"]["exportedAt"]
    assert stamp.endswith("Z")
    assert "T" in stamp


def test_json_round_trip(square_params, rng):
    params = with_updates(square_params, length_mode=LengthMode.RANDOM, max_lines=30)
    state = GenerationEngine(params, rng=rng).run(params)
    loaded_params, segments = from_json(to_json(state, params))
    assert loaded_params == params
    assert segments == state.segments


def test_from_json_rejects_garbage():
    with pytest.raises(ExportError):
        from_json("not json")
    with pytest.raises(ExportError):
        from_json(json.dumps({"segments": []}))
    with pytest.raises(ExportError):
        from_json(json.dumps({"parameters": {}, "segments": [{"start": {"x": 0}}]}))
    with pytest.raises(ExportError):
        from_json(json.dumps({"parameters": {"lengthMode": "spiral"}, "segments": []}))


def test_from_json_accepts_browser_export():
    doc = {
        "parameters": {"lengthMode": "fixed", "fixedLength": 50, "maxLines": 2},
        "segments": [
            {"start": {"x": 0, "y": 0}, "end": {"x": 50, "y": 0}, "length": 50, "angle": 0, "color": "#000"},
        ],
        "metadata": {"totalSegments": 1, "totalLength": 50, "exportedAt": "x"},
    }
    params, segments = from_json(json.dumps(doc))
    assert params.max_lines == 2
    assert segments[0].end.x == 50.0


def test_state_from_segments(square_state, square_params):
    state = state_from_segments(square_params, square_state.segments)
    assert state.is_complete
    assert state.total_lines == 4
    assert state.current_angle == 360.0
    assert state.segments is not square_state.segments


def test_preview_strokes(square_state):
    out = preview_strokes(square_state)
    assert out["complete"] is True
    assert len(out["strokes"]) == 4
    assert out["strokes"][0]["pts"][0] == [0.0, 0.0]
    assert out["strokes"][0]["color"] == "#123456"


def test_empty_drawing_exports(square_params):
    params = Parameters.from_dict({"maxLines": 0}, base=square_params)
    state = GenerationEngine(params).run(params)
    assert "<line" not in to_svg(state, params)
    assert json.loads(to_json(state, params))["metadata"]["totalSegments"] == 0
