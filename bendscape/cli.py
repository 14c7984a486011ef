"""Command line entry point: generate drawings and manage presets."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import AppSettings, Parameters, default_parameters
from .engine import GenerationEngine
from .errors import BendscapeError
from .export import to_json, to_svg
from .presets import PresetStore

logger = logging.getLogger("bendscape")

# CLI flag -> camelCase parameter key
_OVERRIDES = {
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
    "palette": "colorPalette",
    "stop": "stoppingCondition",
    "min_distance": "minDistance",
    "max_lines": "maxLines",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bendscape", description="Generate bent line art.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--presets", type=Path, default=None, help="Preset store (default: $BENDSCAPE_PRESETS)")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Run one generation and write the result")
    src = gen.add_mutually_exclusive_group()
    src.add_argument("--params", type=Path, help="JSON file with camelCase parameters")
    src.add_argument("--preset", help="Name of a saved preset")
    gen.add_argument("--svg", type=Path, help="Write SVG to this path")
    gen.add_argument("--json", type=Path, help="Write JSON export to this path")
    gen.add_argument("--annotate", action="store_true", help="Add length/angle labels to the SVG")
    gen.add_argument("--save-preset", metavar="NAME", help="Store the final parameters as a preset")
    gen.add_argument("--length-mode", choices=["fixed", "random"])
    gen.add_argument("--fixed-length", type=float)
    gen.add_argument("--min-length", type=float)
    gen.add_argument("--max-length", type=float)
    gen.add_argument("--angle-mode", choices=["fixed", "random"])
    gen.add_argument("--fixed-angle", type=float)
    gen.add_argument("--min-angle", type=float)
    gen.add_argument("--max-angle", type=float)
    gen.add_argument("--color-mode", choices=["fixed", "random", "gradient"])
    gen.add_argument("--fixed-color")
    gen.add_argument("--palette", choices=["pastel", "bold", "monochrome"])
    gen.add_argument("--stop", choices=["distance", "count", "exact"])
    gen.add_argument("--min-distance", type=float)
    gen.add_argument("--max-lines", type=int)

    pre = sub.add_parser("presets", help="List or delete saved presets")
    pre_sub = pre.add_subparsers(dest="action", required=True)
    pre_sub.add_parser("list", help="List preset names")
    rm = pre_sub.add_parser("delete", help="Delete a preset")
    rm.add_argument("name")
    return parser


def _load_parameters(args: argparse.Namespace, store: PresetStore) -> Parameters:
    if args.params is not None:
        params = Parameters.from_dict(json.loads(args.params.read_text(encoding="utf-8")))
    elif args.preset is not None:
        preset = store.get(args.preset)
        if preset is None:
            raise BendscapeError(f"Unknown preset: {args.preset}")
        params = preset.parameters
    else:
        params = default_parameters()
    overrides = {
        key: getattr(args, attr) for attr, key in _OVERRIDES.items() if getattr(args, attr) is not None
    }
    return Parameters.from_dict(overrides, base=params) if overrides else params


def _cmd_generate(args: argparse.Namespace, store: PresetStore) -> int:
    params = _load_parameters(args, store)
    state = GenerationEngine(params).run(params)
    if args.svg:
        args.svg.write_text(to_svg(state, params, annotations=args.annotate), encoding="utf-8")
        logger.info("Wrote %s", args.svg)
    if args.json:
        args.json.write_text(to_json(state, params), encoding="utf-8")
        logger.info("Wrote %s", args.json)
    if args.save_preset:
        store.save(args.save_preset, params)
    summary = state.summary()
    print(
        "Segments: {segments}, total length: {total_length:.2f}, stopped by: {stop_reason}".format(**summary)
    )
    return 0


def _cmd_presets(args: argparse.Namespace, store: PresetStore) -> int:
    if args.action == "list":
        for preset in store.load_all():
            print(preset.name)
        return 0
    if not store.delete(args.name):
        print(f"No preset named {args.name!r}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    store = PresetStore(args.presets or AppSettings.from_env().preset_path)
    try:
        if args.command == "generate":
            return _cmd_generate(args, store)
        return _cmd_presets(args, store)
    except (BendscapeError, OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 2


__all__ = ["build_parser", "main"]
