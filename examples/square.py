"""Example script that configures a closed square and asks the server to draw it."""
from __future__ import annotations

import requests

from bendscape.config import AngleMode, LengthMode, Parameters, StoppingCondition
from bendscape.geometry import Point

SERVER = "http://localhost:8000"


def build_square(side: float = 50.0) -> Parameters:
    return Parameters(
        length_mode=LengthMode.FIXED,
        fixed_length=side,
        angle_mode=AngleMode.FIXED,
        fixed_angle=90.0,
        stopping_condition=StoppingCondition.COUNT,
        max_lines=4,
        start_point=Point(400.0, 300.0),
    )


def main() -> None:
    res = requests.put(f"{SERVER}/api/parameters", json=build_square().to_dict(), timeout=5)
    res.raise_for_status()
    res = requests.post(f"{SERVER}/api/generate", timeout=5)
    res.raise_for_status()
    print(res.json())
    svg = requests.get(f"{SERVER}/api/export/svg", timeout=5)
    svg.raise_for_status()
    with open("square.svg", "w", encoding="utf-8") as fh:
        fh.write(svg.text)


if __name__ == "__main__":
    main()
