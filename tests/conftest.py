import random

import pytest

from bendscape.config import AngleMode, ColorMode, LengthMode, Parameters, StoppingCondition
from bendscape.geometry import Point
from bendscape.presets import PresetStore


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def square_params():
    return Parameters(
        length_mode=LengthMode.FIXED,
        fixed_length=50.0,
        angle_mode=AngleMode.FIXED,
        fixed_angle=90.0,
        color_mode=ColorMode.FIXED,
        fixed_color="#123456",
        stopping_condition=StoppingCondition.COUNT,
        max_lines=4,
        start_point=Point(0.0, 0.0),
    )


@pytest.fixture
def store(tmp_path):
    return PresetStore(tmp_path / "presets.json")
