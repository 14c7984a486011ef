import pytest

from bendscape.config import AngleMode, ColorMode, LengthMode, Palette, StoppingCondition, with_updates
from bendscape.engine import GenerationState
from bendscape.geometry import Point
from bendscape.policies import (
    PALETTES,
    PolicySet,
    fixed_angle,
    fixed_color,
    fixed_length,
    random_angle,
    random_color,
    random_length,
    stop_on_count,
    stop_on_distance,
    stop_on_exact,
    uniform_draw,
)


def test_fixed_length_ignores_range(square_params, rng):
    params = with_updates(square_params, min_length=1.0, max_length=2.0)
    assert fixed_length(params, rng) == 50.0


def test_random_length_stays_in_half_open_range(square_params, rng):
    params = with_updates(square_params, min_length=20.0, max_length=100.0)
    values = [random_length(params, rng) for _ in range(500)]
    assert all(20.0 <= v < 100.0 for v in values)
    assert len(set(values)) > 1


def test_random_length_inverted_range_collapses_to_min(square_params, rng):
    params = with_updates(square_params, min_length=100.0, max_length=20.0)
    assert {random_length(params, rng) for _ in range(50)} == {100.0}


def test_uniform_draw_empty_range(rng):
    assert uniform_draw(5.0, 5.0, rng) == 5.0


def test_fixed_angle_accumulates(square_params, rng):
    assert fixed_angle(square_params, 270.0, rng) == 360.0


def test_random_angle_delta_in_range(square_params, rng):
    params = with_updates(square_params, min_angle=30.0, max_angle=60.0)
    for _ in range(500):
        delta = random_angle(params, 0.0, rng)
        assert 30.0 <= delta < 60.0


def test_random_angle_inverted_range_turns_by_min(square_params, rng):
    params = with_updates(square_params, min_angle=90.0, max_angle=10.0)
    assert random_angle(params, 0.0, rng) == 90.0


def test_fixed_color_verbatim(square_params, rng):
    assert fixed_color(square_params, 7, rng) == "#123456"


@pytest.mark.parametrize("palette", [p.value for p in Palette])
def test_random_color_uses_selected_palette(square_params, rng, palette):
    params = with_updates(square_params, color_palette=palette)
    assert all(random_color(params, i, rng) in PALETTES[palette] for i in range(50))


def test_unknown_palette_falls_back_to_pastel(square_params, rng):
    params = with_updates(square_params, color_palette="neon")
    assert random_color(params, 0, rng) in PALETTES["pastel"]


def test_palettes_have_ten_entries():
    assert all(len(colors) == 10 for colors in PALETTES.values())


def test_distance_stop_halts_at_start(square_params):
    params = with_updates(square_params, min_distance=20.0)
    state = GenerationState(current_point=Point(0.0, 0.0))
    assert stop_on_distance(state, params) is True
    state.current_point = Point(30.0, 0.0)
    assert stop_on_distance(state, params) is False


def test_count_stop(square_params):
    state = GenerationState(total_lines=3)
    assert stop_on_count(state, square_params) is False
    state.total_lines = 4
    assert stop_on_count(state, square_params) is True


def test_exact_stop_needs_more_than_one_line(square_params):
    state = GenerationState(current_point=Point(1.5, -2.0), total_lines=1)
    assert stop_on_exact(state, square_params) is False
    state.total_lines = 2
    assert stop_on_exact(state, square_params) is True
    state.current_point = Point(2.5, 0.0)
    assert stop_on_exact(state, square_params) is False


def test_policy_set_selection(square_params):
    params = with_updates(
        square_params,
        length_mode=LengthMode.RANDOM,
        angle_mode=AngleMode.RANDOM,
        color_mode=ColorMode.GRADIENT,
        stopping_condition=StoppingCondition.EXACT,
    )
    policies = PolicySet.from_parameters(params)
    assert policies.length is random_length
    assert policies.angle is random_angle
    assert policies.color is random_color
    assert policies.should_stop is stop_on_exact


def test_policy_set_is_immutable(square_params):
    policies = PolicySet.from_parameters(square_params)
    with pytest.raises(AttributeError):
        policies.length = random_length
