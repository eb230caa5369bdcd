import math

import numpy as np
import pytest

from palette_mixer.blender import blend, lerp, ratio_label, squared_distance, squared_distances
from palette_mixer.color import Color, from_hex
from palette_mixer.errors import InvalidArgument

RED = Color(1.0, 0.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)


def test_red_blue_halfway():
    assert blend(RED, BLUE, 0.5) == Color(0.5, 0.0, 0.5)


def test_black_white_quarter():
    black = Color(0.0, 0.0, 0.0)
    white = Color(1.0, 1.0, 1.0)
    assert blend(black, white, 0.25) == Color(0.25, 0.25, 0.25)


def test_boundaries_return_inputs():
    a = Color(0.2, 0.7, 0.1)
    b = Color(0.9, 0.1, 0.3)
    assert blend(a, b, 0.0) == a
    assert blend(a, b, 1.0) == b


def test_midpoint_is_channel_mean():
    a = Color(0.2, 0.7, 0.1)
    b = Color(0.9, 0.1, 0.3)
    mid = blend(a, b, 0.5)
    assert np.allclose(mid.as_array(), (a.as_array() + b.as_array()) / 2, atol=1e-12)


def test_symmetry():
    a = Color(0.05, 0.2, 0.9)
    b = Color(0.8, 0.7, 0.1)
    t = 0.37
    assert np.allclose(blend(a, b, t).as_array(), blend(b, a, 1 - t).as_array(), atol=1e-12)


def test_channel_bounds():
    rng = np.random.default_rng(0)
    for _ in range(50):
        a = Color.from_array(rng.random(3))
        b = Color.from_array(rng.random(3))
        for t in np.linspace(0, 1, 9):
            rgb = blend(a, b, float(t)).as_array()
            assert np.all((rgb >= 0.0) & (rgb <= 1.0))


@pytest.mark.parametrize("ratio", [-0.1, 1.5, math.nan, math.inf, "half", None, True])
def test_out_of_range_ratio_is_rejected(ratio):
    with pytest.raises(InvalidArgument):
        blend(RED, BLUE, ratio)


def test_squared_distance():
    c = Color(0.3, 0.6, 0.9)
    assert squared_distance(c, c) == 0.0
    assert squared_distance(RED, BLUE) == pytest.approx(2.0)
    a = Color(0.1, 0.2, 0.3)
    b = Color(0.4, 0.0, 0.8)
    assert squared_distance(a, b) == squared_distance(b, a)
    assert squared_distance(a, b) == pytest.approx(0.09 + 0.04 + 0.25)


def test_ratio_label():
    assert ratio_label(0.5) == "50% / 50%"
    assert ratio_label(0.25) == "75% / 25%"
    assert ratio_label(0.0) == "100% / 0%"
    assert ratio_label(1.0) == "0% / 100%"


def test_half_byte_mix_rounds_up():
    mixed = blend(from_hex("#000000"), from_hex("#FD0000"), 0.5)
    assert mixed.hex == "#7F0000"


def test_batch_helpers_match_scalar_functions():
    rng = np.random.default_rng(21)
    a, b, target = rng.random((3, 40, 3))
    t = 0.35
    batch = squared_distances(lerp(a, b, t), target)
    for i in range(len(a)):
        mixed = blend(Color.from_array(a[i]), Color.from_array(b[i]), t)
        assert mixed == Color.from_array(lerp(a[i], b[i], t))
        assert squared_distance(mixed, Color.from_array(target[i])) == pytest.approx(batch[i], abs=1e-15)
