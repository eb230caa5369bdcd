import numpy as np
import pytest

from palette_mixer import unmixer
from palette_mixer.blender import blend, squared_distance
from palette_mixer.color import Color
from palette_mixer.errors import InvalidArgument
from palette_mixer.unmixer import find_closest_pair, unmix

GRAY = Color(0.5, 0.5, 0.5)


def test_same_seed_same_pair():
    first = find_closest_pair(GRAY, 0.5, 10, rng=1234)
    again = find_closest_pair(GRAY, 0.5, 10, rng=1234)
    assert first == again


def test_accepts_generator_instance():
    a = find_closest_pair(GRAY, 0.3, 50, rng=np.random.default_rng(9))
    b = find_closest_pair(GRAY, 0.3, 50, rng=np.random.default_rng(9))
    assert a == b


def test_single_sample_returns_that_sample():
    drawn = np.random.default_rng(3).random((1, 2, 3))
    a, b = find_closest_pair(GRAY, 0.4, 1, rng=3)
    assert a == Color.from_array(drawn[0, 0])
    assert b == Color.from_array(drawn[0, 1])


def test_result_beats_every_sampled_pair():
    n, ratio, target = 200, 0.35, Color(0.8, 0.2, 0.4)
    drawn = np.random.default_rng(11).random((n, 2, 3))
    candidates = [
        squared_distance(
            blend(Color.from_array(p[0]), Color.from_array(p[1]), ratio), target
        )
        for p in drawn
    ]
    result = unmix(target, ratio, n, rng=11)
    assert result.distance <= min(candidates) + 1e-12
    assert result.blended == blend(result.first, result.second, ratio)


def test_first_minimum_wins(monkeypatch):
    fixed = np.array(
        [
            [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]],  # far from gray
            [[0.2, 0.2, 0.2], [0.8, 0.8, 0.8]],  # exact
            [[0.8, 0.8, 0.8], [0.2, 0.2, 0.2]],  # also exact
        ]
    )

    class Fixed:
        def random(self, shape):
            assert shape == fixed.shape
            return fixed

    monkeypatch.setattr(unmixer, "_generator", lambda rng: Fixed())
    a, b = find_closest_pair(GRAY, 0.5, 3)
    assert a == Color(0.2, 0.2, 0.2)
    assert b == Color(0.8, 0.8, 0.8)


def test_more_samples_get_close():
    result = unmix(GRAY, 0.5, 5000, rng=7)
    assert result.distance < 0.01
    assert result.pair == (result.first, result.second)


def test_default_sample_count(monkeypatch):
    seen = {}
    real = unmixer._generator

    def spy(rng):
        gen = real(rng)

        class Spy:
            def random(self, shape):
                seen["shape"] = shape
                return gen.random(shape)

        return Spy()

    monkeypatch.setattr(unmixer, "_generator", spy)
    find_closest_pair(GRAY, 0.5, rng=0)
    assert seen["shape"] == (unmixer.DEFAULT_SAMPLES, 2, 3)


@pytest.mark.parametrize("ratio", [0.0, 1.0, -0.5, 1.5, float("nan")])
def test_ratio_must_be_strictly_inside(ratio):
    with pytest.raises(InvalidArgument):
        find_closest_pair(GRAY, ratio, 10, rng=0)


@pytest.mark.parametrize("count", [0, -5, 2.5, True, "10", None])
def test_sample_count_must_be_positive_int(count):
    with pytest.raises(InvalidArgument):
        find_closest_pair(GRAY, 0.5, count, rng=0)


def test_numpy_integer_sample_count():
    a, b = find_closest_pair(GRAY, 0.5, np.int64(5), rng=0)
    assert isinstance(a, Color) and isinstance(b, Color)
