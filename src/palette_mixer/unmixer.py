"""Stochastic inverse of :func:`palette_mixer.blender.blend`.

For any ratio strictly inside (0, 1) the blend equation has a continuum of
exact solutions, so instead of solving it we draw random candidate pairs and
keep the one whose blend lands closest to the target::

    best = argmin_i || blend(A_i, B_i, ratio) - target ||^2

Quality improves with ``sample_count``; nothing guarantees a near-exact hit.
Close to ratio 0 or 1 one of the two colors barely contributes, so only the
other one is really constrained (the web UI keeps its slider in [0.1, 0.9]).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

import numpy as np

from .blender import blend, check_ratio, lerp, squared_distance, squared_distances
from .color import Color
from .errors import InvalidArgument

log = logging.getLogger(__name__)

DEFAULT_SAMPLES = 500

RandomSource = Union[np.random.Generator, int, None]


@dataclass(frozen=True)
class UnmixResult:
    first: Color
    second: Color
    blended: Color
    distance: float

    @property
    def pair(self) -> tuple[Color, Color]:
        return self.first, self.second


def check_sample_count(sample_count: int) -> int:
    if isinstance(sample_count, bool) or not isinstance(sample_count, (int, np.integer)):
        raise InvalidArgument(f"sample_count must be an integer, got {sample_count!r}")
    if sample_count <= 0:
        raise InvalidArgument(f"sample_count must be positive, got {sample_count}")
    return int(sample_count)


def _generator(rng: RandomSource) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def _best_pair(
    target: Color, ratio: float, sample_count: int, rng: RandomSource
) -> tuple[Color, Color]:
    t = check_ratio(ratio, open_=True)
    n = check_sample_count(sample_count)

    # n × (A, B) × (r, g, b), every channel uniform in [0, 1)
    pairs = _generator(rng).random((n, 2, 3))
    dist = squared_distances(lerp(pairs[:, 0], pairs[:, 1], t), target.as_array())

    # argmin returns the first minimum, i.e. a strict "<" left-to-right scan
    best = int(np.argmin(dist))
    log.debug(
        "unmix %s @ %.3f: best of %d samples is #%d (d²=%.6g)",
        target.hex,
        t,
        n,
        best,
        dist[best],
    )
    return Color.from_array(pairs[best, 0]), Color.from_array(pairs[best, 1])


def find_closest_pair(
    target: Color,
    ratio: float,
    sample_count: int = DEFAULT_SAMPLES,
    rng: RandomSource = None,
) -> tuple[Color, Color]:
    """Guess two source colors whose ``ratio`` blend is close to ``target``.

    ``ratio`` must lie strictly inside (0, 1) and ``sample_count`` must be a
    positive integer, otherwise :class:`InvalidArgument` is raised.  ``rng``
    may be a ``numpy.random.Generator`` or a seed; the same seed always gives
    the same pair.
    """
    return _best_pair(target, ratio, sample_count, rng)


def unmix(
    target: Color,
    ratio: float,
    sample_count: int = DEFAULT_SAMPLES,
    rng: RandomSource = None,
) -> UnmixResult:
    first, second = _best_pair(target, ratio, sample_count, rng)
    mixed = blend(first, second, ratio)
    return UnmixResult(first, second, mixed, squared_distance(mixed, target))


__all__ = [
    "DEFAULT_SAMPLES",
    "UnmixResult",
    "check_sample_count",
    "find_closest_pair",
    "unmix",
]
