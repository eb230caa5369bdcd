from __future__ import annotations

import math

import numpy as np

from .color import Color
from .errors import InvalidArgument


def check_ratio(ratio: float, *, lo: float = 0.0, hi: float = 1.0, open_: bool = False) -> float:
    """Return ``ratio`` as a float, or raise if it falls outside [lo, hi] ((lo, hi) if open_)."""
    if isinstance(ratio, bool):
        raise InvalidArgument(f"ratio must be a number, got {ratio!r}")
    try:
        r = float(ratio)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"ratio must be a number, got {ratio!r}") from exc
    inside = lo < r < hi if open_ else lo <= r <= hi
    if not math.isfinite(r) or not inside:
        bounds = f"({lo}, {hi})" if open_ else f"[{lo}, {hi}]"
        raise InvalidArgument(f"ratio must be within {bounds}, got {ratio!r}")
    return r


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Per-channel ``a * (1 - t) + b * t``; works on one color or a batch."""
    return a * (1.0 - t) + b * t


def squared_distances(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Sum of squared channel differences over the last axis (no square root)."""
    d = x - y
    return (d * d).sum(axis=-1)


def blend(color_a: Color, color_b: Color, ratio: float) -> Color:
    """Linear mix: 0.0 gives ``color_a``, 1.0 gives ``color_b``.

    The ratio must lie in [0, 1]; it is never clamped.
    """
    t = check_ratio(ratio)
    # clip trims float rounding noise only; ratio and channels are already in range
    mixed = np.clip(lerp(color_a.as_array(), color_b.as_array(), t), 0.0, 1.0)
    return Color.from_array(mixed)


def squared_distance(c1: Color, c2: Color) -> float:
    return float(squared_distances(c1.as_array(), c2.as_array()))


def ratio_label(ratio: float) -> str:
    # "75% / 25%": share of the first color, then the second
    t = check_ratio(ratio)
    return f"{int((1.0 - t) * 100)}% / {int(t * 100)}%"


__all__ = [
    "blend",
    "check_ratio",
    "lerp",
    "ratio_label",
    "squared_distance",
    "squared_distances",
]
