"""Color value type and the hex conversion boundary.

All math in this package works on :class:`Color`, an immutable RGB triple
with channels in [0, 1].  Text only enters or leaves through this module:

  to_hex       – ``#RRGGBB`` (uppercase, no alpha), round-to-nearest per channel
  from_hex     – strict inverse of :func:`to_hex`; 6 hex digits, ``#`` optional
  parse_color  – lenient free-text input (any CSS color ColorAide understands)
"""

from __future__ import annotations

import math
import string
from dataclasses import dataclass

import numpy as np
from coloraide import Color as CAColor

from .errors import InvalidArgument, InvalidFormat

Hex = str

FIT_HEX = {"method": "raytrace"}  # consistent gamut-fit for lenient input
_HALF = 0.5 + 1e-6


@dataclass(frozen=True)
class Color:
    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, (int, float, np.floating, np.integer)):
                raise InvalidArgument(f"{name} must be a number, got {v!r}")
            v = float(v)
            if not math.isfinite(v) or not 0.0 <= v <= 1.0:
                raise InvalidArgument(f"{name} must be within [0, 1], got {v!r}")
            object.__setattr__(self, name, v)

    @classmethod
    def from_array(cls, rgb: np.ndarray) -> "Color":
        r, g, b = np.asarray(rgb, dtype=np.float64).reshape(3)
        return cls(float(r), float(g), float(b))

    def as_array(self) -> np.ndarray:
        return np.array([self.red, self.green, self.blue], dtype=np.float64)

    @property
    def hex(self) -> Hex:
        return to_hex(self)

    def __str__(self) -> str:
        return self.hex


def to_hex(color: Color) -> Hex:
    # half rounds up, like the Android ARGB packing; the nudge absorbs the
    # float noise left by 8-bit values that went through a blend
    u8 = np.floor(np.clip(color.as_array(), 0.0, 1.0) * 255.0 + _HALF).astype(np.uint8)
    return f"#{u8[0]:02X}{u8[1]:02X}{u8[2]:02X}"


def canon_hex(s: str) -> Hex:
    """Normalize to '#RRGGBB'; accept exactly 6 hex digits with optional '#'."""
    if not isinstance(s, str):
        raise InvalidFormat(f"hex color must be a string, got {type(s).__name__}")
    raw = s.strip()
    if raw.startswith("#"):
        raw = raw[1:]
    if len(raw) != 6 or not all(c in string.hexdigits for c in raw):
        raise InvalidFormat(f"invalid hex color {s!r}: expected #RRGGBB")
    return "#" + raw.upper()


def from_hex(s: str) -> Color:
    raw = canon_hex(s)[1:]
    r, g, b = (int(raw[i : i + 2], 16) / 255.0 for i in (0, 2, 4))
    return Color(r, g, b)


def parse_color(text: str) -> Color:
    """Parse user-typed color text.

    Strict ``RRGGBB`` input goes through :func:`from_hex` so it round-trips
    exactly, and 8 digits read as ``#AARRGGBB`` (alpha first, as the Android
    color parser does).  Everything else (``red``, ``#f53``, ``rgb(10 20 30)``,
    ...) is handed to ColorAide, converted to sRGB and fitted into gamut.
    Alpha is dropped.
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidFormat("empty color")
    try:
        return from_hex(text)
    except InvalidFormat:
        pass
    raw = text.strip()
    raw = raw[1:] if raw.startswith("#") else raw
    if len(raw) == 8 and all(c in string.hexdigits for c in raw):
        return from_hex(raw[2:])
    try:
        parsed = CAColor(text.strip())
    except ValueError as exc:
        raise InvalidFormat(f"invalid color {text!r}") from exc
    srgb = parsed.convert("srgb").fit(**FIT_HEX)
    rgb = np.clip(np.nan_to_num(np.asarray(srgb.coords(), dtype=np.float64)), 0.0, 1.0)
    return Color.from_array(rgb)


__all__ = [
    "Color",
    "Hex",
    "canon_hex",
    "from_hex",
    "parse_color",
    "to_hex",
]
