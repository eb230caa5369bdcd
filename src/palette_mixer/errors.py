from __future__ import annotations


class InvalidArgument(ValueError):
    """A ratio, channel or sample count outside its documented domain."""


class InvalidFormat(ValueError):
    """Text that cannot be turned into a color (or a malformed store file)."""


__all__ = ["InvalidArgument", "InvalidFormat"]
