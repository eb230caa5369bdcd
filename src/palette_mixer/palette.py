from __future__ import annotations

import logging
import threading
from typing import Iterator, List

from .color import Color, Hex, from_hex, to_hex
from .errors import InvalidFormat
from .store import ColorStore, MemoryStore

log = logging.getLogger(__name__)


def _stored_order(store: ColorStore) -> List[str]:
    ordered = getattr(store, "ordered", None)
    if callable(ordered):
        return list(ordered())
    return sorted(store.list())


class SavedPalette:
    """Colors the user chose to keep, in the order they were saved.

    Every color is snapped to its ``#RRGGBB`` value on the way in, so two
    colors are duplicates exactly when they share a hex string, which is
    also how the backing store sees them.
    """

    def __init__(self, store: ColorStore | None = None) -> None:
        self.store = store if store is not None else MemoryStore()
        self._lock = threading.RLock()
        self._colors: List[Color] = []
        for h in _stored_order(self.store):
            try:
                c = from_hex(h)
            except InvalidFormat:
                log.warning("skipping unreadable saved color %r", h)
                continue
            if c not in self._colors:
                self._colors.append(c)

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self.colors)

    def __contains__(self, color: object) -> bool:
        return isinstance(color, Color) and from_hex(to_hex(color)) in self._colors

    @property
    def colors(self) -> List[Color]:
        with self._lock:
            return list(self._colors)

    def hexes(self) -> List[Hex]:
        return [to_hex(c) for c in self.colors]

    def add(self, color: Color) -> bool:
        """Save ``color``; returns False if it was already saved."""
        hex_value = to_hex(color)
        snapped = from_hex(hex_value)
        with self._lock:
            if snapped in self._colors:
                return False
            # store first; a failing store leaves the palette untouched
            self.store.add(hex_value)
            self._colors.append(snapped)
        log.info("saved color %s", hex_value)
        return True

    def remove(self, color: Color) -> bool:
        """Forget ``color``; returns False if it was not saved."""
        hex_value = to_hex(color)
        snapped = from_hex(hex_value)
        with self._lock:
            if snapped not in self._colors:
                return False
            self.store.remove(hex_value)
            self._colors.remove(snapped)
        log.info("deleted color %s", hex_value)
        return True

    def remove_at(self, index: int) -> Color:
        with self._lock:
            color = self._colors[index]
            self.remove(color)
        return color


__all__ = ["SavedPalette"]
