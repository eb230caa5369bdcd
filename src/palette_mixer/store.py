"""Persistent set-of-hex-strings stores for saved colors.

A store is anything with ``list() / add(hex) / remove(hex)``.  Both
implementations keep every value under :data:`STORAGE_KEY`, remember
insertion order (exposed through ``ordered()``), and are safe to share
between Flask request threads.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Protocol, Set, Union

from .errors import InvalidFormat

log = logging.getLogger(__name__)

STORAGE_KEY = "saved_colors"


class ColorStore(Protocol):
    def list(self) -> Set[str]: ...

    def add(self, hex_value: str) -> None: ...

    def remove(self, hex_value: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: List[str] | None = None) -> None:
        self._lock = threading.Lock()
        self._data: Dict[str, List[str]] = {STORAGE_KEY: []}
        for h in initial or []:
            self.add(h)

    def ordered(self) -> List[str]:
        with self._lock:
            return list(self._data[STORAGE_KEY])

    def list(self) -> Set[str]:
        return set(self.ordered())

    def add(self, hex_value: str) -> None:
        with self._lock:
            values = self._data[STORAGE_KEY]
            if hex_value not in values:
                values.append(hex_value)

    def remove(self, hex_value: str) -> None:
        with self._lock:
            values = self._data[STORAGE_KEY]
            if hex_value in values:
                values.remove(hex_value)


class JsonFileStore:
    """``{"saved_colors": [...]}`` in a JSON file; a missing file reads as empty."""

    def __init__(self, path: Union[str, os.PathLike]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> List[str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        try:
            doc = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidFormat(f"{self.path}: not valid JSON ({exc})") from exc
        values = doc.get(STORAGE_KEY, []) if isinstance(doc, dict) else None
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise InvalidFormat(f"{self.path}: '{STORAGE_KEY}' must be a list of strings")
        return values

    def _write(self, values: List[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump({STORAGE_KEY: values}, fh, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise
        log.debug("wrote %d saved colors to %s", len(values), self.path)

    def ordered(self) -> List[str]:
        with self._lock:
            return self._read()

    def list(self) -> Set[str]:
        return set(self.ordered())

    def add(self, hex_value: str) -> None:
        with self._lock:
            values = self._read()
            if hex_value not in values:
                values.append(hex_value)
                self._write(values)

    def remove(self, hex_value: str) -> None:
        with self._lock:
            values = self._read()
            if hex_value in values:
                values.remove(hex_value)
                self._write(values)


__all__ = ["STORAGE_KEY", "ColorStore", "JsonFileStore", "MemoryStore"]
