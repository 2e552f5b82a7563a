"""A dictionary guarded by a lock."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

V = TypeVar("V")
D = TypeVar("D")


class ThreadSafeStore(Generic[V]):
    """String-keyed store safe to use from several threads."""

    def __init__(self) -> None:
        self._data: dict[str, V] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: V) -> None:
        with self._lock:
            self._data[key] = value

    def get(self, key: str, default: D | None = None) -> V | D | None:
        with self._lock:
            return self._data.get(key, default)

    def delete(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""
        with self._lock:
            self._data.pop(key, None)

    def all_pairs(self) -> dict[str, V]:
        """Return a snapshot copy of every key and value."""
        with self._lock:
            return dict(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)