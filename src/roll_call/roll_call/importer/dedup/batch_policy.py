from __future__ import annotations

from .base import DedupPolicy


class BatchLocalDedupPolicy(DedupPolicy):
    """Only rows of the same batch collide; the target roster is ignored."""

    def __init__(self) -> None:
        self._keys: set[str] = set()

    def seen(self, key: str) -> bool:
        return key in self._keys

    def record(self, key: str) -> None:
        self._keys.add(key)
