from __future__ import annotations

from abc import ABC, abstractmethod


class DedupPolicy(ABC):
    """Strategy Pattern: decide which import rows count as duplicates.

    A policy instance is stateful and serves exactly one import batch.
    """

    @abstractmethod
    def seen(self, key: str) -> bool:
        """True when ``key`` must be discarded as a duplicate."""

        raise NotImplementedError

    @abstractmethod
    def record(self, key: str) -> None:
        raise NotImplementedError
