from __future__ import annotations

from ...common.collation import normalization_key
from ...roster.model import Roster
from .batch_policy import BatchLocalDedupPolicy


class RosterAwareDedupPolicy(BatchLocalDedupPolicy):
    """Stricter variant: rows matching a student already on the roster collide too."""

    def __init__(self, roster: Roster) -> None:
        super().__init__()
        self._existing = {normalization_key(s.given_name, s.family_name) for s in roster.students}

    def seen(self, key: str) -> bool:
        return key in self._existing or super().seen(key)
