from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...roster.model import Roster
from .base import DedupPolicy
from .batch_policy import BatchLocalDedupPolicy
from .roster_policy import RosterAwareDedupPolicy


@dataclass
class DedupPolicyFactory:
    """Factory Pattern: choose the duplicate policy for one import."""

    def for_import(self, *, roster: Optional[Roster], cross_roster: bool = False) -> DedupPolicy:
        if cross_roster and roster is not None:
            return RosterAwareDedupPolicy(roster)
        return BatchLocalDedupPolicy()
