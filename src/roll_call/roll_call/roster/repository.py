from __future__ import annotations

from typing import Protocol, Sequence

from .model import Roster


class RosterRepository(Protocol):
    def save(self, roster: Roster) -> None:
        """Insert or replace the roster with the same id."""

        raise NotImplementedError

    def load_all(self) -> Sequence[Roster]:
        raise NotImplementedError

    def delete(self, roster_id: str) -> None:
        raise NotImplementedError
