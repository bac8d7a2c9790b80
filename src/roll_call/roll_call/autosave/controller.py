"""Dirty tracking for the active roster.

Two states: CLEAN (what is in memory is what is stored) and DIRTY (there
are mutations not yet written). Every mutation goes through ``apply``,
which marks the roster dirty and schedules a write; a successful write
brings the controller back to CLEAN. A failed write leaves it DIRTY so the
unsaved-changes indicator stays on until an explicit save succeeds.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.enums import NotificationLevel, SaveState
from ..core.exceptions import PersistenceError
from ..notifications.sink import NotificationSink
from ..roster.model import Roster
from ..roster.repository import RosterRepository

logger = logging.getLogger(__name__)

Scheduler = Callable[[Callable[[], None]], None]


def run_now(callback: Callable[[], None]) -> None:
    callback()


class AutosaveController:
    def __init__(
        self,
        repository: RosterRepository,
        notifier: NotificationSink,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        scheduler: Optional[Scheduler] = None,
        on_saved: Optional[Callable[[Roster], None]] = None,
    ):
        self._repository = repository
        self._notifier = notifier
        self._clock = clock or now_local
        self._scheduler = scheduler or run_now
        self._on_saved = on_saved
        self._roster: Optional[Roster] = None
        self._state = SaveState.CLEAN
        self._pending = False

    @property
    def state(self) -> SaveState:
        return self._state

    @property
    def is_dirty(self) -> bool:
        return self._state == SaveState.DIRTY

    @property
    def roster(self) -> Optional[Roster]:
        return self._roster

    def load(self, roster: Optional[Roster]) -> None:
        """Track a freshly loaded/created roster (or none); starts CLEAN."""

        self._roster = roster
        self._state = SaveState.CLEAN

    def apply(self, roster: Roster) -> None:
        """Replace the tracked roster after a mutation and schedule a write."""

        self._roster = roster
        self._state = SaveState.DIRTY
        if not self._pending:
            self._pending = True
            self._scheduler(self._autosave)

    def _autosave(self) -> None:
        self._pending = False
        # Nothing to do if an explicit save or a reload got there first.
        if self._state != SaveState.DIRTY or self._roster is None:
            return
        self._persist("List saved automatically")

    def save_now(self) -> bool:
        """Explicit save; writes the current roster whatever the state."""

        if self._roster is None:
            return False
        return self._persist("List saved successfully")

    def confirm_discard(self, confirm: Callable[[], bool]) -> bool:
        """Whether the active roster may be replaced.

        Only asks when there are unsaved changes.
        """

        if not self.is_dirty:
            return True
        return bool(confirm())

    def _persist(self, success_message: str) -> bool:
        if self._roster is None:
            return False
        stamped = replace(self._roster, modified_at=self._clock())
        try:
            self._repository.save(stamped)
        except (PersistenceError, OSError):
            logger.exception("Saving list %s failed", stamped.roster_id)
            self._notifier.notify(NotificationLevel.ERROR, "Error saving the list")
            return False

        self._roster = stamped
        self._state = SaveState.CLEAN
        logger.debug("List %s saved (%d students)", stamped.roster_id, len(stamped.students))
        if self._on_saved:
            self._on_saved(stamped)
        self._notifier.notify(NotificationLevel.SUCCESS, success_message)
        return True
