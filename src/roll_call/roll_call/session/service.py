from __future__ import annotations

import logging
import threading
from datetime import datetime
from functools import wraps
from typing import Callable, List, Optional

from ..autosave.controller import AutosaveController, Scheduler
from ..common.datetime_utils import now_local
from ..core.enums import NotificationLevel, SortField
from ..core.exceptions import DomainError, NoActiveRosterError, PersistenceError, UnsavedChangesError
from ..importer.model import ImportResult
from ..importer.service import ImportService
from ..notifications.sink import NotificationSink
from ..roster.model import Roster, Student
from ..roster.repository import RosterRepository
from ..roster.service import RosterService, search_students, sort_students
from ..summary.model import AttendanceSummary
from ..summary.service import summarize

logger = logging.getLogger(__name__)

NO_LIST_MESSAGE = "You must first create or select a list"
UNSAVED_MESSAGE = "You have unsaved changes. Confirm to switch lists anyway"


def _never_confirm() -> bool:
    return False


def _serialized(method):
    """Run the method under the session lock; one change finishes before the next starts."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class AttendanceSession:
    """Single-user working session over every stored list.

    Holds the active roster through the autosave controller and emits one
    notification per user-visible change.
    Changes are serialized, so it can be shared by concurrent requests.
    """

    def __init__(
        self,
        repository: RosterRepository,
        notifier: NotificationSink,
        *,
        rosters: Optional[RosterService] = None,
        importer: Optional[ImportService] = None,
        clock: Optional[Callable[[], datetime]] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self._repository = repository
        self._notifier = notifier
        self._clock = clock or now_local
        self._rosters = rosters or RosterService(clock=self._clock)
        self._importer = importer or ImportService(clock=self._clock)
        self._autosave = AutosaveController(
            repository,
            notifier,
            clock=self._clock,
            scheduler=scheduler,
            on_saved=self._remember,
        )
        self._lists: List[Roster] = []
        self._lock = threading.RLock()

    # -- state -------------------------------------------------------------

    @property
    def all_lists(self) -> List[Roster]:
        return list(self._lists)

    @property
    def current(self) -> Optional[Roster]:
        return self._autosave.roster

    @property
    def has_unsaved_changes(self) -> bool:
        return self._autosave.is_dirty and self.current is not None

    @property
    def autosave(self) -> AutosaveController:
        return self._autosave

    def summary(self) -> AttendanceSummary:
        return summarize(self.current)

    def students(
        self,
        *,
        term: str = "",
        sort_by: SortField = SortField.FAMILY_NAME,
        descending: bool = False,
    ) -> List[Student]:
        roster = self._require_current()
        return sort_students(search_students(roster.students, term), by=sort_by, descending=descending)

    def _remember(self, roster: Roster) -> None:
        self._lists = [r for r in self._lists if r.roster_id != roster.roster_id]
        self._lists.append(roster)

    def _require_current(self) -> Roster:
        roster = self.current
        if roster is None:
            raise NoActiveRosterError(NO_LIST_MESSAGE)
        return roster

    def _require_current_or_notify(self) -> Roster:
        try:
            return self._require_current()
        except NoActiveRosterError:
            self._notifier.notify(NotificationLevel.ERROR, NO_LIST_MESSAGE)
            raise

    # -- list lifecycle ----------------------------------------------------

    @_serialized
    def load_lists(self) -> List[Roster]:
        self._lists = list(self._repository.load_all())
        logger.info("Loaded %d lists", len(self._lists))
        return self.all_lists

    @_serialized
    def create_list(self, name: str, confirm: Callable[[], bool] = _never_confirm) -> Optional[Roster]:
        """Create, store and select a new list.

        Raises UnsavedChangesError, leaving everything as it was, when the
        active list has unsaved changes and ``confirm`` declines to drop them.
        """

        roster = self._rosters.create_roster(name)
        if self.current is not None and not self._autosave.confirm_discard(confirm):
            raise UnsavedChangesError(UNSAVED_MESSAGE)
        try:
            self._repository.save(roster)
        except PersistenceError:
            logger.exception("Creating list %r failed", roster.name)
            self._notifier.notify(NotificationLevel.ERROR, "Error creating the list")
            return None

        self._lists.append(roster)
        self._autosave.load(roster)
        self._notifier.notify(NotificationLevel.SUCCESS, f'List "{roster.name}" created successfully')
        return roster

    @_serialized
    def select_list(self, roster_id: str, confirm: Callable[[], bool] = _never_confirm) -> bool:
        roster = next((r for r in self._lists if r.roster_id == roster_id), None)
        if roster is None:
            return False
        if self.current is not None and not self._autosave.confirm_discard(confirm):
            return False

        self._autosave.load(roster)
        self._notifier.notify(NotificationLevel.INFO, f'List "{roster.name}" loaded')
        return True

    @_serialized
    def delete_list(self, roster_id: str) -> bool:
        try:
            self._repository.delete(roster_id)
        except PersistenceError:
            logger.exception("Deleting list %s failed", roster_id)
            self._notifier.notify(NotificationLevel.ERROR, "Error deleting the list")
            return False

        self._lists = [r for r in self._lists if r.roster_id != roster_id]
        if self.current is not None and self.current.roster_id == roster_id:
            self._autosave.load(None)
        self._notifier.notify(NotificationLevel.SUCCESS, "List deleted successfully")
        return True

    @_serialized
    def manual_save(self) -> bool:
        return self._autosave.save_now()

    # -- roster mutations --------------------------------------------------

    @_serialized
    def students_loaded(self, result: ImportResult, *, roster_id: Optional[str] = None) -> bool:
        """Append an import result to the active roster.

        ``roster_id`` names the roster the import was started for; if another
        roster became active meanwhile the result is dropped.
        """

        roster = self._require_current_or_notify()
        if roster_id is not None and roster.roster_id != roster_id:
            logger.info("Discarding import for list %s; active list is %s", roster_id, roster.roster_id)
            return False

        updated = self._rosters.append_imported(roster, result.students)

        message = f"{len(result.students)} students loaded from the file"
        if result.duplicates_found > 0:
            message += f". {result.duplicates_found} duplicates removed automatically"
            self._notifier.notify(
                NotificationLevel.WARNING,
                f"Found and removed {result.duplicates_found} duplicate students",
            )
        self._notifier.notify(NotificationLevel.SUCCESS, message)

        self._autosave.apply(updated)
        return True

    def check_upload(self, *, file_name: str, media_type: Optional[str], size: int) -> None:
        """Reject an upload by name, type and size before its content is read."""

        self._require_current_or_notify()
        try:
            self._importer.validate(file_name=file_name, media_type=media_type, size=size)
        except DomainError as e:
            self._notifier.notify(NotificationLevel.ERROR, str(e))
            raise

    @_serialized
    def import_file(
        self,
        content: bytes,
        *,
        file_name: str,
        media_type: Optional[str] = None,
        cross_roster: Optional[bool] = None,
    ) -> ImportResult:
        roster = self._require_current_or_notify()
        try:
            result = self._importer.import_file(
                content, file_name=file_name, media_type=media_type, roster=roster, cross_roster=cross_roster
            )
        except DomainError as e:
            self._notifier.notify(NotificationLevel.ERROR, str(e))
            raise
        self.students_loaded(result, roster_id=roster.roster_id)
        return result

    async def import_file_async(
        self,
        content: bytes,
        *,
        file_name: str,
        media_type: Optional[str] = None,
        cross_roster: Optional[bool] = None,
    ) -> Optional[ImportResult]:
        """Import without blocking the loop; stale results are discarded."""

        roster = self._require_current_or_notify()
        try:
            result = await self._importer.import_file_async(
                content, file_name=file_name, media_type=media_type, roster=roster, cross_roster=cross_roster
            )
        except DomainError as e:
            self._notifier.notify(NotificationLevel.ERROR, str(e))
            raise
        if self.current is None or not self.students_loaded(result, roster_id=roster.roster_id):
            return None
        return result

    @_serialized
    def add_student(
        self,
        given_name: str,
        family_name: str,
        national_id: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Student:
        roster = self._require_current_or_notify()
        updated = self._rosters.add_manual(roster, given_name, family_name, national_id, phone)
        student = updated.students[-1]
        self._notifier.notify(NotificationLevel.SUCCESS, f"{student.full_name} added as present")
        self._autosave.apply(updated)
        return student

    @_serialized
    def toggle_attendance(self, student_id: str) -> Optional[Student]:
        roster = self._require_current()
        updated = self._rosters.toggle_attendance(roster, student_id)
        student = self._rosters.find_student(updated, student_id)
        if student is None:
            return None

        status = "present" if student.present else "absent"
        self._notifier.notify(NotificationLevel.INFO, f"{student.full_name} marked as {status}")
        self._autosave.apply(updated)
        return student

    @_serialized
    def delete_student(self, student_id: str) -> Optional[Student]:
        roster = self._require_current()
        student = self._rosters.find_student(roster, student_id)
        if student is None:
            return None

        updated = self._rosters.delete_student(roster, student_id)
        self._notifier.notify(NotificationLevel.SUCCESS, f"{student.full_name} removed from the list")
        self._autosave.apply(updated)
        return student
