from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from ..common.collation import collation_key
from ..common.datetime_utils import now_local
from ..common.ids import IdFactory
from ..common.validators import optional_text, require_non_empty
from ..core.enums import SortField
from ..core.exceptions import DuplicateStudentError
from .model import Roster, Student


class RosterService:
    """Use cases on a single roster.

    Every mutation returns a new ``Roster``; the argument is left untouched.
    Unknown student ids make toggle/delete a no-op.
    """

    def __init__(
        self,
        *,
        clock: Optional[Callable[[], datetime]] = None,
        ids: Optional[IdFactory] = None,
    ):
        self._clock = clock or now_local
        self._ids = ids or IdFactory(self._clock)

    def create_roster(self, name: str) -> Roster:
        name = require_non_empty(name, "List name")
        now = self._clock()
        return Roster(roster_id=self._ids.roster_id(), name=name, created_at=now, modified_at=now)

    def append_imported(self, roster: Roster, students: Iterable[Student]) -> Roster:
        return replace(roster, students=roster.students + tuple(students))

    def add_manual(
        self,
        roster: Roster,
        given_name: str,
        family_name: str,
        national_id: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Roster:
        given_name = require_non_empty(given_name, "Given name")
        family_name = require_non_empty(family_name, "Family name")

        if self.has_student_named(roster, given_name, family_name):
            raise DuplicateStudentError("This student is already on the list")

        student = Student(
            student_id=self._ids.manual_student_id(),
            given_name=given_name,
            family_name=family_name,
            national_id=optional_text(national_id),
            phone=optional_text(phone),
            present=True,
            is_manual=True,
            created_at=self._clock(),
        )
        return replace(roster, students=roster.students + (student,))

    def toggle_attendance(self, roster: Roster, student_id: str) -> Roster:
        if self.find_student(roster, student_id) is None:
            return roster
        students = tuple(
            replace(s, present=not s.present) if s.student_id == student_id else s for s in roster.students
        )
        return replace(roster, students=students)

    def delete_student(self, roster: Roster, student_id: str) -> Roster:
        for index, s in enumerate(roster.students):
            if s.student_id == student_id:
                return replace(roster, students=roster.students[:index] + roster.students[index + 1 :])
        return roster

    @staticmethod
    def find_student(roster: Roster, student_id: str) -> Optional[Student]:
        for s in roster.students:
            if s.student_id == student_id:
                return s
        return None

    @staticmethod
    def has_student_named(roster: Roster, given_name: str, family_name: str) -> bool:
        given = given_name.strip().lower()
        family = family_name.strip().lower()
        return any(
            s.given_name.strip().lower() == given and s.family_name.strip().lower() == family
            for s in roster.students
        )


def search_students(students: Sequence[Student], term: str) -> list[Student]:
    """Case-insensitive substring filter over names, national id and phone."""

    term = (term or "").strip().lower()
    if not term:
        return list(students)

    def matches(s: Student) -> bool:
        return (
            term in s.given_name.lower()
            or term in s.family_name.lower()
            or (s.national_id is not None and term in s.national_id.lower())
            or (s.phone is not None and term in s.phone)
        )

    return [s for s in students if matches(s)]


def sort_students(
    students: Sequence[Student],
    *,
    by: SortField = SortField.FAMILY_NAME,
    descending: bool = False,
) -> list[Student]:
    if by == SortField.GIVEN_NAME:
        key = lambda s: (collation_key(s.given_name), collation_key(s.family_name))
    else:
        key = lambda s: (collation_key(s.family_name), collation_key(s.given_name))
    return sorted(students, key=key, reverse=descending)
