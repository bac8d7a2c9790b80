from __future__ import annotations

from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..database.base import db_session
from ..database.connection import DatabaseConnection
from ..database.models import RosterRow, StudentRow
from .model import Roster, Student


def student_to_row(roster_id: str, position: int, s: Student) -> StudentRow:
    return StudentRow(
        roster_id=roster_id,
        id=s.student_id,
        position=position,
        given_name=s.given_name,
        family_name=s.family_name,
        national_id=s.national_id,
        phone=s.phone,
        present=s.present,
        is_manual=s.is_manual,
        created_at=s.created_at,
    )


def student_from_row(row: StudentRow) -> Student:
    return Student(
        student_id=row.id,
        given_name=row.given_name,
        family_name=row.family_name,
        national_id=row.national_id,
        phone=row.phone,
        present=bool(row.present),
        is_manual=bool(row.is_manual),
        created_at=row.created_at,
    )


def roster_from_row(row: RosterRow) -> Roster:
    return Roster(
        roster_id=row.id,
        name=row.name,
        created_at=row.created_at,
        modified_at=row.modified_at,
        students=tuple(student_from_row(s) for s in row.students),
    )


def _delete_roster(db: Session, roster_id: str) -> None:
    db.execute(delete(StudentRow).where(StudentRow.roster_id == roster_id))
    db.execute(delete(RosterRow).where(RosterRow.id == roster_id))


class SqlRosterRepository:
    """Roster store on a relational database.

    A save replaces the whole roster (header row plus its student rows) in
    one transaction.
    """

    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def save(self, roster: Roster) -> None:
        with db_session(self._conn) as db:
            _delete_roster(db, roster.roster_id)
            # Re-saving moves the roster to the end, like a fresh insert.
            last_seq = db.scalar(select(func.max(RosterRow.seq))) or 0
            db.add(
                RosterRow(
                    id=roster.roster_id,
                    name=roster.name,
                    created_at=roster.created_at,
                    modified_at=roster.modified_at,
                    seq=last_seq + 1,
                )
            )
            db.flush()
            db.add_all([student_to_row(roster.roster_id, i, s) for i, s in enumerate(roster.students)])

    def load_all(self) -> List[Roster]:
        with db_session(self._conn) as db:
            rows = db.scalars(select(RosterRow).order_by(RosterRow.seq)).all()
            return [roster_from_row(r) for r in rows]

    def delete(self, roster_id: str) -> None:
        with db_session(self._conn) as db:
            _delete_roster(db, roster_id)
