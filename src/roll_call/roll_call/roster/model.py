from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: one person on an attendance roster."""

    student_id: str
    given_name: str
    family_name: str
    present: bool
    is_manual: bool
    created_at: datetime
    national_id: Optional[str] = None
    phone: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.given_name} {self.family_name}"


@dataclass(frozen=True)
class Roster:
    """Domain entity: a named attendance list.

    ``students`` keeps insertion order; display order is decided by callers.
    """

    roster_id: str
    name: str
    created_at: datetime
    modified_at: datetime
    students: tuple[Student, ...] = field(default_factory=tuple)
