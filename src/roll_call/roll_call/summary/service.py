from __future__ import annotations

from typing import Optional

from ..roster.model import Roster
from .model import AttendanceSummary


def summarize(roster: Optional[Roster]) -> AttendanceSummary:
    if roster is None:
        return AttendanceSummary()

    present_manual = present_import = absent_manual = absent_import = 0
    for s in roster.students:
        if s.present:
            if s.is_manual:
                present_manual += 1
            else:
                present_import += 1
        elif s.is_manual:
            absent_manual += 1
        else:
            absent_import += 1

    return AttendanceSummary(
        total=len(roster.students),
        present=present_manual + present_import,
        absent=absent_manual + absent_import,
        present_from_import=present_import,
        present_manual=present_manual,
        absent_from_import=absent_import,
        absent_manual=absent_manual,
    )
