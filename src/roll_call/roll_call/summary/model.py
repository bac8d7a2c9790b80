from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model derived from a roster; never stored."""

    total: int = 0
    present: int = 0
    absent: int = 0
    present_from_import: int = 0
    present_manual: int = 0
    absent_from_import: int = 0
    absent_manual: int = 0
