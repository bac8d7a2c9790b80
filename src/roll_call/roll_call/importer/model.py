from __future__ import annotations

from dataclasses import dataclass

from ..roster.model import Student


@dataclass(frozen=True)
class ImportResult:
    students: tuple[Student, ...]
    duplicates_found: int
    skipped_rows: int = 0
