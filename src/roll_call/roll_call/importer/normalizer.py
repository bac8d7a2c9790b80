"""Turn raw spreadsheet rows into sorted, de-duplicated students.

Row layout after the header: given name, second given name, family name,
second family name. The first and third cells are mandatory.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence

from ..common.collation import name_sort_key, normalization_key
from ..common.ids import IdFactory
from ..core.constants import IMPORT_MIN_CELLS
from ..roster.model import Student
from .dedup.base import DedupPolicy
from .dedup.batch_policy import BatchLocalDedupPolicy
from .model import ImportResult


@dataclass(frozen=True)
class _Names:
    given_name: str
    family_name: str


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _join(*parts: str) -> str:
    return " ".join(p for p in parts if p)


def parse_row(row: Optional[Sequence[Any]]) -> Optional[_Names]:
    """Compose names from one row, or None when the row is incomplete."""

    if not row or len(row) < IMPORT_MIN_CELLS:
        return None
    first_given, second_given, first_family, second_family = (_text(c) for c in row[:IMPORT_MIN_CELLS])
    if not first_given or not first_family:
        return None
    return _Names(given_name=_join(first_given, second_given), family_name=_join(first_family, second_family))


def normalize_rows(
    rows: Iterable[Optional[Sequence[Any]]],
    *,
    now: datetime,
    ids: Optional[IdFactory] = None,
    dedup_policy: Optional[DedupPolicy] = None,
) -> ImportResult:
    policy = dedup_policy or BatchLocalDedupPolicy()
    kept: List[_Names] = []
    duplicates = 0
    skipped = 0

    for index, row in enumerate(rows):
        if index == 0:
            continue  # header

        names = parse_row(row)
        if names is None:
            skipped += 1
            continue

        key = normalization_key(names.given_name, names.family_name)
        if policy.seen(key):
            duplicates += 1
            continue
        policy.record(key)
        kept.append(names)

    kept.sort(key=lambda n: name_sort_key(n.family_name, n.given_name))

    student_ids = (ids or IdFactory(lambda: now)).import_batch_ids(len(kept))
    students = tuple(
        Student(
            student_id=student_id,
            given_name=n.given_name,
            family_name=n.family_name,
            present=False,
            is_manual=False,
            created_at=now,
        )
        for student_id, n in zip(student_ids, kept)
    )
    return ImportResult(students=students, duplicates_found=duplicates, skipped_rows=skipped)
