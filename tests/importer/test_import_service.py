from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from src.roll_call.roll_call.core.exceptions import ImportParseError, UnsupportedFileError
from src.roll_call.roll_call.importer.service import ImportService
from src.roll_call.roll_call.roster.model import Roster, Student

NOW = datetime(2026, 3, 2, 8, 0, 0)

CSV = (
    "Nombre,Segundo,Apellido,Segundo apellido\n"
    "Luis,,Ortiz,\n"
    "Ana,,García,Pérez\n"
    "ana,,garcía,pérez\n"
    ",,Solo,\n"
).encode("utf-8")


def _service(**kwargs) -> ImportService:
    return ImportService(clock=lambda: NOW, **kwargs)


def test_import_csv_end_to_end():
    result = _service().import_file(CSV, file_name="students.csv", media_type="text/csv")

    assert [s.family_name for s in result.students] == ["García Pérez", "Ortiz"]
    assert result.duplicates_found == 1
    assert all(s.created_at == NOW for s in result.students)


def test_validation_runs_before_reading():
    with pytest.raises(UnsupportedFileError):
        _service().import_file(b"\x00\x01", file_name="photo.png", media_type="image/png")


def test_size_ceiling_is_configurable():
    with pytest.raises(UnsupportedFileError):
        _service(max_bytes=10).import_file(CSV, file_name="students.csv")


def test_unreadable_file_rejects_whole_batch():
    with pytest.raises(ImportParseError):
        _service().import_file(b"garbage", file_name="students.xlsx")


def test_cross_roster_setting_applies_by_default():
    ana = Student(
        student_id="manual_1",
        given_name="Ana",
        family_name="García Pérez",
        present=True,
        is_manual=True,
        created_at=NOW,
    )
    roster = Roster(roster_id="1", name="5A", created_at=NOW, modified_at=NOW, students=(ana,))

    strict = _service(cross_roster=True).import_file(CSV, file_name="students.csv", roster=roster)
    loose = _service().import_file(CSV, file_name="students.csv", roster=roster)

    assert [s.given_name for s in strict.students] == ["Luis"]
    assert strict.duplicates_found == 2
    assert len(loose.students) == 2


def test_async_import_matches_sync_import():
    service = _service()

    result = asyncio.run(service.import_file_async(CSV, file_name="students.csv"))

    assert [s.given_name for s in result.students] == ["Ana", "Luis"]
    assert result.duplicates_found == 1
