from __future__ import annotations

import pytest

from src.roll_call.roll_call.core.constants import MAX_UPLOAD_BYTES
from src.roll_call.roll_call.core.exceptions import UnsupportedFileError, ValidationError
from src.roll_call.roll_call.importer.validation import validate_upload

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.mark.parametrize(
    "file_name, media_type",
    [
        ("students.xlsx", XLSX),
        ("students.xls", "application/vnd.ms-excel"),
        ("students.csv", "text/csv"),
        ("students.CSV", "application/octet-stream"),
        ("students.xlsx", ""),
        ("students", XLSX),
    ],
)
def test_accepted_files(file_name, media_type):
    validate_upload(file_name, media_type, 1024)


def test_rejects_unknown_type_and_extension():
    with pytest.raises(UnsupportedFileError):
        validate_upload("notes.txt", "text/plain", 10)


def test_rejects_files_above_ten_mebibytes():
    validate_upload("big.xlsx", XLSX, MAX_UPLOAD_BYTES)

    with pytest.raises(ValidationError) as exc:
        validate_upload("big.xlsx", XLSX, MAX_UPLOAD_BYTES + 1)
    assert "10MB" in str(exc.value)
