from __future__ import annotations

import io
from datetime import datetime

import pandas as pd

from src.roll_call.roll_call.export.service import EXPORT_COLUMNS, ExportService
from src.roll_call.roll_call.roster.model import Student
from src.roll_call.roll_call.summary.model import AttendanceSummary

EXPORTED_AT = datetime(2026, 3, 2, 17, 45, 0)


def _students():
    return [
        Student(
            student_id="excel_1_0",
            given_name="Ana",
            family_name="García Pérez",
            present=False,
            is_manual=False,
            created_at=datetime(2026, 3, 1, 9, 0),
        ),
        Student(
            student_id="manual_2",
            given_name="Luis",
            family_name="Ortiz",
            national_id="123",
            phone="555",
            present=True,
            is_manual=True,
            created_at=datetime(2026, 3, 2, 10, 0),
        ),
    ]


def _summary():
    return AttendanceSummary(total=2, present=1, absent=1, present_manual=1, absent_from_import=1)


def test_build_rows_summary_and_file_name():
    data = ExportService().build(_students(), _summary(), "5A", exported_at=EXPORTED_AT)

    assert data.file_name == "5A_2026-03-02.xlsx"
    assert data.rows[0] == {
        "No.": 1,
        "Given name": "Ana",
        "Family name": "García Pérez",
        "National ID": "",
        "Phone": "",
        "Attendance": "Absent",
        "Origin": "Import",
        "Created": "01/03/2026",
    }
    assert data.rows[1]["Attendance"] == "Present"
    assert data.rows[1]["Origin"] == "Manual"
    assert ["Total students", 2] in data.summary_rows
    assert ["Present added manually", 1] in data.summary_rows
    assert data.summary_rows[-1] == ["Export date", "02/03/2026 17:45:00"]


def test_workbook_has_students_and_summary_sheets():
    svc = ExportService()
    content = svc.write_workbook(svc.build(_students(), _summary(), "5A", exported_at=EXPORTED_AT))

    sheets = pd.read_excel(io.BytesIO(content), sheet_name=None, header=None, engine="openpyxl")

    assert set(sheets) == {"Students", "Summary"}
    assert list(sheets["Students"].iloc[0]) == EXPORT_COLUMNS
    assert sheets["Students"].iloc[2, 1] == "Luis"
    assert sheets["Summary"].iloc[0, 0] == "ATTENDANCE SUMMARY"


def test_empty_roster_still_has_header_row():
    svc = ExportService()
    content = svc.write_workbook(svc.build([], AttendanceSummary(), "empty", exported_at=EXPORTED_AT))

    students = pd.read_excel(io.BytesIO(content), sheet_name="Students", engine="openpyxl")

    assert list(students.columns) == EXPORT_COLUMNS
    assert students.empty
