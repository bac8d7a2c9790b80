from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import Optional, Sequence

import pandas as pd

from ..common.datetime_utils import format_day, now_local
from ..core.constants import STUDENTS_SHEET, SUMMARY_SHEET
from ..core.exceptions import ExportError
from ..roster.model import Student
from ..summary.model import AttendanceSummary
from .model import ExportData

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "No.",
    "Given name",
    "Family name",
    "National ID",
    "Phone",
    "Attendance",
    "Origin",
    "Created",
]

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ExportService:
    def build(
        self,
        students: Sequence[Student],
        summary: AttendanceSummary,
        list_name: str,
        *,
        exported_at: Optional[datetime] = None,
    ) -> ExportData:
        exported_at = exported_at or now_local()

        rows = [
            {
                "No.": index,
                "Given name": s.given_name,
                "Family name": s.family_name,
                "National ID": s.national_id or "",
                "Phone": s.phone or "",
                "Attendance": "Present" if s.present else "Absent",
                "Origin": "Manual" if s.is_manual else "Import",
                "Created": format_day(s.created_at),
            }
            for index, s in enumerate(students, start=1)
        ]

        summary_rows = [
            ["ATTENDANCE SUMMARY"],
            [""],
            ["Total students", summary.total],
            ["Present", summary.present],
            ["Absent", summary.absent],
            [""],
            ["Present from import", summary.present_from_import],
            ["Present added manually", summary.present_manual],
            ["Absent from import", summary.absent_from_import],
            ["Absent added manually", summary.absent_manual],
            [""],
            ["Export date", exported_at.strftime("%d/%m/%Y %H:%M:%S")],
        ]

        file_name = f"{list_name}_{exported_at.strftime('%Y-%m-%d')}.xlsx"
        return ExportData(rows=rows, summary_rows=summary_rows, file_name=file_name)

    def write_workbook(self, data: ExportData) -> bytes:
        out = io.BytesIO()
        try:
            with pd.ExcelWriter(out, engine="openpyxl") as writer:
                pd.DataFrame(data.rows, columns=EXPORT_COLUMNS).to_excel(
                    writer, index=False, sheet_name=STUDENTS_SHEET
                )
                pd.DataFrame(data.summary_rows).to_excel(writer, index=False, header=False, sheet_name=SUMMARY_SHEET)
        except Exception as e:
            logger.exception("Export of %s failed", data.file_name)
            raise ExportError("Error exporting to Excel") from e
        return out.getvalue()
