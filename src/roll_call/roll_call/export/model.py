from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ExportData:
    """What the workbook writer consumes: one row per student plus the summary block."""

    rows: list[dict]
    summary_rows: list[list[Any]]
    file_name: str
