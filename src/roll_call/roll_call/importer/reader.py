from __future__ import annotations

import csv
import io
import logging
from typing import Any, List

import pandas as pd

from ..core.exceptions import ImportParseError

logger = logging.getLogger(__name__)


def _cell_to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


def _looks_like_csv(file_name: str, media_type: str | None) -> bool:
    if (file_name or "").lower().endswith(".csv"):
        return True
    return (media_type or "").split(";")[0].strip().lower() == "text/csv"


def _decode(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        # Spreadsheet programs on Windows often save CSV in a legacy code page.
        return content.decode("latin-1")


def _read_csv(content: bytes) -> pd.DataFrame:
    """CSV rows may differ in length; every row is padded to the widest one."""

    text = _decode(content)
    width = max((len(fields) for fields in csv.reader(io.StringIO(text))), default=0)
    if width == 0:
        return pd.DataFrame()
    return pd.read_csv(
        io.StringIO(text),
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
    )


def read_rows(content: bytes, file_name: str, media_type: str | None = None) -> List[List[str]]:
    """Read the first sheet as raw rows of text, header row included.

    Rows shorter than the sheet are padded with empty cells. Any failure to
    parse is reported as one ImportParseError.
    """

    try:
        if _looks_like_csv(file_name, media_type):
            raw = _read_csv(content)
        else:
            engine = "openpyxl" if (file_name or "").lower().endswith(".xlsx") else None
            raw = pd.read_excel(io.BytesIO(content), sheet_name=0, header=None, dtype=object, engine=engine)
    except pd.errors.EmptyDataError:
        return []
    except Exception as e:
        logger.exception("%s: failed to read spreadsheet", file_name)
        raise ImportParseError("Error processing the file. Check that the format is correct.") from e

    rows: List[List[str]] = []
    for record in raw.itertuples(index=False, name=None):
        rows.append([_cell_to_text(v) for v in record])

    logger.debug("%s: read %d raw rows", file_name, len(rows))
    return rows
