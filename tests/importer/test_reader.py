from __future__ import annotations

import io
from datetime import datetime

import pandas as pd
import pytest

from src.roll_call.roll_call.core.exceptions import ImportParseError
from src.roll_call.roll_call.importer.normalizer import normalize_rows
from src.roll_call.roll_call.importer.reader import read_rows


def _xlsx_bytes(rows) -> bytes:
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, index=False, header=False, sheet_name="Hoja1")
    return out.getvalue()


def test_reads_csv_as_text_rows():
    content = "Nombre,Segundo,Apellido,Segundo apellido\nAna,,García,Pérez\n00123,,López,\n".encode("utf-8")

    rows = read_rows(content, "students.csv")

    assert rows == [
        ["Nombre", "Segundo", "Apellido", "Segundo apellido"],
        ["Ana", "", "García", "Pérez"],
        ["00123", "", "López", ""],
    ]


def test_reads_csv_with_bom():
    content = "\ufeffH1,H2,H3,H4\nAna,,Ruiz,\n".encode("utf-8")

    rows = read_rows(content, "export", media_type="text/csv; charset=utf-8")

    assert rows[0][0] == "H1"
    assert rows[1] == ["Ana", "", "Ruiz", ""]


def test_reads_first_sheet_of_xlsx():
    content = _xlsx_bytes(
        [
            ["Nombre", "Segundo", "Apellido", "Segundo apellido"],
            ["Ana", None, "García", "Pérez"],
            ["Luis", "Alberto", "Ortiz", 12],
        ]
    )

    rows = read_rows(content, "students.xlsx")

    assert rows[1] == ["Ana", "", "García", "Pérez"]
    assert rows[2] == ["Luis", "Alberto", "Ortiz", "12"]


def test_empty_csv_has_no_rows():
    assert read_rows(b"", "empty.csv") == []


def test_corrupt_workbook_is_a_parse_error():
    with pytest.raises(ImportParseError):
        read_rows(b"definitely not a zip archive", "broken.xlsx")


def test_short_title_line_does_not_fix_the_csv_width():
    content = "Listado\nAna,,García,Pérez\nLuis,,Ortiz,\n".encode("utf-8")

    rows = read_rows(content, "students.csv")

    assert rows == [
        ["Listado", "", "", ""],
        ["Ana", "", "García", "Pérez"],
        ["Luis", "", "Ortiz", ""],
    ]


def test_csv_row_with_extra_cell_pads_the_others():
    content = "H1,H2,H3,H4\nAna,,García,Pérez\nLuis,,Ortiz,,nota\n".encode("utf-8")

    rows = read_rows(content, "students.csv")

    assert rows[1] == ["Ana", "", "García", "Pérez", ""]
    assert rows[2] == ["Luis", "", "Ortiz", "", "nota"]


def test_ragged_csv_imports_every_valid_row():
    for content in (
        "Listado\nAna,,García,Pérez\nLuis,,Ortiz,\n",
        "H1,H2,H3,H4\nAna,,García,Pérez\nLuis,,Ortiz,,nota\n",
    ):
        rows = read_rows(content.encode("utf-8"), "students.csv")
        result = normalize_rows(rows, now=datetime(2026, 3, 2, 8, 0, 0))

        assert [s.full_name for s in result.students] == ["Ana García Pérez", "Luis Ortiz"]


def test_latin1_csv_is_decoded():
    content = "Nombre,,Apellido,\nIñigo,,Muñoz,\n".encode("latin-1")

    rows = read_rows(content, "students.csv")

    assert rows[1] == ["Iñigo", "", "Muñoz", ""]
