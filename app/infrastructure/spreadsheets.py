"""Helpers for reading uploaded spreadsheets and writing Excel exports."""

from __future__ import annotations

import math
from io import BytesIO
from typing import Any, Sequence

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

EXCEL_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)
SUPPORTED_SUFFIXES = (".xlsx", ".xls", ".ods", ".csv")

_EXCEL_ENGINES = {".ods": "odf", ".xls": "xlrd"}
_MAX_COLUMN_WIDTH = 60


def _clean_cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return int(value)
        return value
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if value is pd.NaT:
        return None
    return value


def read_spreadsheet_rows(file_bytes: bytes, suffix: str) -> list[dict[str, Any]]:
    """Return the first sheet of ``file_bytes`` as a list of ``header -> value`` rows.

    Headers are stripped, blank cells become ``None`` and rows where every cell
    is blank are dropped. Raises :class:`ValueError` when the content cannot be
    parsed as a spreadsheet of the given ``suffix``.
    """

    normalized_suffix = suffix.lower()
    if normalized_suffix not in SUPPORTED_SUFFIXES:
        raise ValueError("Formato de arquivo inválido. Use .xlsx, .xls, .ods ou .csv")

    buffer = BytesIO(file_bytes)
    try:
        if normalized_suffix == ".csv":
            dataframe = pd.read_csv(buffer, dtype=object)
        else:
            dataframe = pd.read_excel(
                buffer,
                dtype=object,
                engine=_EXCEL_ENGINES.get(normalized_suffix),
            )
    except Exception as exc:  # pandas raises several unrelated exception types
        raise ValueError("Erro ao processar arquivo Excel") from exc

    dataframe.columns = [str(column).strip() for column in dataframe.columns]
    rows: list[dict[str, Any]] = []
    for record in dataframe.to_dict(orient="records"):
        cleaned = {key: _clean_cell(value) for key, value in record.items()}
        if any(value is not None for value in cleaned.values()):
            rows.append(cleaned)
    return rows


def build_workbook(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    *,
    sheet_title: str = "Atividades",
) -> bytes:
    """Render ``rows`` under a styled header row and return the ``.xlsx`` bytes."""

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet_title

    worksheet.append(list(headers))
    header_fill = PatternFill(fill_type="solid", fgColor="4F81BD")
    header_font = Font(color="FFFFFFFF", bold=True)
    header_alignment = Alignment(horizontal="center", vertical="center")
    for cell in worksheet[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment
    worksheet.freeze_panes = "A2"

    widths = [len(str(header)) for header in headers]
    for row in rows:
        values = ["" if value is None else value for value in row]
        worksheet.append(values)
        for index, value in enumerate(values[: len(widths)]):
            widths[index] = max(widths[index], len(str(value)))

    for index, width in enumerate(widths, start=1):
        worksheet.column_dimensions[get_column_letter(index)].width = min(
            width + 2, _MAX_COLUMN_WIDTH
        )

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


__all__ = [
    "EXCEL_CONTENT_TYPE",
    "SUPPORTED_SUFFIXES",
    "build_workbook",
    "read_spreadsheet_rows",
]
