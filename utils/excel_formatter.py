"""
Excel formatter — writes the filtered price list to a downloadable workbook.

One sheet, "Прайс-лист": a styled header row, one row per item, price number
formats, auto-filter, frozen header and auto-fit column widths.

Public API:
    build_export_rows(items, include_flags) → list[dict]
    write_price_list(rows, output) → None
    export_filename(today) → str
"""

import logging
from datetime import date
from pathlib import Path
from typing import BinaryIO

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
import pandas as pd

from config.schema import (
    EXPORT_COLUMNS,
    EXPORT_FLAG_COLUMNS,
    EXPORT_NUMBER_FORMATS,
    EXPORT_SHEET_NAME,
)
from processing.record_assembler import Item

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Constants
# ═══════════════════════════════════════════════════════════════════════════

_HEADER_FILL = PatternFill(start_color="2E7D32", end_color="2E7D32", fill_type="solid")
_HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
_NORMAL_FONT = Font(size=10)

# Max column width (characters) to prevent excessively wide columns
_MAX_COL_WIDTH = 60
_MIN_COL_WIDTH = 8

_FLAG_YES = "Да"


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def build_export_rows(items: list[Item], include_flags: bool = False) -> list[dict]:
    """
    Project items into flat export rows keyed by sheet column name.

    Args:
        items: The currently filtered items (not grouped).
        include_flags: Also export the new / distributor flags.

    Returns:
        One dict per item, in item order.  A missing promo price is "".
    """
    rows: list[dict] = []

    for item in items:
        row = {
            "Категория": item.category,
            "Артикул": item.article,
            "Наименование": item.name,
            "Упак.": item.pack,
            "Цена": item.price,
            "Акция": item.promo_price if item.promo_price is not None else "",
        }
        if include_flags:
            row["Новинка"] = _FLAG_YES if item.is_new else ""
            row["Дистрибьютор"] = _FLAG_YES if item.is_distributor else ""
        rows.append(row)

    return rows


def write_price_list(rows: list[dict], output: Path | str | BinaryIO) -> None:
    """
    Write export rows to an .xlsx workbook.

    Args:
        rows: Output of build_export_rows().
        output: File path, or a binary file object (e.g. io.BytesIO) for
                in-memory downloads.
    """
    dataframe = pd.DataFrame(rows)
    columns = _export_columns(dataframe)

    workbook = openpyxl.Workbook()
    worksheet = workbook.active
    worksheet.title = EXPORT_SHEET_NAME

    for col_idx, col_name in enumerate(columns, start=1):
        cell = worksheet.cell(row=1, column=col_idx, value=col_name)
        cell.fill = _HEADER_FILL
        cell.font = _HEADER_FONT
        cell.alignment = Alignment(horizontal="center")

    for row_offset, df_idx in enumerate(dataframe.index):
        excel_row = row_offset + 2  # 1-based, header is row 1
        for col_offset, col_name in enumerate(columns):
            value = dataframe.at[df_idx, col_name]
            if value == "" or pd.isna(value):
                value = None
            cell = worksheet.cell(row=excel_row, column=col_offset + 1, value=value)
            cell.font = _NORMAL_FONT

    _apply_number_formats(worksheet, columns, len(dataframe))
    _auto_fit_column_widths(worksheet)

    last_col_letter = get_column_letter(len(columns))
    worksheet.auto_filter.ref = f"A1:{last_col_letter}{len(dataframe) + 1}"
    worksheet.freeze_panes = "A2"

    if isinstance(output, (str, Path)):
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        workbook.save(str(output))
    else:
        workbook.save(output)
    workbook.close()

    logger.info(f"Price list exported: {len(dataframe)} rows")


def export_filename(today: date | None = None) -> str:
    """Download filename stamped with the export date, e.g. price_list_18.10.2026.xlsx."""
    today = today or date.today()
    return f"price_list_{today.strftime('%d.%m.%Y')}.xlsx"


# ═══════════════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════════════

def _export_columns(dataframe: pd.DataFrame) -> list[str]:
    """Sheet columns in output order; flag columns only when present."""
    columns = list(EXPORT_COLUMNS)
    columns.extend(c for c in EXPORT_FLAG_COLUMNS if c in dataframe.columns)
    for col_name in columns:
        if col_name not in dataframe.columns:
            dataframe[col_name] = None
    return columns


def _apply_number_formats(
    worksheet: openpyxl.worksheet.worksheet.Worksheet,
    columns: list[str],
    row_count: int,
) -> None:
    """Apply Excel number formats to price columns."""
    for col_offset, col_name in enumerate(columns):
        fmt = EXPORT_NUMBER_FORMATS.get(col_name)
        if fmt is None:
            continue

        col_idx = col_offset + 1
        for row_idx in range(2, row_count + 2):  # skip header row
            worksheet.cell(row=row_idx, column=col_idx).number_format = fmt


def _auto_fit_column_widths(
    worksheet: openpyxl.worksheet.worksheet.Worksheet,
) -> None:
    """
    Set column widths based on content length.

    Width is the longest value in the column, clamped between
    _MIN_COL_WIDTH and _MAX_COL_WIDTH.
    """
    for column_cells in worksheet.columns:
        max_length = _MIN_COL_WIDTH
        col_letter = get_column_letter(column_cells[0].column)

        for cell in column_cells:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))

        worksheet.column_dimensions[col_letter].width = min(max_length + 2, _MAX_COL_WIDTH)
