"""Excel rendering for price-history and harvest reports (openpyxl)."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

PRICE_HISTORY_SHEET = "Price History Report"
HARVEST_SHEET = "Harvest Report"

PRICE_HISTORY_HEADERS = ("No", "Date", "Price", "Unit", "Commodity", "City")
HARVEST_HEADERS = ("No", "Harvest Date", "Quantity", "Unit", "Commodity", "City", "Farmer")

TITLE_ROW = 1
HEADER_ROW = 3
FIRST_DATA_ROW = 4
MIN_COLUMN_WIDTH = 15

_thin = Side(style="thin")
_border = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)
_header_font = Font(bold=True)
_header_fill = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
_center = Alignment(horizontal="center", vertical="center")


def _cell_value(value: Any) -> Any:
    # Excel has no timezone support; dates are rendered as text
    if isinstance(value, datetime):
        return value.strftime("%d-%m-%Y %H:%M:%S")
    if isinstance(value, date):
        return value.strftime("%d-%m-%Y")
    return value


def write_table(
    path: Path,
    sheet_title: str,
    title: str,
    headers: Sequence[str],
    rows: Iterable[Sequence[Any]],
) -> Path:
    """Write a titled, numbered table to `path` and return it.

    Layout: title merged across the header width on row 1, styled headers on
    row 3, data from row 4 with a running "No" column.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title

    last_col = get_column_letter(len(headers))
    ws.cell(row=TITLE_ROW, column=1, value=title).font = Font(bold=True, size=14)
    ws.merge_cells(f"A{TITLE_ROW}:{last_col}{TITLE_ROW}")
    ws.cell(row=TITLE_ROW, column=1).alignment = _center

    for col, header in enumerate(headers, start=1):
        cell = ws.cell(row=HEADER_ROW, column=col, value=header)
        cell.font = _header_font
        cell.fill = _header_fill
        cell.alignment = _center
        cell.border = _border

    widths = [max(MIN_COLUMN_WIDTH, len(h) + 2) for h in headers]
    for index, row in enumerate(rows, start=1):
        values = [index, *(_cell_value(v) for v in row)]
        for col, value in enumerate(values, start=1):
            cell = ws.cell(row=FIRST_DATA_ROW + index - 1, column=col, value=value)
            cell.border = _border
            widths[col - 1] = max(widths[col - 1], len(str(value)) + 2)

    for col, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(col)].width = width

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def write_price_history_report(path: Path, rows: list[dict[str, Any]]) -> Path:
    commodity, city = rows[0]["commodity"], rows[0]["city"]
    return write_table(
        path,
        PRICE_HISTORY_SHEET,
        f"Price History Report - {commodity} in {city}",
        PRICE_HISTORY_HEADERS,
        ((r["date"], r["price"], r["unit"], r["commodity"], r["city"]) for r in rows),
    )


def write_harvest_report(path: Path, rows: list[dict[str, Any]]) -> Path:
    first = rows[0]
    return write_table(
        path,
        HARVEST_SHEET,
        f"Harvest Report - {first['commodity']} in {first['city']} by {first['farmer']}",
        HARVEST_HEADERS,
        (
            (r["harvest_date"], r["quantity"], r["unit"], r["commodity"], r["city"], r["farmer"])
            for r in rows
        ),
    )
