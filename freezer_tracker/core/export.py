"""
Excel export of the full freezer inventory.

The workbook has four sheets:
1. Summary (in-freezer and consumed totals per kind)
2. Raw Food
3. Prepared Meals
4. Breast Milk

Each item sheet lists what is currently in the freezer (with days stored)
followed by consumed items (with the removal date). The workbook is built
entirely in memory; callers only receive bytes once it is complete.
"""

import io
import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from freezer_tracker.core import breast_milk, prepared_meals, raw_food, stats
from freezer_tracker.core.dates import days_since, today_str
from freezer_tracker.core.errors import InternalError

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Color constants
HEADER_COLOR = "0EA5E9"
CONSUMED_HEADER_COLOR = "10B981"
SECTION_COLOR = "E0F2FE"
SECTION_TEXT_COLOR = "1E3A5F"
BORDER_COLOR = "0284C7"
MUTED_TEXT_COLOR = "6B7280"
EMPTY_TEXT_COLOR = "9CA3AF"


def create_header_style(fill_color: str = HEADER_COLOR) -> Dict[str, Any]:
    """Create header row style (colored background, white bold text)."""
    side = Side(style="thin", color=BORDER_COLOR)
    return {
        "font": Font(name="Calibri", size=12, bold=True, color="FFFFFF"),
        "fill": PatternFill(start_color=fill_color, end_color=fill_color, fill_type="solid"),
        "alignment": Alignment(horizontal="center", vertical="center"),
        "border": Border(left=side, right=side, top=side, bottom=side),
    }


def apply_style(cell, style: Dict[str, Any]) -> None:
    for attr, value in style.items():
        setattr(cell, attr, value)


def export_filename(today: Optional[date] = None) -> str:
    return f"freezer-inventory-{today_str(today)}.xlsx"


def _as_date(value: Optional[str]):
    return datetime.strptime(value[:10], "%Y-%m-%d") if value else None


class _Column:
    """One column of an item table: header, value getter, number format, width."""

    def __init__(self, header: str, getter: Callable, number_format: str = None, width: int = 14):
        self.header = header
        self.getter = getter
        self.number_format = number_format
        self.width = width


def _write_title(ws, title: str, color: str, span: int) -> None:
    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=span)
    cell = ws.cell(row=1, column=1, value=title)
    cell.font = Font(name="Calibri", size=16, bold=True, color=color)
    cell.alignment = Alignment(horizontal="center", vertical="center")
    ws.row_dimensions[1].height = 30


def _write_section(ws, row: int, title: str, span: int) -> None:
    ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=span)
    cell = ws.cell(row=row, column=1, value=title)
    cell.font = Font(name="Calibri", size=11, bold=True, color=SECTION_TEXT_COLOR)
    cell.fill = PatternFill(start_color=SECTION_COLOR, end_color=SECTION_COLOR, fill_type="solid")
    cell.alignment = Alignment(horizontal="left", vertical="center")


def _write_table(ws, row: int, columns: List[_Column], items: list, header_color: str,
                 muted: bool = False) -> int:
    """Write a header row and one row per item. Returns the next free row."""
    style = create_header_style(header_color)
    for col_idx, column in enumerate(columns, start=1):
        apply_style(ws.cell(row=row, column=col_idx, value=column.header), style)
    ws.row_dimensions[row].height = 25
    row += 1

    bottom = Border(bottom=Side(style="thin", color="E5E7EB"))
    for item in items:
        for col_idx, column in enumerate(columns, start=1):
            cell = ws.cell(row=row, column=col_idx, value=column.getter(item))
            if column.number_format:
                cell.number_format = column.number_format
            cell.alignment = Alignment(vertical="center")
            cell.border = bottom
            if muted:
                cell.font = Font(color=MUTED_TEXT_COLOR)
        row += 1
    return row


def _write_item_sheet(wb: Workbook, title: str, color: str, active_columns: List[_Column],
                      consumed_columns: List[_Column], active: list, consumed: list) -> None:
    ws = wb.create_sheet(title)
    ws.sheet_properties.tabColor = color
    span = max(len(active_columns), len(consumed_columns))
    _write_title(ws, f"{title} Inventory", color, span)

    _write_section(ws, 3, "Currently in Freezer", span)
    row = _write_table(ws, 4, active_columns, active, HEADER_COLOR)
    if not active:
        cell = ws.cell(row=row, column=1, value="No items in freezer")
        cell.font = Font(italic=True, color=EMPTY_TEXT_COLOR)
        row += 1

    row += 2
    _write_section(ws, row, "Consumed Items", span)
    _write_table(ws, row + 1, consumed_columns, consumed, CONSUMED_HEADER_COLOR, muted=True)

    for col_idx, column in enumerate(active_columns, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = column.width


def _write_summary(wb: Workbook, totals: stats.FreezerStats) -> None:
    ws = wb.active
    ws.title = "Summary"
    ws.sheet_properties.tabColor = HEADER_COLOR

    ws.merge_cells("A1:D1")
    ws["A1"] = "Freezer Inventory Summary"
    ws["A1"].font = Font(name="Calibri", size=18, bold=True, color="0369A1")
    ws["A1"].alignment = Alignment(horizontal="center", vertical="center")
    ws.row_dimensions[1].height = 35

    ws.merge_cells("A2:D2")
    ws["A2"] = f"Generated: {datetime.now():%Y-%m-%d %H:%M}"
    ws["A2"].font = Font(italic=True, color=MUTED_TEXT_COLOR)
    ws["A2"].alignment = Alignment(horizontal="center")

    raw, meals, milk = totals.raw_food, totals.prepared_meals, totals.breast_milk
    sections = [
        ("Raw Food", [
            ("In Freezer:", f"{raw.in_freezer_kg:.1f} kg", f"{raw.in_freezer_pieces:g} pieces"),
            ("Consumed:", f"{raw.consumed_kg:.1f} kg", f"{raw.consumed_pieces:g} pieces"),
        ]),
        ("Prepared Meals", [
            ("In Freezer:", f"{meals.bags_in_freezer} bags", f"{meals.portions_in_freezer} portions"),
            ("Consumed:", f"{meals.bags_consumed} bags", f"{meals.portions_consumed} portions"),
        ]),
        ("Breast Milk", [
            ("In Freezer:", f"{milk.in_freezer_ml} ml", f"{milk.bags_in_freezer} bags"),
            ("Consumed:", f"{milk.consumed_ml} ml", f"{milk.bags_consumed} bags"),
        ]),
    ]

    row = 4
    for heading, lines in sections:
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=4)
        ws.cell(row=row, column=1, value=heading).font = Font(size=14, bold=True)
        row += 1
        for values in lines:
            for col_idx, value in enumerate(values, start=1):
                ws.cell(row=row, column=col_idx, value=value)
            row += 1
        row += 1

    for col_idx, width in enumerate((18, 15, 15, 15), start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def build_workbook(today: Optional[date] = None) -> bytes:
    """Render the whole inventory as .xlsx bytes.

    Raises InternalError if anything fails while reading or rendering, so no
    partial document is ever returned.
    """
    def stored(item):
        return days_since(item.date_added, today)

    def added(item):
        return _as_date(item.date_added)

    def removed(item):
        return _as_date(item.date_removed)

    def comment(item):
        return item.comment or ""

    try:
        wb = Workbook()
        _write_summary(wb, stats.compute())

        raw_lead = [
            _Column("Sub-Category", lambda i: i.sub_category, width=15),
            _Column("Name", lambda i: i.name, width=25),
            _Column("Amount", lambda i: float(i.amount), "0.00", width=10),
            _Column("Unit", lambda i: i.measuring_unit, width=10),
            _Column("Date Added", added, "yyyy-mm-dd"),
        ]
        _write_item_sheet(
            wb, "Raw Food", "EF4444",
            raw_lead + [_Column("Days Stored", stored, "0"), _Column("Comment", comment, width=30)],
            raw_lead + [_Column("Date Removed", removed, "yyyy-mm-dd"), _Column("Comment", comment, width=30)],
            raw_food.list_active(), raw_food.list_consumed(),
        )

        meal_lead = [
            _Column("Name", lambda i: i.name, width=30),
            _Column("Portions", lambda i: int(i.portions), "0", width=12),
            _Column("Date Added", added, "yyyy-mm-dd"),
        ]
        _write_item_sheet(
            wb, "Prepared Meals", "F59E0B",
            meal_lead + [_Column("Days Stored", stored, "0"), _Column("Comment", comment, width=35)],
            meal_lead + [_Column("Date Removed", removed, "yyyy-mm-dd"), _Column("Comment", comment, width=35)],
            prepared_meals.list_active(), prepared_meals.list_consumed(),
        )

        milk_lead = [
            _Column("Volume (ml)", lambda i: int(i.volume_ml), "0"),
            _Column("Date Expressed", lambda i: _as_date(i.date_expressed), "yyyy-mm-dd", width=16),
            _Column("Date Added", added, "yyyy-mm-dd"),
        ]
        _write_item_sheet(
            wb, "Breast Milk", "8B5CF6",
            milk_lead + [_Column("Days Stored", stored, "0"), _Column("Comment", comment, width=35)],
            milk_lead + [_Column("Date Removed", removed, "yyyy-mm-dd"), _Column("Comment", comment, width=35)],
            breast_milk.list_active(), breast_milk.list_consumed(),
        )

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()
    except Exception as e:
        logger.exception("Export failed")
        raise InternalError("Failed to generate export") from e
