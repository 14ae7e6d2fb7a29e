# ledger/exports.py
"""
File exports for ledger reports.

Supports Excel (.xlsx), CSV (.csv) and text (.txt). A report is a list
of row dicts plus column definitions:

    {"key": "debit", "header": "Debit", "width": 14, "numeric": True}
"""

import csv
from datetime import date, datetime
from decimal import Decimal
import io
from typing import Any, Optional

from django.http import HttpResponse
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter


class ExportFormat:
    EXCEL = "xlsx"
    CSV = "csv"
    TXT = "txt"

    CHOICES = [EXCEL, CSV, TXT]
    CONTENT_TYPES = {
        EXCEL: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        CSV: "text/csv",
        TXT: "text/plain",
    }


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


def _cell_value(value: Any, numeric: bool):
    # Decimals go in as numbers, everything else as text.
    if numeric and isinstance(value, Decimal):
        return float(value)
    return format_value(value)


def export_to_excel(
    rows: list[dict],
    columns: list[dict],
    title: str,
    subtitle: str = "",
    totals: Optional[dict] = None,
) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]

    border = Border(*(Side(style="thin"),) * 4)
    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="305496", end_color="305496", fill_type="solid")

    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=len(columns))
    ws.cell(row=1, column=1, value=title).font = Font(bold=True, size=14)
    if subtitle:
        ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=len(columns))
        ws.cell(row=2, column=1, value=subtitle).font = Font(italic=True, size=10, color="666666")

    header_row = 4
    for col_idx, col in enumerate(columns, 1):
        cell = ws.cell(row=header_row, column=col_idx, value=col["header"])
        cell.font = header_font
        cell.fill = header_fill
        cell.border = border
        cell.alignment = Alignment(horizontal="center")
        ws.column_dimensions[get_column_letter(col_idx)].width = col.get("width", 15)

    row_idx = header_row
    for row_idx, row in enumerate(rows, header_row + 1):
        for col_idx, col in enumerate(columns, 1):
            numeric = col.get("numeric", False)
            cell = ws.cell(row=row_idx, column=col_idx, value=_cell_value(row.get(col["key"]), numeric))
            cell.border = border
            if numeric:
                cell.alignment = Alignment(horizontal="right")
                cell.number_format = "#,##0.00"

    if totals:
        total_row = row_idx + 1
        for col_idx, col in enumerate(columns, 1):
            if col["key"] in totals:
                cell = ws.cell(row=total_row, column=col_idx,
                               value=_cell_value(totals[col["key"]], col.get("numeric", False)))
                cell.font = Font(bold=True)
                cell.number_format = "#,##0.00"

    ws.freeze_panes = ws.cell(row=header_row + 1, column=1)

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def export_to_csv(rows: list[dict], columns: list[dict], totals: Optional[dict] = None) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([col["header"] for col in columns])
    for row in rows:
        writer.writerow([format_value(row.get(col["key"])) for col in columns])
    if totals:
        writer.writerow([format_value(totals.get(col["key"])) for col in columns])
    return output.getvalue()


def export_to_txt(rows: list[dict], columns: list[dict], totals: Optional[dict] = None) -> str:
    """Fixed-width columns, capped at 50 characters each."""
    all_rows = rows + ([totals] if totals else [])
    widths = []
    for col in columns:
        width = max([len(col["header"])] + [len(format_value(r.get(col["key"]))) for r in all_rows])
        widths.append(min(width, 50))

    def line(values):
        parts = []
        for col, width, value in zip(columns, widths, values):
            if len(value) > width:
                value = value[:width - 3] + "..."
            parts.append(value.rjust(width) if col.get("numeric") else value.ljust(width))
        return "  ".join(parts).rstrip()

    lines = [line([col["header"] for col in columns]), line(["-" * w for w in widths])]
    lines += [line([format_value(r.get(col["key"])) for col in columns]) for r in rows]
    if totals:
        lines.append(line(["=" * w for w in widths]))
        lines.append(line([format_value(totals.get(col["key"])) for col in columns]))
    return "\n".join(lines) + "\n"


def create_export_response(
    rows: list[dict],
    columns: list[dict],
    format: str,
    filename: str,
    title: str,
    subtitle: str = "",
    totals: Optional[dict] = None,
) -> HttpResponse:
    if format not in ExportFormat.CHOICES:
        raise ValueError(f"Invalid format: {format}. Must be one of {ExportFormat.CHOICES}")

    content_type = ExportFormat.CONTENT_TYPES[format]
    if format == ExportFormat.EXCEL:
        response = HttpResponse(
            export_to_excel(rows, columns, title=title, subtitle=subtitle, totals=totals),
            content_type=content_type,
        )
    elif format == ExportFormat.CSV:
        response = HttpResponse(export_to_csv(rows, columns, totals=totals), content_type=content_type)
        response.charset = "utf-8-sig"
    else:
        response = HttpResponse(export_to_txt(rows, columns, totals=totals), content_type=content_type)

    response["Content-Disposition"] = f'attachment; filename="{filename}.{format}"'
    return response


# =============================================================================
# Report columns
# =============================================================================

TRIAL_BALANCE_COLUMNS = [
    {"key": "account_number", "header": "Account", "width": 10},
    {"key": "account_name", "header": "Account Name", "width": 40},
    {"key": "debit", "header": "Debit", "width": 15, "numeric": True},
    {"key": "credit", "header": "Credit", "width": 15, "numeric": True},
    {"key": "balance", "header": "Balance", "width": 15, "numeric": True},
]

LEDGER_COLUMNS = [
    {"key": "date", "header": "Date", "width": 12},
    {"key": "cheque_date", "header": "Cheque Date", "width": 12},
    {"key": "account_number", "header": "Account", "width": 10},
    {"key": "account_name", "header": "Account Name", "width": 35},
    {"key": "description", "header": "Description", "width": 45},
    {"key": "eft_number", "header": "EFT #", "width": 10},
    {"key": "reference", "header": "Reference", "width": 12},
    {"key": "debit", "header": "Debit", "width": 14, "numeric": True},
    {"key": "credit", "header": "Credit", "width": 14, "numeric": True},
]


def trial_balance_export(report: dict, format: str) -> HttpResponse:
    period = ""
    if report["from_date"] and report["to_date"]:
        period = f"{report['from_date'].isoformat()} to {report['to_date'].isoformat()}"
    totals = {
        "account_name": "Total",
        "debit": report["total_debit"],
        "credit": report["total_credit"],
        "balance": report["total_debit"] - report["total_credit"],
    }
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return create_export_response(
        report["accounts"],
        TRIAL_BALANCE_COLUMNS,
        format=format,
        filename=f"trial_balance_{stamp}",
        title="Trial Balance",
        subtitle=period,
        totals=totals,
    )


def ledger_export(entries, format: str) -> HttpResponse:
    rows = [
        {col["key"]: getattr(entry, col["key"]) for col in LEDGER_COLUMNS}
        for entry in entries
    ]
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return create_export_response(
        rows,
        LEDGER_COLUMNS,
        format=format,
        filename=f"general_ledger_{stamp}",
        title="General Ledger",
    )
