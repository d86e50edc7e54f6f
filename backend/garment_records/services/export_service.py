# Overview: Service-layer operations for exports; CSV and XLSX renderings of report and list views.

"""
Export Service

CSV layout matches the files users already import into spreadsheets:
- header line: labels joined by commas, unquoted
- data lines: every field quoted, embedded quotes doubled
- lines joined by \\n, no trailing newline, UTF-8

Missing values (no challan / no invoice yet) export as empty strings.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from ..models import Client, DeliveryChallan, Invoice, JobOrder
from .fulfillment_service import fulfillment
from .reporting_service import StatusFilter, StatusReportRow, status_report
from .store_service import StoreSnapshot
from .tax_service import challan_amount, tax_breakdown


class ExportError(Exception):
    """Raised when an export view or format is not recognised."""
    pass


@dataclass(frozen=True)
class Table:
    title: str
    headers: list[str]
    rows: list[list[Any]]


STATUS_REPORT_COLUMNS = [
    ("date", "Date"),
    ("job_order_no", "Job Order No"),
    ("vendor_name", "Vendor"),
    ("goods_description", "Goods Description"),
    ("color", "Color"),
    ("uom", "Unit"),
    ("quantity", "Total Quantity"),
    ("completed_qty", "Completed Qty"),
    ("damage_qty", "Damage Qty (Job)"),
    ("pending_qty", "Pending Qty"),
    ("status", "Status"),
    ("challan_no", "Challan No"),
    ("challan_date", "Challan Date"),
    ("challan_finished_qty", "Finished Qty (Challan)"),
    ("challan_damage_qty", "Damage Qty (Challan)"),
    ("invoice_date", "Invoice Date"),
    ("invoice_no", "Invoice No"),
    ("invoice_challan_qty", "Challan Qty (Inv)"),
    ("invoice_rate_per_piece", "Rate/Piece"),
    ("billed_to", "Billed To"),
    ("taxable_amount", "Taxable Amount"),
    ("cgst", "CGST"),
    ("sgst", "SGST"),
    ("total_amount", "Total Amount"),
]

JOB_ORDER_HEADERS = [
    "Job Order No", "Date", "Vendor", "Description", "Color", "Total Qty", "UOM",
    "Completed Qty", "Damage Qty", "Pending Qty", "Status", "Remark",
]

CHALLAN_HEADERS = [
    "Challan No", "Date", "PO Number", "PO Date", "Billed To", "Billed To Address",
    "Shipped To", "Shipped To Address", "Goods Description", "HSN Code", "Finished Qty",
    "UOM", "Damage Qty", "Rate Per Piece", "Amount", "Remark",
]

INVOICE_HEADERS = [
    "Invoice No", "Date", "PO Number", "Billed To", "Goods Description", "HSN Code",
    "Challan Qty", "Rate", "Taxable Amount", "CGST", "SGST", "Total Amount", "Remark",
]

CLIENT_HEADERS = ["Name", "Address", "GSTIN", "Contact Person", "Email", "Phone"]

EXPORT_FILENAMES = {
    "status": "status-report",
    "job-orders": "job-orders",
    "challans": "delivery-challans",
    "invoices": "invoices",
    "clients": "clients",
}

EXPORT_VIEWS = list(EXPORT_FILENAMES)
EXPORT_FORMATS = ["csv", "xlsx"]


def status_report_table(rows: Iterable[StatusReportRow]) -> Table:
    return Table(
        title="Status Report",
        headers=[label for _, label in STATUS_REPORT_COLUMNS],
        rows=[[getattr(row, key) for key, _ in STATUS_REPORT_COLUMNS] for row in rows],
    )


def job_orders_table(orders: Iterable[JobOrder], challans: Iterable[DeliveryChallan]) -> Table:
    challans = list(challans)
    rows = []
    for order in orders:
        result = fulfillment(order, challans)
        rows.append([
            order.job_order_no, order.date, order.vendor_name, order.goods_description,
            order.color, order.quantity, order.uom, result.completed_qty,
            order.damage_qty, result.pending_qty, order.status, order.remark,
        ])
    return Table(title="Job Orders", headers=list(JOB_ORDER_HEADERS), rows=rows)


def challans_table(challans: Iterable[DeliveryChallan]) -> Table:
    rows = [
        [
            c.challan_no, c.date, c.po_number, c.po_date,
            c.billed_to.name, c.billed_to.address,
            c.shipped_to.name, c.shipped_to.address,
            c.goods_description, c.hsn_code,
            c.finished_qty, c.uom, c.damage_qty, c.rate_per_piece,
            challan_amount(c),
            c.remark,
        ]
        for c in challans
    ]
    return Table(title="Delivery Challans", headers=list(CHALLAN_HEADERS), rows=rows)


def invoices_table(invoices: Iterable[Invoice]) -> Table:
    rows = []
    for inv in invoices:
        tax = tax_breakdown(inv)
        rows.append([
            inv.invoice_no, inv.date, inv.po_number, inv.billed_to.name,
            inv.goods_description, inv.hsn_code, inv.challan_qty, inv.rate_per_piece,
            tax.taxable, tax.cgst, tax.sgst, tax.total, inv.remark,
        ])
    return Table(title="Invoices", headers=list(INVOICE_HEADERS), rows=rows)


def clients_table(clients: Iterable[Client]) -> Table:
    rows = [
        [c.name, c.address, c.gstin, c.contact_person, c.email, c.phone]
        for c in clients
    ]
    return Table(title="Clients", headers=list(CLIENT_HEADERS), rows=rows)


def build_table(view: str, snapshot: StoreSnapshot, filters: StatusFilter | None = None) -> Table:
    """
    Build the export table for a named view.

    filters only applies to the status view.
    """
    if view == "status":
        rows = status_report(snapshot.job_orders, snapshot.challans, snapshot.invoices, filters)
        return status_report_table(rows)
    if view == "job-orders":
        return job_orders_table(snapshot.job_orders, snapshot.challans)
    if view == "challans":
        return challans_table(snapshot.challans)
    if view == "invoices":
        return invoices_table(snapshot.invoices)
    if view == "clients":
        return clients_table(snapshot.clients)
    raise ExportError(f"Unknown export view '{view}'")


def default_filename(view: str, fmt: str = "csv") -> str:
    if view not in EXPORT_FILENAMES:
        raise ExportError(f"Unknown export view '{view}'")
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"Unknown export format '{fmt}'")
    return f"{EXPORT_FILENAMES[view]}.{fmt}"


def _decimal_text(value: Decimal) -> str:
    """Plain positional form without trailing zeros: 14400.00 -> 14400, 0.0590 -> 0.059."""
    text = format(value.normalize(), "f")
    return "0" if text == "-0" else text


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Decimal):
        return _decimal_text(value)
    return str(value)


def to_csv(table: Table) -> str:
    buf = io.StringIO()
    buf.write(",".join(table.headers))
    if table.rows:
        buf.write("\n")
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerows([[_cell_text(v) for v in row] for row in table.rows])
    return buf.getvalue().rstrip("\n")


def to_csv_bytes(table: Table) -> bytes:
    return to_csv(table).encode("utf-8")


def _cell_xlsx(value: Any):
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    return value


def write_xlsx(table: Table, fp) -> None:
    """Write table to fp (path or binary file object) as a one-sheet workbook."""
    wb = Workbook()
    ws = wb.active
    ws.title = table.title[:31]
    ws.append(table.headers)
    for row in table.rows:
        ws.append([_cell_xlsx(v) for v in row])

    for col in range(1, len(table.headers) + 1):
        ws.column_dimensions[get_column_letter(col)].width = 18

    wb.save(fp)


def export_view(
    view: str,
    snapshot: StoreSnapshot,
    fp,
    *,
    fmt: str = "csv",
    filters: StatusFilter | None = None,
) -> Table:
    """Render a view to fp. CSV needs a binary file object or path."""
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"Unknown export format '{fmt}'")
    table = build_table(view, snapshot, filters)
    if fmt == "xlsx":
        write_xlsx(table, fp)
        return table
    data = to_csv_bytes(table)
    if isinstance(fp, (str, bytes)) or hasattr(fp, "__fspath__"):
        with open(fp, "wb") as fh:
            fh.write(data)
    else:
        fp.write(data)
    return table
