# Overview: Service-layer operations for reporting; joins orders, challans and invoices.

"""
Reporting Service

The status report is one row per job order, joining the order with every
challan raised against it and the first invoice raised against it.

KNOWN LIMITATION: only the first invoice with a matching PO number is shown.
Further invoices for the same order do not appear in the report.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from ..models import Client, DeliveryChallan, Invoice, JobOrder, JobOrderStatus
from .fulfillment_service import fulfillment
from .tax_service import tax_breakdown


@dataclass(frozen=True)
class StatusFilter:
    """Empty strings mean 'no filter'."""
    search: str = ""
    vendor: str = ""
    status: str = ""


@dataclass(frozen=True)
class StatusReportRow:
    id: str | None
    job_order_no: str
    date: str
    vendor_name: str
    goods_description: str
    color: str
    quantity: int
    uom: str
    completed_qty: int
    damage_qty: int
    pending_qty: int
    status: JobOrderStatus
    remark: str
    challan_no: str | None = None
    challan_date: str | None = None
    challan_finished_qty: int | None = None
    challan_damage_qty: int | None = None
    invoice_date: str | None = None
    invoice_no: str | None = None
    invoice_challan_qty: int | None = None
    invoice_rate_per_piece: Decimal | None = None
    billed_to: str | None = None
    taxable_amount: Decimal | None = None
    cgst: Decimal | None = None
    sgst: Decimal | None = None
    total_amount: Decimal | None = None


def _contains(haystack: str | None, needle: str) -> bool:
    return needle in (haystack or "").lower()


def _status_value(status) -> str:
    return status.value if isinstance(status, JobOrderStatus) else str(status)


def matches_status_filter(order: JobOrder, filters: StatusFilter) -> bool:
    if filters.vendor and order.vendor_name != filters.vendor:
        return False
    if filters.status and _status_value(order.status) != filters.status:
        return False
    if not filters.search:
        return True
    needle = filters.search.lower()
    return (
        _contains(order.job_order_no, needle)
        or _contains(order.vendor_name, needle)
        or _contains(order.goods_description, needle)
    )


def first_invoice_for(job_order_no: str, invoices: Iterable[Invoice]) -> Invoice | None:
    for invoice in invoices:
        if invoice.po_number == job_order_no:
            return invoice
    return None


def build_status_row(
    order: JobOrder,
    challans: Iterable[DeliveryChallan],
    invoices: Iterable[Invoice],
) -> StatusReportRow:
    result = fulfillment(order, challans)
    related = result.challans

    challan_fields = {}
    if related:
        challan_fields = {
            "challan_no": ", ".join(c.challan_no for c in related),
            "challan_date": ", ".join(c.date for c in related),
            "challan_finished_qty": result.completed_qty,
            "challan_damage_qty": result.damage_qty,
        }

    invoice_fields = {}
    invoice = first_invoice_for(order.job_order_no, invoices)
    if invoice is not None:
        tax = tax_breakdown(invoice)
        invoice_fields = {
            "invoice_date": invoice.date,
            "invoice_no": invoice.invoice_no,
            "invoice_challan_qty": invoice.challan_qty,
            "invoice_rate_per_piece": invoice.rate_per_piece,
            "billed_to": invoice.billed_to.name,
            "taxable_amount": tax.taxable,
            "cgst": tax.cgst,
            "sgst": tax.sgst,
            "total_amount": tax.total,
        }

    return StatusReportRow(
        id=order.id,
        job_order_no=order.job_order_no,
        date=order.date,
        vendor_name=order.vendor_name,
        goods_description=order.goods_description,
        color=order.color,
        quantity=order.quantity,
        uom=order.uom,
        completed_qty=result.completed_qty,
        damage_qty=order.damage_qty,
        pending_qty=result.pending_qty,
        status=order.status,
        remark=order.remark,
        **challan_fields,
        **invoice_fields,
    )


def status_report(
    orders: Iterable[JobOrder],
    challans: Iterable[DeliveryChallan],
    invoices: Iterable[Invoice],
    filters: StatusFilter | None = None,
) -> list[StatusReportRow]:
    """
    Build the comprehensive status report.

    Args:
        orders: Job orders in display order (output keeps this order)
        challans: All delivery challans
        invoices: All invoices
        filters: Optional search/vendor/status filter

    Returns:
        One StatusReportRow per job order that passes the filter
    """
    filters = filters or StatusFilter()
    challans = list(challans)
    invoices = list(invoices)
    return [
        build_status_row(order, challans, invoices)
        for order in orders
        if matches_status_filter(order, filters)
    ]


def unique_vendors(orders: Iterable[JobOrder]) -> list[str]:
    seen: list[str] = []
    for order in orders:
        if order.vendor_name not in seen:
            seen.append(order.vendor_name)
    return seen


# ----------------------------------------------------------------------
# List-view filters
# ----------------------------------------------------------------------


def filter_job_orders(
    orders: Iterable[JobOrder],
    *,
    search: str = "",
    vendor: str = "",
    status: str = "",
) -> list[JobOrder]:
    """Job order list: search over number, description and color."""
    needle = search.lower()
    rows = []
    for order in orders:
        if vendor and order.vendor_name != vendor:
            continue
        if status and _status_value(order.status) != status:
            continue
        if (
            _contains(order.job_order_no, needle)
            or _contains(order.goods_description, needle)
            or _contains(order.color, needle)
        ):
            rows.append(order)
    return rows


def filter_challans(challans: Iterable[DeliveryChallan], search: str = "") -> list[DeliveryChallan]:
    needle = search.lower()
    return [
        c for c in challans
        if _contains(c.challan_no, needle)
        or _contains(c.po_number, needle)
        or _contains(c.goods_description, needle)
    ]


def filter_invoices(invoices: Iterable[Invoice], search: str = "") -> list[Invoice]:
    needle = search.lower()
    return [
        i for i in invoices
        if _contains(i.invoice_no, needle)
        or _contains(i.po_number, needle)
        or _contains(i.goods_description, needle)
    ]


def filter_clients(clients: Iterable[Client], search: str = "") -> list[Client]:
    needle = search.lower()
    return [
        c for c in clients
        if _contains(c.name, needle)
        or _contains(c.contact_person, needle)
        or _contains(c.gstin, needle)
    ]
