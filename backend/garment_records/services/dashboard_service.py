# Overview: Service-layer operations for the dashboard; status counts, invoice totals, top clients.

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from ..models import Invoice, JobOrder, JobOrderStatus
from .tax_service import tax_breakdown


DEFAULT_TOP_CLIENTS = 5
DEFAULT_RECENT_ORDERS = 5


@dataclass(frozen=True)
class ClientRevenue:
    name: str
    total: Decimal


@dataclass(frozen=True)
class RecentQuantity:
    name: str
    quantity: int
    completed_qty: int


@dataclass(frozen=True)
class DashboardSummary:
    total_orders: int
    total_invoices: int
    status_counts: dict[str, int]
    total_invoice_value: Decimal
    top_clients: list[ClientRevenue] = field(default_factory=list)
    recent_quantities: list[RecentQuantity] = field(default_factory=list)


def status_counts(orders: Iterable[JobOrder]) -> dict[str, int]:
    """Order count per status; every status is present, zero if unused."""
    counts = {status.value: 0 for status in JobOrderStatus}
    for order in orders:
        key = JobOrderStatus(order.status).value
        counts[key] += 1
    return counts


def total_invoice_value(invoices: Iterable[Invoice]) -> Decimal:
    return sum((tax_breakdown(inv).total for inv in invoices), Decimal("0"))


def top_clients(invoices: Iterable[Invoice], n: int = DEFAULT_TOP_CLIENTS) -> list[ClientRevenue]:
    """
    Clients ranked by invoiced total (tax included), highest first.

    Grouping is by billed-to name. Ties keep first-seen order.
    """
    totals: dict[str, Decimal] = {}
    for invoice in invoices:
        name = invoice.billed_to.name
        totals[name] = totals.get(name, Decimal("0")) + tax_breakdown(invoice).total
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [ClientRevenue(name=name, total=total) for name, total in ranked[:n]]


def recent_quantities(orders: Iterable[JobOrder], n: int = DEFAULT_RECENT_ORDERS) -> list[RecentQuantity]:
    # Uses the stored completed_qty, not the challan sum.
    return [
        RecentQuantity(name=o.job_order_no, quantity=o.quantity, completed_qty=o.completed_qty)
        for o in list(orders)[:n]
    ]


def dashboard(
    orders: Iterable[JobOrder],
    invoices: Iterable[Invoice],
    *,
    top_n: int = DEFAULT_TOP_CLIENTS,
    recent_n: int = DEFAULT_RECENT_ORDERS,
) -> DashboardSummary:
    orders = list(orders)
    invoices = list(invoices)
    return DashboardSummary(
        total_orders=len(orders),
        total_invoices=len(invoices),
        status_counts=status_counts(orders),
        total_invoice_value=total_invoice_value(invoices),
        top_clients=top_clients(invoices, top_n),
        recent_quantities=recent_quantities(orders, recent_n),
    )
