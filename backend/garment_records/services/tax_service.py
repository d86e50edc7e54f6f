# Overview: Service-layer operations for invoice tax; single source for GST amounts.

"""
Tax Service

Every invoice amount shown anywhere (status report, dashboard, exports) goes
through tax_breakdown() so the figures cannot drift apart.

RATES: CGST and SGST are flat, process-wide rates. No slab logic, no
inter-state IGST.

MONEY: Decimal throughout. Amounts are not rounded here; formatting to two
places is a presentation concern.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..models import DeliveryChallan, Invoice


CGST_RATE = Decimal("0.09")
SGST_RATE = Decimal("0.09")


@dataclass(frozen=True)
class TaxBreakdown:
    taxable: Decimal
    cgst: Decimal
    sgst: Decimal
    total: Decimal


def to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def tax_breakdown(invoice: Invoice) -> TaxBreakdown:
    """
    Compute taxable value, CGST, SGST and total for an invoice.

    taxable = challan_qty * rate_per_piece
    total   = taxable + cgst + sgst
    """
    taxable = to_decimal(invoice.challan_qty) * to_decimal(invoice.rate_per_piece)
    cgst = taxable * CGST_RATE
    sgst = taxable * SGST_RATE
    return TaxBreakdown(
        taxable=taxable,
        cgst=cgst,
        sgst=sgst,
        total=taxable + cgst + sgst,
    )


def challan_amount(challan: DeliveryChallan) -> Decimal:
    """Untaxed value of a challan (finished_qty * rate_per_piece)."""
    return to_decimal(challan.finished_qty) * to_decimal(challan.rate_per_piece)
