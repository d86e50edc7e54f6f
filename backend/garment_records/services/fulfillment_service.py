# Overview: Service-layer operations for job order fulfillment; derives quantities from challans.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..models import DeliveryChallan, JobOrder


@dataclass(frozen=True)
class Fulfillment:
    completed_qty: int
    damage_qty: int
    pending_qty: int
    challans: list[DeliveryChallan] = field(default_factory=list)


def related_challans(job_order_no: str, challans: Iterable[DeliveryChallan]) -> list[DeliveryChallan]:
    """Challans whose PO number equals the order number (exact, case-sensitive)."""
    return [c for c in challans if c.po_number == job_order_no]


def fulfillment(order: JobOrder, challans: Iterable[DeliveryChallan]) -> Fulfillment:
    """
    Aggregate delivered quantities for one job order.

    pending_qty is not clamped: over-delivery yields a negative figure.
    """
    related = related_challans(order.job_order_no, challans)
    completed = sum(c.finished_qty for c in related)
    damage = sum(c.damage_qty for c in related)
    return Fulfillment(
        completed_qty=completed,
        damage_qty=damage,
        pending_qty=order.quantity - completed,
        challans=related,
    )
