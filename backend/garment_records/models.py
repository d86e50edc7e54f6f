# backend/garment_records/models.py
# Overview: In-memory record types for clients, job orders, delivery challans and invoices.

from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
from enum import Enum


class JobOrderStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"

    def __str__(self) -> str:
        return self.value


JOB_STATUS_OPTIONS = [s.value for s in JobOrderStatus]

VENDORS = [
    "ABC Textiles",
    "XYZ Garments",
    "Sewing Masters Co.",
    "Fabric World",
    "Quality Threads Ltd.",
]

UOM_OPTIONS = ["Pieces", "Sets", "Meters", "Kg"]


@dataclass(frozen=True)
class PartyDetails:
    """
    Billing/shipping party as it was when a challan or invoice was written.

    Not linked to Client by identifier; later client edits do not reach
    existing documents.
    """
    name: str
    address: str
    gstin: str | None = None

    @classmethod
    def from_client(cls, client: "Client") -> "PartyDetails":
        return cls(name=client.name, address=client.address, gstin=client.gstin)


@dataclass
class Client:
    name: str
    address: str
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    gstin: str | None = None
    id: str | None = None


@dataclass
class JobOrder:
    date: str
    vendor_name: str
    goods_description: str
    color: str
    quantity: int
    uom: str = UOM_OPTIONS[0]
    # Cached at edit time; the challan sum is authoritative.
    completed_qty: int = 0
    damage_qty: int = 0
    status: JobOrderStatus = JobOrderStatus.PENDING
    remark: str = ""
    job_order_no: str = ""
    id: str | None = None


@dataclass
class DeliveryChallan:
    date: str
    po_number: str
    po_date: str
    billed_to: PartyDetails
    shipped_to: PartyDetails
    goods_description: str
    hsn_code: str
    finished_qty: int
    uom: str = UOM_OPTIONS[0]
    damage_qty: int = 0
    rate_per_piece: Decimal = field(default_factory=lambda: Decimal("0"))
    remark: str = ""
    challan_no: str = ""
    id: str | None = None


@dataclass
class Invoice:
    date: str
    po_number: str
    po_date: str
    billed_to: PartyDetails
    shipped_to: PartyDetails
    goods_description: str
    hsn_code: str
    challan_qty: int
    uom: str = UOM_OPTIONS[0]
    rate_per_piece: Decimal = field(default_factory=lambda: Decimal("0"))
    remark: str = ""
    invoice_no: str = ""
    id: str | None = None


def clone(record):
    """Shallow copy of a record; PartyDetails is frozen so sharing it is safe."""
    return replace(record)
