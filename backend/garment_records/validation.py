"""
Form payload parsing.

parse_client, parse_job_order, parse_challan and parse_invoice turn loosely
typed input (strings from forms or CSV, JSON numbers) into records the
EntityStore accepts, raising ValidationError on the first bad field. The
demo seed builds its records through them.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from .models import Client, DeliveryChallan, Invoice, JobOrder, JobOrderStatus, PartyDetails, UOM_OPTIONS
from .time_utils import parse_iso_date, today_iso


class ValidationError(ValueError):
    """Input problem in a record payload."""


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _required_text(payload: dict, key: str) -> str:
    text = _to_text(payload.get(key))
    if not text:
        raise ValidationError(f"{key} is required")
    return text


def _to_quantity(payload: dict, key: str, *, required: bool = False) -> int:
    value = payload.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{key} is required")
        return 0

    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    if isinstance(value, int):
        qty = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{key} must be an integer, not a decimal")
        qty = int(value)
    elif isinstance(value, str):
        stripped = value.strip()
        # Reject scientific notation (e.g., "1e3") and decimals
        if "e" in stripped.lower() or "." in stripped:
            raise ValidationError(f"{key} must be a plain integer")
        try:
            qty = int(stripped)
        except ValueError:
            raise ValidationError(f"{key} must be an integer")
    else:
        raise ValidationError(f"{key} must be an integer")

    if qty < 0:
        raise ValidationError(f"{key} cannot be negative")
    return qty


def _to_rate(payload: dict, key: str) -> Decimal:
    value = payload.get(key)
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be a number")
    text = str(value).strip()
    # Reject scientific notation (e.g., "1e3")
    if "e" in text.lower():
        raise ValidationError(f"{key} must be a plain number")
    try:
        rate = Decimal(text)
    except InvalidOperation:
        raise ValidationError(f"{key} must be a number")
    if not rate.is_finite() or rate < 0:
        raise ValidationError(f"{key} must be a non-negative number")
    return rate


def _to_date(payload: dict, key: str) -> str:
    value = payload.get(key)
    if value is None or value == "":
        return today_iso()
    try:
        parsed = parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{key} must be an ISO-8601 date")
    return parsed.isoformat() if parsed else today_iso()


def _to_status(payload: dict, key: str = "status") -> JobOrderStatus:
    value = payload.get(key)
    if value is None or value == "":
        return JobOrderStatus.PENDING
    try:
        return JobOrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in JobOrderStatus)
        raise ValidationError(f"{key} must be one of: {allowed}")


def parse_party(payload: dict | None, key: str) -> PartyDetails:
    if not isinstance(payload, dict):
        raise ValidationError(f"{key} is required")
    return PartyDetails(
        name=_required_text(payload, "name"),
        address=_to_text(payload.get("address")),
        gstin=_to_text(payload.get("gstin")) or None,
    )


def parse_client(payload: dict) -> Client:
    return Client(
        id=_to_text(payload.get("id")) or None,
        name=_required_text(payload, "name"),
        address=_to_text(payload.get("address")),
        gstin=_to_text(payload.get("gstin")) or None,
        contact_person=_to_text(payload.get("contact_person")),
        email=_to_text(payload.get("email")),
        phone=_to_text(payload.get("phone")),
    )


def parse_job_order(payload: dict) -> JobOrder:
    """
    Build a JobOrder from a form payload.

    job_order_no is carried through for updates; the store assigns it on create.
    """
    return JobOrder(
        id=_to_text(payload.get("id")) or None,
        job_order_no=_to_text(payload.get("job_order_no")),
        date=_to_date(payload, "date"),
        vendor_name=_required_text(payload, "vendor_name"),
        goods_description=_required_text(payload, "goods_description"),
        color=_required_text(payload, "color"),
        quantity=_to_quantity(payload, "quantity", required=True),
        uom=_to_text(payload.get("uom")) or UOM_OPTIONS[0],
        completed_qty=_to_quantity(payload, "completed_qty"),
        damage_qty=_to_quantity(payload, "damage_qty"),
        status=_to_status(payload),
        remark=_to_text(payload.get("remark")),
    )


def parse_challan(payload: dict) -> DeliveryChallan:
    billed_to = parse_party(payload.get("billed_to"), "billed_to")
    shipped = payload.get("shipped_to")
    return DeliveryChallan(
        id=_to_text(payload.get("id")) or None,
        challan_no=_to_text(payload.get("challan_no")),
        date=_to_date(payload, "date"),
        po_number=_required_text(payload, "po_number"),
        po_date=_to_date(payload, "po_date"),
        billed_to=billed_to,
        shipped_to=parse_party(shipped, "shipped_to") if shipped else billed_to,
        goods_description=_required_text(payload, "goods_description"),
        hsn_code=_to_text(payload.get("hsn_code")),
        finished_qty=_to_quantity(payload, "finished_qty", required=True),
        uom=_to_text(payload.get("uom")) or UOM_OPTIONS[0],
        damage_qty=_to_quantity(payload, "damage_qty"),
        rate_per_piece=_to_rate(payload, "rate_per_piece"),
        remark=_to_text(payload.get("remark")),
    )


def parse_invoice(payload: dict) -> Invoice:
    billed_to = parse_party(payload.get("billed_to"), "billed_to")
    shipped = payload.get("shipped_to")
    return Invoice(
        id=_to_text(payload.get("id")) or None,
        invoice_no=_to_text(payload.get("invoice_no")),
        date=_to_date(payload, "date"),
        po_number=_required_text(payload, "po_number"),
        po_date=_to_date(payload, "po_date"),
        billed_to=billed_to,
        shipped_to=parse_party(shipped, "shipped_to") if shipped else billed_to,
        goods_description=_required_text(payload, "goods_description"),
        hsn_code=_to_text(payload.get("hsn_code")),
        challan_qty=_to_quantity(payload, "challan_qty", required=True),
        uom=_to_text(payload.get("uom")) or UOM_OPTIONS[0],
        rate_per_piece=_to_rate(payload, "rate_per_piece"),
        remark=_to_text(payload.get("remark")),
    )
