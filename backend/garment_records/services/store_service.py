# Overview: Service-layer operations for the entity store; owns the session's records.

"""
Entity Store

One store per session. It is the only place records are created, replaced or
removed; everything else reads snapshots and derives from them.

NUMBERING: Job orders, challans and invoices get a display number of
prefix + zero-padded (collection size + 1). Deleting a record and creating a
new one can hand out a number that is already in use. Identifiers (uuid4)
never repeat.

MISSING REFERENCES: update/delete with an unknown identifier is a no-op.

SIDE EFFECT: creating a challan moves any Pending order with the matching
order number to In Progress.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Iterable

from ..models import Client, DeliveryChallan, Invoice, JobOrder, JobOrderStatus, clone
from .fulfillment_service import fulfillment


logger = logging.getLogger(__name__)

JOB_ORDER_PREFIX = "JO"
CHALLAN_PREFIX = "DC"
INVOICE_PREFIX = "INV"


@dataclass(frozen=True)
class StoreSnapshot:
    clients: tuple[Client, ...]
    job_orders: tuple[JobOrder, ...]
    challans: tuple[DeliveryChallan, ...]
    invoices: tuple[Invoice, ...]


def next_display_number(prefix: str, current_count: int, *, pad: int = 3) -> str:
    """Display number for the next record of a kind, e.g. JO-004."""
    return f"{prefix}-{str(current_count + 1).zfill(pad)}"


def new_identifier() -> str:
    return uuid.uuid4().hex


def _replace_by_id(records: list, record) -> bool:
    for index, existing in enumerate(records):
        if existing.id == record.id:
            records[index] = clone(record)
            return True
    return False


def _remove_by_ids(records: list, ids: Iterable[str]) -> list:
    id_set = set(ids)
    return [r for r in records if r.id not in id_set]


def _find(records: list, record_id: str):
    for record in records:
        if record.id == record_id:
            return clone(record)
    return None


class EntityStore:
    """In-memory collections for clients, job orders, challans and invoices."""

    def __init__(self) -> None:
        self._clients: list[Client] = []
        self._job_orders: list[JobOrder] = []
        self._challans: list[DeliveryChallan] = []
        self._invoices: list[Invoice] = []

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def clients(self) -> list[Client]:
        return [clone(c) for c in self._clients]

    @property
    def job_orders(self) -> list[JobOrder]:
        return [clone(o) for o in self._job_orders]

    @property
    def challans(self) -> list[DeliveryChallan]:
        return [clone(c) for c in self._challans]

    @property
    def invoices(self) -> list[Invoice]:
        return [clone(i) for i in self._invoices]

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            clients=tuple(self.clients),
            job_orders=tuple(self.job_orders),
            challans=tuple(self.challans),
            invoices=tuple(self.invoices),
        )

    def get_client(self, client_id: str) -> Client | None:
        return _find(self._clients, client_id)

    def get_job_order(self, order_id: str) -> JobOrder | None:
        return _find(self._job_orders, order_id)

    def get_challan(self, challan_id: str) -> DeliveryChallan | None:
        return _find(self._challans, challan_id)

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        return _find(self._invoices, invoice_id)

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------

    def create_client(self, client: Client) -> Client:
        created = replace(client, id=new_identifier())
        self._clients.append(created)
        logger.debug("Created client %s (%s)", created.id, created.name)
        return clone(created)

    def update_client(self, client: Client) -> bool:
        updated = _replace_by_id(self._clients, client)
        if not updated:
            logger.debug("Ignoring update for unknown client %s", client.id)
        return updated

    def delete_clients(self, ids: Iterable[str]) -> int:
        before = len(self._clients)
        self._clients = _remove_by_ids(self._clients, ids)
        return before - len(self._clients)

    # ------------------------------------------------------------------
    # Job orders
    # ------------------------------------------------------------------

    def create_job_order(self, order: JobOrder) -> JobOrder:
        """
        Add a job order.

        Any job_order_no on the input is replaced by the generated number.
        """
        created = replace(
            order,
            id=new_identifier(),
            job_order_no=next_display_number(JOB_ORDER_PREFIX, len(self._job_orders)),
            status=JobOrderStatus(order.status),
        )
        self._job_orders.append(created)
        logger.debug("Created job order %s", created.job_order_no)
        return clone(created)

    def update_job_order(self, order: JobOrder) -> bool:
        """
        Replace a job order, refreshing its cached completed_qty from challans.
        """
        refreshed = replace(
            order,
            status=JobOrderStatus(order.status),
            completed_qty=fulfillment(order, self._challans).completed_qty,
        )
        updated = _replace_by_id(self._job_orders, refreshed)
        if not updated:
            logger.debug("Ignoring update for unknown job order %s", order.id)
        return updated

    def delete_job_orders(self, ids: Iterable[str]) -> int:
        before = len(self._job_orders)
        self._job_orders = _remove_by_ids(self._job_orders, ids)
        return before - len(self._job_orders)

    def update_job_order_status(self, ids: Iterable[str], status: JobOrderStatus | str) -> int:
        """
        Set the status of every order in ids.

        The collection is swapped in one assignment so readers never observe
        a partial update.
        """
        target = JobOrderStatus(status)
        id_set = set(ids)
        changed = 0
        orders = []
        for order in self._job_orders:
            if order.id in id_set:
                order = replace(order, status=target)
                changed += 1
            orders.append(order)
        self._job_orders = orders
        logger.debug("Set status %s on %d job order(s)", target.value, changed)
        return changed

    # ------------------------------------------------------------------
    # Delivery challans
    # ------------------------------------------------------------------

    def create_challan(self, challan: DeliveryChallan) -> DeliveryChallan:
        created = replace(
            challan,
            id=new_identifier(),
            challan_no=next_display_number(CHALLAN_PREFIX, len(self._challans)),
        )
        orders = []
        for order in self._job_orders:
            if order.job_order_no == created.po_number and order.status == JobOrderStatus.PENDING:
                order = replace(order, status=JobOrderStatus.IN_PROGRESS)
                logger.debug("Job order %s moved to In Progress by %s", order.job_order_no, created.challan_no)
            orders.append(order)
        self._challans.append(created)
        self._job_orders = orders
        return clone(created)

    def update_challan(self, challan: DeliveryChallan) -> bool:
        updated = _replace_by_id(self._challans, challan)
        if not updated:
            logger.debug("Ignoring update for unknown challan %s", challan.id)
        return updated

    def delete_challans(self, ids: Iterable[str]) -> int:
        before = len(self._challans)
        self._challans = _remove_by_ids(self._challans, ids)
        return before - len(self._challans)

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    def create_invoice(self, invoice: Invoice) -> Invoice:
        created = replace(
            invoice,
            id=new_identifier(),
            invoice_no=next_display_number(INVOICE_PREFIX, len(self._invoices)),
        )
        self._invoices.append(created)
        logger.debug("Created invoice %s against %s", created.invoice_no, created.po_number)
        return clone(created)

    def update_invoice(self, invoice: Invoice) -> bool:
        updated = _replace_by_id(self._invoices, invoice)
        if not updated:
            logger.debug("Ignoring update for unknown invoice %s", invoice.id)
        return updated

    def delete_invoices(self, ids: Iterable[str]) -> int:
        before = len(self._invoices)
        self._invoices = _remove_by_ids(self._invoices, ids)
        return before - len(self._invoices)
