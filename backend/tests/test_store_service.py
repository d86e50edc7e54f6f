"""
Entity store tests.

Verifies:
- Sequential display numbers and unique identifiers
- Silent no-op on unknown identifiers
- Challan creation promotes Pending orders to In Progress
- Bulk status updates
- Display-number reuse after deletion (known behaviour)
"""

import pytest

from garment_records.models import Client, JobOrderStatus, PartyDetails
from garment_records.services.store_service import next_display_number


# =============================================================================
# NUMBERING
# =============================================================================


class TestNumbering:

    def test_display_number_format(self):
        assert next_display_number("JO", 0) == "JO-001"
        assert next_display_number("INV", 41) == "INV-042"
        assert next_display_number("DC", 999) == "DC-1000"

    def test_orders_numbered_sequentially(self, store, make_order):
        first = store.create_job_order(make_order())
        second = store.create_job_order(make_order(job_order_no="ignored"))
        assert first.job_order_no == "JO-001"
        assert second.job_order_no == "JO-002"
        assert first.id != second.id

    def test_challans_and_invoices_numbered(self, store, make_challan, make_invoice):
        challan = store.create_challan(make_challan("JO-001", 10))
        invoice = store.create_invoice(make_invoice("JO-001", 10, 100))
        assert challan.challan_no == "DC-001"
        assert invoice.invoice_no == "INV-001"

    def test_display_number_reused_after_delete(self, store, make_order):
        """Numbers derive from collection size, so a delete can cause a repeat."""
        store.create_job_order(make_order())
        second = store.create_job_order(make_order())
        first_id = store.job_orders[0].id
        store.delete_job_orders({first_id})

        third = store.create_job_order(make_order())
        assert third.job_order_no == second.job_order_no == "JO-002"
        assert third.id != second.id


# =============================================================================
# UPDATE / DELETE
# =============================================================================


class TestUpdateDelete:

    def test_update_replaces_matching_record(self, store):
        client = store.create_client(Client(name="Trendy Threads", address="456 Style St"))
        client.phone = "8765432109"
        assert store.update_client(client) is True
        assert store.get_client(client.id).phone == "8765432109"

    def test_update_unknown_id_is_noop(self, store, make_order):
        store.create_job_order(make_order())
        ghost = make_order(id="does-not-exist", job_order_no="JO-999")
        assert store.update_job_order(ghost) is False
        assert [o.job_order_no for o in store.job_orders] == ["JO-001"]

    def test_delete_by_id_set_ignores_unknown(self, store, make_order):
        a = store.create_job_order(make_order())
        b = store.create_job_order(make_order())
        removed = store.delete_job_orders({a.id, "unknown"})
        assert removed == 1
        assert [o.id for o in store.job_orders] == [b.id]

    def test_delete_order_does_not_cascade(self, store, make_order, make_challan, make_invoice):
        order = store.create_job_order(make_order())
        store.create_challan(make_challan(order.job_order_no, 10))
        store.create_invoice(make_invoice(order.job_order_no, 10, 100))
        store.delete_job_orders([order.id])
        assert store.job_orders == []
        assert len(store.challans) == 1
        assert len(store.invoices) == 1

    def test_delete_challans_leaves_status(self, store, make_order, make_challan):
        order = store.create_job_order(make_order())
        challan = store.create_challan(make_challan(order.job_order_no, 10))
        store.delete_challans([challan.id])
        assert store.challans == []
        assert store.get_job_order(order.id).status == JobOrderStatus.IN_PROGRESS

    def test_update_job_order_refreshes_completed_qty(self, store, make_order, make_challan):
        order = store.create_job_order(make_order(quantity=500))
        store.create_challan(make_challan(order.job_order_no, 300))
        store.create_challan(make_challan(order.job_order_no, 100))

        order.remark = "edited"
        store.update_job_order(order)
        stored = store.get_job_order(order.id)
        assert stored.completed_qty == 400
        assert stored.remark == "edited"

    def test_returned_records_are_copies(self, store, make_order):
        order = store.create_job_order(make_order())
        order.quantity = 1
        assert store.get_job_order(order.id).quantity == 500


# =============================================================================
# CHALLAN SIDE EFFECT
# =============================================================================


class TestChallanPromotesOrder:

    def test_pending_order_moves_to_in_progress(self, store, make_order, make_challan):
        target = store.create_job_order(make_order())
        other = store.create_job_order(make_order())
        store.create_challan(make_challan(target.job_order_no, 50))

        assert store.get_job_order(target.id).status == JobOrderStatus.IN_PROGRESS
        assert store.get_job_order(other.id).status == JobOrderStatus.PENDING

    def test_completed_order_is_not_demoted(self, store, make_order, make_challan):
        order = store.create_job_order(make_order(status=JobOrderStatus.COMPLETED))
        store.create_challan(make_challan(order.job_order_no, 50))
        assert store.get_job_order(order.id).status == JobOrderStatus.COMPLETED

    def test_orphan_challan_is_accepted(self, store, make_order, make_challan):
        order = store.create_job_order(make_order())
        challan = store.create_challan(make_challan("JO-404", 50))
        assert challan.challan_no == "DC-001"
        assert store.get_job_order(order.id).status == JobOrderStatus.PENDING

    def test_match_is_case_sensitive(self, store, make_order, make_challan):
        order = store.create_job_order(make_order())
        store.create_challan(make_challan("jo-001", 50))
        assert store.get_job_order(order.id).status == JobOrderStatus.PENDING


# =============================================================================
# BULK STATUS
# =============================================================================


class TestBulkStatus:

    def test_sets_status_on_selected_orders(self, store, make_order):
        a = store.create_job_order(make_order())
        b = store.create_job_order(make_order())
        c = store.create_job_order(make_order())

        changed = store.update_job_order_status({a.id, c.id}, JobOrderStatus.COMPLETED)
        assert changed == 2
        statuses = {o.id: o.status for o in store.job_orders}
        assert statuses[a.id] == JobOrderStatus.COMPLETED
        assert statuses[b.id] == JobOrderStatus.PENDING
        assert statuses[c.id] == JobOrderStatus.COMPLETED

    def test_accepts_status_string(self, store, make_order):
        a = store.create_job_order(make_order())
        store.update_job_order_status([a.id], "In Progress")
        assert store.get_job_order(a.id).status is JobOrderStatus.IN_PROGRESS

    def test_rejects_unknown_status(self, store, make_order):
        a = store.create_job_order(make_order())
        with pytest.raises(ValueError):
            store.update_job_order_status([a.id], "Shipped")


class TestPartySnapshot:

    def test_client_edit_does_not_touch_existing_challans(self, store, make_challan):
        client = store.create_client(Client(name="Classic Couture", address="789 Elegance Blvd"))
        snapshot = PartyDetails.from_client(client)
        challan = store.create_challan(make_challan("JO-001", 10, party=snapshot))

        client.address = "1 New Road"
        store.update_client(client)

        assert store.get_challan(challan.id).billed_to.address == "789 Elegance Blvd"
