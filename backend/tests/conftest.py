"""
Pytest fixtures for garment_records tests.

Provides an app with its in-memory store, bare and seeded stores, and
small record builders.
"""

from decimal import Decimal

import pytest

from garment_records import create_app
from garment_records.extensions import get_store
from garment_records.models import DeliveryChallan, Invoice, JobOrder, PartyDetails
from garment_records.services.seed_service import seed_demo_data
from garment_records.services.store_service import EntityStore


@pytest.fixture(scope='function')
def app():
    """Create application for testing (demo data seeded)."""
    app = create_app({
        'TESTING': True,
        'RECORDS_SEED_DEMO': True,
    })
    yield app


@pytest.fixture(scope='function')
def cli_runner(app):
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def app_store(app):
    with app.app_context():
        yield get_store()


@pytest.fixture(scope='function')
def store():
    """Empty store."""
    return EntityStore()


@pytest.fixture(scope='function')
def seeded_store():
    """Store holding the demo clients, orders, challans and invoices."""
    return seed_demo_data(EntityStore())


def _make_order(**overrides) -> JobOrder:
    values = dict(
        date="2024-07-01",
        vendor_name="ABC Textiles",
        goods_description="Cotton T-Shirts",
        color="White",
        quantity=500,
    )
    values.update(overrides)
    return JobOrder(**values)


def _make_challan(po_number: str, finished_qty: int, **overrides) -> DeliveryChallan:
    party = overrides.pop("party", PartyDetails(name="Fashion Forward Inc.", address="123 Fashion Ave"))
    values = dict(
        date="2024-07-10",
        po_number=po_number,
        po_date="2024-07-01",
        billed_to=party,
        shipped_to=party,
        goods_description="Cotton T-Shirts",
        hsn_code="6109",
        finished_qty=finished_qty,
        rate_per_piece=Decimal("250"),
    )
    values.update(overrides)
    return DeliveryChallan(**values)


def _make_invoice(po_number: str, challan_qty: int, rate, billed_to: str = "Fashion Forward Inc.", **overrides) -> Invoice:
    party = PartyDetails(name=billed_to, address="Somewhere")
    values = dict(
        date="2024-07-11",
        po_number=po_number,
        po_date="2024-07-01",
        billed_to=party,
        shipped_to=party,
        goods_description="Cotton T-Shirts",
        hsn_code="6109",
        challan_qty=challan_qty,
        rate_per_piece=Decimal(str(rate)),
    )
    values.update(overrides)
    return Invoice(**values)


@pytest.fixture
def make_order():
    return _make_order


@pytest.fixture
def make_challan():
    return _make_challan


@pytest.fixture
def make_invoice():
    return _make_invoice
