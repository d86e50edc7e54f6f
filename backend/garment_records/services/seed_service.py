# Overview: Service-layer operations for demo data; seeds a fresh store with sample records.

"""
Seed Service

Demo records are kept as form payloads and go through the same
validation.parse_* functions any user-entered record would, so the sample
data can never hold a value the forms would reject.
"""

from __future__ import annotations

from dataclasses import asdict

from ..models import PartyDetails
from ..validation import parse_challan, parse_client, parse_invoice, parse_job_order
from .store_service import EntityStore


DEMO_CLIENTS = [
    {
        "name": "Fashion Forward Inc.",
        "address": "123 Fashion Ave, Garment City, 110001",
        "gstin": "29ABCDE1234F1Z5",
        "contact_person": "John Doe",
        "email": "john.doe@fashionforward.com",
        "phone": "9876543210",
    },
    {
        "name": "Trendy Threads",
        "address": "456 Style St, Apparel Town, 110002",
        "gstin": "29FGHIJ5678K2Z6",
        "contact_person": "Jane Smith",
        "email": "jane.smith@trendythreads.com",
        "phone": "8765432109",
    },
    {
        "name": "Classic Couture",
        "address": "789 Elegance Blvd, Fashion District, 110003",
        "gstin": "29LMNOP9012Q3Z7",
        "contact_person": "Robert Brown",
        "email": "robert.brown@classiccouture.com",
        "phone": "7654321098",
    },
]

DEMO_JOB_ORDERS = [
    {
        "date": "2024-07-01", "vendor_name": "ABC Textiles", "goods_description": "Cotton T-Shirts",
        "color": "White", "quantity": 500, "completed_qty": 300, "damage_qty": 5,
        "status": "In Progress",
    },
    {
        "date": "2024-07-02", "vendor_name": "XYZ Garments", "goods_description": "Denim Jeans",
        "color": "Blue", "quantity": 200, "completed_qty": 200, "damage_qty": 2,
        "status": "Completed", "remark": "Urgent order",
    },
    {
        "date": "2024-07-03", "vendor_name": "Sewing Masters Co.", "goods_description": "Polo Shirts",
        "color": "Black", "quantity": 300,
    },
]

# (po_number, po_date, client index, description, hsn, qty, rate, challan date, invoice date)
DEMO_SHIPMENTS = [
    ("JO-001", "2024-07-01", 0, "Cotton T-Shirts", "6109", 300, "250", "2024-07-10", "2024-07-11"),
    ("JO-002", "2024-07-02", 1, "Denim Jeans", "6203", 200, "800", "2024-07-08", "2024-07-09"),
]


def seed_demo_data(store: EntityStore) -> EntityStore:
    """
    Load the sample clients, orders, challans and invoices into store.

    Orders are created first so the challans resolve to JO-001 and JO-002.
    """
    clients = [store.create_client(parse_client(payload)) for payload in DEMO_CLIENTS]
    for payload in DEMO_JOB_ORDERS:
        store.create_job_order(parse_job_order(payload))

    for po_number, po_date, client_idx, description, hsn, qty, rate, challan_date, invoice_date in DEMO_SHIPMENTS:
        party = asdict(PartyDetails.from_client(clients[client_idx]))
        common = {
            "po_number": po_number,
            "po_date": po_date,
            "billed_to": party,
            "goods_description": description,
            "hsn_code": hsn,
            "rate_per_piece": rate,
        }
        store.create_challan(parse_challan({**common, "date": challan_date, "finished_qty": qty}))
        store.create_invoice(parse_invoice({**common, "date": invoice_date, "challan_qty": qty}))
    return store
