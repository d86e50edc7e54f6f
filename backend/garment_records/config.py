# backend/garment_records/config.py
from __future__ import annotations
import os


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Load the sample clients/orders/challans/invoices into each new app
    RECORDS_SEED_DEMO = _env_flag("RECORDS_SEED_DEMO", "true")

    # Dashboard list sizes
    RECORDS_TOP_CLIENTS_LIMIT = int(os.environ.get("RECORDS_TOP_CLIENTS_LIMIT", "5"))
    RECORDS_RECENT_ORDERS_LIMIT = int(os.environ.get("RECORDS_RECENT_ORDERS_LIMIT", "5"))

    # Where `flask records export` writes when --output is not given
    RECORDS_EXPORT_DIR = os.environ.get("RECORDS_EXPORT_DIR", ".")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
