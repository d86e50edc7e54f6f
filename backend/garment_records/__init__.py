# backend/garment_records/__init__.py
import logging

from flask import Flask

from .config import Config
from .extensions import records


def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if isinstance(level, int):
        app.logger.setLevel(level)
        logging.getLogger("garment_records").setLevel(level)

    # One in-memory store per app instance
    store = records.init_app(app)

    if app.config.get("RECORDS_SEED_DEMO"):
        from .services.seed_service import seed_demo_data
        seed_demo_data(store)
        app.logger.info(
            "Seeded demo data: %d orders, %d challans, %d invoices",
            len(store.job_orders),
            len(store.challans),
            len(store.invoices),
        )

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
