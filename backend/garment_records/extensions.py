# Overview: Flask extension holding the session's entity store.

from __future__ import annotations

from flask import Flask, current_app

from .services.store_service import EntityStore


class Records:
    """Attaches one EntityStore per app under app.extensions["records"]."""

    def __init__(self, app: Flask | None = None) -> None:
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> EntityStore:
        store = EntityStore()
        app.extensions["records"] = store
        return store


def get_store() -> EntityStore:
    """Store for the current app; requires an app context."""
    return current_app.extensions["records"]


records = Records()
