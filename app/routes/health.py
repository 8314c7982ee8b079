"""Health check routes."""

from __future__ import annotations

from flask import Blueprint, current_app

from app.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint, with the configured source order."""

    fetcher = current_app.extensions.get("result_fetcher")
    sources = fetcher.source_names if fetcher is not None else []
    return ok({"status": "ok", "sources": sources})
