"""Health check routes."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from rifa.utils.responses import fail, ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint (pings the database)."""

    try:
        with current_app.extensions["engine"].connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("Database ping failed")
        return fail("db_unavailable", "Database unavailable", 503)

    return ok({"status": "ok"})
