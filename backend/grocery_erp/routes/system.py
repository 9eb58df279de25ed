# backend/grocery_erp/routes/system.py
"""
System health and POS settings endpoints.
"""

import time

from flask import Blueprint, current_app

from ..extensions import db
from ..models import Order, Product, Store
from ..time_utils import utcnow

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """Count a few core tables; any failure marks the database unhealthy."""
    start_time = time.time()
    try:
        details = {
            "stores": db.session.query(Store).count(),
            "products": db.session.query(Product).count(),
            "orders": db.session.query(Order).count(),
        }
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": details,
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error"
        }


@system_bp.get("/health")
def health():
    """
    Returns:
    - 200: database reachable
    - 503: database check failed
    """
    database_health = check_database_health()
    healthy = database_health["status"] == "healthy"

    response = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": utcnow().isoformat() + "Z",
        "checks": {
            "database": database_health,
        }
    }
    return response, 200 if healthy else 503


@system_bp.get("/api/settings")
def pos_settings():
    """Server-wide values the POS client needs before building a cart."""
    return {
        "tax_rate_bps": current_app.config["TAX_RATE_BPS"],
        "low_stock_default_threshold": current_app.config["LOW_STOCK_DEFAULT_THRESHOLD"],
    }, 200
