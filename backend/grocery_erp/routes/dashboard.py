# Overview: Flask API route for the dashboard summary; recomputed on every request.

from flask import Blueprint, current_app, jsonify, request

from ..services.dashboard_service import get_dashboard_summary
from ..services.entity_store import get_entity_store
from ..services.inventory_service import DEFAULT_LOW_STOCK_THRESHOLD


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.get("")
def dashboard():
    """
    Query params:
    - store_id: int (optional) - scope orders, revenue and low stock to one store
    """
    store_id = request.args.get("store_id", type=int)
    try:
        summary = get_dashboard_summary(
            get_entity_store(),
            store_id,
            default_threshold=current_app.config.get("LOW_STOCK_DEFAULT_THRESHOLD", DEFAULT_LOW_STOCK_THRESHOLD),
        )
    except Exception:
        current_app.logger.exception("Failed to build dashboard summary")
        return jsonify({"error": "Internal server error"}), 500
    return jsonify(summary), 200
