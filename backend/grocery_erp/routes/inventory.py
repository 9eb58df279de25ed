# Overview: Flask API routes for inventory operations; parses input and returns JSON responses.

"""
Inventory routes.

Low-stock threshold for records without min_stock_level comes from
LOW_STOCK_DEFAULT_THRESHOLD. Restock and adjust bodies carry a single
integer (quantity / delta); restock may also carry occurred_at (ISO-8601).
"""
from flask import Blueprint, current_app, jsonify, request

from ..models import Inventory
from ..services import inventory_service
from ..services.entity_store import get_entity_store
from ..services.inventory_service import InventoryError
from ..time_utils import parse_iso_datetime
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_inventory,
    require_int_field,
    ValidationError,
    ConflictError,
)


inventory_bp = Blueprint("inventory", __name__, url_prefix="/api/inventory")

INVENTORY_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "product_id", "store_id", "quantity", "min_stock_level", "max_stock_level", "last_restock_date",
    }),
    required_on_create=frozenset({"product_id", "store_id"}),
)


def _default_threshold() -> int:
    return current_app.config.get(
        "LOW_STOCK_DEFAULT_THRESHOLD", inventory_service.DEFAULT_LOW_STOCK_THRESHOLD
    )


@inventory_bp.get("")
def list_inventory():
    store_id = request.args.get("store_id", type=int)
    records = inventory_service.get_inventory(get_entity_store(), store_id)
    return jsonify([r.to_dict() for r in records]), 200


@inventory_bp.get("/details")
def inventory_details():
    """Inventory rows with product, store and stock_status attached."""
    store_id = request.args.get("store_id", type=int)
    return jsonify(inventory_service.get_inventory_details(get_entity_store(), store_id)), 200


@inventory_bp.get("/low-stock")
def low_stock():
    store_id = request.args.get("store_id", type=int)
    records = inventory_service.get_low_stock_items(
        get_entity_store(), store_id, default_threshold=_default_threshold()
    )
    return jsonify([r.to_dict() for r in records]), 200


@inventory_bp.get("/product/<int:product_id>")
def product_inventory(product_id: int):
    """
    With store_id: the single record for that store (404 if none).
    Without: every store's record for the product.
    """
    entities = get_entity_store()
    store_id = request.args.get("store_id", type=int)

    if store_id is None:
        records = inventory_service.list_product_inventory(entities, product_id)
        return jsonify([r.to_dict() for r in records]), 200

    record = inventory_service.get_product_inventory(entities, product_id, store_id)
    if not record:
        return {"error": "Inventory not found"}, 404
    return record.to_dict(), 200


@inventory_bp.post("")
def create_inventory_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Inventory, payload=payload, policy=INVENTORY_POLICY, partial=False)
        enforce_rules_inventory(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        record = inventory_service.create_inventory(get_entity_store(), patch)
    except ConflictError as e:
        return {"error": str(e)}, 409

    return record.to_dict(), 201


@inventory_bp.put("/<int:inventory_id>")
def update_inventory_route(inventory_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Inventory, payload=payload, policy=INVENTORY_POLICY, partial=True)
        enforce_rules_inventory(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        record = inventory_service.update_inventory(get_entity_store(), inventory_id, patch)
    except ConflictError as e:
        return {"error": str(e)}, 409

    if not record:
        return {"error": "Inventory not found"}, 404
    return record.to_dict(), 200


@inventory_bp.post("/<int:inventory_id>/restock")
def restock_route(inventory_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        quantity = require_int_field(payload, "quantity")
        occurred_at = None
        raw = payload.get("occurred_at")
        if raw:
            if not isinstance(raw, str):
                raise ValidationError("occurred_at must be an ISO-8601 datetime")
            occurred_at = parse_iso_datetime(raw)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except ValueError:
        return {"error": "occurred_at must be an ISO-8601 datetime"}, 400

    try:
        record = inventory_service.restock_inventory(
            get_entity_store(), inventory_id, quantity, occurred_at=occurred_at
        )
    except InventoryError as e:
        return {"error": str(e)}, 400
    except Exception:
        current_app.logger.exception("Failed to restock inventory")
        return {"error": "Internal server error"}, 500

    if not record:
        return {"error": "Inventory not found"}, 404
    return record.to_dict(), 200


@inventory_bp.post("/<int:inventory_id>/adjust")
def adjust_route(inventory_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        delta = require_int_field(payload, "delta")
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        record = inventory_service.adjust_inventory(get_entity_store(), inventory_id, delta)
    except InventoryError as e:
        return {"error": str(e)}, 400
    except Exception:
        current_app.logger.exception("Failed to adjust inventory")
        return {"error": "Internal server error"}, 500

    if not record:
        return {"error": "Inventory not found"}, 404
    return record.to_dict(), 200
