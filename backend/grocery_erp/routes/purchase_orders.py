# Overview: Flask API routes for supplier purchase orders; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..models import PurchaseOrder, PurchaseOrderItem
from ..services import purchase_order_service
from ..services.entity_store import get_entity_store
from ..services.purchase_order_service import PurchaseOrderError
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    validate_items,
    enforce_non_negative_amounts,
    enforce_rules_line_item,
    ValidationError,
    ConflictError,
)

PURCHASE_ORDER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "po_number", "store_id", "supplier_name", "order_date", "expected_delivery_date",
        "status", "total_cents", "notes",
    }),
    required_on_create=frozenset({"po_number", "store_id", "supplier_name"}),
)

PURCHASE_ORDER_ITEM_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"product_id", "quantity", "cost_price_cents", "total_cents"}),
    required_on_create=frozenset({"product_id", "quantity", "cost_price_cents", "total_cents"}),
)

purchase_orders_bp = Blueprint("purchase_orders", __name__, url_prefix="/api/purchase-orders")


@purchase_orders_bp.get("")
def list_purchase_orders():
    store_id = request.args.get("store_id", type=int)
    purchase_orders = purchase_order_service.list_purchase_orders(get_entity_store(), store_id=store_id)
    return jsonify([po.to_dict() for po in purchase_orders]), 200


@purchase_orders_bp.get("/<int:po_id>")
def get_purchase_order(po_id: int):
    found = purchase_order_service.get_purchase_order_with_items(get_entity_store(), po_id)
    if found is None:
        return jsonify({"error": "Purchase order not found"}), 404

    purchase_order, items = found
    return jsonify({"purchase_order": purchase_order.to_dict(), "items": [i.to_dict() for i in items]}), 200


@purchase_orders_bp.post("")
def create_purchase_order():
    """Body: {"purchase_order": {...}, "items": [...]}"""
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"error": "Invalid JSON payload"}), 400

    try:
        po_fields = validate_payload(
            model=PurchaseOrder,
            payload=payload.get("purchase_order"),
            policy=PURCHASE_ORDER_POLICY,
            partial=False,
        )
        enforce_non_negative_amounts(po_fields, "total_cents")
        items = validate_items(
            model=PurchaseOrderItem, items=payload.get("items"), policy=PURCHASE_ORDER_ITEM_POLICY
        )
        for index, item in enumerate(items):
            try:
                enforce_rules_line_item(item, amount_fields=("cost_price_cents", "total_cents"))
            except ValidationError as exc:
                raise ValidationError(f"items[{index}]: {exc}") from exc
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        purchase_order = purchase_order_service.create_purchase_order(get_entity_store(), po_fields, items)
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409
    except PurchaseOrderError as e:
        return jsonify({"error": str(e), "details": e.details}), 400
    except Exception:
        current_app.logger.exception("Failed to create purchase order")
        return jsonify({"error": "Internal server error"}), 500

    current_app.logger.info(
        "Created purchase order %s for store %s (%d items)",
        purchase_order.po_number, purchase_order.store_id, len(items),
    )
    return jsonify(purchase_order.to_dict()), 201


@purchase_orders_bp.put("/<int:po_id>/status")
def update_purchase_order_status(po_id: int):
    data = request.get_json(silent=True) or {}
    status = data.get("status")
    if not isinstance(status, str):
        return jsonify({"error": "Status is required"}), 400

    try:
        purchase_order = purchase_order_service.update_purchase_order_status(get_entity_store(), po_id, status)
    except PurchaseOrderError as e:
        return jsonify({"error": str(e), "details": e.details}), 400

    if not purchase_order:
        return jsonify({"error": "Purchase order not found"}), 404
    return jsonify(purchase_order.to_dict()), 200
