# Overview: Flask API routes for orders; order + items creation, status changes and listings.

"""
Order routes.

POST body:
    {"order": {...order fields...}, "items": [{...line item...}, ...]}

The order and its items are saved together or not at all. A line item
without line_total_cents gets quantity * unit_price_cents - discount_cents.
"""
from flask import Blueprint, current_app, jsonify, request

from ..models import Order, OrderItem
from ..services import order_service
from ..services.entity_store import get_entity_store
from ..services.order_service import OrderError
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    validate_items,
    validate_order_status,
    enforce_rules_order,
    enforce_rules_line_item,
    ValidationError,
    ConflictError,
)

ORDER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "order_number", "customer_id", "employee_id", "store_id", "order_date", "order_status",
        "order_type", "total_cents", "tax_cents", "discount_cents", "payment_method", "notes",
    }),
    required_on_create=frozenset({"store_id", "total_cents"}),
)

ORDER_ITEM_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"product_id", "quantity", "unit_price_cents", "line_total_cents", "discount_cents"}),
    required_on_create=frozenset({"product_id", "quantity", "unit_price_cents"}),
)

orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


def _clean_items(raw_items) -> list[dict]:
    items = validate_items(model=OrderItem, items=raw_items, policy=ORDER_ITEM_POLICY)
    for index, item in enumerate(items):
        try:
            enforce_rules_line_item(
                item, amount_fields=("unit_price_cents", "line_total_cents", "discount_cents")
            )
        except ValidationError as exc:
            raise ValidationError(f"items[{index}]: {exc}") from exc
        if item.get("line_total_cents") is None:
            item["line_total_cents"] = item["quantity"] * item["unit_price_cents"] - (item.get("discount_cents") or 0)
    return items


@orders_bp.get("")
def list_orders():
    """
    Query params:
    - store_id: int (optional)
    - status: str (optional) - one of the order statuses
    - type: str (optional) - in_store | online
    """
    orders = order_service.list_orders(
        get_entity_store(),
        store_id=request.args.get("store_id", type=int),
        status=request.args.get("status") or None,
        order_type=request.args.get("type") or None,
    )
    return jsonify([o.to_dict() for o in orders]), 200


@orders_bp.get("/recent")
def recent_orders():
    limit = request.args.get("limit", default=5, type=int)
    store_id = request.args.get("store_id", type=int)
    orders = order_service.get_recent_orders(get_entity_store(), limit=limit, store_id=store_id)
    return jsonify([o.to_dict() for o in orders]), 200


@orders_bp.get("/<int:order_id>")
def get_order(order_id: int):
    found = order_service.get_order_with_items(get_entity_store(), order_id)
    if found is None:
        return jsonify({"error": "Order not found"}), 404

    order, items = found
    return jsonify({"order": order.to_dict(), "items": [i.to_dict() for i in items]}), 200


@orders_bp.post("")
def create_order():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"error": "Invalid JSON payload"}), 400

    try:
        order_fields = validate_payload(
            model=Order, payload=payload.get("order"), policy=ORDER_POLICY, partial=False
        )
        enforce_rules_order(order_fields)
        items = _clean_items(payload.get("items"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        order = order_service.create_order(
            get_entity_store(),
            order_fields,
            items,
            decrement_inventory=current_app.config.get("DECREMENT_INVENTORY_ON_ORDER", False),
        )
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409
    except OrderError as e:
        return jsonify({"error": str(e), "details": e.details}), 400
    except Exception:
        current_app.logger.exception("Failed to create order")
        return jsonify({"error": "Internal server error"}), 500

    current_app.logger.info(
        "Created order %s (store %s, %d items, %d cents)",
        order.order_number, order.store_id, len(items), order.total_cents,
    )
    return jsonify(order.to_dict()), 201


@orders_bp.put("/<int:order_id>/status")
def update_order_status(order_id: int):
    data = request.get_json(silent=True) or {}

    try:
        status = validate_order_status(data.get("status"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        order = order_service.update_order_status(get_entity_store(), order_id, status)
    except OrderError as e:
        return jsonify({"error": str(e), "details": e.details}), 400
    except Exception:
        current_app.logger.exception("Failed to update order status")
        return jsonify({"error": "Internal server error"}), 500

    if not order:
        return jsonify({"error": "Order not found"}), 404
    return jsonify(order.to_dict()), 200
