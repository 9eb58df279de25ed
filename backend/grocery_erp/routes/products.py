# Overview: Flask API routes for products operations; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..models import Product
from ..services import catalog_service
from ..services.entity_store import get_entity_store
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_product,
    ValidationError,
    ConflictError,
)

PRODUCT_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "name", "description", "sku", "price_cents", "cost_price_cents", "category_id",
        "image_url", "barcode", "weight", "unit", "is_active",
    }),
    required_on_create=frozenset({"name", "sku", "price_cents"}),
)

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
def list_products():
    """
    Query params:
    - category_id: int (optional)
    """
    category_id = request.args.get("category_id", type=int)
    products = catalog_service.list_products(get_entity_store(), category_id=category_id)
    return jsonify([p.to_dict() for p in products]), 200


@products_bp.get("/<int:product_id>")
def get_product(product_id: int):
    product = get_entity_store().products.get(product_id)
    if not product:
        return {"error": "Product not found"}, 404
    return product.to_dict(), 200


@products_bp.post("")
def create_product_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY, partial=False)
        enforce_rules_product(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        created = catalog_service.create_product(get_entity_store(), patch)
    except ConflictError as e:
        return {"error": str(e)}, 409
    except Exception:
        current_app.logger.exception("Failed to create product")
        return {"error": "Internal server error"}, 500

    return created.to_dict(), 201


@products_bp.put("/<int:product_id>")
def update_product_route(product_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY, partial=True)
        enforce_rules_product(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        updated = catalog_service.update_product(get_entity_store(), product_id, patch)
    except ConflictError as e:
        return {"error": str(e)}, 409
    except Exception:
        current_app.logger.exception("Failed to update product")
        return {"error": "Internal server error"}, 500

    if not updated:
        return {"error": "Product not found"}, 404

    return updated.to_dict(), 200


@products_bp.delete("/<int:product_id>")
def delete_product_route(product_id: int):
    """Hard delete. Inventory rows and order items that reference the product are left as they are."""
    if not get_entity_store().products.delete(product_id):
        return {"error": "Product not found"}, 404
    return {"ok": True}, 200
