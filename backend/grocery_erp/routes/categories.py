# Overview: Flask API routes for product categories; parses input and returns JSON responses.

from flask import Blueprint, jsonify, request

from ..models import ProductCategory
from ..services.entity_store import get_entity_store
from ..validation import ModelValidationPolicy, validate_payload, ValidationError

CATEGORY_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"name", "description", "image_url"}),
    required_on_create=frozenset({"name"}),
)

categories_bp = Blueprint("categories", __name__, url_prefix="/api/categories")


@categories_bp.get("")
def list_categories():
    categories = get_entity_store().categories.list()
    return jsonify([c.to_dict() for c in categories]), 200


@categories_bp.get("/<int:category_id>")
def get_category(category_id: int):
    category = get_entity_store().categories.get(category_id)
    if not category:
        return {"error": "Category not found"}, 404
    return category.to_dict(), 200


@categories_bp.post("")
def create_category():
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(model=ProductCategory, payload=payload, policy=CATEGORY_POLICY, partial=False)
    except ValidationError as e:
        return {"error": str(e)}, 400

    category = get_entity_store().categories.create(patch)
    return category.to_dict(), 201


@categories_bp.put("/<int:category_id>")
def update_category(category_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(model=ProductCategory, payload=payload, policy=CATEGORY_POLICY, partial=True)
    except ValidationError as e:
        return {"error": str(e)}, 400

    category = get_entity_store().categories.update(category_id, patch)
    if not category:
        return {"error": "Category not found"}, 404
    return category.to_dict(), 200


@categories_bp.delete("/<int:category_id>")
def delete_category(category_id: int):
    if not get_entity_store().categories.delete(category_id):
        return {"error": "Category not found"}, 404
    return {"ok": True}, 200
