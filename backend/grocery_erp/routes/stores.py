# Overview: Flask API routes for stores operations; parses input and returns JSON responses.

from flask import Blueprint, jsonify, request

from ..models import Store
from ..services.entity_store import get_entity_store
from ..validation import ModelValidationPolicy, validate_payload, ValidationError

STORE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"name", "address", "city", "state", "zip_code", "phone", "email", "is_active"}),
    required_on_create=frozenset({"name", "address", "city", "state", "zip_code"}),
)

stores_bp = Blueprint("stores", __name__, url_prefix="/api/stores")


@stores_bp.get("")
def list_stores():
    stores = get_entity_store().stores.list()
    return jsonify([store.to_dict() for store in stores]), 200


@stores_bp.get("/<int:store_id>")
def get_store(store_id: int):
    store = get_entity_store().stores.get(store_id)
    if not store:
        return jsonify({"error": "Store not found"}), 404
    return jsonify(store.to_dict()), 200


@stores_bp.post("")
def create_store():
    data = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(model=Store, payload=data, policy=STORE_POLICY, partial=False)
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400

    store = get_entity_store().stores.create(patch)
    return jsonify(store.to_dict()), 201


@stores_bp.put("/<int:store_id>")
def update_store(store_id: int):
    data = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(model=Store, payload=data, policy=STORE_POLICY, partial=True)
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400

    store = get_entity_store().stores.update(store_id, patch)
    if not store:
        return jsonify({"error": "Store not found"}), 404
    return jsonify(store.to_dict()), 200


@stores_bp.delete("/<int:store_id>")
def delete_store(store_id: int):
    if not get_entity_store().stores.delete(store_id):
        return jsonify({"error": "Store not found"}), 404
    return jsonify({"ok": True}), 200
