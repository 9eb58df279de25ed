# Overview: Flask API routes for customer records; phone lookup used at checkout.

from flask import Blueprint, current_app, jsonify, request

from ..models import Customer
from ..services import catalog_service
from ..services.entity_store import get_entity_store
from ..validation import ModelValidationPolicy, validate_payload, ValidationError, ConflictError

CUSTOMER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "first_name", "last_name", "email", "phone", "address", "city", "state", "zip_code",
    }),
    required_on_create=frozenset({"first_name", "last_name"}),
)

customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
def list_customers():
    """
    Query params:
    - phone: str (optional) - exact phone match; may return an empty list
    """
    entities = get_entity_store()
    phone = request.args.get("phone")
    if phone:
        customers = catalog_service.find_customers_by_phone(entities, phone)
    else:
        customers = entities.customers.list()
    return jsonify([c.to_dict() for c in customers]), 200


@customers_bp.get("/<int:customer_id>")
def get_customer(customer_id: int):
    customer = get_entity_store().customers.get(customer_id)
    if not customer:
        return {"error": "Customer not found"}, 404
    return customer.to_dict(), 200


@customers_bp.post("")
def create_customer():
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(model=Customer, payload=payload, policy=CUSTOMER_POLICY, partial=False)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        customer = catalog_service.create_customer(get_entity_store(), patch)
    except ConflictError as e:
        return {"error": str(e)}, 409
    except Exception:
        current_app.logger.exception("Failed to create customer")
        return {"error": "Internal server error"}, 500
    return customer.to_dict(), 201


@customers_bp.put("/<int:customer_id>")
def update_customer(customer_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(model=Customer, payload=payload, policy=CUSTOMER_POLICY, partial=True)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        customer = catalog_service.update_customer(get_entity_store(), customer_id, patch)
    except ConflictError as e:
        return {"error": str(e)}, 409
    except Exception:
        current_app.logger.exception("Failed to update customer")
        return {"error": "Internal server error"}, 500

    if not customer:
        return {"error": "Customer not found"}, 404
    return customer.to_dict(), 200


@customers_bp.delete("/<int:customer_id>")
def delete_customer(customer_id: int):
    if not get_entity_store().customers.delete(customer_id):
        return {"error": "Customer not found"}, 404
    return {"ok": True}, 200
