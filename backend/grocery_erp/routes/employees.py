# Overview: Flask API routes for employee records; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..models import Employee
from ..services import catalog_service
from ..services.entity_store import get_entity_store
from ..validation import ModelValidationPolicy, validate_payload, ValidationError, ConflictError

EMPLOYEE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "first_name", "last_name", "email", "phone", "position", "store_id", "hire_date", "is_active",
    }),
    required_on_create=frozenset({"first_name", "last_name", "email", "position"}),
)

employees_bp = Blueprint("employees", __name__, url_prefix="/api/employees")


@employees_bp.get("")
def list_employees():
    """
    Query params:
    - store_id: int (optional) - only employees assigned to this store
    """
    store_id = request.args.get("store_id", type=int)
    employees = get_entity_store().employees.list(store_id=store_id)
    return jsonify([e.to_dict() for e in employees]), 200


@employees_bp.get("/<int:employee_id>")
def get_employee(employee_id: int):
    employee = get_entity_store().employees.get(employee_id)
    if not employee:
        return {"error": "Employee not found"}, 404
    return employee.to_dict(), 200


@employees_bp.post("")
def create_employee():
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(model=Employee, payload=payload, policy=EMPLOYEE_POLICY, partial=False)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        employee = catalog_service.create_employee(get_entity_store(), patch)
    except ConflictError as e:
        return {"error": str(e)}, 409
    except Exception:
        current_app.logger.exception("Failed to create employee")
        return {"error": "Internal server error"}, 500
    return employee.to_dict(), 201


@employees_bp.put("/<int:employee_id>")
def update_employee(employee_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        patch = validate_payload(model=Employee, payload=payload, policy=EMPLOYEE_POLICY, partial=True)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        employee = catalog_service.update_employee(get_entity_store(), employee_id, patch)
    except ConflictError as e:
        return {"error": str(e)}, 409
    except Exception:
        current_app.logger.exception("Failed to update employee")
        return {"error": "Internal server error"}, 500

    if not employee:
        return {"error": "Employee not found"}, 404
    return employee.to_dict(), 200


@employees_bp.delete("/<int:employee_id>")
def delete_employee(employee_id: int):
    if not get_entity_store().employees.delete(employee_id):
        return {"error": "Employee not found"}, 404
    return {"ok": True}, 200
