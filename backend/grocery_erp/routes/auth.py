# Overview: Flask API routes for users and login; parses input and returns JSON responses.

"""
User and authentication routes.

Login is a credential check only: it returns the user record on success and
issues no session or token. Roles are informational; nothing here enforces
them.
"""

from flask import Blueprint, request, jsonify, current_app

from ..services import auth_service
from ..services.auth_service import AuthError, PasswordValidationError
from ..services.entity_store import get_entity_store
from ..validation import ConflictError


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")
users_bp = Blueprint("users", __name__, url_prefix="/api/users")


@users_bp.post("")
def create_user_route():
    """Body: username, email, password (required); role, employee_id, is_active (optional)."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON payload"}), 400

    username = data.get("username")
    email = data.get("email")
    password = data.get("password")

    if not all(isinstance(v, str) and v.strip() for v in (username, email, password)):
        return jsonify({"error": "username, email and password required"}), 400

    employee_id = data.get("employee_id")
    if employee_id is not None and (not isinstance(employee_id, int) or isinstance(employee_id, bool)):
        return jsonify({"error": "employee_id must be an integer"}), 400

    try:
        user = auth_service.create_user(
            get_entity_store(),
            username=username.strip(),
            email=email.strip(),
            password=password,
            role=data.get("role"),
            employee_id=employee_id,
            is_active=bool(data.get("is_active", True)),
            rounds=current_app.config.get("BCRYPT_LOG_ROUNDS", auth_service.DEFAULT_BCRYPT_ROUNDS),
        )
    except PasswordValidationError as e:
        return jsonify({"error": str(e)}), 400
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409

    return jsonify(user.to_dict()), 201


@users_bp.get("/<int:user_id>")
def get_user_route(user_id: int):
    user = get_entity_store().users.get(user_id)
    if not user:
        return jsonify({"error": "User not found"}), 404
    return jsonify(user.to_dict()), 200


@auth_bp.post("/login")
def login_route():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON payload"}), 400

    username = data.get("username")
    password = data.get("password")
    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        return jsonify({"error": "username and password required"}), 400

    try:
        user = auth_service.login(get_entity_store(), username, password)
    except AuthError as e:
        return jsonify({"error": str(e)}), 401

    return jsonify({"user": user.to_dict()}), 200
