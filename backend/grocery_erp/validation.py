from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import DeclarativeMeta

from .models.orders import ORDER_STATUSES, ORDER_TYPES, PAYMENT_METHODS
from .time_utils import parse_iso_datetime


# $9,999,999.99; anything above is a data entry error
MAX_AMOUNT_CENTS = 999_999_999


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """409-level uniqueness conflict (duplicate SKU, order number, ...)."""


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Per-route input policy:
    - writable_fields: what clients are allowed to set
    - required_on_create: fields required for POST
    """
    writable_fields: frozenset[str]
    required_on_create: frozenset[str] = frozenset()


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    return {c.key: c for c in model.__mapper__.columns}


def _coerce_integer(key: str, value: Any) -> int:
    # bool is a subclass of int and never a valid quantity or amount
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped or "e" in stripped.lower() or "." in stripped:
            raise ValidationError(f"{key} must be a plain integer")
        try:
            return int(stripped)
        except ValueError:
            raise ValidationError(f"{key} must be an integer")
    if isinstance(value, float):
        raise ValidationError(f"{key} must be an integer, not a decimal")
    raise ValidationError(f"{key} must be an integer")


def _coerce_value(col, value: Any):
    coltype = col.type

    if isinstance(coltype, Integer):
        return _coerce_integer(col.key, value)

    if isinstance(coltype, Float):
        if isinstance(value, bool):
            raise ValidationError(f"{col.key} must be a number")
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{col.key} must be a number")

    if isinstance(coltype, Boolean):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
            return value.strip().lower() == "true"
        raise ValidationError(f"{col.key} must be a boolean")

    # Accept ISO-8601 strings; normalize to UTC-naive
    if isinstance(coltype, DateTime):
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                dt = parse_iso_datetime(value)
            except ValueError:
                raise ValidationError(f"{col.key} must be an ISO-8601 datetime")
            if dt is None:
                raise ValidationError(f"{col.key} must be an ISO-8601 datetime")
            return dt
        raise ValidationError(f"{col.key} must be a datetime")

    if isinstance(coltype, (String, Text)):
        return str(value).strip()

    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: Any,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - the policy allowlist (writable_fields)
    - required_on_create (if partial=False)
    Returns a cleaned patch dict with only writable fields.

    partial=False: create semantics (enforce required_on_create)
    partial=True: update semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    if not partial:
        missing = sorted(f for f in policy.required_on_create if payload.get(f) is None)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cols = _columns_by_key(model)

    for k in payload.keys():
        if k not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {k}")
        if k not in cols:
            raise ValidationError(f"Unknown field: {k}")

    patch: dict = {}

    for k, raw in payload.items():
        col = cols[k]

        if raw is None:
            if not col.nullable:
                raise ValidationError(f"{k} cannot be null")
            patch[k] = None
            continue

        val = _coerce_value(col, raw)

        if isinstance(col.type, (String, Text)) and not col.nullable and val == "":
            raise ValidationError(f"{k} cannot be blank")

        if isinstance(col.type, String) and col.type.length and isinstance(val, str):
            if len(val) > col.type.length:
                raise ValidationError(f"{k} exceeds max length {col.type.length}")

        patch[k] = val

    return patch


def validate_items(
    *,
    model: DeclarativeMeta,
    items: Any,
    policy: ModelValidationPolicy,
) -> list[dict]:
    """Validate a list of line-item payloads; errors name the offending index."""
    if items is None:
        return []
    if not isinstance(items, list):
        raise ValidationError("items must be a list")

    cleaned = []
    for index, item in enumerate(items):
        try:
            cleaned.append(validate_payload(model=model, payload=item, policy=policy, partial=False))
        except ValidationError as exc:
            raise ValidationError(f"items[{index}]: {exc}") from exc
    return cleaned


def enforce_non_negative_amounts(patch: dict, *fields: str) -> None:
    for field in fields:
        value = patch.get(field)
        if value is None:
            continue
        if value < 0:
            raise ValidationError(f"{field} must be >= 0")
        if value > MAX_AMOUNT_CENTS:
            raise ValidationError(f"{field} cannot exceed {MAX_AMOUNT_CENTS} (${MAX_AMOUNT_CENTS / 100:,.2f})")


def enforce_rules_product(patch: dict) -> None:
    enforce_non_negative_amounts(patch, "price_cents", "cost_price_cents")


def enforce_rules_inventory(patch: dict) -> None:
    for field in ("min_stock_level", "max_stock_level"):
        if patch.get(field) is not None and patch[field] < 0:
            raise ValidationError(f"{field} must be >= 0")

    low, high = patch.get("min_stock_level"), patch.get("max_stock_level")
    if low is not None and high is not None and high < low:
        raise ValidationError("max_stock_level must be >= min_stock_level")


def validate_order_status(status: Any) -> str:
    if status not in ORDER_STATUSES:
        raise ValidationError(f"Invalid status. Must be one of: {', '.join(ORDER_STATUSES)}")
    return status


def enforce_rules_order(patch: dict) -> None:
    if "order_status" in patch and patch["order_status"] is not None:
        validate_order_status(patch["order_status"])

    order_type = patch.get("order_type")
    if order_type is not None and order_type not in ORDER_TYPES:
        raise ValidationError(f"Invalid order_type. Must be one of: {', '.join(ORDER_TYPES)}")

    payment_method = patch.get("payment_method")
    if payment_method is not None and payment_method not in PAYMENT_METHODS:
        raise ValidationError(f"Invalid payment_method. Must be one of: {', '.join(PAYMENT_METHODS)}")

    enforce_non_negative_amounts(patch, "total_cents", "tax_cents", "discount_cents")


def enforce_rules_line_item(patch: dict, *, amount_fields: tuple[str, ...]) -> None:
    quantity = patch.get("quantity")
    if quantity is not None and quantity <= 0:
        raise ValidationError("quantity must be > 0")
    enforce_non_negative_amounts(patch, *amount_fields)


def require_int_field(payload: Any, key: str) -> int:
    """Pull a required integer out of a loose JSON body (restock quantity, adjust delta)."""
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")
    if payload.get(key) is None:
        raise ValidationError(f"Missing required fields: {key}")
    return _coerce_integer(key, payload[key])
