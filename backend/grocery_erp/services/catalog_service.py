# Overview: Service-layer operations for products, employees and customers; uniqueness checks on write.

from __future__ import annotations

from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError

from ..models import Customer, Employee, Product
from ..validation import ConflictError
from .entity_store import EntityStore, Repository

T = TypeVar("T")


def _ensure_unique(repo: Repository, field: str, value, message: str, *, exclude_id: int | None = None) -> None:
    if value is None:
        return
    existing = repo.find_first(**{field: value})
    if existing is not None and existing.id != exclude_id:
        raise ConflictError(message)


def _write_unique(
    repo: Repository,
    field: str,
    value,
    message: str,
    write: Callable[[], T],
    *,
    exclude_id: int | None = None,
) -> T:
    """
    Check-then-write. A unique constraint hit from a concurrent writer that
    slipped past the check is reported as the same ConflictError.
    """
    _ensure_unique(repo, field, value, message, exclude_id=exclude_id)
    try:
        return write()
    except IntegrityError:
        # Repository writes with commit=True have already rolled back
        _ensure_unique(repo, field, value, message, exclude_id=exclude_id)
        raise


def create_product(entities: EntityStore, patch: dict) -> Product:
    return _write_unique(
        entities.products, "sku", patch.get("sku"), "SKU already exists.",
        lambda: entities.products.create(patch),
    )


def update_product(entities: EntityStore, product_id: int, patch: dict) -> Product | None:
    return _write_unique(
        entities.products, "sku", patch.get("sku"), "SKU already exists.",
        lambda: entities.products.update(product_id, patch),
        exclude_id=product_id,
    )


def list_products(entities: EntityStore, *, category_id: int | None = None) -> list[Product]:
    return entities.products.list(category_id=category_id)


def create_employee(entities: EntityStore, patch: dict) -> Employee:
    return _write_unique(
        entities.employees, "email", patch.get("email"), "Email already exists.",
        lambda: entities.employees.create(patch),
    )


def update_employee(entities: EntityStore, employee_id: int, patch: dict) -> Employee | None:
    return _write_unique(
        entities.employees, "email", patch.get("email"), "Email already exists.",
        lambda: entities.employees.update(employee_id, patch),
        exclude_id=employee_id,
    )


def create_customer(entities: EntityStore, patch: dict) -> Customer:
    return _write_unique(
        entities.customers, "email", patch.get("email"), "Email already exists.",
        lambda: entities.customers.create(patch),
    )


def update_customer(entities: EntityStore, customer_id: int, patch: dict) -> Customer | None:
    return _write_unique(
        entities.customers, "email", patch.get("email"), "Email already exists.",
        lambda: entities.customers.update(customer_id, patch),
        exclude_id=customer_id,
    )


def find_customers_by_phone(entities: EntityStore, phone: str) -> list[Customer]:
    """Exact match on the stored phone string."""
    return entities.customers.list(phone=phone.strip())
