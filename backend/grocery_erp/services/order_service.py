# Overview: Service-layer operations for orders; order + line items as one unit, status state machine.

"""
Order aggregate.

An order and its line items are written in a single transaction: either the
order and every item are committed, or nothing is. Items are not embedded in
the returned order; fetch them with get_order_items / get_order_with_items.

STATE MACHINE:
    pending, processing, out_for_delivery, completed, cancelled
    initial: pending

ORDER_STATUS_TRANSITIONS currently allows every move, including
completed -> pending. Tightening the workflow is an edit to that table.
"""

from __future__ import annotations

import secrets

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..models import Order, OrderItem, ORDER_STATUSES
from ..time_utils import utcnow
from ..validation import ConflictError
from .concurrency import lock_for_update
from .entity_store import EntityStore


INITIAL_ORDER_STATUS = "pending"

ORDER_STATUS_TRANSITIONS: dict[str, frozenset[str]] = {
    status: frozenset(ORDER_STATUSES) for status in ORDER_STATUSES
}


class OrderError(Exception):
    """Raised for order operation errors."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


def can_transition(from_status: str, to_status: str) -> bool:
    return to_status in ORDER_STATUS_TRANSITIONS.get(from_status, frozenset())


def generate_order_number() -> str:
    """Server-side order number, e.g. ORD-20260119143005-3FA9."""
    return f"ORD-{utcnow():%Y%m%d%H%M%S}-{secrets.token_hex(2).upper()}"


def _decrement_stock(entities: EntityStore, store_id: int, item: dict) -> None:
    record = lock_for_update(
        entities.session.query(entities.inventory.model).filter_by(
            product_id=item["product_id"], store_id=store_id
        )
    ).first()
    # No inventory record for this product at this store: nothing to decrement
    if record is None:
        return
    record.quantity = record.quantity - item["quantity"]


def create_order(
    entities: EntityStore,
    order_fields: dict,
    items: list[dict],
    *,
    decrement_inventory: bool = False,
) -> Order:
    """
    Persist an order and its line items atomically.

    Each item is tagged with the new order id. If any item fails to persist,
    the order and all earlier items are rolled back and OrderError names the
    failing item index.

    Raises:
        ConflictError: order_number already exists
        OrderError: the order or one of its items could not be saved
    """
    fields = dict(order_fields)
    if not fields.get("order_number"):
        fields["order_number"] = generate_order_number()
    fields.setdefault("order_status", INITIAL_ORDER_STATUS)

    if entities.orders.find_first(order_number=fields["order_number"]) is not None:
        raise ConflictError("Order number already exists.")

    with entities.transaction():
        try:
            order = entities.orders.create(fields, commit=False)
        except IntegrityError as exc:
            # A concurrent insert took the order_number after the check above
            entities.session.rollback()
            if entities.orders.find_first(order_number=fields["order_number"]) is not None:
                raise ConflictError("Order number already exists.") from exc
            raise OrderError("Order could not be saved") from exc
        except SQLAlchemyError as exc:
            raise OrderError("Order could not be saved") from exc

        for index, item in enumerate(items):
            try:
                entities.order_items.create({**item, "order_id": order.id}, commit=False)
            except SQLAlchemyError as exc:
                raise OrderError(
                    f"Order item {index} could not be saved",
                    details={"item_index": index},
                ) from exc

            if decrement_inventory:
                _decrement_stock(entities, order.store_id, item)

    return order


def update_order_status(entities: EntityStore, order_id: int, new_status: str) -> Order | None:
    """
    Move an order to new_status. Only order_status changes.

    Returns None when the order does not exist.
    """
    order = entities.orders.get(order_id)
    if order is None:
        return None

    if not can_transition(order.order_status, new_status):
        raise OrderError(
            f"Cannot move order from {order.order_status} to {new_status}",
            details={"from": order.order_status, "to": new_status},
        )

    return entities.orders.update(order_id, {"order_status": new_status})


def get_order_items(entities: EntityStore, order_id: int) -> list[OrderItem]:
    return entities.order_items.list(order_id=order_id)


def get_order_with_items(entities: EntityStore, order_id: int) -> tuple[Order, list[OrderItem]] | None:
    order = entities.orders.get(order_id)
    if order is None:
        return None
    return order, get_order_items(entities, order_id)


def list_orders(
    entities: EntityStore,
    *,
    store_id: int | None = None,
    status: str | None = None,
    order_type: str | None = None,
) -> list[Order]:
    return entities.orders.list(store_id=store_id, order_status=status, order_type=order_type)


def get_recent_orders(entities: EntityStore, *, limit: int = 5, store_id: int | None = None) -> list[Order]:
    """Newest orders first by order_date."""
    query = entities.session.query(Order)
    if store_id is not None:
        query = query.filter(Order.store_id == store_id)
    return (
        query.order_by(Order.order_date.desc(), Order.id.desc())
        .limit(max(limit, 0))
        .all()
    )
