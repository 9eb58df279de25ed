# Overview: Service-layer operations for supplier purchase orders.

from __future__ import annotations

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..models import PurchaseOrder, PurchaseOrderItem
from ..validation import ConflictError
from .entity_store import EntityStore


class PurchaseOrderError(Exception):
    """Raised for purchase order operation errors."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


def create_purchase_order(entities: EntityStore, po_fields: dict, items: list[dict]) -> PurchaseOrder:
    """
    Persist a purchase order and its items in one transaction.

    Same all-or-nothing contract as order_service.create_order.
    """
    po_number = po_fields.get("po_number")
    if po_number and entities.purchase_orders.find_first(po_number=po_number) is not None:
        raise ConflictError("Purchase order number already exists.")

    with entities.transaction():
        try:
            purchase_order = entities.purchase_orders.create(po_fields, commit=False)
        except IntegrityError as exc:
            entities.session.rollback()
            if po_number and entities.purchase_orders.find_first(po_number=po_number) is not None:
                raise ConflictError("Purchase order number already exists.") from exc
            raise PurchaseOrderError("Purchase order could not be saved") from exc
        except SQLAlchemyError as exc:
            raise PurchaseOrderError("Purchase order could not be saved") from exc

        for index, item in enumerate(items):
            try:
                entities.purchase_order_items.create(
                    {**item, "purchase_order_id": purchase_order.id}, commit=False
                )
            except SQLAlchemyError as exc:
                raise PurchaseOrderError(
                    f"Purchase order item {index} could not be saved",
                    details={"item_index": index},
                ) from exc

    return purchase_order


def update_purchase_order_status(entities: EntityStore, po_id: int, status: str) -> PurchaseOrder | None:
    """Status is free text (pending, ordered, received, ...); blank is rejected."""
    if not status or not status.strip():
        raise PurchaseOrderError("Status is required")
    return entities.purchase_orders.update(po_id, {"status": status.strip()})


def get_purchase_order_items(entities: EntityStore, po_id: int) -> list[PurchaseOrderItem]:
    return entities.purchase_order_items.list(purchase_order_id=po_id)


def get_purchase_order_with_items(
    entities: EntityStore, po_id: int
) -> tuple[PurchaseOrder, list[PurchaseOrderItem]] | None:
    purchase_order = entities.purchase_orders.get(po_id)
    if purchase_order is None:
        return None
    return purchase_order, get_purchase_order_items(entities, po_id)


def list_purchase_orders(entities: EntityStore, *, store_id: int | None = None) -> list[PurchaseOrder]:
    return entities.purchase_orders.list(store_id=store_id)
