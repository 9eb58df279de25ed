# Overview: Service-layer operations for inventory; listings, low-stock detection, restock/adjust.

"""
Inventory queries and stock movements.

Low stock means quantity <= min_stock_level, or <= the default threshold
when the record has no min_stock_level. The low-stock query is a pure
filter; the finer out-of-stock / low-stock / overstocked / in-stock
classification is only attached by get_inventory_details.

Product lookups always take a store scope. list_product_inventory returns
every store's record for a product instead of picking one.
"""

from __future__ import annotations

from datetime import datetime

from ..models import Inventory
from ..time_utils import utcnow
from ..validation import ConflictError
from .concurrency import lock_for_update, run_with_retry
from .entity_store import EntityStore


DEFAULT_LOW_STOCK_THRESHOLD = 10

OUT_OF_STOCK = "out-of-stock"
LOW_STOCK = "low-stock"
OVERSTOCKED = "overstocked"
IN_STOCK = "in-stock"


class InventoryError(Exception):
    """Raised when an inventory movement is invalid."""
    pass


def get_inventory(entities: EntityStore, store_id: int | None = None) -> list[Inventory]:
    return entities.inventory.list(store_id=store_id)


def low_stock_threshold(record: Inventory, default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> int:
    if record.min_stock_level is None:
        return default_threshold
    return record.min_stock_level


def is_low_stock(record: Inventory, default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> bool:
    return record.quantity <= low_stock_threshold(record, default_threshold)


def get_low_stock_items(
    entities: EntityStore,
    store_id: int | None = None,
    *,
    default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> list[Inventory]:
    return [
        record
        for record in get_inventory(entities, store_id)
        if is_low_stock(record, default_threshold)
    ]


def classify_stock_level(record: Inventory) -> str:
    if record.quantity <= 0:
        return OUT_OF_STOCK
    if record.min_stock_level and record.quantity <= record.min_stock_level:
        return LOW_STOCK
    if record.max_stock_level and record.quantity >= record.max_stock_level:
        return OVERSTOCKED
    return IN_STOCK


def get_product_inventory(entities: EntityStore, product_id: int, store_id: int) -> Inventory | None:
    """The record for one product at one store, or None."""
    return entities.inventory.find_first(product_id=product_id, store_id=store_id)


def list_product_inventory(entities: EntityStore, product_id: int) -> list[Inventory]:
    """Every store's record for a product."""
    return entities.inventory.list(product_id=product_id)


def get_inventory_details(entities: EntityStore, store_id: int | None = None) -> list[dict]:
    """Inventory rows joined with their product and store plus a stock status."""
    products = {p.id: p for p in entities.products.list()}
    stores = {s.id: s for s in entities.stores.list()}

    rows = []
    for record in get_inventory(entities, store_id):
        product = products.get(record.product_id)
        store = stores.get(record.store_id)
        row = record.to_dict()
        row["product"] = product.to_dict() if product else None
        row["store"] = store.to_dict() if store else None
        row["stock_status"] = classify_stock_level(record)
        rows.append(row)
    return rows


def _ensure_unique_pair(entities: EntityStore, product_id: int, store_id: int, *, exclude_id: int | None = None) -> None:
    existing = get_product_inventory(entities, product_id, store_id)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError("Inventory record already exists for this product and store.")


def create_inventory(entities: EntityStore, fields: dict) -> Inventory:
    _ensure_unique_pair(entities, fields["product_id"], fields["store_id"])
    return entities.inventory.create(fields)


def update_inventory(entities: EntityStore, inventory_id: int, patch: dict) -> Inventory | None:
    record = entities.inventory.get(inventory_id)
    if record is None:
        return None

    product_id = patch.get("product_id") or record.product_id
    store_id = patch.get("store_id") or record.store_id
    if (product_id, store_id) != (record.product_id, record.store_id):
        _ensure_unique_pair(entities, product_id, store_id, exclude_id=record.id)

    return entities.inventory.update(inventory_id, patch)


def _locked_record(entities: EntityStore, inventory_id: int) -> Inventory | None:
    return lock_for_update(
        entities.session.query(Inventory).filter_by(id=inventory_id)
    ).first()


def restock_inventory(
    entities: EntityStore,
    inventory_id: int,
    quantity: int,
    *,
    occurred_at: datetime | None = None,
) -> Inventory | None:
    """Add received stock and stamp last_restock_date. None if the record is missing."""
    if quantity <= 0:
        raise InventoryError("quantity must be > 0 for restock")

    def _op():
        record = _locked_record(entities, inventory_id)
        if record is None:
            return None
        record.quantity = record.quantity + quantity
        record.last_restock_date = occurred_at or utcnow()
        entities.session.commit()
        return record

    return run_with_retry(entities.session, _op)


def adjust_inventory(entities: EntityStore, inventory_id: int, delta: int) -> Inventory | None:
    """Apply a signed correction (shrinkage, count variance). None if the record is missing."""
    if delta == 0:
        raise InventoryError("delta must be non-zero for adjustment")

    def _op():
        record = _locked_record(entities, inventory_id)
        if record is None:
            return None
        record.quantity = record.quantity + delta
        entities.session.commit()
        return record

    return run_with_retry(entities.session, _op)
