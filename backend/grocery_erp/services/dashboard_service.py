# Overview: Dashboard aggregation; recomputed from orders, inventory and customers on every read.

from __future__ import annotations

from datetime import datetime

from .entity_store import EntityStore
from .inventory_service import DEFAULT_LOW_STOCK_THRESHOLD, get_low_stock_items
from .order_service import get_recent_orders, list_orders
from ..time_utils import local_day_bounds_utc

RECENT_ORDERS_LIMIT = 5


def get_dashboard_summary(
    entities: EntityStore,
    store_id: int | None = None,
    *,
    now: datetime | None = None,
    default_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> dict:
    """
    Same-day order count and revenue, low-stock count and customer count.

    "Today" is the server-local calendar day containing `now`. Orders,
    revenue and low stock honor store_id; the customer count is chain-wide
    because customers are not attached to a store.
    """
    day_start, day_end = local_day_bounds_utc(now)

    orders = list_orders(entities, store_id=store_id)
    todays_orders = [o for o in orders if day_start <= o.order_date < day_end]
    todays_revenue_cents = sum(o.total_cents or 0 for o in todays_orders)

    low_stock = get_low_stock_items(entities, store_id, default_threshold=default_threshold)

    low_stock_items = []
    for record in low_stock:
        product = entities.products.get(record.product_id)
        row = record.to_dict()
        row["product"] = product.to_dict() if product else None
        low_stock_items.append(row)

    return {
        "store_id": store_id,
        "todays_orders": len(todays_orders),
        "todays_revenue_cents": todays_revenue_cents,
        "customer_count": entities.customers.count(),
        "low_stock_count": len(low_stock),
        "recent_orders": [
            o.to_dict() for o in get_recent_orders(entities, limit=RECENT_ORDERS_LIMIT, store_id=store_id)
        ],
        "low_stock_items": low_stock_items,
    }
