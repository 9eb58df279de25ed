from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z


class Inventory(db.Model):
    """
    Stock level of one product at one store.

    At most one record exists per (product_id, store_id) pair. Quantity may go
    negative through adjustments; low-stock detection treats it like any
    other value at or below the threshold.
    """
    __tablename__ = "inventory"
    __table_args__ = (
        db.UniqueConstraint("product_id", "store_id", name="uq_inventory_product_store"),
        db.Index("ix_inventory_store_product", "store_id", "product_id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, nullable=False, index=True)
    store_id = db.Column(db.Integer, nullable=False, index=True)

    quantity = db.Column(db.Integer, nullable=False, default=0)
    min_stock_level = db.Column(db.Integer, nullable=True, default=5)
    max_stock_level = db.Column(db.Integer, nullable=True)
    last_restock_date = db.Column(db.DateTime, nullable=True)

    # Optimistic locking for concurrent restock/adjust
    version_id = db.Column(db.Integer, nullable=False, default=1)
    __mapper_args__ = {"version_id_col": version_id}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "store_id": self.store_id,
            "quantity": self.quantity,
            "min_stock_level": self.min_stock_level,
            "max_stock_level": self.max_stock_level,
            "last_restock_date": to_utc_z(self.last_restock_date),
            "version_id": self.version_id,
        }
