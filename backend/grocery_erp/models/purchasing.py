from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


class PurchaseOrder(db.Model):
    """
    Supplier replenishment order.

    Mirrors Order, but status is free text (pending, ordered, received, ...).
    """
    __tablename__ = "purchase_orders"
    __table_args__ = (
        db.UniqueConstraint("po_number", name="uq_purchase_orders_po_number"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    po_number = db.Column(db.String(64), nullable=False)
    store_id = db.Column(db.Integer, nullable=False, index=True)
    supplier_name = db.Column(db.String(255), nullable=False)
    order_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    expected_delivery_date = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.String(32), nullable=False, default="pending")
    total_cents = db.Column(db.Integer, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "po_number": self.po_number,
            "store_id": self.store_id,
            "supplier_name": self.supplier_name,
            "order_date": to_utc_z(self.order_date),
            "expected_delivery_date": to_utc_z(self.expected_delivery_date),
            "status": self.status,
            "total_cents": self.total_cents,
            "notes": self.notes,
        }


class PurchaseOrderItem(db.Model):
    __tablename__ = "purchase_order_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    purchase_order_id = db.Column(db.Integer, nullable=False, index=True)
    product_id = db.Column(db.Integer, nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    cost_price_cents = db.Column(db.Integer, nullable=False)
    total_cents = db.Column(db.Integer, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "purchase_order_id": self.purchase_order_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "cost_price_cents": self.cost_price_cents,
            "total_cents": self.total_cents,
        }
