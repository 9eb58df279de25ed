from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z, utcnow


ORDER_STATUSES = ("pending", "processing", "completed", "cancelled", "out_for_delivery")

ORDER_TYPES = ("in_store", "online")

PAYMENT_METHODS = ("cash", "credit", "debit", "online")


class Order(db.Model):
    """
    Customer order (POS sale or online order).

    Created once together with its items; afterwards only order_status
    changes. customer_id and employee_id are optional soft references.
    """
    __tablename__ = "orders"
    __table_args__ = (
        db.UniqueConstraint("order_number", name="uq_orders_order_number"),
        db.Index("ix_orders_store_date", "store_id", "order_date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    order_number = db.Column(db.String(64), nullable=False)

    customer_id = db.Column(db.Integer, nullable=True, index=True)
    employee_id = db.Column(db.Integer, nullable=True, index=True)
    store_id = db.Column(db.Integer, nullable=False, index=True)

    order_date = db.Column(db.DateTime, nullable=False, default=utcnow)
    order_status = db.Column(db.String(32), nullable=False, default="pending", index=True)
    order_type = db.Column(db.String(16), nullable=False, default="in_store")

    # All amounts in cents
    total_cents = db.Column(db.Integer, nullable=False)
    tax_cents = db.Column(db.Integer, nullable=True, default=0)
    discount_cents = db.Column(db.Integer, nullable=True, default=0)

    payment_method = db.Column(db.String(32), nullable=True, default="cash")
    notes = db.Column(db.Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Order id={self.id} number={self.order_number!r} status={self.order_status}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order_number": self.order_number,
            "customer_id": self.customer_id,
            "employee_id": self.employee_id,
            "store_id": self.store_id,
            "order_date": to_utc_z(self.order_date),
            "order_status": self.order_status,
            "order_type": self.order_type,
            "total_cents": self.total_cents,
            "tax_cents": self.tax_cents,
            "discount_cents": self.discount_cents,
            "payment_method": self.payment_method,
            "notes": self.notes,
        }


class OrderItem(db.Model):
    """Line item on an order. Never mutated or deleted on its own."""
    __tablename__ = "order_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, nullable=False, index=True)
    product_id = db.Column(db.Integer, nullable=False, index=True)

    quantity = db.Column(db.Integer, nullable=False)
    unit_price_cents = db.Column(db.Integer, nullable=False)
    line_total_cents = db.Column(db.Integer, nullable=False)
    discount_cents = db.Column(db.Integer, nullable=True, default=0)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order_id": self.order_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "unit_price_cents": self.unit_price_cents,
            "line_total_cents": self.line_total_cents,
            "discount_cents": self.discount_cents,
        }
