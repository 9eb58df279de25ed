from __future__ import annotations

from ..extensions import db


class ProductCategory(db.Model):
    """Grouping for the product catalog (produce, dairy, bakery, ...)."""
    __tablename__ = "product_categories"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(512), nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "image_url": self.image_url,
        }


class Product(db.Model):
    """
    Catalog product.

    Prices are integer cents. category_id is a soft reference: deleting a
    category (or the product) performs no referential check.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.UniqueConstraint("sku", name="uq_products_sku"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    sku = db.Column(db.String(64), nullable=False, index=True)

    price_cents = db.Column(db.Integer, nullable=False)
    cost_price_cents = db.Column(db.Integer, nullable=True)

    category_id = db.Column(db.Integer, nullable=True, index=True)
    image_url = db.Column(db.String(512), nullable=True)
    barcode = db.Column(db.String(64), nullable=True)
    weight = db.Column(db.Float, nullable=True)
    unit = db.Column(db.String(32), nullable=True, default="piece")
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Product id={self.id} sku={self.sku!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "sku": self.sku,
            "price_cents": self.price_cents,
            "cost_price_cents": self.cost_price_cents,
            "category_id": self.category_id,
            "image_url": self.image_url,
            "barcode": self.barcode,
            "weight": self.weight,
            "unit": self.unit,
            "is_active": self.is_active,
        }
