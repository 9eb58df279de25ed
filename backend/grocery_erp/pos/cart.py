# Overview: In-memory cart with integer-cent pricing and flat sales tax.

from __future__ import annotations

from dataclasses import dataclass


# 8.25%
DEFAULT_TAX_RATE_BPS = 825


def compute_tax_cents(subtotal_cents: int, tax_rate_bps: int) -> int:
    """Tax on a subtotal, rounded half-up to the cent."""
    return (subtotal_cents * tax_rate_bps + 5000) // 10000


@dataclass
class CartLine:
    product_id: int
    name: str
    unit_price_cents: int
    quantity: int = 1

    @property
    def line_total_cents(self) -> int:
        return self.unit_price_cents * self.quantity

    def to_order_item(self) -> dict:
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "unit_price_cents": self.unit_price_cents,
            "line_total_cents": self.line_total_cents,
            "discount_cents": 0,
        }


class Cart:
    """
    Lines keyed by product id, kept in insertion order.

    Adding a product that is already in the cart bumps its quantity.
    set_quantity never goes below 1; use remove() to drop a line.
    """

    def __init__(self, tax_rate_bps: int = DEFAULT_TAX_RATE_BPS):
        self.tax_rate_bps = tax_rate_bps
        self._lines: dict[int, CartLine] = {}

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def add_product(self, product_id: int, name: str, unit_price_cents: int, quantity: int = 1) -> CartLine:
        if quantity < 1:
            raise ValueError("quantity must be >= 1")
        if unit_price_cents < 0:
            raise ValueError("unit_price_cents must be >= 0")

        line = self._lines.get(product_id)
        if line is None:
            line = CartLine(product_id=product_id, name=name, unit_price_cents=unit_price_cents, quantity=quantity)
            self._lines[product_id] = line
        else:
            line.quantity += quantity
        return line

    def add(self, product: dict, quantity: int = 1) -> CartLine:
        """Add a product as returned by GET /api/products."""
        return self.add_product(product["id"], product["name"], product["price_cents"], quantity)

    def set_quantity(self, product_id: int, quantity: int) -> None:
        line = self._lines.get(product_id)
        if line is None:
            raise KeyError(product_id)
        line.quantity = max(1, quantity)

    def remove(self, product_id: int) -> None:
        self._lines.pop(product_id, None)

    def clear(self) -> None:
        self._lines.clear()

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    @property
    def subtotal_cents(self) -> int:
        return sum(line.line_total_cents for line in self._lines.values())

    @property
    def tax_cents(self) -> int:
        return compute_tax_cents(self.subtotal_cents, self.tax_rate_bps)

    @property
    def total_cents(self) -> int:
        return self.subtotal_cents + self.tax_cents
