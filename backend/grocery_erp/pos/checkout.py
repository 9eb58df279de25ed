# Overview: Checkout client; turns a Cart into an order through the HTTP API and renders the receipt.

"""
Checkout flow

    cart -> preconditions -> (customer lookup by phone) -> POST /api/orders -> Invoice

Preconditions are checked locally and no request is sent when they fail.
The cart is cleared only after the server accepts the order; on any
failure it is left untouched so the cashier can retry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import httpx

from .cart import Cart, CartLine


class CheckoutError(Exception):
    """Raised when checkout is refused locally or rejected by the server."""
    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[dict] = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details or {}


@dataclass
class Invoice:
    order: dict
    lines: list[CartLine]
    subtotal_cents: int
    tax_cents: int
    total_cents: int
    payment_method: str
    store: Optional[dict] = None
    customer: Optional[dict] = None
    issued_at: datetime = field(default_factory=datetime.now)

    @property
    def order_number(self) -> str:
        return self.order.get("order_number", "")

    def render_text(self, width: int = 40) -> str:
        def money(cents: int) -> str:
            return f"${cents / 100:,.2f}"

        def row(left: str, right: str) -> str:
            gap = max(1, width - len(left) - len(right))
            return f"{left}{' ' * gap}{right}"

        rule = "-" * width
        out = []

        if self.store:
            out.append(self.store.get("name", "").center(width).rstrip())
            address = ", ".join(
                part for part in (self.store.get("address"), self.store.get("city"), self.store.get("state")) if part
            )
            if address:
                out.append(address.center(width).rstrip())
            if self.store.get("phone"):
                out.append(self.store["phone"].center(width).rstrip())
            out.append(rule)

        out.append(f"Invoice: {self.order_number}")
        out.append(f"Date:    {self.issued_at:%Y-%m-%d %H:%M}")
        if self.customer:
            name = f"{self.customer.get('first_name', '')} {self.customer.get('last_name', '')}".strip()
            out.append(f"Customer: {name}")
            if self.customer.get("phone"):
                out.append(f"Phone:    {self.customer['phone']}")
        out.append(rule)

        for line in self.lines:
            out.append(line.name[:width])
            out.append(row(f"  {line.quantity} x {money(line.unit_price_cents)}", money(line.line_total_cents)))

        out.append(rule)
        out.append(row("Subtotal", money(self.subtotal_cents)))
        out.append(row("Tax", money(self.tax_cents)))
        out.append(row("TOTAL", money(self.total_cents)))
        out.append(row("Paid by", self.payment_method))
        out.append(rule)
        out.append("Thank you for shopping with us!".center(width).rstrip())
        return "\n".join(out) + "\n"


class CheckoutClient:
    """
    Thin httpx wrapper around the order API.

    Pass either base_url (a new httpx.Client is created and owned) or a
    ready client, e.g. one built on httpx.WSGITransport for in-process use.
    """

    def __init__(self, base_url: Optional[str] = None, *, client: Optional[httpx.Client] = None, timeout: float = 30.0):
        if client is None and base_url is None:
            raise ValueError("base_url or client is required")
        self._owns_client = client is None
        self.client = client or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "CheckoutClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return self.client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise CheckoutError(f"Could not reach server: {exc}") from exc

    @staticmethod
    def _error_from(response: httpx.Response) -> CheckoutError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("error") if isinstance(body, dict) else None
        details = body.get("details") if isinstance(body, dict) else None
        return CheckoutError(
            message or f"Server returned {response.status_code}",
            status_code=response.status_code,
            details=details,
        )

    def find_customer_by_phone(self, phone: str) -> Optional[dict]:
        """First customer whose phone matches exactly, or None."""
        response = self._request("GET", "/api/customers", params={"phone": phone})
        if response.status_code != 200:
            raise self._error_from(response)
        matches = response.json()
        return matches[0] if matches else None

    def get_tax_rate_bps(self) -> int:
        """The server's configured TAX_RATE_BPS."""
        response = self._request("GET", "/api/settings")
        if response.status_code != 200:
            raise self._error_from(response)
        return int(response.json()["tax_rate_bps"])

    def new_cart(self) -> Cart:
        """Empty cart taxed at the server's rate."""
        return Cart(tax_rate_bps=self.get_tax_rate_bps())

    def get_store(self, store_id: int) -> Optional[dict]:
        response = self._request("GET", f"/api/stores/{store_id}")
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise self._error_from(response)
        return response.json()

    def checkout(
        self,
        cart: Cart,
        store_id: Optional[int],
        payment_method: str = "cash",
        customer_id: Optional[int] = None,
        customer_phone: Optional[str] = None,
        *,
        employee_id: Optional[int] = None,
        order_type: str = "in_store",
        notes: Optional[str] = None,
    ) -> Invoice:
        """
        Place the cart as an order.

        An unmatched customer_phone is not an error; the order is recorded
        without a customer.
        """
        if cart.is_empty():
            raise CheckoutError("Cart is empty")
        if not store_id:
            raise CheckoutError("No store selected")

        customer = None
        if customer_id is None and customer_phone and customer_phone.strip():
            customer = self.find_customer_by_phone(customer_phone.strip())
            if customer is not None:
                customer_id = customer["id"]

        store = self.get_store(store_id)
        lines = cart.lines
        subtotal, tax, total = cart.subtotal_cents, cart.tax_cents, cart.total_cents

        order = {
            "store_id": store_id,
            "customer_id": customer_id,
            "employee_id": employee_id,
            "order_type": order_type,
            "order_status": "completed",
            "total_cents": total,
            "tax_cents": tax,
            "discount_cents": 0,
            "payment_method": payment_method,
            "notes": notes,
        }
        payload = {
            "order": {k: v for k, v in order.items() if v is not None},
            "items": [line.to_order_item() for line in lines],
        }

        response = self._request("POST", "/api/orders", json=payload)
        if response.status_code != 201:
            raise self._error_from(response)

        created = response.json()
        cart.clear()

        return Invoice(
            order=created,
            lines=lines,
            subtotal_cents=subtotal,
            tax_cents=tax,
            total_cents=total,
            payment_method=payment_method,
            store=store,
            customer=customer,
        )
