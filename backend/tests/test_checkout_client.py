"""
Checkout client tests, run in-process against the Flask app via httpx.WSGITransport.

Verifies:
- Refusals (empty cart, no store) send no request
- Phone lookup attaches the customer
- Successful checkout clears the cart and returns an invoice
- Server rejection keeps the cart intact
"""

import httpx
import pytest

from grocery_erp.pos import Cart, CheckoutClient, CheckoutError
from grocery_erp.services.order_service import get_order_items


@pytest.fixture
def checkout(app, db_session):
    transport = httpx.WSGITransport(app=app)
    with httpx.Client(transport=transport, base_url="http://testserver") as http:
        yield CheckoutClient(client=http)


@pytest.fixture
def cart(apples, milk):
    cart = Cart()
    cart.add_product(apples.id, apples.name, apples.price_cents, quantity=5)
    cart.add_product(milk.id, milk.name, milk.price_cents, quantity=2)
    return cart


class _NoNetwork(httpx.BaseTransport):
    def handle_request(self, request):
        raise AssertionError(f"unexpected request: {request.method} {request.url}")


class TestCheckoutPreconditions:

    def test_empty_cart_refused_without_request(self):
        client = CheckoutClient(client=httpx.Client(transport=_NoNetwork(), base_url="http://testserver"))
        with pytest.raises(CheckoutError, match="Cart is empty"):
            client.checkout(Cart(), store_id=1)

    def test_missing_store_refused_without_request(self):
        cart = Cart()
        cart.add_product(1, "Organic Apples", 399)
        client = CheckoutClient(client=httpx.Client(transport=_NoNetwork(), base_url="http://testserver"))

        with pytest.raises(CheckoutError, match="No store selected"):
            client.checkout(cart, store_id=None)
        assert not cart.is_empty()

    def test_requires_base_url_or_client(self):
        with pytest.raises(ValueError):
            CheckoutClient()


class TestCheckoutFlow:

    def test_successful_checkout(self, checkout, cart, entities, store):
        invoice = checkout.checkout(cart, store.id, payment_method="credit")

        assert cart.is_empty()
        assert invoice.subtotal_cents == 2493
        assert invoice.tax_cents == 206
        assert invoice.total_cents == 2699
        assert invoice.order_number.startswith("ORD-")

        order = entities.orders.get(invoice.order["id"])
        assert order.total_cents == 2699
        assert order.tax_cents == 206
        assert order.payment_method == "credit"
        assert order.customer_id is None
        assert len(get_order_items(entities, order.id)) == 2

    def test_customer_resolved_by_phone(self, checkout, cart, entities, store, customer):
        invoice = checkout.checkout(cart, store.id, customer_phone="555-1111")

        assert invoice.customer["id"] == customer.id
        assert entities.orders.get(invoice.order["id"]).customer_id == customer.id

    def test_unknown_phone_is_walk_in(self, checkout, cart, entities, store, customer):
        invoice = checkout.checkout(cart, store.id, customer_phone="555-0000")
        assert invoice.customer is None
        assert entities.orders.get(invoice.order["id"]).customer_id is None

    def test_server_rejection_keeps_cart(self, checkout, entities, store):
        cart = Cart()
        cart.add_product(1, "Organic Apples", 399)
        # A negative tax rate produces a negative tax amount the server refuses
        cart.tax_rate_bps = -10000

        with pytest.raises(CheckoutError) as excinfo:
            checkout.checkout(cart, store.id)

        assert excinfo.value.status_code == 400
        assert not cart.is_empty()
        assert entities.orders.count() == 0

    def test_invoice_text(self, checkout, cart, store, customer):
        invoice = checkout.checkout(cart, store.id, customer_phone="555-1111")
        text = invoice.render_text()

        assert "Main Street - Downtown" in text
        assert invoice.order_number in text
        assert "Robert Johnson" in text
        assert "5 x $3.99" in text
        assert "$24.93" in text
        assert "$2.06" in text
        assert "$26.99" in text


class TestServerTaxRate:

    def test_default_rate(self, checkout):
        assert checkout.get_tax_rate_bps() == 825

    def test_new_cart_uses_configured_rate(self, app, checkout, apples, monkeypatch):
        monkeypatch.setitem(app.config, "TAX_RATE_BPS", 1000)

        cart = checkout.new_cart()
        cart.add_product(apples.id, apples.name, apples.price_cents, quantity=5)

        assert cart.subtotal_cents == 1995
        assert cart.tax_cents == 200
        assert cart.total_cents == 2195
