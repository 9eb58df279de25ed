"""
Order API tests.

Verifies:
- POST creates order + items together (201), bad input is 400, duplicate number is 409
- GET /<id> returns order with items
- status updates validate the status value
- list filters and /recent
"""

import pytest


def order_body(store_id, items, **order_overrides):
    total = sum(i["quantity"] * i["unit_price_cents"] for i in items)
    order = {"store_id": store_id, "total_cents": total, "tax_cents": 0}
    order.update(order_overrides)
    return {"order": order, "items": items}


@pytest.fixture
def basket(apples, milk):
    return [
        {"product_id": apples.id, "quantity": 5, "unit_price_cents": 399, "line_total_cents": 1995},
        {"product_id": milk.id, "quantity": 2, "unit_price_cents": 249},
    ]


class TestCreateOrderApi:

    def test_create_with_items(self, client, store, basket):
        resp = client.post("/api/orders", json=order_body(store.id, basket, payment_method="credit"))
        assert resp.status_code == 201
        order = resp.get_json()
        assert order["order_status"] == "pending"
        assert order["payment_method"] == "credit"

        detail = client.get(f"/api/orders/{order['id']}").get_json()
        assert detail["order"]["id"] == order["id"]
        assert [i["quantity"] for i in detail["items"]] == [5, 2]
        # line total computed when omitted
        assert detail["items"][1]["line_total_cents"] == 498

    def test_missing_order_object(self, client, basket):
        resp = client.post("/api/orders", json={"items": basket})
        assert resp.status_code == 400

    def test_missing_store(self, client, basket):
        resp = client.post("/api/orders", json={"order": {"total_cents": 100}, "items": basket})
        assert resp.status_code == 400
        assert "store_id" in resp.get_json()["error"]

    def test_invalid_status_rejected(self, client, store, basket):
        resp = client.post("/api/orders", json=order_body(store.id, basket, order_status="shipped"))
        assert resp.status_code == 400

    def test_unknown_payment_method_rejected(self, client, entities, store, basket):
        resp = client.post("/api/orders", json=order_body(store.id, basket, payment_method="iou"))
        assert resp.status_code == 400
        assert "payment_method" in resp.get_json()["error"]
        assert entities.orders.count() == 0

    def test_invalid_item_names_index(self, client, entities, store, basket):
        basket[1]["quantity"] = 0
        resp = client.post("/api/orders", json=order_body(store.id, basket))
        assert resp.status_code == 400
        assert resp.get_json()["error"].startswith("items[1]")
        assert entities.orders.count() == 0

    def test_items_must_be_list(self, client, store):
        resp = client.post("/api/orders", json={"order": {"store_id": store.id, "total_cents": 0}, "items": {}})
        assert resp.status_code == 400

    def test_duplicate_order_number(self, client, store, basket):
        body = order_body(store.id, basket, order_number="ORD-2305")
        assert client.post("/api/orders", json=body).status_code == 201
        assert client.post("/api/orders", json=body).status_code == 409

    def test_inventory_decrement_follows_config(self, app, client, entities, store, apples, basket):
        record = entities.inventory.create({"product_id": apples.id, "store_id": store.id, "quantity": 20})

        client.post("/api/orders", json=order_body(store.id, basket))
        assert entities.inventory.get(record.id).quantity == 20

        app.config["DECREMENT_INVENTORY_ON_ORDER"] = True
        try:
            client.post("/api/orders", json=order_body(store.id, basket))
        finally:
            app.config["DECREMENT_INVENTORY_ON_ORDER"] = False
        assert entities.inventory.get(record.id).quantity == 15


class TestOrderStatusApi:

    def test_update_status(self, client, store, basket):
        order = client.post("/api/orders", json=order_body(store.id, basket)).get_json()

        resp = client.put(f"/api/orders/{order['id']}/status", json={"status": "out_for_delivery"})
        assert resp.status_code == 200
        assert resp.get_json()["order_status"] == "out_for_delivery"
        assert resp.get_json()["total_cents"] == order["total_cents"]

    def test_invalid_status(self, client, store, basket):
        order = client.post("/api/orders", json=order_body(store.id, basket)).get_json()
        resp = client.put(f"/api/orders/{order['id']}/status", json={"status": "lost"})
        assert resp.status_code == 400

    def test_missing_order(self, client):
        resp = client.put("/api/orders/999999/status", json={"status": "completed"})
        assert resp.status_code == 404


class TestOrderListingApi:

    @pytest.fixture
    def orders(self, client, store, other_store, basket):
        client.post("/api/orders", json=order_body(
            store.id, basket, order_number="ORD-1", order_type="online", order_date="2026-01-01T10:00:00Z"))
        client.post("/api/orders", json=order_body(
            store.id, basket, order_number="ORD-2", order_status="completed", order_date="2026-01-02T10:00:00Z"))
        client.post("/api/orders", json=order_body(
            other_store.id, basket, order_number="ORD-3", order_date="2026-01-03T10:00:00Z"))

    def test_filters(self, client, store, orders):
        assert len(client.get("/api/orders").get_json()) == 3
        assert len(client.get(f"/api/orders?store_id={store.id}").get_json()) == 2
        assert [o["order_number"] for o in client.get("/api/orders?status=completed").get_json()] == ["ORD-2"]
        assert [o["order_number"] for o in client.get("/api/orders?type=online").get_json()] == ["ORD-1"]

    def test_recent(self, client, store, orders):
        recent = client.get("/api/orders/recent?limit=2").get_json()
        assert [o["order_number"] for o in recent] == ["ORD-3", "ORD-2"]

        scoped = client.get(f"/api/orders/recent?store_id={store.id}").get_json()
        assert [o["order_number"] for o in scoped] == ["ORD-2", "ORD-1"]

    def test_get_missing(self, client):
        assert client.get("/api/orders/999999").status_code == 404
