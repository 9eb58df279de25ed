"""
Catalog, store, employee and customer API tests.

Verifies CRUD status codes (201/200/400/404/409) and query filters.
"""

import pytest

from grocery_erp.services import catalog_service


@pytest.fixture
def uniqueness_check_misses_once(monkeypatch):
    """A concurrent writer commits the same key between the check and the insert."""
    real_check = catalog_service._ensure_unique
    calls = []

    def check(*args, **kwargs):
        calls.append(args)
        if len(calls) > 1:
            real_check(*args, **kwargs)

    monkeypatch.setattr(catalog_service, "_ensure_unique", check)


# =============================================================================
# PRODUCTS
# =============================================================================


class TestProductsApi:

    def test_create_and_fetch(self, client, category):
        resp = client.post("/api/products", json={
            "name": "Organic Bananas", "sku": "P005", "price_cents": 99, "category_id": category.id, "unit": "lb",
        })
        assert resp.status_code == 201
        created = resp.get_json()
        assert created["unit"] == "lb"
        assert created["is_active"] is True

        resp = client.get(f"/api/products/{created['id']}")
        assert resp.status_code == 200
        assert resp.get_json()["sku"] == "P005"

    def test_missing_required_fields(self, client):
        resp = client.post("/api/products", json={"name": "No SKU"})
        assert resp.status_code == 400
        assert "sku" in resp.get_json()["error"]

    def test_unknown_field_rejected(self, client):
        resp = client.post("/api/products", json={"name": "X", "sku": "X1", "price_cents": 1, "colour": "red"})
        assert resp.status_code == 400

    def test_negative_price_rejected(self, client):
        resp = client.post("/api/products", json={"name": "X", "sku": "X1", "price_cents": -5})
        assert resp.status_code == 400

    def test_decimal_price_rejected(self, client):
        resp = client.post("/api/products", json={"name": "X", "sku": "X1", "price_cents": 3.99})
        assert resp.status_code == 400

    def test_duplicate_sku_conflicts(self, client, apples):
        resp = client.post("/api/products", json={"name": "Other Apples", "sku": "P001", "price_cents": 100})
        assert resp.status_code == 409

    def test_duplicate_sku_from_constraint_conflicts(self, client, apples, uniqueness_check_misses_once):
        resp = client.post("/api/products", json={"name": "Other Apples", "sku": "P001", "price_cents": 100})
        assert resp.status_code == 409
        assert resp.get_json()["error"] == "SKU already exists."

    def test_update_sku_from_constraint_conflicts(self, client, apples, milk, uniqueness_check_misses_once):
        resp = client.put(f"/api/products/{milk.id}", json={"sku": "P001"})
        assert resp.status_code == 409

    def test_unexpected_failure_is_500(self, client, monkeypatch):
        def boom(entities, patch):
            raise RuntimeError("disk full")

        monkeypatch.setattr(catalog_service, "create_product", boom)
        resp = client.post("/api/products", json={"name": "X", "sku": "X1", "price_cents": 1})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Internal server error"}

    def test_update_partial(self, client, apples):
        resp = client.put(f"/api/products/{apples.id}", json={"price_cents": 429})
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["price_cents"] == 429
        assert body["name"] == "Organic Apples"

    def test_update_to_taken_sku_conflicts(self, client, apples, milk):
        resp = client.put(f"/api/products/{milk.id}", json={"sku": "P001"})
        assert resp.status_code == 409

    def test_update_missing(self, client):
        assert client.put("/api/products/999999", json={"name": "Ghost"}).status_code == 404

    def test_delete(self, client, apples):
        assert client.delete(f"/api/products/{apples.id}").status_code == 200
        assert client.get(f"/api/products/{apples.id}").status_code == 404
        assert client.delete(f"/api/products/{apples.id}").status_code == 404

    def test_list_by_category(self, client, entities, apples, milk):
        bakery = entities.categories.create({"name": "Bakery"})
        entities.products.create({"name": "Artisan Bread", "sku": "P003", "price_cents": 425, "category_id": bakery.id})

        all_products = client.get("/api/products").get_json()
        assert len(all_products) == 3

        bakery_only = client.get(f"/api/products?category_id={bakery.id}").get_json()
        assert [p["sku"] for p in bakery_only] == ["P003"]


# =============================================================================
# CATEGORIES AND STORES
# =============================================================================


class TestCategoriesApi:

    def test_crud(self, client):
        resp = client.post("/api/categories", json={"name": "Beverages", "description": "Drinks and juices"})
        assert resp.status_code == 201
        category_id = resp.get_json()["id"]

        resp = client.put(f"/api/categories/{category_id}", json={"description": "Soft drinks"})
        assert resp.get_json()["description"] == "Soft drinks"
        assert resp.get_json()["name"] == "Beverages"

        assert client.delete(f"/api/categories/{category_id}").status_code == 200
        assert client.get(f"/api/categories/{category_id}").status_code == 404

    def test_blank_name_rejected(self, client):
        assert client.post("/api/categories", json={"name": "   "}).status_code == 400


class TestStoresApi:

    def test_create_requires_address_fields(self, client):
        resp = client.post("/api/stores", json={"name": "Northgate Mall"})
        assert resp.status_code == 400
        assert "zip_code" in resp.get_json()["error"]

    def test_create_and_list(self, client, store):
        resp = client.post("/api/stores", json={
            "name": "Northgate Mall", "address": "789 North Blvd", "city": "Anytown", "state": "CA",
            "zip_code": "90003",
        })
        assert resp.status_code == 201
        assert len(client.get("/api/stores").get_json()) == 2

    def test_get_missing(self, client):
        assert client.get("/api/stores/999999").status_code == 404


# =============================================================================
# EMPLOYEES AND CUSTOMERS
# =============================================================================


class TestEmployeesApi:

    @pytest.fixture
    def staff(self, client, store, other_store):
        for first, email, store_id in [
            ("Sarah", "sarah@groceryerp.com", store.id),
            ("John", "john@groceryerp.com", store.id),
            ("Emily", "emily@groceryerp.com", other_store.id),
        ]:
            resp = client.post("/api/employees", json={
                "first_name": first, "last_name": "Doe", "email": email, "position": "Cashier",
                "store_id": store_id,
            })
            assert resp.status_code == 201

    def test_filter_by_store(self, client, store, staff):
        names = [e["first_name"] for e in client.get(f"/api/employees?store_id={store.id}").get_json()]
        assert names == ["Sarah", "John"]

    def test_duplicate_email_conflicts(self, client, staff):
        resp = client.post("/api/employees", json={
            "first_name": "Sam", "last_name": "Doe", "email": "sarah@groceryerp.com", "position": "Cashier",
        })
        assert resp.status_code == 409

    def test_duplicate_email_from_constraint_conflicts(self, client, entities, uniqueness_check_misses_once):
        entities.employees.create({
            "first_name": "Sarah", "last_name": "Doe", "email": "sarah@groceryerp.com", "position": "Manager",
        })
        resp = client.post("/api/employees", json={
            "first_name": "Sam", "last_name": "Doe", "email": "sarah@groceryerp.com", "position": "Cashier",
        })
        assert resp.status_code == 409

    def test_hire_date_accepts_iso(self, client):
        resp = client.post("/api/employees", json={
            "first_name": "David", "last_name": "Brown", "email": "david@groceryerp.com", "position": "Cashier",
            "hire_date": "2025-06-01T09:00:00Z",
        })
        assert resp.status_code == 201
        assert resp.get_json()["hire_date"].startswith("2025-06-01T09:00:00")


class TestCustomersApi:

    def test_phone_lookup(self, client, customer):
        matches = client.get("/api/customers?phone=555-1111").get_json()
        assert [c["id"] for c in matches] == [customer.id]

        assert client.get("/api/customers?phone=555-9999").get_json() == []

    def test_email_optional(self, client):
        resp = client.post("/api/customers", json={"first_name": "Jose", "last_name": "Martinez"})
        assert resp.status_code == 201
        assert resp.get_json()["email"] is None

    def test_duplicate_email_conflicts(self, client, customer):
        resp = client.post("/api/customers", json={
            "first_name": "Rob", "last_name": "J", "email": "robert@example.com",
        })
        assert resp.status_code == 409

    def test_duplicate_email_from_constraint_conflicts(self, client, customer, uniqueness_check_misses_once):
        resp = client.post("/api/customers", json={
            "first_name": "Rob", "last_name": "J", "email": "robert@example.com",
        })
        assert resp.status_code == 409
        assert resp.get_json()["error"] == "Email already exists."

    def test_update_and_delete(self, client, customer):
        resp = client.put(f"/api/customers/{customer.id}", json={"city": "Springfield"})
        assert resp.status_code == 200
        assert resp.get_json()["city"] == "Springfield"

        assert client.delete(f"/api/customers/{customer.id}").status_code == 200
        assert client.get(f"/api/customers/{customer.id}").status_code == 404
