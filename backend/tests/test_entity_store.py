"""
Entity store tests.

Verifies:
- create assigns increasing ids and get returns what was stored
- list scoping (None means unscoped)
- update is a shallow merge that ignores None
- delete reports whether anything was removed; ids are never reused
- transaction() commits or rolls back every staged write together
"""

import pytest

from grocery_erp.services.entity_store import EntityStore


STORE_FIELDS = {
    "name": "Northgate Mall",
    "address": "789 North Blvd",
    "city": "Anytown",
    "state": "CA",
    "zip_code": "90003",
}


class TestCreateAndGet:

    def test_get_returns_created_fields(self, entities):
        created = entities.stores.create(STORE_FIELDS)

        fetched = entities.stores.get(created.id)
        assert fetched is not None
        for key, value in STORE_FIELDS.items():
            assert getattr(fetched, key) == value
        assert fetched.is_active is True

    def test_ids_strictly_increase(self, entities):
        first = entities.categories.create({"name": "Bakery"})
        second = entities.categories.create({"name": "Beverages"})
        third = entities.categories.create({"name": "Meat & Seafood"})
        assert first.id < second.id < third.id

    def test_caller_supplied_id_is_ignored(self, entities):
        existing = entities.categories.create({"name": "Bakery"})
        created = entities.categories.create({"id": existing.id, "name": "Beverages"})
        assert created.id != existing.id

    def test_get_missing_returns_none(self, entities):
        assert entities.products.get(999_999) is None

    def test_defaults_applied(self, entities, category):
        product = entities.products.create({"name": "Artisan Bread", "sku": "P003", "price_cents": 425})
        assert product.unit == "piece"
        assert product.is_active is True


class TestList:

    def test_scope_filters_by_store(self, entities, store, other_store):
        entities.employees.create({
            "first_name": "Sarah", "last_name": "Johnson", "email": "sarah@groceryerp.com",
            "position": "Store Manager", "store_id": store.id,
        })
        entities.employees.create({
            "first_name": "Emily", "last_name": "Wilson", "email": "emily@groceryerp.com",
            "position": "Store Manager", "store_id": other_store.id,
        })

        scoped = entities.employees.list(store_id=store.id)
        assert [e.first_name for e in scoped] == ["Sarah"]

    def test_none_scope_means_everything(self, entities, store, other_store):
        assert len(entities.stores.list(id=None)) == 2

    def test_list_is_ordered_by_id(self, entities):
        names = ["Bakery", "Beverages", "Dairy & Eggs"]
        for name in names:
            entities.categories.create({"name": name})
        assert [c.name for c in entities.categories.list()] == names


class TestUpdate:

    def test_partial_merge_keeps_other_fields(self, entities, apples):
        updated = entities.products.update(apples.id, {"price_cents": 449})
        assert updated.price_cents == 449
        assert updated.name == "Organic Apples"
        assert updated.sku == "P001"

    def test_none_values_leave_field_untouched(self, entities, apples):
        updated = entities.products.update(apples.id, {"description": None, "unit": None})
        assert updated.unit == "lb"

    def test_update_missing_returns_none(self, entities):
        assert entities.products.update(999_999, {"name": "Ghost"}) is None

    def test_id_cannot_be_changed(self, entities, apples):
        original_id = apples.id
        updated = entities.products.update(apples.id, {"id": original_id + 100})
        assert updated.id == original_id


class TestDelete:

    def test_get_after_delete_is_none(self, entities, apples):
        assert entities.products.delete(apples.id) is True
        assert entities.products.get(apples.id) is None

    def test_second_delete_returns_false(self, entities, apples):
        assert entities.products.delete(apples.id) is True
        assert entities.products.delete(apples.id) is False

    def test_ids_not_reused_after_delete(self, entities):
        first = entities.categories.create({"name": "Bakery"})
        entities.categories.delete(first.id)
        second = entities.categories.create({"name": "Beverages"})
        assert second.id > first.id


class TestTransaction:

    def test_commits_all_staged_writes(self, entities, store):
        with entities.transaction():
            entities.categories.create({"name": "Bakery"}, commit=False)
            entities.categories.create({"name": "Beverages"}, commit=False)

        assert entities.categories.count() == 2

    def test_rolls_back_everything_on_error(self, entities):
        with pytest.raises(RuntimeError):
            with entities.transaction():
                entities.categories.create({"name": "Bakery"}, commit=False)
                raise RuntimeError("boom")

        assert entities.categories.count() == 0

    def test_separate_stores_share_session_data(self, db_session, entities):
        entities.categories.create({"name": "Bakery"})
        assert EntityStore(db_session).categories.count() == 1
