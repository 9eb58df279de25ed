"""
Pytest fixtures for the grocery ERP backend tests.

Provides an app on an in-memory database, the Flask test client, a per-test
table wipe and a small catalog (category, store, products) to build on.
"""

import pytest

from grocery_erp import create_app
from grocery_erp.extensions import db
from grocery_erp.services.entity_store import EntityStore


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'SEED_SAMPLE_DATA': False,
        'BCRYPT_LOG_ROUNDS': 4,
        'DECREMENT_INVENTORY_ON_ORDER': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Empty every table before each test; ids keep counting up."""
    with app.app_context():
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        db.session.expunge_all()

        yield db.session

        db.session.rollback()


@pytest.fixture(scope='function')
def entities(db_session):
    return EntityStore(db_session)


@pytest.fixture(scope='function')
def category(entities):
    return entities.categories.create({"name": "Dairy & Eggs", "description": "Milk, cheese, and eggs"})


@pytest.fixture(scope='function')
def store(entities):
    return entities.stores.create({
        "name": "Main Street - Downtown",
        "address": "123 Main St",
        "city": "Anytown",
        "state": "CA",
        "zip_code": "90001",
        "phone": "555-1234",
    })


@pytest.fixture(scope='function')
def other_store(entities):
    return entities.stores.create({
        "name": "Westside Plaza",
        "address": "456 West Ave",
        "city": "Anytown",
        "state": "CA",
        "zip_code": "90002",
    })


@pytest.fixture(scope='function')
def apples(entities, category):
    return entities.products.create({
        "name": "Organic Apples", "sku": "P001", "price_cents": 399, "category_id": category.id, "unit": "lb",
    })


@pytest.fixture(scope='function')
def milk(entities, category):
    return entities.products.create({
        "name": "Whole Milk", "sku": "P002", "price_cents": 249, "category_id": category.id, "unit": "gallon",
    })


@pytest.fixture(scope='function')
def customer(entities):
    return entities.customers.create({
        "first_name": "Robert", "last_name": "Johnson", "email": "robert@example.com", "phone": "555-1111",
    })

