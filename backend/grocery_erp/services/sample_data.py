# Overview: Demo data set loaded into a fresh database (categories, stores, staff, stock, orders).

from __future__ import annotations

from .auth_service import DEFAULT_BCRYPT_ROUNDS, create_user
from .entity_store import EntityStore
from .order_service import create_order

SAMPLE_PASSWORD = "Password123"

CATEGORIES = [
    {"name": "Fruits & Vegetables", "description": "Fresh produce"},
    {"name": "Dairy & Eggs", "description": "Milk, cheese, and eggs"},
    {"name": "Meat & Seafood", "description": "Fresh meat and seafood"},
    {"name": "Bakery", "description": "Bread and baked goods"},
    {"name": "Beverages", "description": "Drinks and juices"},
]

STORES = [
    {"name": "Main Street - Downtown", "address": "123 Main St", "city": "Anytown", "state": "CA",
     "zip_code": "90001", "phone": "555-1234", "email": "downtown@groceryerp.com"},
    {"name": "Westside Plaza", "address": "456 West Ave", "city": "Anytown", "state": "CA",
     "zip_code": "90002", "phone": "555-5678", "email": "westside@groceryerp.com"},
    {"name": "Northgate Mall", "address": "789 North Blvd", "city": "Anytown", "state": "CA",
     "zip_code": "90003", "phone": "555-9012", "email": "northgate@groceryerp.com"},
]

# category_index refers to CATEGORIES
PRODUCTS = [
    {"name": "Organic Apples", "description": "Fresh organic apples", "sku": "P001", "price_cents": 399,
     "category_index": 0, "barcode": "123456789", "unit": "lb"},
    {"name": "Whole Milk", "description": "Whole milk", "sku": "P002", "price_cents": 249,
     "category_index": 1, "barcode": "234567890", "unit": "gallon"},
    {"name": "Artisan Bread", "description": "Freshly baked artisan bread", "sku": "P003", "price_cents": 425,
     "category_index": 3, "barcode": "345678901", "unit": "loaf"},
    {"name": "Chicken Breast", "description": "Fresh chicken breast", "sku": "P004", "price_cents": 599,
     "category_index": 2, "barcode": "456789012", "unit": "lb"},
    {"name": "Organic Bananas", "description": "Fresh organic bananas", "sku": "P005", "price_cents": 99,
     "category_index": 0, "barcode": "567890123", "unit": "lb"},
    {"name": "Almond Milk", "description": "Unsweetened almond milk", "sku": "P006", "price_cents": 349,
     "category_index": 1, "barcode": "678901234", "unit": "half-gallon"},
    {"name": "Frozen Pizza", "description": "Pepperoni pizza", "sku": "P007", "price_cents": 699,
     "category_index": 4, "barcode": "789012345", "unit": "piece"},
]

# store_index refers to STORES
EMPLOYEES = [
    {"first_name": "Sarah", "last_name": "Johnson", "email": "sarah@groceryerp.com", "phone": "555-1111",
     "position": "Store Manager", "store_index": 0},
    {"first_name": "John", "last_name": "Smith", "email": "john@groceryerp.com", "phone": "555-2222",
     "position": "Cashier", "store_index": 0},
    {"first_name": "Michael", "last_name": "Davis", "email": "michael@groceryerp.com", "phone": "555-3333",
     "position": "Inventory Clerk", "store_index": 0},
    {"first_name": "Emily", "last_name": "Wilson", "email": "emily@groceryerp.com", "phone": "555-4444",
     "position": "Store Manager", "store_index": 1},
    {"first_name": "David", "last_name": "Brown", "email": "david@groceryerp.com", "phone": "555-5555",
     "position": "Cashier", "store_index": 1},
]

# employee_index refers to EMPLOYEES
USERS = [
    {"username": "sarah", "email": "sarah@groceryerp.com", "role": "admin", "employee_index": 0},
    {"username": "john", "email": "john@groceryerp.com", "role": "employee", "employee_index": 1},
    {"username": "michael", "email": "michael@groceryerp.com", "role": "employee", "employee_index": 2},
    {"username": "emily", "email": "emily@groceryerp.com", "role": "manager", "employee_index": 3},
    {"username": "david", "email": "david@groceryerp.com", "role": "employee", "employee_index": 4},
    {"username": "meman", "email": "meman@groceryerp.com", "role": "admin", "employee_index": None},
]

CUSTOMERS = [
    {"first_name": "Robert", "last_name": "Johnson", "email": "robert@example.com", "phone": "555-1111",
     "address": "123 Oak St", "city": "Anytown", "state": "CA", "zip_code": "90001"},
    {"first_name": "Maria", "last_name": "Garcia", "email": "maria@example.com", "phone": "555-2222",
     "address": "456 Pine St", "city": "Anytown", "state": "CA", "zip_code": "90001"},
    {"first_name": "James", "last_name": "Smith", "email": "james@example.com", "phone": "555-3333",
     "address": "789 Maple St", "city": "Anytown", "state": "CA", "zip_code": "90002"},
    {"first_name": "Jennifer", "last_name": "Brown", "email": "jennifer@example.com", "phone": "555-4444",
     "address": "321 Elm St", "city": "Anytown", "state": "CA", "zip_code": "90002"},
    {"first_name": "Jose", "last_name": "Martinez", "email": "jose@example.com", "phone": "555-5555",
     "address": "654 Birch St", "city": "Anytown", "state": "CA", "zip_code": "90003"},
]

# (product_index, store_index) -> quantity for the deliberately low rows
LOW_STOCK_SEED = {(4, 0): 3, (5, 0): 5, (6, 0): 8}

# Indexes refer to CUSTOMERS, EMPLOYEES, STORES and PRODUCTS
ORDERS = [
    ({"order_number": "ORD-2305", "customer_index": 0, "employee_index": 1, "store_index": 0,
      "order_status": "completed", "order_type": "in_store", "total_cents": 12400, "tax_cents": 1000,
      "payment_method": "credit"},
     [(0, 5, 399), (1, 2, 249), (3, 3, 599)]),
    ({"order_number": "ORD-2304", "customer_index": 1, "employee_index": 1, "store_index": 0,
      "order_status": "processing", "order_type": "online", "total_cents": 6750, "tax_cents": 550,
      "payment_method": "credit"},
     [(2, 2, 425), (5, 1, 349)]),
    ({"order_number": "ORD-2303", "customer_index": 2, "employee_index": 4, "store_index": 1,
      "order_status": "out_for_delivery", "order_type": "online", "total_cents": 8995, "tax_cents": 750,
      "payment_method": "credit"},
     [(6, 2, 699), (0, 3, 399)]),
    ({"order_number": "ORD-2302", "customer_index": 3, "employee_index": 4, "store_index": 1,
      "order_status": "cancelled", "order_type": "online", "total_cents": 4520, "tax_cents": 370,
      "payment_method": "credit"},
     [(1, 1, 249), (4, 4, 99)]),
    ({"order_number": "ORD-2301", "customer_index": 4, "employee_index": 1, "store_index": 0,
      "order_status": "completed", "order_type": "in_store", "total_cents": 11275, "tax_cents": 925,
      "payment_method": "cash"},
     [(3, 2, 599), (2, 3, 425)]),
]


def _seed_quantity(product_index: int, store_index: int) -> int:
    if (product_index, store_index) in LOW_STOCK_SEED:
        return LOW_STOCK_SEED[(product_index, store_index)]
    # Deterministic spread between 20 and 119
    return 20 + (product_index * 37 + store_index * 11) % 100


def seed_sample_data(entities: EntityStore, *, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> dict:
    """
    Load the demo data set. Does nothing if any store already exists.

    Returns per-entity counts of what was created.
    """
    if entities.stores.count() > 0:
        return {}

    categories = [entities.categories.create(c) for c in CATEGORIES]
    stores = [entities.stores.create(s) for s in STORES]

    products = []
    for row in PRODUCTS:
        fields = {k: v for k, v in row.items() if k != "category_index"}
        fields["category_id"] = categories[row["category_index"]].id
        products.append(entities.products.create(fields))

    employees = []
    for row in EMPLOYEES:
        fields = {k: v for k, v in row.items() if k != "store_index"}
        fields["store_id"] = stores[row["store_index"]].id
        employees.append(entities.employees.create(fields))

    for row in USERS:
        index = row["employee_index"]
        create_user(
            entities,
            username=row["username"],
            email=row["email"],
            password=SAMPLE_PASSWORD,
            role=row["role"],
            employee_id=employees[index].id if index is not None else None,
            rounds=bcrypt_rounds,
        )

    customers = [entities.customers.create(c) for c in CUSTOMERS]

    inventory_count = 0
    for p_index, product in enumerate(products):
        for s_index, store in enumerate(stores):
            entities.inventory.create({
                "product_id": product.id,
                "store_id": store.id,
                "quantity": _seed_quantity(p_index, s_index),
                "min_stock_level": 10,
                "max_stock_level": 100,
            })
            inventory_count += 1

    for row, lines in ORDERS:
        order_fields = {
            k: v for k, v in row.items()
            if k not in {"customer_index", "employee_index", "store_index"}
        }
        order_fields["customer_id"] = customers[row["customer_index"]].id
        order_fields["employee_id"] = employees[row["employee_index"]].id
        order_fields["store_id"] = stores[row["store_index"]].id
        items = [
            {
                "product_id": products[p_index].id,
                "quantity": quantity,
                "unit_price_cents": price,
                "line_total_cents": quantity * price,
                "discount_cents": 0,
            }
            for p_index, quantity, price in lines
        ]
        create_order(entities, order_fields, items)

    return {
        "categories": len(categories),
        "stores": len(stores),
        "products": len(products),
        "employees": len(employees),
        "users": len(USERS),
        "customers": len(customers),
        "inventory": inventory_count,
        "orders": len(ORDERS),
        "order_items": sum(len(lines) for _, lines in ORDERS),
    }
