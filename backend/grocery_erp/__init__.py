# backend/grocery_erp/__init__.py
from __future__ import annotations

from flask import Flask, request

from .config import Config
from .extensions import db


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize extensions
    db.init_app(app)

    # Import models so the metadata is complete before create_all
    from . import models  # noqa: F401

    with app.app_context():
        db.create_all()
        if app.config.get("SEED_SAMPLE_DATA"):
            from .services.entity_store import get_entity_store
            from .services.sample_data import seed_sample_data

            counts = seed_sample_data(
                get_entity_store(),
                bcrypt_rounds=app.config.get("BCRYPT_LOG_ROUNDS", 12),
            )
            if counts:
                app.logger.info("Loaded sample data: %s", counts)

    # Register blueprints
    from .routes.system import system_bp
    from .routes.categories import categories_bp
    from .routes.products import products_bp
    from .routes.stores import stores_bp
    from .routes.employees import employees_bp
    from .routes.customers import customers_bp
    from .routes.inventory import inventory_bp
    from .routes.orders import orders_bp
    from .routes.purchase_orders import purchase_orders_bp
    from .routes.dashboard import dashboard_bp
    from .routes.auth import auth_bp, users_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(stores_bp)
    app.register_blueprint(employees_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(inventory_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(purchase_orders_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        allowed_origins = {
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:5000",
            "http://127.0.0.1:5000",
        }
        if origin in allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
