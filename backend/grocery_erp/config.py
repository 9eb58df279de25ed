# backend/grocery_erp/config.py
from __future__ import annotations
import os


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # In-memory SQLite by default: every process starts from an empty data set
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite://",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Load the demo catalog, stores, staff, customers and orders at startup
    SEED_SAMPLE_DATA = _env_flag("SEED_SAMPLE_DATA", True)

    # Flat sales tax in basis points (825 = 8.25%)
    TAX_RATE_BPS = int(os.environ.get("TAX_RATE_BPS", "825"))

    # Floor used by low-stock detection when a record has no min_stock_level
    LOW_STOCK_DEFAULT_THRESHOLD = int(os.environ.get("LOW_STOCK_DEFAULT_THRESHOLD", "10"))

    # Order creation leaves inventory untouched unless this is enabled
    DECREMENT_INVENTORY_ON_ORDER = _env_flag("DECREMENT_INVENTORY_ON_ORDER", False)

    BCRYPT_LOG_ROUNDS = int(os.environ.get("BCRYPT_LOG_ROUNDS", "12"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
