"""
Point-of-sale client: cart pricing and checkout against the HTTP API.
"""

from .cart import Cart, CartLine, DEFAULT_TAX_RATE_BPS, compute_tax_cents
from .checkout import CheckoutClient, CheckoutError, Invoice

__all__ = [
    "Cart",
    "CartLine",
    "CheckoutClient",
    "CheckoutError",
    "DEFAULT_TAX_RATE_BPS",
    "Invoice",
    "compute_tax_cents",
]
