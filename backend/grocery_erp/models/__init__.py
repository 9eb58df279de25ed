from .catalog import ProductCategory, Product
from .stores import Store, Employee
from .inventory import Inventory
from .customers import Customer
from .orders import Order, OrderItem, ORDER_STATUSES, ORDER_TYPES, PAYMENT_METHODS
from .purchasing import PurchaseOrder, PurchaseOrderItem
from .auth import User

__all__ = [
    'ProductCategory', 'Product',
    'Store', 'Employee',
    'Inventory',
    'Customer',
    'Order', 'OrderItem', 'ORDER_STATUSES', 'ORDER_TYPES', 'PAYMENT_METHODS',
    'PurchaseOrder', 'PurchaseOrderItem',
    'User',
]
