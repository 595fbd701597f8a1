# storefront/models/__init__.py
from .category import Category
from .product import Product
from .order import Order, OrderStatus
from .order_item import OrderItem

__all__ = [
    "Category",
    "Product",
    "Order",
    "OrderStatus",
    "OrderItem",
]
