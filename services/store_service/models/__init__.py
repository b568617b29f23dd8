"""Store Service models package."""

from services.store_service.models.catalog import Discount, Product
from services.store_service.models.commerce import Order, OrderItem
from services.store_service.models.enums import (
    DiscountType,
    OrderStatus,
    ProductCategory,
    StockStatus,
)

__all__ = [
    "Discount",
    "DiscountType",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Product",
    "ProductCategory",
    "StockStatus",
]
