"""Enum definitions for store service models."""

import enum


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class ProductCategory(str, enum.Enum):
    ELECTRIC = "ELECTRIC"
    WATER = "WATER"
    GAS = "GAS"
    THERMAL = "THERMAL"


class StockStatus(str, enum.Enum):
    IN_STOCK = "in_stock"
    ON_REQUEST = "on_request"
    OUT_OF_STOCK = "out_of_stock"


class DiscountType(str, enum.Enum):
    PERCENT = "percent"
    FIXED = "fixed"


class OrderStatus(str, enum.Enum):
    NEW = "new"
    PROCESSING = "processing"
    IN_DELIVERY = "in_delivery"
    COMPLETE = "complete"
    CANCELLED = "cancelled"
