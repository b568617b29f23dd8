"""
Model factories for creating valid test data.

Every factory produces a valid, insertable SQLAlchemy model instance.
Override any field via kwargs.

Usage:
    product = ProductFactory.create(price=Decimal("450.00"))
    db_session.add(product)
    await db_session.commit()
"""

import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now() -> datetime:
    return datetime.now(timezone.utc)


def days_ago(days: int) -> datetime:
    return _now() - timedelta(days=days)


def _suffix() -> str:
    return uuid.uuid4().hex[:8].upper()


def _address(**overrides) -> dict:
    address = {
        "name": "Ion Popescu",
        "company": "Contorix SRL",
        "address1": "Str. Lunga 10",
        "address2": None,
        "city": "Brasov",
        "postcode": "500001",
        "country": "Romania",
        "phone": "+40 700 000 000",
    }
    address.update(overrides)
    return address


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class ProductFactory:
    @staticmethod
    def create(**overrides):
        from services.store_service.models import (
            Product,
            ProductCategory,
            StockStatus,
        )

        defaults = {
            "sku": f"SKU-{_suffix()}",
            "name": "Three-phase energy meter",
            "category": ProductCategory.ELECTRIC,
            "manufacturer": "Eastron",
            "series": "SDM630",
            "mounting": "DIN rail",
            "protocol": "Modbus RTU",
            "price": Decimal("100.00"),
            "currency": "RON",
            "stock_status": StockStatus.IN_STOCK,
            "is_active": True,
            "specs": {"Voltage": "230V"},
            "short_description": {"en": "Meter"},
            "full_description": {},
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Product(**defaults)


class DiscountFactory:
    @staticmethod
    def create(**overrides):
        from services.store_service.models import Discount, DiscountType

        defaults = {
            "code": f"CODE{_suffix()}",
            "description": "Test discount",
            "type": DiscountType.PERCENT,
            "value": Decimal("10"),
            "is_active": True,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Discount(**defaults)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


class OrderFactory:
    @staticmethod
    def create(**overrides):
        from services.store_service.models import Order, OrderStatus

        defaults = {
            "order_number": f"ORD-2026-{uuid.uuid4().int % 1_000_000:06d}",
            "client_token": f"tok-{_suffix()}",
            "client_ip": "10.0.0.1",
            "customer_email": "buyer@test.com",
            "order_notes": None,
            "billing_details": _address(),
            "shipping_details": _address(),
            "subtotal": Decimal("100.00"),
            "discount_code": None,
            "discount_amount": Decimal("0.00"),
            "final_total": Decimal("100.00"),
            "currency": "RON",
            "status": OrderStatus.NEW,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Order(**defaults)


class OrderItemFactory:
    @staticmethod
    def create(order_id, **overrides):
        from services.store_service.models import OrderItem

        defaults = {
            "order_id": order_id,
            "product_id": None,
            "product_name": "Three-phase energy meter",
            "sku": f"SKU-{_suffix()}",
            "quantity": 1,
            "unit_price": Decimal("100.00"),
            "line_total": Decimal("100.00"),
            "created_at": _now(),
        }
        defaults.update(overrides)
        return OrderItem(**defaults)


def order_payload(items, **overrides) -> dict:
    """Checkout request body as the storefront sends it."""
    payload = {
        "email": "buyer@test.com",
        "billing": _address(),
        "items": items,
        "client_token": "tok-checkout",
    }
    payload.update(overrides)
    return payload
